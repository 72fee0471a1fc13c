"""
Endpoint subpackage for API v1.

Each module in this package defines an APIRouter for one domain
(series, auth, watched items, health).  The domain routers are
aggregated in ``router.py``.
"""
