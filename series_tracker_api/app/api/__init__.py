"""
API package containing the HTTP routes.

``dependencies`` holds shared FastAPI dependencies; the ``v1``
subpackage exposes a top-level ``router`` that includes all
domain-specific endpoints.
"""
