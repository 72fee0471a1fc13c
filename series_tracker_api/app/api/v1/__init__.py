"""
Version 1 of the API.

Bundles the series, auth and watched-item endpoints.  The router is
mounted under ``/api`` by ``create_app``.
"""
