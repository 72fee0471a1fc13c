"""
Top-level router for the series tracker API.

This router aggregates the domain routers (series, auth, watched
items) under the prefix chosen by ``create_app``.  When new domains
are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import auth, series, watched

router = APIRouter()

router.include_router(series.router, prefix="/series", tags=["series"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(watched.router, prefix="/user/watched", tags=["watched"])
