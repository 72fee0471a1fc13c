"""
Main entrypoint for the Series Tracker API.

This module assembles the FastAPI application: it sets up logging,
creates the series store owned by the app, registers the error
handlers and includes the routers.  ``create_app`` builds a fresh
application; ``app`` is instantiated at import time so it can be
served directly, e.g.::

    uvicorn series_tracker_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.endpoints import health
from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import InternalError, ServiceError
from .core.logging_config import setup_logging
from .services.series_store import SeriesStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Creates the database file if needed and applies migrations.  Any
    # failure here aborts startup.
    init_db()
    logger.info("%s %s ready", settings.project_name, settings.api_version)
    yield


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = tuple(first.get("loc", ()))
    if loc[:1] == ("body",) and (first.get("type") == "json_invalid" or len(loc) == 1):
        return "invalid json body"
    if loc == ("path", "series_id"):
        return "invalid series id"
    if len(loc) > 1:
        return f"invalid {loc[-1]}"
    return "invalid request"


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": _validation_message(exc)},
    )


def create_app(store: Optional[SeriesStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[SeriesStore]
        Series store to serve.  Defaults to a store holding the three
        sample series.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.series_store = store if store is not None else SeriesStore.with_seed_data()

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health.router, tags=["health"])
    app.include_router(v1_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
