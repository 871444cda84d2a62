"""
Main entrypoint for the Airline Booking API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn airline_api.app.main:app --reload

Services are built once when the application starts (see
``services.context``) and shared by all requests through
``app.state``.
"""

from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .commands import CommandsFactory, RequestHandler
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .services.context import ServiceContext, get_context


def create_app(context: Optional[ServiceContext] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    context : Optional[ServiceContext]
        Services to use.  Defaults to the process-wide context built
        from environment settings; tests pass their own.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Build services and apply migrations.  This creates the
        # database file if it does not exist.
        ctx = context or get_context()
        init_db(ctx.provider)
        app.state.context = ctx
        app.state.request_handler = RequestHandler(CommandsFactory(ctx), ctx.settings)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
