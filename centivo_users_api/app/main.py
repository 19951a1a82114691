"""
Main entrypoint for the Centivo Users API.

This module assembles the FastAPI application, sets up logging and
includes the API router.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Importing the app here makes it easy to run with uvicorn
or another ASGI server, e.g.::

    uvicorn centivo_users_api.app.main:app

When the app is served that way it connects to MongoDB in its
lifespan hook; if the connection fails, startup fails and the server
never accepts requests.  ``centivo_users_api.app.server`` instead
connects first and injects the ready context.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from pymongo.errors import PyMongoError

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import DatabaseNotReady, MongoContext
from .core.errors import database_not_ready_handler
from .core.logging_config import setup_logging


def create_app(context: Optional[MongoContext] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    context : Optional[MongoContext]
        An already connected database context.  When omitted the
        application creates one from ``app_settings`` at startup and
        closes it on shutdown.
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned: Optional[MongoContext] = None
        if app.state.mongo is None:
            owned = MongoContext.from_settings(app_settings)
            # A failure here aborts ASGI startup before any request is served.
            try:
                await owned.connect()
            except PyMongoError:
                await owned.close()
                raise
            app.state.mongo = owned
        try:
            yield
        finally:
            if owned is not None:
                await owned.close()
                app.state.mongo = None

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, lifespan=lifespan)
    app.state.settings = app_settings
    app.state.mongo = context

    app.add_exception_handler(DatabaseNotReady, database_not_ready_handler)
    app.include_router(api_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
