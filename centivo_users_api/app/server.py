"""
Process entry point for the Centivo Users API.

The MongoDB connection is established before uvicorn binds the
listener, so the service never accepts a request it cannot serve.
If the initial connection fails the process logs the error and exits
with status 1; there is no retry.

Usage::

    centivo-users-api
    python run.py

Host, port and MongoDB location are read from the environment (see
``core.config``).
"""

import asyncio
import logging
from typing import Optional

from pymongo.errors import PyMongoError
from uvicorn import Config, Server

from .core.config import Settings, settings as default_settings
from .core.db import MongoContext
from .core.logging_config import setup_logging
from .main import create_app


logger = logging.getLogger(__name__)


async def connect_database(app_settings: Settings) -> MongoContext:
    """Create the shared context and wait until MongoDB answers.

    Exits the process with status 1 when the server is unreachable.
    """
    context = MongoContext.from_settings(app_settings)
    try:
        await context.connect()
    except PyMongoError:
        await context.close()
        raise SystemExit(1)
    return context


async def serve(app_settings: Optional[Settings] = None) -> None:
    """Connect to MongoDB, then serve HTTP until the process is stopped."""
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    context = await connect_database(app_settings)
    app = create_app(context=context, app_settings=app_settings)

    config = Config(
        app=app,
        host=app_settings.host,
        port=app_settings.port,
        reload=False,
        log_level=app_settings.log_level.lower(),
    )
    server = Server(config)
    logger.info("Starting server on %s:%s", app_settings.host, app_settings.port)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        pass
