"""
MongoDB connection handling.

The service keeps exactly one ``AsyncMongoClient`` for the lifetime of the
process.  Instead of a module level global, the client lives on a
``MongoContext`` object that is created at startup, connected once,
and handed to the FastAPI application (``app.state.mongo``).  Route
dependencies read the context from the application, so tests can
inject a context backed by an in-memory collection.

The client connects lazily, so ``connect`` issues a ``ping`` to prove the
server is reachable before the HTTP listener starts accepting traffic.
"""

import logging
from typing import Any, Optional

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from .config import Settings


logger = logging.getLogger(__name__)


class DatabaseNotReady(RuntimeError):
    """Raised when the database is used before ``connect`` succeeded."""


class MongoContext:
    """Process-wide handle on the MongoDB client and target database."""

    def __init__(self, client: Any, database_name: str, users_collection: str = "users") -> None:
        self.client = client
        self.database_name = database_name
        self.users_collection = users_collection
        self._ready = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoContext":
        """Build a context with a client configured from ``settings``."""
        client = AsyncMongoClient(
            settings.mongo_url,
            serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
        )
        return cls(client, settings.database_name, settings.users_collection)

    @property
    def ready(self) -> bool:
        return self._ready

    async def connect(self) -> None:
        """Verify connectivity and mark the context ready.

        Raises the driver's ``PyMongoError`` when the server cannot be
        reached; the caller decides whether that is fatal.
        """
        try:
            await self.client.admin.command("ping")
        except PyMongoError as exc:
            logger.error("Error while connecting to MongoDB server: %s", exc)
            raise
        self._ready = True
        logger.info("Successfully connected to MongoDB server (database=%s)", self.database_name)

    @property
    def database(self) -> Any:
        if not self._ready:
            raise DatabaseNotReady("MongoDB connection has not been established")
        return self.client[self.database_name]

    @property
    def users(self) -> Any:
        """Collection holding user documents."""
        return self.database[self.users_collection]

    async def close(self) -> None:
        if self.client is not None:
            logger.info("Closing MongoDB client")
            await self.client.close()
        self._ready = False


def get_mongo_context(app: Any) -> Optional[MongoContext]:
    """Return the context attached to ``app``, if any."""
    return getattr(app.state, "mongo", None)
