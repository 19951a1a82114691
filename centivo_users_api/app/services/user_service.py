"""
Business logic for users.

``UserService`` resolves a single user document by its ObjectId,
returning it only when the user is older than the configured minimum
age.  The service never writes to the collection.  A missing user and
an underage user look the same to callers: both yield ``None``.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError


logger = logging.getLogger(__name__)


class UserServiceError(Exception):
    """Base class for user lookup failures."""


class InvalidUserId(UserServiceError):
    """The identifier is not a 24 character hex ObjectId."""

    def __init__(self, user_id: Any) -> None:
        super().__init__(f"Invalid user id: {user_id!r}")
        self.user_id = user_id


class UserLookupError(UserServiceError):
    """The database failed while running the lookup."""


class UserLookupTimeout(UserLookupError):
    """The lookup did not complete within the configured timeout."""


class UserService:
    """Сервис чтения пользователей из коллекции MongoDB.

    Parameters
    ----------
    collection
        PyMongo async collection (or any object with an awaitable ``find_one``).
    minimum_age : int
        Users must have ``age`` strictly greater than this value.
    query_timeout : Optional[float]
        Upper bound in seconds for a single query.  ``None`` or ``0``
        waits indefinitely.
    """

    def __init__(self, collection: Any, minimum_age: int = 21, query_timeout: Optional[float] = None) -> None:
        self.collection = collection
        self.minimum_age = minimum_age
        self.query_timeout = query_timeout or None

    @staticmethod
    def is_valid_id(user_id: Any) -> bool:
        # ObjectId.is_valid also accepts 12 raw bytes; only hex text is allowed here.
        return isinstance(user_id, str) and len(user_id) == 24 and ObjectId.is_valid(user_id)

    def build_filter(self, user_id: str) -> Dict[str, Any]:
        return {"_id": ObjectId(user_id), "age": {"$gt": self.minimum_age}}

    async def get_adult_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Return the user document for ``user_id`` or ``None``.

        Raises ``InvalidUserId`` before any I/O when the identifier is
        malformed, ``UserLookupTimeout`` when the query exceeds the
        timeout and ``UserLookupError`` for any other failure of the
        query, including documents the driver cannot decode.
        """
        if not self.is_valid_id(user_id):
            raise InvalidUserId(user_id)

        try:
            query = self.collection.find_one(self.build_filter(user_id))
            if self.query_timeout:
                return await asyncio.wait_for(query, timeout=self.query_timeout)
            return await query
        except asyncio.TimeoutError as exc:
            raise UserLookupTimeout(f"User lookup exceeded {self.query_timeout}s") from exc
        except PyMongoError as exc:
            raise UserLookupError(str(exc)) from exc
        except Exception as exc:
            # Decoding failures (bson.errors.InvalidBSON) are not PyMongoErrors.
            raise UserLookupError(f"{type(exc).__name__}: {exc}") from exc
