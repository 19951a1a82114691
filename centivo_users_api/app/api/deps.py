"""
FastAPI dependencies shared by the endpoints.

The Mongo context and settings are stored on ``app.state`` by
``create_app``; these helpers fetch them from the current request so
handlers never touch module level state.
"""

from fastapi import Depends, Request

from centivo_users_api.app.core.config import Settings
from centivo_users_api.app.core.db import DatabaseNotReady, get_mongo_context
from centivo_users_api.app.services.user_service import UserService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request, settings: Settings = Depends(get_settings)) -> UserService:
    """Build a ``UserService`` bound to the application's users collection.

    Raises ``DatabaseNotReady`` if the application has no connected
    context; the users endpoint turns that into a 503.
    """
    context = get_mongo_context(request.app)
    if context is None:
        raise DatabaseNotReady("No MongoDB context attached to the application")
    return UserService(
        context.users,
        minimum_age=settings.minimum_age,
        query_timeout=settings.query_timeout_seconds,
    )
