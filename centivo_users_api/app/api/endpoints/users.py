"""
User endpoints.

Expose ``GET /users/{user_id}``: fetch one user by ObjectId, returned
only when the user is older than the configured minimum age.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from centivo_users_api.app.api.deps import get_settings, get_user_service
from centivo_users_api.app.core.config import Settings
from centivo_users_api.app.core.errors import (
    DATABASE_TIMEOUT,
    INTERNAL_ERROR,
    INVALID_PARAMS,
    USER_NOT_FOUND,
    error_response,
)
from centivo_users_api.app.schemas.user import ErrorMessage, UserEnvelope, serialize_user
from centivo_users_api.app.services.user_service import (
    InvalidUserId,
    UserLookupError,
    UserLookupTimeout,
    UserService,
)


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{user_id}",
    response_model=UserEnvelope,
    responses={
        400: {"model": ErrorMessage, "description": "Malformed user id"},
        404: {"model": ErrorMessage, "description": "No adult user (only with USERS_NOT_FOUND_AS_404)"},
        500: {"model": ErrorMessage, "description": "Database error"},
        503: {"model": ErrorMessage, "description": "Database not connected"},
        504: {"model": ErrorMessage, "description": "Database query timed out"},
    },
)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Retrieve a user by id from the ``users`` collection.

    Requirements:

    * ``user_id`` must be a valid 24 character hex ObjectId;
    * only users with ``age`` strictly greater than the minimum age
      (21 by default) are returned.

    A user that does not exist and a user that is too young are
    indistinguishable: both answer ``200 {"user": null}``, or
    ``404 {"msg": "User not found"}`` when ``USERS_NOT_FOUND_AS_404``
    is enabled.
    """
    try:
        user = await service.get_adult_user(user_id)
    except InvalidUserId:
        logger.warning("Invalid user id: %r", user_id)
        return error_response(status.HTTP_400_BAD_REQUEST, INVALID_PARAMS)
    except UserLookupTimeout as exc:
        logger.error("Mongo query timeout for user %s: %s", user_id, exc)
        return error_response(status.HTTP_504_GATEWAY_TIMEOUT, DATABASE_TIMEOUT)
    except UserLookupError as exc:
        logger.error("Mongo query error for user %s: %s", user_id, exc, exc_info=exc.__cause__)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

    if user is None and settings.not_found_as_404:
        logger.info("No adult user with id %s", user_id)
        return error_response(status.HTTP_404_NOT_FOUND, USER_NOT_FOUND)

    try:
        content = {"user": serialize_user(user)}
    except Exception:
        logger.exception("Could not serialize user %s", user_id)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
    return JSONResponse(status_code=status.HTTP_200_OK, content=content)
