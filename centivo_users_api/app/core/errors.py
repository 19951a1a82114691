"""
Error payloads and application level exception handlers.

Every error response of this service carries a ``{"msg": ...}`` body.
Request-level failures are translated inside the endpoint; the
handlers here cover failures raised while resolving dependencies.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from .db import DatabaseNotReady


logger = logging.getLogger(__name__)

INVALID_PARAMS = "Invalid Params"
INTERNAL_ERROR = "Internal server error"
USER_NOT_FOUND = "User not found"
SERVICE_UNAVAILABLE = "Service unavailable"
DATABASE_TIMEOUT = "Database timeout"


def error_response(status_code: int, msg: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"msg": msg})


async def database_not_ready_handler(request: Request, exc: DatabaseNotReady) -> JSONResponse:
    logger.error("Rejecting %s %s: %s", request.method, request.url.path, exc)
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, SERVICE_UNAVAILABLE)
