"""
Pydantic models for user responses.

User documents are owned by whoever writes the ``users`` collection,
so the service does not model their fields.  ``UserEnvelope`` wraps
the raw document (or ``null``) and ``ErrorMessage`` is the body of
every non-200 response.  ``serialize_user`` turns BSON values that
have no JSON form into JSON-friendly values.
"""

import base64
from typing import Any, Dict, Optional

from bson import Binary, Decimal128, ObjectId
from bson import json_util
from bson.binary import UUID_SUBTYPE, UuidRepresentation
from bson.code import Code
from bson.dbref import DBRef
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.regex import Regex
from bson.timestamp import Timestamp
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field


class UserEnvelope(BaseModel):
    user: Optional[Dict[str, Any]] = Field(
        None,
        examples=[{"_id": "507f1f77bcf86cd799439012", "age": 25}],
        description="Matched user document, or null when no adult user has this id",
    )


class ErrorMessage(BaseModel):
    msg: str = Field(..., examples=["Invalid Params"])


def _bytes_to_text(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _binary_to_text(value: Binary) -> str:
    # UUIDs read as canonical text; any other payload as base64.
    if value.subtype == UUID_SUBTYPE:
        return str(value.as_uuid(UuidRepresentation.STANDARD))
    return _bytes_to_text(bytes(value))


def _extended_json(value: Any) -> Any:
    return jsonable_encoder(json_util.default(value, json_util.RELAXED_JSON_OPTIONS))


BSON_ENCODERS = {
    ObjectId: str,
    Decimal128: str,
    Binary: _binary_to_text,
    bytes: _bytes_to_text,
    Timestamp: _extended_json,
    Regex: _extended_json,
    Code: _extended_json,
    DBRef: _extended_json,
    MinKey: _extended_json,
    MaxKey: _extended_json,
}


def serialize_user(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return ``document`` in a JSON-safe form.

    ``ObjectId`` and ``Decimal128`` become strings, UUID binaries become
    canonical UUID text, other binaries and raw bytes base64.  Remaining BSON-only
    types use their relaxed Extended JSON shape (``{"$timestamp": ...}``).
    """
    if document is None:
        return None
    return jsonable_encoder(document, custom_encoder=BSON_ENCODERS)
