from __future__ import annotations

import asyncio

import pytest
from bson import ObjectId
from bson.errors import InvalidBSON
from pymongo.errors import ConnectionFailure, NetworkTimeout

from centivo_users_api.app.services.user_service import (
    InvalidUserId,
    UserLookupError,
    UserLookupTimeout,
    UserService,
)

from .conftest import ADULT_ID, MISSING_ID, UNDERAGE_ID


@pytest.mark.parametrize(
    "value, expected",
    [
        (ADULT_ID, True),
        (ADULT_ID.upper(), True),
        ("", False),
        ("xyz", False),
        ("g" * 24, False),
        (b"aaaaaaaaaaaa", False),
        (None, False),
    ],
)
def test_is_valid_id(value, expected):
    assert UserService.is_valid_id(value) is expected


def test_invalid_id_raises_before_query(users_collection):
    service = UserService(users_collection)

    with pytest.raises(InvalidUserId):
        asyncio.run(service.get_adult_user("not-an-id"))
    assert users_collection.queries == []


def test_returns_adult_document(users_collection):
    service = UserService(users_collection)

    user = asyncio.run(service.get_adult_user(ADULT_ID))

    assert user == {"_id": ObjectId(ADULT_ID), "age": 25}


def test_age_bound_is_strict(users_collection):
    service = UserService(users_collection)

    assert asyncio.run(service.get_adult_user(UNDERAGE_ID)) is None
    assert asyncio.run(service.get_adult_user(MISSING_ID)) is None


def test_minimum_age_is_configurable(users_collection):
    service = UserService(users_collection, minimum_age=20)

    assert asyncio.run(service.get_adult_user(UNDERAGE_ID)) == {"_id": ObjectId(UNDERAGE_ID), "age": 21}
    assert users_collection.queries[-1]["age"] == {"$gt": 20}


def test_driver_error_is_wrapped(users_collection):
    users_collection.error = NetworkTimeout("socket timed out")
    service = UserService(users_collection)

    with pytest.raises(UserLookupError) as excinfo:
        asyncio.run(service.get_adult_user(ADULT_ID))
    assert not isinstance(excinfo.value, UserLookupTimeout)
    assert isinstance(excinfo.value.__cause__, NetworkTimeout)


def test_query_timeout(users_collection):
    users_collection.delay = 0.5
    service = UserService(users_collection, query_timeout=0.01)

    with pytest.raises(UserLookupTimeout):
        asyncio.run(service.get_adult_user(ADULT_ID))


def test_zero_timeout_waits_for_result(users_collection):
    users_collection.delay = 0.01
    service = UserService(users_collection, query_timeout=0)

    assert service.query_timeout is None
    assert asyncio.run(service.get_adult_user(ADULT_ID))["age"] == 25


def test_decode_error_is_wrapped(users_collection):
    users_collection.error = InvalidBSON("corrupt document")
    service = UserService(users_collection)

    with pytest.raises(UserLookupError) as excinfo:
        asyncio.run(service.get_adult_user(ADULT_ID))
    assert isinstance(excinfo.value.__cause__, InvalidBSON)


class RaisingCollection:
    def find_one(self, filter):
        raise ConnectionFailure("pool closed")


def test_error_raised_before_awaiting_is_wrapped():
    service = UserService(RaisingCollection())

    with pytest.raises(UserLookupError):
        asyncio.run(service.get_adult_user(ADULT_ID))
