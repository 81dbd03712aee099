"""Unit tests for Status, StatusCode and exception translation."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import aiohttp
import pytest
from pydantic import ValidationError

from gax.core import Status, StatusCode
from gax.operations import Operation


class TestStatus:
    """Test the Status value type."""

    def test_default_is_ok(self):
        status = Status()
        assert status.ok
        assert status.code is StatusCode.OK
        assert status.message == ""

    def test_equality_by_code_and_message(self):
        assert Status(StatusCode.NOT_FOUND, "x") == Status(StatusCode.NOT_FOUND, "x")
        assert Status(StatusCode.NOT_FOUND, "x") != Status(StatusCode.NOT_FOUND, "y")
        assert Status(StatusCode.NOT_FOUND, "x") != Status(StatusCode.ABORTED, "x")

    def test_immutable(self):
        status = Status()
        with pytest.raises(AttributeError):
            status.code = StatusCode.UNKNOWN  # type: ignore[misc]

    def test_str(self):
        assert str(Status()) == "OK"
        assert str(Status(StatusCode.UNAVAILABLE, "down")) == "UNAVAILABLE: down"


class TestStatusCode:
    """Test canonical code conversions."""

    def test_seventeen_codes(self):
        assert len(StatusCode) == 17
        assert sorted(code.number for code in StatusCode) == list(range(17))

    def test_from_number(self):
        assert StatusCode.from_number(5) is StatusCode.NOT_FOUND
        assert StatusCode.from_number(16) is StatusCode.UNAUTHENTICATED
        assert StatusCode.from_number(99) is StatusCode.UNKNOWN

    @pytest.mark.parametrize(
        ("http_status", "code"),
        [
            (200, StatusCode.OK),
            (204, StatusCode.OK),
            (400, StatusCode.INVALID_ARGUMENT),
            (401, StatusCode.UNAUTHENTICATED),
            (403, StatusCode.PERMISSION_DENIED),
            (404, StatusCode.NOT_FOUND),
            (409, StatusCode.ABORTED),
            (418, StatusCode.FAILED_PRECONDITION),
            (429, StatusCode.RESOURCE_EXHAUSTED),
            (500, StatusCode.INTERNAL),
            (502, StatusCode.INTERNAL),
            (503, StatusCode.UNAVAILABLE),
            (504, StatusCode.DEADLINE_EXCEEDED),
            (302, StatusCode.UNKNOWN),
        ],
    )
    def test_from_http(self, http_status, code):
        assert StatusCode.from_http(http_status) is code


class TestStatusFromException:
    """Test translation of transport-native errors."""

    def test_response_error(self):
        error = aiohttp.ClientResponseError(MagicMock(), (), status=429, message="Too Many")

        status = Status.from_exception(error)

        assert status == Status(StatusCode.RESOURCE_EXHAUSTED, "Too Many")

    def test_timeout(self):
        assert Status.from_exception(asyncio.TimeoutError()).code is StatusCode.DEADLINE_EXCEEDED

    def test_connection_error(self):
        status = Status.from_exception(aiohttp.ClientConnectionError("refused"))
        assert status == Status(StatusCode.UNAVAILABLE, "refused")

    def test_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            Operation.model_validate({"done": "maybe"})

        assert Status.from_exception(exc_info.value).code is StatusCode.INTERNAL

    def test_other_client_error(self):
        status = Status.from_exception(aiohttp.ClientPayloadError("truncated"))
        assert status.code is StatusCode.UNKNOWN
