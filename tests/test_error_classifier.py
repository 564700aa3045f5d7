"""
Error classification tests.

Module under test: dashboard_access.exception
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from conftest import status_error
from dashboard_access.exception import (
    ApiError,
    AuthError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    RecoveryAction,
    ServerError,
    UnknownApiError,
    ValidationFailedError,
    action_for,
    classify,
    format_validation_errors,
    get_user_message,
)


@pytest.mark.parametrize(
    ("status", "kind", "error_type"),
    [
        (400, ErrorKind.VALIDATION, ValidationFailedError),
        (401, ErrorKind.AUTH, AuthError),
        (403, ErrorKind.AUTH, AuthError),
        (404, ErrorKind.NOT_FOUND, NotFoundError),
        (500, ErrorKind.SERVER, ServerError),
        (503, ErrorKind.SERVER, ServerError),
        (409, ErrorKind.UNKNOWN, UnknownApiError),
        (429, ErrorKind.UNKNOWN, UnknownApiError),
        (302, ErrorKind.UNKNOWN, UnknownApiError),
    ],
)
def test_status_table(status: int, kind: ErrorKind, error_type: type[ApiError]) -> None:
    error = classify(status_error(status))

    assert isinstance(error, error_type)
    assert error.kind == kind
    assert error.status == status


class TestNoResponse:
    """Failures without a response are network errors with status 0."""

    def test_httpx_timeout(self):
        raw = httpx.ReadTimeout("read timed out", request=httpx.Request("GET", "http://test/"))
        error = classify(raw)

        assert isinstance(error, NetworkError)
        assert error.status == 0
        assert error.is_timeout is True
        assert error.message == "Request timeout. Please try again."
        assert error.cause is raw

    def test_asyncio_timeout(self):
        error = classify(asyncio.TimeoutError())

        assert error.kind == ErrorKind.NETWORK
        assert error.is_timeout is True

    def test_connection_refused(self):
        raw = httpx.ConnectError("connection refused", request=httpx.Request("GET", "http://test/"))
        error = classify(raw)

        assert error.kind == ErrorKind.NETWORK
        assert error.status == 0
        assert error.is_timeout is False
        assert error.message == "Network error. Please check your connection."

    def test_plain_exception(self):
        error = classify(ConnectionResetError("reset by peer"))

        assert error.kind == ErrorKind.NETWORK
        assert error.status == 0

    def test_abort_code_is_timeout(self):
        class _Aborted(Exception):
            code = "ECONNABORTED"

        assert classify(_Aborted()).is_timeout is True


class TestResponseBody:
    def test_field_errors_from_400_body(self):
        error = classify(
            status_error(
                400,
                {"message": "Invalid form", "errors": {"firstName": ["is required"], "email": "is invalid"}},
            )
        )

        assert error.message == "Invalid form"
        assert error.field_errors == {"firstName": ["is required"], "email": ["is invalid"]}

    def test_default_message_when_body_has_none(self):
        assert classify(status_error(400)).message == "Invalid request parameters"
        assert classify(status_error(401)).message == "You are not authenticated. Please log in."
        assert classify(status_error(403)).message == "You do not have permission to perform this action."
        assert classify(status_error(404)).message == "The requested resource was not found."
        assert classify(status_error(502)).message == "Server error. Please try again later."
        assert classify(status_error(418)).message == "An unexpected error occurred."

    def test_error_key_used_when_message_missing(self):
        assert classify(status_error(500, {"error": "database down"})).message == "database down"

    def test_message_never_changes_kind(self):
        error = classify(status_error(500, {"message": "Validation failed: unauthorized timeout"}))

        assert error.kind == ErrorKind.SERVER

    def test_non_json_body(self):
        request = httpx.Request("GET", "http://test/")
        response = httpx.Response(502, text="<html>Bad gateway</html>", request=request)
        raw = httpx.HTTPStatusError("bad gateway", request=request, response=response)

        error = classify(raw)
        assert error.kind == ErrorKind.SERVER
        assert error.message == "Server error. Please try again later."

    def test_unread_stream_classified_by_status(self):
        request = httpx.Request("GET", "http://test/")
        response = httpx.Response(500, stream=httpx.ByteStream(b'{"message": "boom"}'), request=request)
        raw = httpx.HTTPStatusError("server error", request=request, response=response)

        error = classify(raw)

        assert isinstance(error, ServerError)
        assert error.status == 500
        assert error.message == "Server error. Please try again later."

    def test_duck_typed_response(self):
        class _Response:
            status = 404
            data = {"message": "No such company size"}

        class _Raw(Exception):
            response = _Response()

        error = classify(_Raw())
        assert isinstance(error, NotFoundError)
        assert error.message == "No such company size"


def test_classify_is_idempotent() -> None:
    first = classify(status_error(503))

    assert classify(first) is first


def test_recovery_actions() -> None:
    assert action_for(classify(status_error(500))) == RecoveryAction.RETRY
    assert action_for(NetworkError()) == RecoveryAction.RETRY
    assert action_for(classify(status_error(400))) == RecoveryAction.FAIL_FAST
    assert action_for(classify(status_error(401))) == RecoveryAction.FAIL_FAST
    assert action_for(classify(status_error(404))) == RecoveryAction.FAIL_FAST


def test_user_message_formats_field_errors() -> None:
    error = ValidationFailedError(status=400, field_errors={"companyName": ["is required", "is too short"]})

    assert get_user_message(error) == "Validation errors:\ncompany Name: is required, is too short"
    assert get_user_message(ServerError(status=500)) == "Server error. Please try again later."


def test_format_validation_errors_one_line_per_field() -> None:
    text = format_validation_errors({"email": ["is invalid"], "phoneNumber": ["is required"]})

    assert text.splitlines() == ["Validation errors:", "email: is invalid", "phone Number: is required"]


def test_to_dict() -> None:
    error = ValidationFailedError("Bad input", status=400, field_errors={"email": ["is invalid"]})

    assert error.to_dict() == {
        "kind": "validation",
        "status": 400,
        "message": "Bad input",
        "field_errors": {"email": ["is invalid"]},
    }
