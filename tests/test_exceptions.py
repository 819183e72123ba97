"""Tests for error body parsing and status mapping."""

from __future__ import annotations

import httpx
import pytest

from sfrest.sdk.exceptions import (
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    SalesforceError,
    ValidationError,
    build_exception,
    parse_error,
)
from sfrest.sdk.models import LimitInfo


def test_parse_rest_error_list():
    resp = httpx.Response(
        400, json=[{"message": "No such column", "errorCode": "INVALID_FIELD"}],
    )
    assert parse_error(resp) == ("No such column", "INVALID_FIELD")


def test_parse_oauth_error():
    resp = httpx.Response(
        400, json={"error": "invalid_grant", "error_description": "authentication failure"},
    )
    assert parse_error(resp) == ("authentication failure", "invalid_grant")


def test_parse_single_message_object():
    resp = httpx.Response(500, json={"message": "boom", "errorCode": "UNKNOWN_EXCEPTION"})
    assert parse_error(resp) == ("boom", "UNKNOWN_EXCEPTION")


def test_parse_non_json_body():
    resp = httpx.Response(502, text="<html>Bad Gateway</html>")
    assert parse_error(resp) == ("<html>Bad Gateway</html>", None)


def test_parse_unexpected_json_shape():
    resp = httpx.Response(500, json=[])
    assert parse_error(resp) == ("[]", None)


@pytest.mark.parametrize(
    ("status", "exc_cls"),
    [
        (400, ValidationError),
        (401, AuthenticationError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (429, RateLimitError),
        (500, SalesforceError),
        (503, SalesforceError),
    ],
)
def test_status_mapping(status, exc_cls):
    exc = build_exception(status, "detail")
    assert type(exc) is exc_cls
    assert exc.status_code == status


def test_request_limit_exceeded_overrides_status():
    info = LimitInfo(used=5000, available=5000)
    exc = build_exception(403, "limit", "REQUEST_LIMIT_EXCEEDED", info)
    assert isinstance(exc, RateLimitError)
    assert exc.limit_info is info


def test_message_format():
    assert str(build_exception(404, "gone", "NOT_FOUND")) == "404 NOT_FOUND: gone"
    assert str(build_exception(500, "oops")) == "500: oops"
