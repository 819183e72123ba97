"""Exception hierarchy for the Salesforce SDK."""

from __future__ import annotations

import httpx

from sfrest.sdk.models import LimitInfo


class SalesforceError(Exception):
    """Base exception for all Salesforce API errors."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code
        prefix = f"{status_code} {error_code}" if error_code else str(status_code)
        super().__init__(f"{prefix}: {detail}")


class ValidationError(SalesforceError):
    """Raised on 400 responses (malformed query, bad field, ...)."""


class AuthenticationError(SalesforceError):
    """Raised on 401 responses and failed token requests."""


class ForbiddenError(SalesforceError):
    """Raised on 403 responses."""


class NotFoundError(SalesforceError):
    """Raised on 404 responses."""


class RateLimitError(SalesforceError):
    """Raised on 429 responses or ``REQUEST_LIMIT_EXCEEDED`` errors."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str | None = None,
        limit_info: LimitInfo | None = None,
    ) -> None:
        super().__init__(status_code, detail, error_code)
        self.limit_info = limit_info


# Maps HTTP status codes to exception classes.
_STATUS_MAP: dict[int, type[SalesforceError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitError,
}

_RATE_LIMIT_CODES = frozenset({"REQUEST_LIMIT_EXCEEDED"})


def parse_error(response: httpx.Response) -> tuple[str, str | None]:
    """Extract ``(detail, error_code)`` from an error body.

    REST errors arrive as ``[{"message": ..., "errorCode": ...}]``; the OAuth
    endpoint answers ``{"error": ..., "error_description": ...}``.
    """
    try:
        body = response.json()
    except ValueError:
        return response.text, None
    if isinstance(body, list) and body and isinstance(body[0], dict):
        first = body[0]
        return first.get("message", response.text), first.get("errorCode")
    if isinstance(body, dict):
        if "error" in body:
            return body.get("error_description") or body["error"], body["error"]
        if "message" in body:
            return body["message"], body.get("errorCode")
    return response.text, None


def build_exception(
    status_code: int,
    detail: str,
    error_code: str | None = None,
    limit_info: LimitInfo | None = None,
) -> SalesforceError:
    """Construct the appropriate exception for *status_code*."""
    exc_cls = _STATUS_MAP.get(status_code, SalesforceError)
    if error_code in _RATE_LIMIT_CODES:
        exc_cls = RateLimitError
    if exc_cls is RateLimitError:
        return RateLimitError(status_code, detail, error_code, limit_info)
    return exc_cls(status_code, detail, error_code)
