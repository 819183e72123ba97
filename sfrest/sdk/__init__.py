"""Salesforce REST SDK: auth, typed clients and query helpers."""

from __future__ import annotations

from sfrest.sdk.auth import async_authenticate, authenticate
from sfrest.sdk.client import AsyncSalesforceClient, SalesforceClient
from sfrest.sdk.exceptions import (
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    SalesforceError,
    ValidationError,
)
from sfrest.sdk.models import (
    ApiVersion,
    AuthContext,
    Credentials,
    LimitInfo,
    QueryResult,
    SObjectSummary,
    load_credentials,
)
from sfrest.sdk.soql import format_soql, quote

__all__ = [
    "AsyncSalesforceClient",
    "SalesforceClient",
    "authenticate",
    "async_authenticate",
    "SalesforceError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
    "ApiVersion",
    "AuthContext",
    "Credentials",
    "LimitInfo",
    "QueryResult",
    "SObjectSummary",
    "load_credentials",
    "format_soql",
    "quote",
]
