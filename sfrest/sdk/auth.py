"""OAuth2 username-password flow."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from sfrest.sdk.exceptions import AuthenticationError, parse_error
from sfrest.sdk.models import AuthContext, Credentials
from sfrest.sdk.urls import TOKEN_PATH

logger = logging.getLogger(__name__)

DEFAULT_LOGIN_URL = "https://login.salesforce.com"


def _token_form(credentials: Credentials) -> dict[str, str]:
    return {
        "grant_type": "password",
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "username": credentials.username,
        "password": credentials.grant_password,
        "format": "json",
    }


def _client_kwargs(
    login_url: str,
    timeout: float,
    transport: Any | None,
) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "base_url": login_url.rstrip("/"),
        "timeout": timeout,
    }
    if transport is not None:
        kwargs["transport"] = transport
    return kwargs


def _to_auth_context(response: httpx.Response, username: str) -> AuthContext:
    if not response.is_success:
        detail, error_code = parse_error(response)
        logger.warning("Authentication failed for %s: %s", username, detail)
        raise AuthenticationError(response.status_code, detail, error_code)
    auth = AuthContext.model_validate(response.json())
    logger.info("Authenticated %s against %s", username, auth.instance_url)
    return auth


def authenticate(
    credentials: Credentials,
    login_url: str = DEFAULT_LOGIN_URL,
    timeout: float = 30.0,
    *,
    _transport: httpx.BaseTransport | None = None,
) -> AuthContext:
    """Exchange *credentials* for an :class:`AuthContext`.

    Raises :class:`AuthenticationError` when the token endpoint rejects the
    request (bad password, unknown client, missing security token ...).
    """
    with httpx.Client(**_client_kwargs(login_url, timeout, _transport)) as client:
        resp = client.post(TOKEN_PATH, data=_token_form(credentials))
    return _to_auth_context(resp, credentials.username)


async def async_authenticate(
    credentials: Credentials,
    login_url: str = DEFAULT_LOGIN_URL,
    timeout: float = 30.0,
    *,
    _transport: httpx.AsyncBaseTransport | None = None,
) -> AuthContext:
    """Async variant of :func:`authenticate`."""
    async with httpx.AsyncClient(
        **_client_kwargs(login_url, timeout, _transport)
    ) as client:
        resp = await client.post(TOKEN_PATH, data=_token_form(credentials))
    return _to_auth_context(resp, credentials.username)
