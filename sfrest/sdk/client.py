"""Async and sync HTTP clients for the Salesforce REST API."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Mapping, Sequence

import httpx

from sfrest.sdk import urls
from sfrest.sdk.exceptions import SalesforceError, build_exception, parse_error
from sfrest.sdk.models import (
    ApiVersion,
    AuthContext,
    LimitInfo,
    QueryResult,
    SObjectSummary,
)
from sfrest.services import limits as limit_state
from sfrest.services.request_context import request_scope

logger = logging.getLogger(__name__)


def _decode(response: httpx.Response) -> Any:
    """Decode a JSON body; 204 and other empty bodies yield *None*."""
    if not response.content:
        return None
    return response.json()


def _flow_inputs(
    inputs: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None,
) -> list[Mapping[str, Any]]:
    if inputs is None:
        return []
    if isinstance(inputs, Mapping):
        return [inputs]
    return list(inputs)


def _search_records(body: Any) -> list[dict[str, Any]]:
    # Older API versions return a bare list.
    if isinstance(body, list):
        return body
    return body.get("searchRecords", [])


class _BaseClient:
    """State shared by both clients: auth, version pinning, usage tracking."""

    def __init__(self, auth: AuthContext, version: str | None) -> None:
        self.auth = auth
        self._version = version
        # Scoped to the current context so concurrent tasks keep their own pin.
        self._pinned: ContextVar[str | None] = ContextVar(
            f"sfrest_pinned_version_{id(self)}", default=None,
        )
        self.last_limit_info: LimitInfo | None = None

    def _client_kwargs(self, timeout: float, transport: Any | None) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "base_url": self.auth.instance_url.rstrip("/"),
            "headers": {
                "Authorization": f"Bearer {self.auth.access_token}",
                "Accept": "application/json",
            },
            "timeout": timeout,
        }
        if transport is not None:
            kwargs["transport"] = transport
        return kwargs

    @property
    def version(self) -> str | None:
        """The pinned or negotiated API version, *None* until known."""
        return self._pinned.get() or self._version

    @contextmanager
    def using_version(self, version: str) -> Iterator[None]:
        """Pin *version* for calls made inside the block.

        The pin lives in a context variable, so other tasks sharing this
        client keep using the negotiated version.
        """
        token = self._pinned.set(version)
        try:
            yield
        finally:
            self._pinned.reset(token)

    def _handle_response(self, response: httpx.Response) -> None:
        self.last_limit_info = limit_state.record(response.headers)
        if response.status_code >= 400:
            detail, error_code = parse_error(response)
            raise build_exception(
                response.status_code, detail, error_code, self.last_limit_info,
            )

    @staticmethod
    def _pick_latest(versions: list[ApiVersion]) -> str:
        if not versions:
            raise ValueError("server reported no API versions")
        return versions[-1].version


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncSalesforceClient(_BaseClient):
    """Async client for the Salesforce REST API (backed by ``httpx.AsyncClient``)."""

    def __init__(
        self,
        auth: AuthContext,
        version: str | None = None,
        timeout: float = 30.0,
        *,
        _transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(auth, version)
        self._client = httpx.AsyncClient(**self._client_kwargs(timeout, _transport))
        self._version_lock = asyncio.Lock()

    # -- context manager -----------------------------------------------------

    async def __aenter__(self) -> AsyncSalesforceClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # -- internal ------------------------------------------------------------

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Issue one request against the instance and decode the response."""
        with request_scope():
            resp = await self._client.request(method, path, **kwargs)
            logger.debug("%s %s -> %d", method, path, resp.status_code)
            self._handle_response(resp)
            return _decode(resp)

    async def safe_request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Like :meth:`request`, but failures come back as their message."""
        try:
            return await self.request(method, path, **kwargs)
        except (SalesforceError, httpx.HTTPError, ValueError) as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            return str(exc)

    # -- versions ------------------------------------------------------------

    async def all_versions(self) -> list[ApiVersion]:
        body = await self.request("GET", urls.VERSIONS_PATH)
        return [ApiVersion.model_validate(v) for v in body]

    async def latest_version(self) -> str:
        return self._pick_latest(await self.all_versions())

    async def resolve_version(self) -> str:
        """Return the pinned version, negotiating (once) if none is set."""
        pinned = self._pinned.get()
        if pinned is not None:
            return pinned
        if self._version is None:
            async with self._version_lock:
                # Another task may have finished negotiating while we waited.
                if self._version is None:
                    self._version = await self.latest_version()
                    logger.info("Using API version %s", self._version)
        return self._version

    # -- public methods ------------------------------------------------------

    async def resources(self) -> dict[str, str]:
        return await self.request("GET", urls.resources_url(await self.resolve_version()))

    async def describe_global(self) -> dict[str, Any]:
        return await self.request("GET", urls.sobjects_url(await self.resolve_version()))

    async def sobject_names(self) -> list[SObjectSummary]:
        body = await self.describe_global()
        return [SObjectSummary.from_describe(s) for s in body.get("sobjects", [])]

    async def recent_items(self, sobject: str) -> list[dict[str, Any]]:
        body = await self.request(
            "GET", urls.sobject_url(await self.resolve_version(), sobject),
        )
        return body.get("recentItems", [])

    async def get(
        self,
        sobject: str,
        record_id: str,
        fields: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        version = await self.resolve_version()
        body = await self.request(
            "GET", urls.record_url(version, sobject, record_id, fields),
        )
        if fields:
            body.pop("attributes", None)
        return body

    async def describe(self, sobject: str) -> dict[str, Any]:
        return await self.request(
            "GET", urls.describe_url(await self.resolve_version(), sobject),
        )

    async def create(self, sobject: str, record: Mapping[str, Any]) -> dict[str, Any]:
        url = urls.sobject_url(await self.resolve_version(), sobject) + "/"
        return await self.request("POST", url, json=dict(record))

    async def update(
        self,
        sobject: str,
        record_id: str,
        record: Mapping[str, Any],
    ) -> None:
        url = urls.record_url(await self.resolve_version(), sobject, record_id)
        await self.request("PATCH", url, json=dict(record))

    async def delete(self, sobject: str, record_id: str) -> None:
        url = urls.record_url(await self.resolve_version(), sobject, record_id)
        await self.request("DELETE", url)

    async def query(self, soql: str) -> QueryResult:
        body = await self.request(
            "GET", urls.gen_query_url(await self.resolve_version(), soql),
        )
        return QueryResult.model_validate(body)

    async def query_all(self, soql: str) -> QueryResult:
        body = await self.request(
            "GET", urls.gen_query_all_url(await self.resolve_version(), soql),
        )
        return QueryResult.model_validate(body)

    async def search(self, sosl: str) -> list[dict[str, Any]]:
        body = await self.request(
            "GET", urls.gen_search_url(await self.resolve_version(), sosl),
        )
        return _search_records(body)

    async def flows(self) -> dict[str, Any]:
        return await self.request("GET", urls.flows_url(await self.resolve_version()))

    async def run_flow(
        self,
        name: str,
        inputs: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        url = urls.flow_url(await self.resolve_version(), name)
        return await self.request("POST", url, json={"inputs": _flow_inputs(inputs)})

    async def limits(self) -> dict[str, Any]:
        return await self.request("GET", urls.limits_url(await self.resolve_version()))


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class SalesforceClient(_BaseClient):
    """Synchronous client for the Salesforce REST API (backed by ``httpx.Client``)."""

    def __init__(
        self,
        auth: AuthContext,
        version: str | None = None,
        timeout: float = 30.0,
        *,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(auth, version)
        self._client = httpx.Client(**self._client_kwargs(timeout, _transport))

    # -- context manager -----------------------------------------------------

    def __enter__(self) -> SalesforceClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -- internal ------------------------------------------------------------

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Issue one request against the instance and decode the response."""
        with request_scope():
            resp = self._client.request(method, path, **kwargs)
            logger.debug("%s %s -> %d", method, path, resp.status_code)
            self._handle_response(resp)
            return _decode(resp)

    def safe_request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Like :meth:`request`, but failures come back as their message."""
        try:
            return self.request(method, path, **kwargs)
        except (SalesforceError, httpx.HTTPError, ValueError) as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            return str(exc)

    # -- versions ------------------------------------------------------------

    def all_versions(self) -> list[ApiVersion]:
        body = self.request("GET", urls.VERSIONS_PATH)
        return [ApiVersion.model_validate(v) for v in body]

    def latest_version(self) -> str:
        return self._pick_latest(self.all_versions())

    def resolve_version(self) -> str:
        """Return the pinned version, negotiating (once) if none is set."""
        pinned = self._pinned.get()
        if pinned is not None:
            return pinned
        if self._version is None:
            self._version = self.latest_version()
            logger.info("Using API version %s", self._version)
        return self._version

    # -- public methods ------------------------------------------------------

    def resources(self) -> dict[str, str]:
        return self.request("GET", urls.resources_url(self.resolve_version()))

    def describe_global(self) -> dict[str, Any]:
        return self.request("GET", urls.sobjects_url(self.resolve_version()))

    def sobject_names(self) -> list[SObjectSummary]:
        body = self.describe_global()
        return [SObjectSummary.from_describe(s) for s in body.get("sobjects", [])]

    def recent_items(self, sobject: str) -> list[dict[str, Any]]:
        body = self.request("GET", urls.sobject_url(self.resolve_version(), sobject))
        return body.get("recentItems", [])

    def get(
        self,
        sobject: str,
        record_id: str,
        fields: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        body = self.request(
            "GET", urls.record_url(self.resolve_version(), sobject, record_id, fields),
        )
        if fields:
            body.pop("attributes", None)
        return body

    def describe(self, sobject: str) -> dict[str, Any]:
        return self.request("GET", urls.describe_url(self.resolve_version(), sobject))

    def create(self, sobject: str, record: Mapping[str, Any]) -> dict[str, Any]:
        url = urls.sobject_url(self.resolve_version(), sobject) + "/"
        return self.request("POST", url, json=dict(record))

    def update(
        self,
        sobject: str,
        record_id: str,
        record: Mapping[str, Any],
    ) -> None:
        url = urls.record_url(self.resolve_version(), sobject, record_id)
        self.request("PATCH", url, json=dict(record))

    def delete(self, sobject: str, record_id: str) -> None:
        url = urls.record_url(self.resolve_version(), sobject, record_id)
        self.request("DELETE", url)

    def query(self, soql: str) -> QueryResult:
        body = self.request("GET", urls.gen_query_url(self.resolve_version(), soql))
        return QueryResult.model_validate(body)

    def query_all(self, soql: str) -> QueryResult:
        body = self.request(
            "GET", urls.gen_query_all_url(self.resolve_version(), soql),
        )
        return QueryResult.model_validate(body)

    def search(self, sosl: str) -> list[dict[str, Any]]:
        body = self.request("GET", urls.gen_search_url(self.resolve_version(), sosl))
        return _search_records(body)

    def flows(self) -> dict[str, Any]:
        return self.request("GET", urls.flows_url(self.resolve_version()))

    def run_flow(
        self,
        name: str,
        inputs: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        url = urls.flow_url(self.resolve_version(), name)
        return self.request("POST", url, json={"inputs": _flow_inputs(inputs)})

    def limits(self) -> dict[str, Any]:
        return self.request("GET", urls.limits_url(self.resolve_version()))
