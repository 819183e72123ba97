"""Builders for versioned REST paths.

All functions return paths relative to the instance URL, e.g.
``/services/data/v59.0/sobjects/Account``.
"""

from __future__ import annotations

from typing import Sequence
from urllib.parse import quote_plus

VERSIONS_PATH = "/services/data/"
TOKEN_PATH = "/services/oauth2/token"


def _require(value: str, what: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{what} must not be blank")
    return value


def data_path(version: str) -> str:
    version = _require(version, "version")
    return f"/services/data/v{version.lstrip('vV')}"


def resources_url(version: str) -> str:
    return f"{data_path(version)}/"


def sobjects_url(version: str) -> str:
    return f"{data_path(version)}/sobjects"


def sobject_url(version: str, sobject: str) -> str:
    return f"{sobjects_url(version)}/{_require(sobject, 'sobject')}"


def record_url(
    version: str,
    sobject: str,
    record_id: str,
    fields: Sequence[str] | None = None,
) -> str:
    if isinstance(fields, str):
        raise TypeError("fields must be a sequence of field names, not a string")
    url = f"{sobject_url(version, sobject)}/{_require(record_id, 'record id')}"
    if fields:
        url += "?fields=" + ",".join(fields)
    return url


def describe_url(version: str, sobject: str) -> str:
    return f"{sobject_url(version, sobject)}/describe"


def limits_url(version: str) -> str:
    return f"{data_path(version)}/limits"


def flows_url(version: str) -> str:
    return f"{data_path(version)}/actions/custom/flow"


def flow_url(version: str, name: str) -> str:
    return f"{flows_url(version)}/{_require(name, 'flow name')}"


def _encode_q(query: str) -> str:
    query = _require(query, "query")
    return quote_plus(" ".join(query.split()))


def gen_query_url(version: str, query: str) -> str:
    """Build a SOQL query URL.

    >>> gen_query_url("20.0", "SELECT name from Account")
    '/services/data/v20.0/query?q=SELECT+name+from+Account'
    """
    return f"{data_path(version)}/query?q={_encode_q(query)}"


def gen_query_all_url(version: str, query: str) -> str:
    """Like :func:`gen_query_url` but includes deleted and archived rows."""
    return f"{data_path(version)}/queryAll?q={_encode_q(query)}"


def gen_search_url(version: str, sosl: str) -> str:
    """Build a SOSL search URL."""
    return f"{data_path(version)}/search?q={_encode_q(sosl)}"
