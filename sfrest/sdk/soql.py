"""Serialize Python values into SOQL literals.

``format_soql`` lets callers bind parameters into a query template without
hand-quoting::

    format_soql("SELECT Id FROM Contact WHERE Email = {email}", email=addr)
    format_soql("SELECT Id FROM Account WHERE Name LIKE '{:like}%'", prefix)
    format_soql("SELECT Id FROM Lead WHERE CreatedDate = {:literal}", "TODAY")
"""

from __future__ import annotations

import math
import string
from collections.abc import Sequence, Set
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

# Backslash must be escaped first.
_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ("'", "\\'"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("\b", "\\b"),
    ("\f", "\\f"),
)


def escape(text: str) -> str:
    """Escape *text* for use inside a single-quoted SOQL string."""
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def _quote_number(value: int | float | Decimal) -> str:
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"cannot serialize non-finite number {value!r}")
        value = Decimal(repr(value))
    elif not value.is_finite():
        raise ValueError(f"cannot serialize non-finite number {value!r}")
    return format(value, "f")


def _quote_datetime(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _quote_scalar(value: Any) -> str:
    if value is None:
        return "null"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return _quote_number(value)
    if isinstance(value, str):
        return f"'{escape(value)}'"
    if isinstance(value, datetime):
        return _quote_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"cannot serialize {type(value).__name__} into SOQL")


def quote(value: Any) -> str:
    """Return the SOQL literal for *value*.

    Sets and sequences become parenthesised lists suitable for ``IN``;
    set members are sorted so the output does not depend on hash order.
    """
    if isinstance(value, (Set, Sequence)) and not isinstance(
        value, (str, bytes, bytearray)
    ):
        members = [_quote_scalar(v) for v in value]
        if not members:
            raise ValueError("cannot serialize an empty collection into SOQL")
        if isinstance(value, Set):
            members.sort()
        return "(" + ",".join(members) + ")"
    return _quote_scalar(value)


def quote_like(value: str) -> str:
    """Escape *value* for a LIKE pattern, without surrounding quotes."""
    if not isinstance(value, str):
        raise TypeError("LIKE patterns must be strings")
    return escape(value).replace("%", "\\%").replace("_", "\\_")


class _SoqlFormatter(string.Formatter):
    def format_field(self, value: Any, format_spec: str) -> str:
        if not format_spec:
            return quote(value)
        if format_spec == "like":
            return quote_like(value)
        if format_spec == "literal":
            return str(value)
        raise ValueError(f"unknown SOQL format spec {format_spec!r}")


_formatter = _SoqlFormatter()


def format_soql(template: str, *args: Any, **kwargs: Any) -> str:
    """Format *template* with every argument serialized by :func:`quote`."""
    return _formatter.vformat(template, args, kwargs)
