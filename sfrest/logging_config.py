"""Logging configuration for sfrest and its CLI.

JSON and text formatters tag each line with the ID of the API call in
progress and mask bearer tokens, client secrets and passwords before output.
"""

from __future__ import annotations

import json
import logging
import re
import sys
import traceback
from datetime import datetime, timezone

from sfrest.services.request_context import get_request_id

# Attributes present on every LogRecord, used by JSONFormatter to filter extras.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

_SECRET_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(Bearer\s+)[^\s'\"]+", re.IGNORECASE),
    re.compile(r"((?:access_token|client_secret|password)[\"']?\s*[=:]\s*[\"']?)[^\s&'\",]+"),
)

# Chatty transport loggers kept at WARNING unless the root level is DEBUG.
_QUIET_LOGGERS = ("httpx", "httpcore")


def redact(text: str) -> str:
    """Mask bearer tokens, secrets and passwords in *text*."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(r"\1***", text)
    return text


def _exception_text(record: logging.LogRecord) -> str:
    return redact("".join(traceback.format_exception(*record.exc_info)))


class JSONFormatter(logging.Formatter):
    """Single-line JSON log output for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = redact(record.getMessage())
        entry: dict = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = _exception_text(record)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text format with optional request ID prefix."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = redact(record.getMessage())
        ts = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).strftime("%Y-%m-%d %H:%M:%S")

        request_id = get_request_id()
        rid_prefix = f"[{request_id[:12]}] " if request_id else ""

        line = f"{ts} {record.levelname:<8} {rid_prefix}{record.name} - {record.message}"

        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + _exception_text(record)

        return line


def setup_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Configure the root logger. Call once at startup."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.DEBUG if level <= logging.DEBUG else logging.WARNING
        )
