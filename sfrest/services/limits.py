"""Process-wide snapshot of the most recent API usage report.

Every response overwrites the snapshot, so with several clients in flight it
reflects whichever response arrived last.
"""

from __future__ import annotations

import logging
from typing import Mapping

from sfrest.sdk.models import LimitInfo

logger = logging.getLogger(__name__)

_snapshot: LimitInfo | None = None


def record(headers: Mapping[str, str]) -> LimitInfo | None:
    """Parse *headers* and replace the stored snapshot."""
    global _snapshot  # noqa: PLW0603
    _snapshot = LimitInfo.from_headers(headers)
    if _snapshot is not None:
        logger.debug(
            "API usage %d/%d", _snapshot.used, _snapshot.available,
        )
    return _snapshot


def last_limit_info() -> LimitInfo | None:
    return _snapshot


def clear() -> None:
    """Forget the stored snapshot (useful in tests)."""
    global _snapshot  # noqa: PLW0603
    _snapshot = None
