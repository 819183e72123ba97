"""Tests for the process-wide API usage snapshot."""

from __future__ import annotations

from sfrest.sdk.models import LimitInfo
from sfrest.services import limits


def test_default_is_none():
    assert limits.last_limit_info() is None


def test_record_stores_snapshot():
    info = limits.record({"sforce-limit-info": "api-usage=10/100"})
    assert info == LimitInfo(used=10, available=100)
    assert limits.last_limit_info() == info


def test_last_writer_wins():
    limits.record({"sforce-limit-info": "api-usage=10/100"})
    limits.record({"sforce-limit-info": "api-usage=11/100"})
    assert limits.last_limit_info().used == 11


def test_missing_header_clears_snapshot():
    limits.record({"sforce-limit-info": "api-usage=10/100"})
    assert limits.record({}) is None
    assert limits.last_limit_info() is None
