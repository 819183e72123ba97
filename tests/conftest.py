import pytest

from sfrest.services import limits


@pytest.fixture(autouse=True)
def _clear_limit_snapshot():
    """Reset the process-wide API usage snapshot between every test."""
    limits.clear()
    yield
    limits.clear()
