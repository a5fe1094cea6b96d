"""
Shared test fixtures for the blockmodel test suite.

Date fields format in the configured time zone, so every test runs
with it pinned to UTC unless it overrides the variable itself.
"""

from unittest.mock import MagicMock

import pytest

from blockmodel.core.config import TIMEZONE_ENV


@pytest.fixture(autouse=True)
def utc_field_timezone(monkeypatch):
    """Pin the field time zone to UTC."""
    monkeypatch.setenv(TIMEZONE_ENV, "UTC")


@pytest.fixture
def observer() -> MagicMock:
    """A date field observer that records its calls."""
    return MagicMock(spec=["on_date_changed"])
