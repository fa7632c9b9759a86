"""
Pytest configuration and fixtures for unit tests.

Unit tests are fast, isolated tests that don't require external dependencies.
"""

from datetime import datetime, timedelta, timezone

import pytest

from udyami.local_store import LocalDatabase
from udyami.shared.key_value_store import InMemoryStore
from udyami.shared.records import SellerRecord


class FakeClock:
    """Controllable replacement for utc_now."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def memory_store():
    """Empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture
def local_db(memory_store):
    """LocalDatabase over an in-memory store."""
    return LocalDatabase(memory_store)


@pytest.fixture
def clock():
    """Fake clock starting at a fixed UTC time."""
    return FakeClock(datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def delhi_plumber():
    return SellerRecord(201, "Vikram", frozenset({"Plumbing", "Painting"}), "Delhi", "9876543214")


@pytest.fixture
def sample_job_data():
    """Job as submitted by the post-job form."""
    return {
        "title": "Fix kitchen leak",
        "description": "Leaking pipe under the sink",
        "skill": "Plumbing",
        "budget_min": 1000,
        "budget_max": 3000,
        "timeline": "2 days",
        "location": "Delhi",
        "buyer_id": 103,
    }
