"""Shared fixtures: a BuildStore on a temp file with a hand-driven clock."""

import pytest
from fastapi.testclient import TestClient

from api.deps import get_scheduler, get_store
from repositories.file_store import BuildStore
from services.cleanup import CleanupScheduler

START_MS = 1_700_000_000_000
TTL_MS = 2 * 60 * 60 * 1000

VALID_BUILD = {
    "name": "Frost PvP",
    "className": "Mage",
    "assignedPoints": {"frost": 31, "arcane": 20},
    "totalPoints": 51,
    "availablePoints": 0,
}


class FakeClock:
    def __init__(self, start: int = START_MS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture
def store(data_file, clock):
    return BuildStore(data_file, record_lifetime_ms=TTL_MS, clock=clock)


@pytest.fixture
def scheduler(store):
    return CleanupScheduler(store, interval_seconds=30 * 60)


@pytest.fixture
def client(store, scheduler):
    from main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_scheduler] = lambda: scheduler
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
