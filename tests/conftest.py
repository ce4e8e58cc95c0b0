"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from eventease.core.context import SessionRegistry
from eventease.core.dependencies import get_registry
from eventease.main import app
from eventease.services import AttendanceTracker, SessionTracker


class Recorder:
    """Counts change notifications."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


@pytest.fixture(name="recorder")
def recorder_fixture() -> Recorder:
    return Recorder()


@pytest.fixture(name="session_tracker")
def session_tracker_fixture() -> SessionTracker:
    return SessionTracker()


@pytest.fixture(name="tracker")
def tracker_fixture() -> AttendanceTracker:
    return AttendanceTracker()


@pytest.fixture(name="event_date")
def event_date_fixture() -> datetime:
    return datetime.now(UTC) + timedelta(days=7)


@pytest.fixture(name="launch_tracker")
def launch_tracker_fixture(tracker: AttendanceTracker, event_date: datetime):
    """A tracker holding a single-seat "Launch" event with id 1."""
    tracker.create_event(1, "Launch", event_date, capacity=1)
    return tracker


@pytest.fixture(name="registry")
def registry_fixture() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture(name="client")
def client_fixture(registry: SessionRegistry):
    """Create a test client backed by an isolated session registry."""

    def get_registry_override():
        return registry

    app.dependency_overrides[get_registry] = get_registry_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
