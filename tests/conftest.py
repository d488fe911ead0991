"""Shared fixtures: headless Qt and a manual frame scheduler."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402

from geoglobe.config import GlobeConfig  # noqa: E402
from geoglobe.models import City, ContinentOutline, GeoPoint  # noqa: E402


class FakeScheduler:
    """Frame scheduler driven by the test instead of a timer."""

    def __init__(self):
        self.pending = {}
        self.scheduled = 0
        self.cancelled = 0
        self._next = 0

    def schedule(self, callback):
        self._next += 1
        self.pending[self._next] = callback
        self.scheduled += 1
        return self._next

    def cancel(self, handle):
        if self.pending.pop(handle, None) is not None:
            self.cancelled += 1

    def fire(self) -> int:
        """Run every callback that is due, returns how many ran."""
        due = list(self.pending.values())
        self.pending.clear()
        for callback in due:
            callback()
        return len(due)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def config():
    return GlobeConfig()


@pytest.fixture
def pole_cities():
    """North pole faces the viewer at rest, south pole faces away."""
    return (
        City("North", GeoPoint(90.0, 0.0), "#8B5CF6", 85),
        City("South", GeoPoint(-90.0, 0.0), "#3B82F6", 12),
    )


@pytest.fixture
def northern_cities():
    return (
        City("A", GeoPoint(60.0, 0.0), "#EC4899", 10),
        City("B", GeoPoint(60.0, 90.0), "#10B981", 20),
        City("C", GeoPoint(70.0, -120.0), "#F59E0B", 30),
    )


@pytest.fixture
def gapped_outline():
    """Outline with one vertex far behind the globe at rest."""
    coords = [(60, 0), (60, 10), (-89, 20), (60, 30), (60, 40)]
    return ContinentOutline("Gapped", tuple(GeoPoint(lat, lon) for lat, lon in coords))
