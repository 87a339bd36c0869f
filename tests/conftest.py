"""Shared fixtures for route-replay tests."""

import logging

import pytest

from route_replay.capture.region import CaptureRegion
from route_replay.models import GeoPoint, PixelPoint, Route


class LinearViewport:
    """Maps lng/lat straight to container pixels (x = lng * 100, y = lat * 100)."""

    def __init__(self, scale: float = 100.0):
        self.scale = scale
        self.calls = 0

    def project(self, point: GeoPoint) -> PixelPoint:
        self.calls += 1
        return PixelPoint(point.lng * self.scale, point.lat * self.scale)

    def get_center(self) -> GeoPoint:
        return GeoPoint(0.0, 0.0)

    def get_zoom(self) -> float:
        return 0.0


@pytest.fixture
def viewport() -> LinearViewport:
    return LinearViewport()


@pytest.fixture
def region() -> CaptureRegion:
    return CaptureRegion(left=100, top=100, width=800, height=600, aspect_ratio=800 / 600)


@pytest.fixture
def horizontal_route() -> Route:
    """Five points along region row y=200, from x=100 to x=500."""
    return Route(
        id="run-1",
        name="Morning run",
        coordinates=tuple(GeoPoint(3.0, lng) for lng in (2.0, 3.0, 4.0, 5.0, 6.0)),
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI installs handlers on the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
