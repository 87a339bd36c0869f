"""Tests for projection into capture-region pixels."""

import math

import pytest

from route_replay.capture.region import CaptureRegion
from route_replay.errors import ProjectionError
from route_replay.geo.projection import is_point_in_bounds, project, project_many
from route_replay.models import GeoPoint, PixelPoint


def test_project_subtracts_region_origin(viewport, region):
    """Container pixel minus region offset gives the region-local pixel."""
    point = project(GeoPoint(4.0, 3.0), region, viewport)

    assert point == PixelPoint(200.0, 300.0)


def test_project_is_deterministic(viewport, region):
    """Identical inputs always give identical pixels."""
    point = GeoPoint(34.05, -118.25)

    assert project(point, region, viewport) == project(point, region, viewport)


def test_project_follows_region_position(viewport):
    """Moving the region moves the projected point the opposite way."""
    point = GeoPoint(2.0, 2.0)
    near = CaptureRegion(left=0, top=0, width=400, height=300, aspect_ratio=4 / 3)
    far = CaptureRegion(left=150, top=50, width=400, height=300, aspect_ratio=4 / 3)

    assert project(point, near, viewport) == PixelPoint(200.0, 200.0)
    assert project(point, far, viewport) == PixelPoint(50.0, 150.0)


@pytest.mark.parametrize("lat, lng", [(math.nan, 1.0), (1.0, math.inf), (-math.inf, 0.0)])
def test_project_rejects_non_finite_coordinates(viewport, region, lat, lng):
    with pytest.raises(ProjectionError):
        project(GeoPoint(lat, lng), region, viewport)


def test_project_rejects_non_finite_viewport_output(region):
    """A viewport returning garbage is reported, not passed through."""

    class BrokenViewport:
        def project(self, point):
            return PixelPoint(math.nan, 0.0)

    with pytest.raises(ProjectionError, match="non-finite pixel"):
        project(GeoPoint(1.0, 1.0), region, BrokenViewport())


def test_project_many_skips_and_collects_bad_points(viewport, region):
    bad = GeoPoint(math.nan, 2.0)
    skipped: list[GeoPoint] = []

    points = list(
        project_many([GeoPoint(2.0, 2.0), bad, GeoPoint(3.0, 3.0)], region, viewport, skipped)
    )

    assert points == [PixelPoint(100.0, 100.0), PixelPoint(200.0, 200.0)]
    assert skipped == [bad]


def test_point_in_bounds_edges_are_inclusive():
    assert is_point_in_bounds(PixelPoint(0, 0), 800, 600)
    assert is_point_in_bounds(PixelPoint(800, 600), 800, 600)
    assert not is_point_in_bounds(PixelPoint(801, 300), 800, 600)


def test_point_in_bounds_respects_margin():
    point = PixelPoint(-5, 300)

    assert not is_point_in_bounds(point, 800, 600, 0)
    assert is_point_in_bounds(point, 800, 600, margin=10)
