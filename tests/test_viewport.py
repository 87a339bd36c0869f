"""Tests for the Web Mercator reference viewport."""

import math

import pytest

from route_replay.constants import DEFAULT_MAP_CENTER, DEFAULT_MAP_ZOOM, MAX_MAP_ZOOM
from route_replay.geo.viewport import (
    MercatorViewport,
    ViewportState,
    lat_lng_to_world,
    world_to_lat_lng,
)
from route_replay.models import GeoPoint, Route


def test_center_projects_to_container_middle():
    viewport = MercatorViewport(GeoPoint(34.0, -118.4), 12, 800, 600)

    point = viewport.project(GeoPoint(34.0, -118.4))

    assert point.x == pytest.approx(400)
    assert point.y == pytest.approx(300)


def test_north_and_east_map_to_up_and_right():
    viewport = MercatorViewport(GeoPoint(0.0, 0.0), 5, 800, 600)

    north_east = viewport.project(GeoPoint(1.0, 1.0))

    assert north_east.x > 400
    assert north_east.y < 300


def test_world_coordinates_round_trip():
    x, y = lat_lng_to_world(51.5, -0.12, 10)
    lat, lng = world_to_lat_lng(x, y, 10)

    assert lat == pytest.approx(51.5)
    assert lng == pytest.approx(-0.12)


def test_viewport_satisfies_protocol():
    viewport = MercatorViewport(GeoPoint(0.0, 0.0), 3, 100, 100)

    assert isinstance(viewport, ViewportState)
    assert viewport.get_zoom() == 3
    assert viewport.get_center() == GeoPoint(0.0, 0.0)


def test_fit_routes_keeps_every_point_inside_padding():
    route = Route(
        id="loop",
        coordinates=(
            GeoPoint(34.00, -118.50),
            GeoPoint(34.10, -118.40),
            GeoPoint(34.05, -118.30),
            GeoPoint(math.nan, -118.0),  # ignored
        ),
    )

    viewport = MercatorViewport.fit_routes([route], 1000, 800, padding=(50, 50))

    for p in route.coordinates[:3]:
        x, y = viewport.project(p)
        assert 50 - 1e-6 <= x <= 950 + 1e-6
        assert 50 - 1e-6 <= y <= 750 + 1e-6
    assert viewport.get_zoom() == pytest.approx(round(viewport.get_zoom(), 1))


def test_fit_routes_without_points_uses_default_view():
    viewport = MercatorViewport.fit_routes([Route(id="empty")], 800, 600)

    assert viewport.get_center() == GeoPoint(*DEFAULT_MAP_CENTER)
    assert viewport.get_zoom() == DEFAULT_MAP_ZOOM


def test_fit_routes_single_point_uses_max_zoom():
    route = Route(id="dot", coordinates=(GeoPoint(10.0, 20.0),))

    viewport = MercatorViewport.fit_routes([route], 800, 600)

    assert viewport.get_zoom() == MAX_MAP_ZOOM
    assert viewport.get_center().lat == pytest.approx(10.0)
    assert viewport.get_center().lng == pytest.approx(20.0)
