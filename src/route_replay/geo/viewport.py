"""Viewport state: the map widget's geographic-to-container projection."""

import math
from typing import Iterable, Protocol, runtime_checkable

from ..constants import (
    DEFAULT_MAP_CENTER,
    DEFAULT_MAP_ZOOM,
    MAP_FIT_BOUNDS_PADDING,
    MAX_MAP_ZOOM,
    MAX_MERCATOR_LATITUDE,
    TILE_SIZE,
    ZOOM_SNAP,
)
from ..models import GeoPoint, PixelPoint, Route


@runtime_checkable
class ViewportState(Protocol):
    """Read-only handle to the current map view.

    ``project`` returns a pixel relative to the map container's top-left
    corner. Implementations must not change between calls during a capture
    session.
    """

    def project(self, point: GeoPoint) -> PixelPoint: ...

    def get_center(self) -> GeoPoint: ...

    def get_zoom(self) -> float: ...


def lat_lng_to_world(lat: float, lng: float, zoom: float) -> tuple[float, float]:
    """Convert latitude/longitude to Web Mercator world pixels at ``zoom``."""
    scale = TILE_SIZE * 2 ** zoom
    lat = max(-MAX_MERCATOR_LATITUDE, min(MAX_MERCATOR_LATITUDE, lat))
    x = (lng + 180.0) / 360.0 * scale
    y = (1.0 - math.asinh(math.tan(math.radians(lat))) / math.pi) / 2.0 * scale
    return x, y


def world_to_lat_lng(x: float, y: float, zoom: float) -> tuple[float, float]:
    """Convert Web Mercator world pixels back to latitude/longitude."""
    scale = TILE_SIZE * 2 ** zoom
    lng = x / scale * 360.0 - 180.0
    lat = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * y / scale))))
    return lat, lng


class MercatorViewport:
    """A fixed Web Mercator view of ``width`` x ``height`` container pixels."""

    def __init__(self, center: GeoPoint, zoom: float, width: int, height: int):
        """
        Initialize viewport.

        Args:
            center: Geographic point shown at the container's center
            zoom: Fractional zoom level (0 = whole world in one 256px tile)
            width: Container width in pixels
            height: Container height in pixels
        """
        self._center = center
        self._zoom = float(zoom)
        self.width = width
        self.height = height
        self._origin = lat_lng_to_world(center.lat, center.lng, self._zoom)

    def project(self, point: GeoPoint) -> PixelPoint:
        x, y = lat_lng_to_world(point.lat, point.lng, self._zoom)
        return PixelPoint(
            x - self._origin[0] + self.width / 2,
            y - self._origin[1] + self.height / 2,
        )

    def get_center(self) -> GeoPoint:
        return self._center

    def get_zoom(self) -> float:
        return self._zoom

    def __repr__(self) -> str:
        return (
            f"MercatorViewport(center=({self._center.lat:.5f}, {self._center.lng:.5f}), "
            f"zoom={self._zoom}, size={self.width}x{self.height})"
        )

    @classmethod
    def fit_routes(
        cls,
        routes: Iterable[Route],
        width: int,
        height: int,
        padding: tuple[float, float] = MAP_FIT_BOUNDS_PADDING,
        max_zoom: float = MAX_MAP_ZOOM,
    ) -> "MercatorViewport":
        """
        Build a viewport that shows every finite coordinate of ``routes``.

        The zoom is the largest multiple of ``ZOOM_SNAP`` that keeps all points
        inside the container minus ``padding`` on each side. Without any usable
        coordinate the default center and zoom are used.
        """
        world = [
            lat_lng_to_world(p.lat, p.lng, 0)
            for route in routes
            for p in route.coordinates
            if p.is_finite
        ]
        if not world:
            return cls(GeoPoint(*DEFAULT_MAP_CENTER), DEFAULT_MAP_ZOOM, width, height)

        xs = [x for x, _ in world]
        ys = [y for _, y in world]
        center = GeoPoint(*world_to_lat_lng((min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2, 0))

        available_w = width - 2 * padding[0]
        available_h = height - 2 * padding[1]
        if available_w <= 0 or available_h <= 0:
            return cls(center, 0, width, height)

        ratios = [
            available / span
            for available, span in ((available_w, max(xs) - min(xs)), (available_h, max(ys) - min(ys)))
            if span > 0
        ]
        if not ratios:
            return cls(center, max_zoom, width, height)

        zoom = math.log2(min(ratios))
        # Small epsilon keeps exact multiples from flooring one step down.
        zoom = math.floor(zoom / ZOOM_SNAP + 1e-9) * ZOOM_SNAP
        zoom = round(max(0.0, min(max_zoom, zoom)), 6)
        return cls(center, zoom, width, height)
