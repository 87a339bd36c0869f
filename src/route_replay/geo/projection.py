"""Projection of geographic points into capture-region pixel coordinates.

Coordinate flow: lat/lng -> container pixel (viewport) -> region pixel.
Nothing here caches or mutates state, so identical inputs always produce
identical outputs.
"""

import math
from typing import TYPE_CHECKING, Iterable, Iterator

from ..errors import ProjectionError
from ..models import GeoPoint, PixelPoint

if TYPE_CHECKING:
    from ..capture.region import CaptureRegion
    from .viewport import ViewportState


def project(point: GeoPoint, region: "CaptureRegion", viewport: "ViewportState") -> PixelPoint:
    """
    Map a geographic point to a pixel local to the capture region.

    Args:
        point: Geographic coordinate
        region: Frozen capture region (viewport pixel units)
        viewport: Map view providing the container projection

    Returns:
        Pixel coordinate with (0, 0) at the region's top-left corner

    Raises:
        ProjectionError: If the point or its projection is not finite
    """
    if not _is_finite_point(point):
        raise ProjectionError(point)
    container = viewport.project(point)
    x = container[0] - region.left
    y = container[1] - region.top
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ProjectionError(point, reason="viewport returned a non-finite pixel")
    return PixelPoint(x, y)


def project_many(
    points: Iterable[GeoPoint],
    region: "CaptureRegion",
    viewport: "ViewportState",
    skipped: list[GeoPoint] | None = None,
) -> Iterator[PixelPoint]:
    """Project points in order, skipping (and optionally collecting) unprojectable ones."""
    for point in points:
        try:
            yield project(point, region, viewport)
        except ProjectionError:
            if skipped is not None:
                skipped.append(point)


def is_point_in_bounds(point: PixelPoint, width: float, height: float, margin: float = 0) -> bool:
    """Inclusive bounds test, widened by ``margin`` on every side."""
    return (
        -margin <= point[0] <= width + margin
        and -margin <= point[1] <= height + margin
    )


def _is_finite_point(point: GeoPoint) -> bool:
    try:
        return math.isfinite(point.lat) and math.isfinite(point.lng)
    except (AttributeError, TypeError):
        return False
