"""Core value types shared by projection, animation and rendering."""

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, NamedTuple

from .errors import ValidationError


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A geographic coordinate in degrees."""
    lat: float
    lng: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lng)


class PixelPoint(NamedTuple):
    """A 2D pixel coordinate (x grows right, y grows down)."""
    x: float
    y: float


@dataclass(frozen=True)
class Route:
    """An ordered track of coordinates; insertion order is track order."""

    id: str
    name: str = ""
    coordinates: tuple[GeoPoint, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable of points but always store an immutable tuple.
        if not isinstance(self.coordinates, tuple):
            object.__setattr__(self, "coordinates", tuple(self.coordinates))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Route":
        """
        Build a route from decoded JSON.

        Coordinates may be ``[lat, lng]`` pairs or ``{"lat": .., "lng": ..}``
        objects. Non-finite numbers are kept; they are skipped at render time.

        Raises:
            ValidationError: If the id is missing or a coordinate is not numeric
        """
        route_id = raw.get("id")
        if route_id is None or str(route_id) == "":
            raise ValidationError("Route id is required")
        route_id = str(route_id)
        points = [
            _point_from_raw(item, route_id, index)
            for index, item in enumerate(raw.get("coordinates") or [])
        ]
        return cls(id=route_id, name=str(raw.get("name") or ""), coordinates=tuple(points))


def _point_from_raw(item: Any, route_id: str, index: int) -> GeoPoint:
    if isinstance(item, Mapping):
        values = (item.get("lat"), item.get("lng", item.get("lon")))
    elif isinstance(item, (list, tuple)) and len(item) >= 2:
        values = (item[0], item[1])
    else:
        raise ValidationError(f"Route '{route_id}' coordinate {index} must be [lat, lng]")
    if any(isinstance(v, bool) for v in values):
        raise ValidationError(f"Route '{route_id}' coordinate {index} is not numeric")
    try:
        lat, lng = (float(v) for v in values)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"Route '{route_id}' coordinate {index} is not numeric"
        ) from exc
    return GeoPoint(lat, lng)


def routes_from_document(document: Any) -> list[Route]:
    """Parse ``{"routes": [...]}`` or a bare list of route objects."""
    if isinstance(document, Mapping):
        document = document.get("routes")
    if not isinstance(document, list):
        raise ValidationError("Route document must contain a list of routes")
    return [Route.from_mapping(item) for item in _mappings(document)]


def _mappings(items: Iterable[Any]) -> Iterable[Mapping[str, Any]]:
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValidationError(f"Route entry {index} must be an object")
        yield item


def load_routes(path: str | Path) -> list[Route]:
    """Load routes from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return routes_from_document(json.load(f))
