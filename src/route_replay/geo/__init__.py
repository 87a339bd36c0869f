"""Geographic projection into capture-region pixels."""

from .projection import is_point_in_bounds, project, project_many
from .viewport import MercatorViewport, ViewportState

__all__ = [
    "MercatorViewport",
    "ViewportState",
    "is_point_in_bounds",
    "project",
    "project_many",
]
