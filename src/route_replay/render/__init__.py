"""Frame rendering with Pillow."""

from .renderer import FrameRenderer, RenderState, new_surface
from .style import StyleConfig, color_for_route, to_rgba

__all__ = [
    "FrameRenderer",
    "RenderState",
    "StyleConfig",
    "color_for_route",
    "new_surface",
    "to_rgba",
]
