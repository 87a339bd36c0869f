"""Style configuration for rendered frames."""

from dataclasses import dataclass, replace

from PIL import ImageColor

from ..constants import (
    BACKGROUND_COLOR,
    COLOR_PALETTE,
    DEBUG_COLOR,
    DEBUG_CROSSHAIR_SIZE,
    DEBUG_SAMPLE_STEP,
    DEFAULT_ROUTE_COLOR,
    MARKER_INNER_RADIUS,
    MARKER_OUTER_RADIUS,
    MARKER_OUTLINE_COLOR,
    MARKER_OUTLINE_WIDTH,
    MARKER_RING_COLOR,
    ROUTE_WIDTH,
    STATIC_ROUTE_COLOR,
    STATIC_ROUTE_OPACITY,
    STATIC_ROUTE_WIDTH,
)

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class StyleConfig:
    """Immutable per-render styling. Widths and radii are in output pixels."""

    route_color: str = DEFAULT_ROUTE_COLOR
    route_width: int = ROUTE_WIDTH
    marker_outer_radius: int = MARKER_OUTER_RADIUS
    marker_inner_radius: int = MARKER_INNER_RADIUS
    background_color: str | None = BACKGROUND_COLOR  # None renders transparent
    static_route_opacity: float = STATIC_ROUTE_OPACITY
    static_route_color: str = STATIC_ROUTE_COLOR
    static_route_width: int = STATIC_ROUTE_WIDTH
    marker_ring_color: str = MARKER_RING_COLOR
    marker_outline_color: str = MARKER_OUTLINE_COLOR
    marker_outline_width: int = MARKER_OUTLINE_WIDTH
    debug_color: str = DEBUG_COLOR
    debug_crosshair_size: int = DEBUG_CROSSHAIR_SIZE
    debug_sample_step: int = DEBUG_SAMPLE_STEP

    @classmethod
    def default(cls) -> "StyleConfig":
        return cls()

    @classmethod
    def transparent(cls) -> "StyleConfig":
        """Default style without a background fill."""
        return cls(background_color=None)

    def with_route_color(self, color: str) -> "StyleConfig":
        return replace(self, route_color=color)


def to_rgba(color: str, opacity: float = 1.0) -> RGBA:
    """Parse a CSS-style color string and apply ``opacity`` (0-1) to its alpha."""
    rgba = ImageColor.getcolor(color, "RGBA")
    alpha = round(rgba[3] * max(0.0, min(1.0, opacity)))
    return (rgba[0], rgba[1], rgba[2], alpha)


def color_for_route(index: int) -> str:
    """Palette color for the ``index``-th route in multi-color mode."""
    return COLOR_PALETTE[index % len(COLOR_PALETTE)]
