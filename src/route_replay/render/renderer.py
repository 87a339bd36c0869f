"""Renderer for drawing route frames using Pillow.

Frames are drawn from viewport projections only; nothing here inspects the
live map's on-screen state, which keeps output reproducible.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from PIL import Image, ImageDraw

from ..animation.engine import visible_coordinates
from ..capture.region import CaptureRegion
from ..geo.projection import project_many
from ..geo.viewport import ViewportState
from ..models import GeoPoint, PixelPoint, Route
from .style import StyleConfig, to_rgba

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


@dataclass(frozen=True)
class RenderState:
    """Everything that varies between frames of one render session."""

    route: Route | None
    progress_percent: float = 0.0
    style: StyleConfig = field(default_factory=StyleConfig.default)
    static_routes: Sequence[Route] = ()
    debug: bool = False


def new_surface(width: int, height: int) -> Image.Image:
    """Create a transparent RGBA surface to render into."""
    return Image.new("RGBA", (width, height), TRANSPARENT)


class FrameRenderer:
    """Renders route frames as PIL Images."""

    def __init__(self) -> None:
        # Points dropped because they could not be projected.
        self.skipped_points = 0
        self.total_skipped_points = 0

    def render_frame(
        self,
        surface: Image.Image,
        region: CaptureRegion,
        viewport: ViewportState,
        state: RenderState,
    ) -> Image.Image:
        """
        Render one frame into ``surface`` and return it.

        Layers, back to front: background, static context routes, the
        revealed part of the active route, the position marker, and the
        optional debug crosshairs. Region pixels are scaled to the surface
        size, so a region can be rendered at any output resolution.

        Args:
            surface: RGBA image, cleared before drawing
            region: Frozen capture region
            viewport: Map view used for projection
            state: Active route, progress, style and context routes

        Returns:
            The same surface, drawn
        """
        if surface.mode != "RGBA":
            raise ValueError(f"Surface must be RGBA, got {surface.mode}")

        self.skipped_points = 0
        style = state.style
        width, height = surface.size
        scale = (width / region.width, height / region.height)

        surface.paste(TRANSPARENT, (0, 0, width, height))
        if style.background_color is not None:
            ImageDraw.Draw(surface).rectangle(
                (0, 0, width - 1, height - 1), fill=to_rgba(style.background_color)
            )

        route = state.route
        if route is None:
            logger.warning("No active route; rendering background only")
            return surface

        skipped: list[GeoPoint] = []

        if state.static_routes:
            self._draw_static_routes(surface, region, viewport, state, scale, skipped)

        draw = ImageDraw.Draw(surface)
        visible = visible_coordinates(route, state.progress_percent)
        points = self._to_surface(project_many(visible, region, viewport, skipped), scale)
        self._draw_polyline(draw, points, to_rgba(style.route_color), style.route_width)

        if state.progress_percent > 0 and points:
            self._draw_marker(draw, points[-1], style)

        if state.debug and route.coordinates:
            sampled = route.coordinates[:: max(1, style.debug_sample_step)]
            self._draw_debug_overlay(
                draw,
                self._to_surface(project_many(sampled, region, viewport), scale),
                style,
            )

        self.skipped_points = len(skipped)
        self.total_skipped_points += self.skipped_points
        if skipped:
            logger.debug("Skipped %d unprojectable points", len(skipped))
        return surface

    def _draw_static_routes(
        self,
        surface: Image.Image,
        region: CaptureRegion,
        viewport: ViewportState,
        state: RenderState,
        scale: tuple[float, float],
        skipped: list[GeoPoint],
    ) -> None:
        """Draw context routes onto a transparent overlay, then blend it in."""
        style = state.style
        active_id = state.route.id if state.route is not None else None
        overlay = Image.new("RGBA", surface.size, TRANSPARENT)
        draw = ImageDraw.Draw(overlay)
        color = to_rgba(style.static_route_color, style.static_route_opacity)
        for route in state.static_routes:
            if route.id == active_id or not route.coordinates:
                continue
            points = self._to_surface(
                project_many(route.coordinates, region, viewport, skipped), scale
            )
            self._draw_polyline(draw, points, color, style.static_route_width)
        surface.alpha_composite(overlay)

    @staticmethod
    def _to_surface(points: Iterable[PixelPoint], scale: tuple[float, float]) -> list[tuple[float, float]]:
        return [(x * scale[0], y * scale[1]) for x, y in points]

    @staticmethod
    def _draw_polyline(
        draw: ImageDraw.ImageDraw,
        points: list[tuple[float, float]],
        color: tuple[int, int, int, int],
        width: int,
    ) -> None:
        """Stroke a polyline with rounded joins and caps; fewer than 2 points draws nothing."""
        if len(points) < 2:
            return
        draw.line(points, fill=color, width=width, joint="curve")
        radius = width / 2
        if radius >= 1:
            for x, y in (points[0], points[-1]):
                draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=color)

    @staticmethod
    def _draw_marker(draw: ImageDraw.ImageDraw, point: tuple[float, float], style: StyleConfig) -> None:
        """Draw the two-layer current-position marker."""
        x, y = point
        outer = style.marker_outer_radius
        inner = style.marker_inner_radius
        draw.ellipse(
            (x - outer, y - outer, x + outer, y + outer),
            fill=to_rgba(style.marker_ring_color),
            outline=to_rgba(style.marker_outline_color),
            width=style.marker_outline_width,
        )
        draw.ellipse(
            (x - inner, y - inner, x + inner, y + inner),
            fill=to_rgba(style.route_color),
        )

    @staticmethod
    def _draw_debug_overlay(
        draw: ImageDraw.ImageDraw, points: list[tuple[float, float]], style: StyleConfig
    ) -> None:
        """Draw crosshairs to visualize projection accuracy."""
        color = to_rgba(style.debug_color)
        size = style.debug_crosshair_size
        for x, y in points:
            draw.line([(x - size, y), (x + size, y)], fill=color, width=1)
            draw.line([(x, y - size), (x, y + size)], fill=color, width=1)
