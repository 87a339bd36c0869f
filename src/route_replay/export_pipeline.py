"""Export orchestration: frame-indexed rendering streamed into a sink.

Frames are rendered one at a time, handed to the sink in increasing index
order and released immediately, so peak memory does not grow with the
number of frames. Cancellation is cooperative and checked between frames.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Sequence

from PIL import Image

from .animation.timeline import ExportTimeline, FrameTick
from .capture.region import CaptureRegion, CaptureRegionManager, validate_region
from .constants import MAP_FIT_BOUNDS_PADDING, PROGRESS_LOG_INTERVAL, RENDER_ATTEMPTS
from .errors import RasterizationError
from .geo.viewport import MercatorViewport, ViewportState
from .models import Route
from .output.base import FrameSink
from .render.renderer import FrameRenderer, RenderState, new_surface
from .settings import ExportSettings, validate_settings

logger = logging.getLogger(__name__)


class ExportStatus(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class RecordingSession:
    """Mutable state of one export. Never reused."""

    target_width: int
    target_height: int
    target_frame_rate: int
    target_duration_seconds: float
    total_frames: int
    frame_index: int = 0
    cancel_requested: bool = False
    peak_in_flight: int = 0


@dataclass(frozen=True)
class ExportProgress:
    frames_written: int
    total_frames: int

    @property
    def percent(self) -> float:
        if self.total_frames <= 0:
            return 100.0
        return self.frames_written / self.total_frames * 100.0


@dataclass(frozen=True)
class ExportResult:
    status: ExportStatus
    frames_written: int
    total_frames: int

    @property
    def cancelled(self) -> bool:
        return self.status is ExportStatus.CANCELLED


ProgressCallback = Callable[[ExportProgress], None]


class ExportPipeline:
    """Renders every frame of an export and streams it into a sink."""

    def __init__(
        self,
        sink: FrameSink,
        renderer: FrameRenderer | None = None,
        on_progress: ProgressCallback | None = None,
    ):
        """
        Initialize pipeline.

        Args:
            sink: Receives each frame, in order, as soon as it is rendered
            renderer: Frame renderer (a fresh one by default)
            on_progress: Called after every frame handed to the sink
        """
        self.sink = sink
        self.renderer = renderer or FrameRenderer()
        self.on_progress = on_progress
        self.session: RecordingSession | None = None
        self.in_flight = 0

    def cancel(self) -> None:
        """Request cancellation; takes effect before the next frame starts."""
        if self.session is None:
            logger.debug("Cancel requested with no export running")
            return
        self.session.cancel_requested = True

    def run(
        self,
        settings: ExportSettings,
        region: CaptureRegion,
        viewport: ViewportState,
        state: RenderState,
    ) -> ExportResult:
        """
        Export every frame synchronously.

        Raises:
            ValidationError: If settings or region are invalid (before any work)
            RasterizationError: If a frame fails twice; earlier frames stay in the sink
        """
        session, timeline = self._begin(settings, region)
        try:
            for tick in timeline.iter_ticks():
                if session.cancel_requested:
                    break
                frame = self._render_frame(session, tick, region, viewport, state)
                self._deliver(session, tick, frame)
                del frame
            return self._finish(session)
        finally:
            self._teardown()

    async def run_async(
        self,
        settings: ExportSettings,
        region: CaptureRegion,
        viewport: ViewportState,
        state: RenderState,
    ) -> ExportResult:
        """Same contract as ``run``; each rasterization is awaited on a worker thread."""
        session, timeline = self._begin(settings, region)
        try:
            for tick in timeline.iter_ticks():
                if session.cancel_requested:
                    break
                frame = await asyncio.to_thread(
                    self._render_frame, session, tick, region, viewport, state
                )
                self._deliver(session, tick, frame)
                del frame
            return self._finish(session)
        finally:
            self._teardown()

    def _begin(
        self, settings: ExportSettings, region: CaptureRegion
    ) -> tuple[RecordingSession, ExportTimeline]:
        if self.session is not None:
            raise RuntimeError("An export is already running on this pipeline")
        validate_settings(settings).raise_for_errors()
        validate_region(region).raise_for_errors()

        timeline = ExportTimeline(settings.duration_seconds, settings.frame_rate)
        session = RecordingSession(
            target_width=settings.width,
            target_height=settings.height,
            target_frame_rate=settings.frame_rate,
            target_duration_seconds=settings.duration_seconds,
            total_frames=timeline.total_frames,
        )
        logger.info(
            "Starting export: %d frames at %dx%d, %d fps",
            session.total_frames,
            session.target_width,
            session.target_height,
            session.target_frame_rate,
        )
        self.session = session
        self.in_flight = 0
        try:
            self.sink.open(session)
        except Exception:
            self.session = None
            raise
        return session, timeline

    def _render_frame(
        self,
        session: RecordingSession,
        tick: FrameTick,
        region: CaptureRegion,
        viewport: ViewportState,
        state: RenderState,
    ) -> Image.Image:
        """Render one frame, retrying once before giving up on the export."""
        frame_state = replace(state, progress_percent=tick.progress_percent)
        self.in_flight += 1
        session.peak_in_flight = max(session.peak_in_flight, self.in_flight)
        last_error: Exception | None = None
        for attempt in range(1, RENDER_ATTEMPTS + 1):
            try:
                surface = new_surface(session.target_width, session.target_height)
                return self.renderer.render_frame(surface, region, viewport, frame_state)
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "Frame %d failed to render (attempt %d/%d): %s",
                    tick.index,
                    attempt,
                    RENDER_ATTEMPTS,
                    exc,
                )
        self.in_flight -= 1
        logger.error("Aborting export at frame %d", tick.index)
        raise RasterizationError(tick.index, str(last_error)) from last_error

    def _deliver(self, session: RecordingSession, tick: FrameTick, frame: Image.Image) -> None:
        try:
            self.sink.write_frame(tick.index, frame)
        finally:
            self.in_flight -= 1
        session.frame_index = tick.index + 1

        if session.frame_index % PROGRESS_LOG_INTERVAL == 0:
            logger.debug(
                "Exported %d/%d frames (t=%d ms)",
                session.frame_index,
                session.total_frames,
                tick.time_ms,
            )
        if self.on_progress is not None:
            self.on_progress(ExportProgress(session.frame_index, session.total_frames))

    def _finish(self, session: RecordingSession) -> ExportResult:
        if session.frame_index < session.total_frames:
            logger.info(
                "Export cancelled after %d/%d frames", session.frame_index, session.total_frames
            )
            status = ExportStatus.CANCELLED
        else:
            logger.info("Export finished: %d frames", session.frame_index)
            status = ExportStatus.COMPLETED
        return ExportResult(status, session.frame_index, session.total_frames)

    def _teardown(self) -> None:
        try:
            self.sink.close()
        finally:
            self.session = None


def plan_headless_capture(
    routes: Sequence[Route],
    aspect_ratio: float,
    viewport_width: int,
    viewport_height: int,
) -> tuple[CaptureRegion, MercatorViewport]:
    """
    Freeze a capture region on a virtual screen and fit a map view to it.

    Used when no interactive map is present: the region is calculated for the
    screen, then the viewport is zoomed so ``routes`` fit inside the region.
    """
    manager = CaptureRegionManager()
    region = manager.calculate_and_store(aspect_ratio, viewport_width, viewport_height)
    padding = (
        region.left + MAP_FIT_BOUNDS_PADDING[0],
        region.top + MAP_FIT_BOUNDS_PADDING[1],
    )
    viewport = MercatorViewport.fit_routes(routes, viewport_width, viewport_height, padding=padding)
    return region, viewport
