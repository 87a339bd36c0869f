"""Route reveal animation: wall-clock playback and frame-indexed export."""

from .engine import (
    AnimationController,
    AnimationState,
    AnimationStatus,
    playback_duration_ms,
    position_at_progress,
    visible_coordinates,
)
from .timeline import ExportTimeline, FrameTick, frame_progress, total_frame_count

__all__ = [
    "AnimationController",
    "AnimationState",
    "AnimationStatus",
    "ExportTimeline",
    "FrameTick",
    "frame_progress",
    "playback_duration_ms",
    "position_at_progress",
    "total_frame_count",
    "visible_coordinates",
]
