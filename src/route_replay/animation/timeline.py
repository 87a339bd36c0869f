"""Frame-indexed timeline for export, independent of wall-clock time."""

from dataclasses import dataclass
from typing import Iterator


def total_frame_count(duration_seconds: float, frame_rate: float) -> int:
    """Number of frames needed to cover ``duration_seconds`` at ``frame_rate``."""
    return max(0, round(duration_seconds * frame_rate))


def frame_progress(frame_index: int, total_frames: int) -> float:
    """
    Progress percentage for a frame index.

    The first frame is 0% and the last is exactly 100%. With a single frame
    (or none) progress stays at 0.
    """
    if total_frames <= 1:
        return 0.0
    return frame_index / (total_frames - 1) * 100.0


@dataclass(frozen=True)
class FrameTick:
    """One step of the export timeline."""
    index: int
    progress_percent: float
    time_ms: int


class ExportTimeline:
    """Generates the frame-indexed progress sequence for an export."""

    def __init__(self, duration_seconds: float, frame_rate: int):
        """
        Initialize timeline.

        Args:
            duration_seconds: Length of the exported animation
            frame_rate: Frames per second
        """
        self.duration_seconds = duration_seconds
        self.frame_rate = frame_rate
        self.total_frames = total_frame_count(duration_seconds, frame_rate)

    def iter_ticks(self, max_frames: int | None = None) -> Iterator[FrameTick]:
        """Yield ticks in strictly increasing frame order."""
        limit = self.total_frames if max_frames is None else min(max_frames, self.total_frames)
        for index in range(limit):
            yield FrameTick(
                index=index,
                progress_percent=frame_progress(index, self.total_frames),
                time_ms=round(index * 1000 / self.frame_rate),
            )

    def __len__(self) -> int:
        return self.total_frames
