"""Base classes for frame sinks."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image

if TYPE_CHECKING:
    from ..export_pipeline import RecordingSession

logger = logging.getLogger(__name__)


class FrameSink(ABC):
    """Abstract base class for consumers of exported frames.

    Frames arrive one at a time in increasing index order. A sink must not
    assume it may keep a frame after ``write_frame`` returns; the pipeline
    drops its own reference immediately.
    """

    def __init__(self, path: str = ""):
        """
        Initialize the sink with an output location.

        Args:
            path: Output path (file or directory, depending on the sink)
        """
        self.path = path

    def open(self, session: "RecordingSession") -> None:
        """Prepare for a new export. Called once before the first frame."""

    @abstractmethod
    def write_frame(self, frame_index: int, frame: Image.Image) -> None:
        """
        Consume one rendered frame.

        Args:
            frame_index: Zero-based index of the frame in the export
            frame: RGBA image for the frame
        """
        raise NotImplementedError

    def close(self) -> None:
        """Finish the export. Called once, even after a failure or cancellation."""


class PillowImageSequenceSink(FrameSink, ABC):
    """Template sink writing each frame as a numbered image file in a directory."""

    frame_name_template = "frame_{index:05d}"

    @property
    @abstractmethod
    def output_format(self) -> str:
        """Pillow format identifier (for example, ``png`` or ``webp``)."""
        raise NotImplementedError

    @property
    def extension(self) -> str:
        return f".{self.output_format}"

    @property
    def save_options(self) -> dict[str, object]:
        """Additional Pillow ``save`` kwargs for this format."""
        return {}

    def open(self, session: "RecordingSession") -> None:
        if not self.path:
            raise ValueError("Output path not set")
        Path(self.path).mkdir(parents=True, exist_ok=True)
        logger.info("Writing %d %s frames to %s", session.total_frames, self.output_format, self.path)

    def frame_path(self, frame_index: int) -> Path:
        return Path(self.path) / (self.frame_name_template.format(index=frame_index) + self.extension)

    def write_frame(self, frame_index: int, frame: Image.Image) -> None:
        frame.save(self.frame_path(frame_index), format=self.output_format, **self.save_options)
