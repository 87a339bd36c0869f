"""Frame sinks for exported image sequences."""

from .base import FrameSink, PillowImageSequenceSink
from .png_sink import PngSequenceSink
from .webp_sink import WebPSequenceSink

_SINK_FORMATS: dict[str, type[PillowImageSequenceSink]] = {
    "png": PngSequenceSink,
    "webp": WebPSequenceSink,
}


def resolve_frame_sink(directory: str, output_format: str = "png") -> FrameSink:
    """
    Resolve the image-sequence sink for a format name.

    Args:
        directory: Directory the frames are written to
        output_format: Format name, case-insensitive, with or without a leading dot

    Returns:
        A FrameSink instance

    Raises:
        ValueError: If the format is not supported
    """
    sink_class = _SINK_FORMATS.get(output_format.lower().removeprefix("."))
    if sink_class is None:
        supported = ", ".join(supported_sink_formats())
        raise ValueError(f"Unsupported frame format: {output_format}. Supported formats: {supported}")
    return sink_class(directory)


def supported_sink_formats() -> tuple[str, ...]:
    """Return supported frame format names."""
    return tuple(_SINK_FORMATS.keys())


__all__ = [
    "FrameSink",
    "PillowImageSequenceSink",
    "PngSequenceSink",
    "WebPSequenceSink",
    "resolve_frame_sink",
    "supported_sink_formats",
]
