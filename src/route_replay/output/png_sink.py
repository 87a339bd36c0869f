"""PNG image-sequence sink."""

from .base import PillowImageSequenceSink


class PngSequenceSink(PillowImageSequenceSink):
    """Writes frames as ``frame_00000.png``, ``frame_00001.png``, ..."""

    @property
    def output_format(self) -> str:
        return "png"

    @property
    def save_options(self) -> dict[str, object]:
        return {"compress_level": 6}
