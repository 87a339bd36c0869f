"""WebP image-sequence sink."""

from .base import PillowImageSequenceSink


class WebPSequenceSink(PillowImageSequenceSink):
    """Writes frames as lossless WebP files, keeping the alpha channel."""

    @property
    def output_format(self) -> str:
        return "webp"

    @property
    def save_options(self) -> dict[str, object]:
        return {
            "lossless": True,
            "quality": 100,
            "method": 4,
        }
