"""Export settings, presets and their validation."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from .constants import (
    ANIMATION_DURATION_DEFAULT,
    EXPORT_MAX_DIMENSION,
    EXPORT_MAX_DURATION,
    EXPORT_MAX_FRAME_RATE,
    EXPORT_MIN_DIMENSION,
    EXPORT_MIN_FRAME_RATE,
    EXPORT_RESOLUTIONS,
)
from .errors import ValidationError, ValidationResult

_MISSING = object()


@dataclass(frozen=True)
class ExportSettings:
    """Target output of one export: resolution, frame rate and duration."""

    width: int
    height: int
    frame_rate: int
    target_duration: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Requested duration, or the default animation length when unset."""
        if self.target_duration is None:
            return float(ANIMATION_DURATION_DEFAULT)
        return float(self.target_duration)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def from_resolution(
        cls, resolution: str, frame_rate: int, target_duration: float | None = None
    ) -> "ExportSettings":
        width, height = parse_resolution(resolution)
        return cls(width=width, height=height, frame_rate=frame_rate, target_duration=target_duration)

    def validate(self) -> ValidationResult:
        return validate_settings(self)


def validate_settings(settings: ExportSettings | Mapping[str, Any]) -> ValidationResult:
    """
    Check export settings, reporting every violated constraint together.

    Accepts an ``ExportSettings`` or a raw mapping with ``width``, ``height``,
    ``frameRate`` (or ``frame_rate``) and optional ``targetDuration`` (or
    ``target_duration``).
    """
    if isinstance(settings, ExportSettings):
        width, height = settings.width, settings.height
        frame_rate, duration = settings.frame_rate, settings.target_duration
    else:
        width = settings.get("width", _MISSING)
        height = settings.get("height", _MISSING)
        frame_rate = _first_present(settings, "frameRate", "frame_rate")
        duration = _first_present(settings, "targetDuration", "target_duration")
        if duration is _MISSING:
            duration = None

    errors: list[str] = []
    _check_dimension(errors, "Width", width)
    _check_dimension(errors, "Height", height)

    if not _is_number(frame_rate):
        errors.append("Frame rate must be a number")
    elif not EXPORT_MIN_FRAME_RATE <= frame_rate <= EXPORT_MAX_FRAME_RATE:
        errors.append(
            f"Frame rate must be between {EXPORT_MIN_FRAME_RATE} and "
            f"{EXPORT_MAX_FRAME_RATE} fps, got {frame_rate}"
        )

    if duration is not None:
        if not _is_number(duration):
            errors.append("Target duration must be a number of seconds")
        elif duration <= 0:
            errors.append(f"Target duration must be greater than 0 seconds, got {duration}")
        elif duration > EXPORT_MAX_DURATION:
            errors.append(
                f"Target duration must not exceed {EXPORT_MAX_DURATION} seconds, got {duration}"
            )

    return ValidationResult(tuple(errors))


def parse_resolution(resolution: str) -> tuple[int, int]:
    """
    Parse ``"WIDTHxHEIGHT"`` (or a preset name such as ``1080p``).

    Raises:
        ValidationError: If the string is not a resolution
    """
    preset = EXPORT_RESOLUTIONS.get(resolution.strip().lower())
    if preset is not None:
        return preset
    parts = resolution.lower().split("x")
    try:
        width, height = (int(p) for p in parts)
    except ValueError as exc:
        raise ValidationError(f"Invalid resolution '{resolution}'. Use WIDTHxHEIGHT") from exc
    return width, height


def aspect_ratio_for_resolution(resolution: str) -> float:
    width, height = parse_resolution(resolution)
    if height <= 0:
        raise ValidationError(f"Invalid resolution '{resolution}'. Height must be positive")
    return width / height


def default_output_name(prefix: str = "route-replay", now: datetime | None = None) -> str:
    """Timestamped name for an export's output, e.g. ``route-replay-2024-01-31T09-15-00``."""
    now = now or datetime.now()
    return f"{prefix}-{now.strftime('%Y-%m-%dT%H-%M-%S')}"


def _check_dimension(errors: list[str], field: str, value: Any) -> None:
    if value is _MISSING or not _is_number(value):
        errors.append(f"{field} must be a number")
    elif value != int(value):
        errors.append(f"{field} must be a whole number of pixels, got {value}")
    elif not EXPORT_MIN_DIMENSION <= value <= EXPORT_MAX_DIMENSION:
        errors.append(
            f"{field} must be between {EXPORT_MIN_DIMENSION} and "
            f"{EXPORT_MAX_DIMENSION} pixels, got {value}"
        )


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return _MISSING


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
