"""Domain-specific exceptions for route rendering and export."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .models import GeoPoint


class RouteReplayError(Exception):
    """Base class for all route-replay errors."""


class ValidationError(RouteReplayError, ValueError):
    """Raised when a capture region or export settings fail validation.

    Every violated constraint is kept in ``errors`` so callers can report
    them together.
    """

    def __init__(self, errors: Sequence[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class ProjectionError(RouteReplayError, ValueError):
    """Raised when a coordinate cannot be projected to a finite pixel."""

    def __init__(self, point: "GeoPoint | object", reason: str = "non-finite coordinate"):
        self.point = point
        super().__init__(f"Cannot project {point!r}: {reason}")


class RasterizationError(RouteReplayError, RuntimeError):
    """Raised when a frame fails to render after its retry."""

    def __init__(self, frame_index: int, reason: str | None = None):
        self.frame_index = frame_index
        message = f"Frame {frame_index} failed to render"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a non-raising validation pass."""

    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise ``ValidationError`` listing every error, if any."""
        if self.errors:
            raise ValidationError(self.errors)
