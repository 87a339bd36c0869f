"""Wall-clock animation state machine for interactive playback."""

import logging
import math
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Sequence

from ..constants import ANIMATION_DURATION_MAX, ANIMATION_DURATION_MIN
from ..errors import ValidationError
from ..models import GeoPoint, Route

logger = logging.getLogger(__name__)


class AnimationStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


@dataclass
class AnimationState:
    status: AnimationStatus = AnimationStatus.IDLE
    progress_percent: float = 0.0
    duration_ms: float = 0.0
    clock_origin: float = 0.0


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


def playback_duration_ms(seconds: float) -> float:
    """
    Convert an interactive playback length to milliseconds.

    Raises:
        ValidationError: If ``seconds`` is outside the supported playback range
    """
    if not isinstance(seconds, (int, float)) or not ANIMATION_DURATION_MIN <= seconds <= ANIMATION_DURATION_MAX:
        raise ValidationError(
            f"Playback duration must be between {ANIMATION_DURATION_MIN} and "
            f"{ANIMATION_DURATION_MAX} seconds, got {seconds!r}"
        )
    return float(seconds) * 1000.0


class AnimationController:
    """Owns one ``AnimationState`` and is its only writer.

    Transitions: idle -> playing -> (paused <-> playing) -> idle.
    ``stop`` and ``reset`` both return to idle with progress 0.
    """

    def __init__(self, clock: Callable[[], float] = monotonic_ms):
        """
        Initialize controller.

        Args:
            clock: Returns the current time in milliseconds; injectable for tests
        """
        self._clock = clock
        self._state = AnimationState()

    @property
    def state(self) -> AnimationState:
        """A copy of the current state; mutating it has no effect."""
        return replace(self._state)

    @property
    def status(self) -> AnimationStatus:
        return self._state.status

    @property
    def progress_percent(self) -> float:
        return self._state.progress_percent

    @property
    def is_complete(self) -> bool:
        return self._state.progress_percent >= 100.0

    def play(self, duration_ms: float, now: float | None = None) -> None:
        """
        Start playback, or resume it from a pause without a progress jump.

        Raises:
            ValidationError: If ``duration_ms`` is not a positive number
        """
        if not isinstance(duration_ms, (int, float)) or not math.isfinite(duration_ms) or duration_ms <= 0:
            raise ValidationError(f"Animation duration must be positive, got {duration_ms!r}")
        state = self._state
        if state.status is AnimationStatus.PLAYING:
            return
        now = self._clock() if now is None else now

        if state.status is AnimationStatus.PAUSED:
            # Rebuild the origin so elapsed time maps back to the frozen progress.
            state.clock_origin = now - (state.progress_percent / 100.0) * duration_ms
        else:
            state.progress_percent = 0.0
            state.clock_origin = now
        state.duration_ms = float(duration_ms)
        state.status = AnimationStatus.PLAYING
        logger.debug("Animation playing from %.2f%%", state.progress_percent)

    def tick(self, now: float | None = None) -> float:
        """Advance progress from the clock. A no-op unless playing."""
        state = self._state
        if state.status is not AnimationStatus.PLAYING:
            return state.progress_percent
        now = self._clock() if now is None else now
        progress = (now - state.clock_origin) / state.duration_ms * 100.0
        progress = max(0.0, min(100.0, progress))
        # Never move backwards, even if the clock does.
        state.progress_percent = max(state.progress_percent, progress)
        return state.progress_percent

    def pause(self) -> None:
        if self._state.status is AnimationStatus.PLAYING:
            self._state.status = AnimationStatus.PAUSED

    def stop(self) -> None:
        self._state = AnimationState()

    def reset(self) -> None:
        self._state = AnimationState()


def visible_coordinates(route: Route | None, progress_percent: float) -> Sequence[GeoPoint]:
    """
    Return the revealed prefix of a route.

    The count is ``floor(N * progress / 100)``, so the drawn route never
    overshoots the elapsed fraction: 0% is empty and 100% is every point.
    """
    if route is None or not route.coordinates:
        return ()
    total = len(route.coordinates)
    progress = max(0.0, min(100.0, progress_percent))
    count = math.floor(total * progress / 100.0)
    return route.coordinates[:count]


def position_at_progress(route: Route | None, progress_percent: float) -> GeoPoint | None:
    """Coordinate at the head of the animation, or None for an empty route."""
    if route is None or not route.coordinates:
        return None
    total = len(route.coordinates)
    progress = max(0.0, min(100.0, progress_percent))
    index = min(math.floor(progress / 100.0 * total), total - 1)
    return route.coordinates[index]
