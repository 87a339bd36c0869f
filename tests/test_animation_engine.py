"""Tests for the wall-clock animation controller and route reveal helpers."""

import pytest

from route_replay.animation.engine import (
    AnimationController,
    AnimationStatus,
    playback_duration_ms,
    position_at_progress,
    visible_coordinates,
)
from route_replay.errors import ValidationError
from route_replay.models import GeoPoint, Route


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1_000.0)


@pytest.fixture
def controller(clock) -> AnimationController:
    return AnimationController(clock=clock)


def five_point_route() -> Route:
    return Route(id="r", coordinates=tuple(GeoPoint(0.0, float(i)) for i in range(5)))


class TestAnimationController:
    def test_starts_idle(self, controller):
        assert controller.status is AnimationStatus.IDLE
        assert controller.progress_percent == 0.0

    def test_progress_follows_clock(self, controller, clock):
        controller.play(10_000)
        clock.now += 2_500

        assert controller.tick() == pytest.approx(25.0)
        assert controller.status is AnimationStatus.PLAYING

    def test_progress_clamps_at_100(self, controller, clock):
        controller.play(1_000)
        clock.now += 5_000

        assert controller.tick() == 100.0
        assert controller.is_complete

    def test_progress_never_decreases(self, controller, clock):
        """A clock that jumps backwards must not rewind the animation."""
        controller.play(10_000)
        seen = []
        for now in (2_000, 4_000, 3_000, 1_500, 6_000, 5_000):
            clock.now = 1_000.0 + now
            seen.append(controller.tick())

        assert seen == sorted(seen)
        assert seen[-1] == pytest.approx(60.0)

    def test_pause_freezes_progress(self, controller, clock):
        controller.play(10_000)
        clock.now += 3_000
        controller.tick()
        controller.pause()
        clock.now += 50_000

        assert controller.tick() == pytest.approx(30.0)
        assert controller.status is AnimationStatus.PAUSED

    def test_resume_continues_without_jump(self, controller, clock):
        controller.play(10_000)
        clock.now += 4_000
        controller.tick()
        controller.pause()
        clock.now += 60_000

        controller.play(10_000)
        assert controller.tick() == pytest.approx(40.0)
        clock.now += 1_000
        assert controller.tick() == pytest.approx(50.0)

    def test_play_while_playing_is_noop(self, controller, clock):
        controller.play(10_000)
        clock.now += 5_000
        controller.play(10_000)

        assert controller.tick() == pytest.approx(50.0)

    def test_stop_and_reset_zero_progress(self, controller, clock):
        controller.play(10_000)
        clock.now += 5_000
        controller.tick()

        controller.stop()
        assert controller.status is AnimationStatus.IDLE
        assert controller.progress_percent == 0.0

        controller.reset()
        assert controller.status is AnimationStatus.IDLE
        assert controller.progress_percent == 0.0

    def test_stop_while_paused_returns_to_idle(self, controller, clock):
        controller.play(1_000, now=0)
        controller.tick(now=500)
        controller.pause()

        controller.stop()

        assert controller.status is AnimationStatus.IDLE
        assert controller.state.clock_origin == 0.0

    def test_play_after_stop_restarts(self, controller, clock):
        controller.play(10_000)
        clock.now += 8_000
        controller.tick()
        controller.stop()

        controller.play(10_000)
        clock.now += 1_000
        assert controller.tick() == pytest.approx(10.0)

    @pytest.mark.parametrize("duration", [0, -5, float("nan"), "10"])
    def test_rejects_invalid_duration(self, controller, duration):
        with pytest.raises(ValidationError):
            controller.play(duration)

        assert controller.status is AnimationStatus.IDLE

    def test_state_is_a_copy(self, controller):
        controller.play(1_000)
        snapshot = controller.state
        snapshot.progress_percent = 99.0

        assert controller.progress_percent == 0.0

    def test_explicit_now_overrides_clock(self):
        controller = AnimationController(clock=lambda: pytest.fail("clock should not be read"))

        controller.play(2_000, now=0)
        assert controller.tick(now=500) == pytest.approx(25.0)


class TestVisibleCoordinates:
    @pytest.mark.parametrize(
        "progress, expected",
        [(0, 0), (19.9, 0), (20, 1), (40, 2), (50, 2), (99, 4), (100, 5)],
    )
    def test_prefix_length_is_floored(self, progress, expected):
        route = five_point_route()

        visible = visible_coordinates(route, progress)

        assert len(visible) == expected
        assert tuple(visible) == route.coordinates[:expected]

    def test_empty_and_missing_routes(self):
        assert visible_coordinates(None, 50) == ()
        assert visible_coordinates(Route(id="empty"), 100) == ()

    def test_out_of_range_progress_is_clamped(self):
        route = five_point_route()

        assert len(visible_coordinates(route, -10)) == 0
        assert len(visible_coordinates(route, 250)) == 5


def test_position_at_progress():
    route = five_point_route()

    assert position_at_progress(route, 0) == GeoPoint(0.0, 0.0)
    assert position_at_progress(route, 50) == GeoPoint(0.0, 2.0)
    assert position_at_progress(route, 100) == GeoPoint(0.0, 4.0)
    assert position_at_progress(None, 50) is None


def test_playback_duration_range():
    assert playback_duration_ms(10) == 10_000.0
    assert playback_duration_ms(1) == 1_000.0
    assert playback_duration_ms(60) == 60_000.0
    for seconds in (0.5, 61, float("nan")):
        with pytest.raises(ValidationError, match="between 1 and 60 seconds"):
            playback_duration_ms(seconds)
