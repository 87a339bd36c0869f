"""Tests for the frame-indexed export timeline."""

import pytest

from route_replay.animation.timeline import ExportTimeline, frame_progress, total_frame_count


def test_ten_seconds_at_sixty_fps():
    timeline = ExportTimeline(10, 60)

    ticks = list(timeline.iter_ticks())

    assert timeline.total_frames == 600
    assert len(timeline) == 600
    assert [t.index for t in ticks] == list(range(600))
    assert ticks[0].progress_percent == 0.0
    assert ticks[-1].progress_percent == 100.0
    assert ticks[300].progress_percent == pytest.approx(300 / 599 * 100)


def test_progress_is_strictly_increasing():
    progresses = [t.progress_percent for t in ExportTimeline(2, 30).iter_ticks()]

    assert all(a < b for a, b in zip(progresses, progresses[1:]))


def test_time_follows_frame_rate():
    ticks = list(ExportTimeline(1, 4).iter_ticks())

    assert [t.time_ms for t in ticks] == [0, 250, 500, 750]


def test_single_frame_stays_at_zero():
    assert frame_progress(0, 1) == 0.0
    assert frame_progress(0, 0) == 0.0


@pytest.mark.parametrize(
    "duration, fps, expected",
    [(10, 60, 600), (1.5, 30, 45), (0.01, 24, 0), (3600, 120, 432_000)],
)
def test_total_frame_count(duration, fps, expected):
    assert total_frame_count(duration, fps) == expected


def test_max_frames_limits_ticks():
    timeline = ExportTimeline(10, 30)

    ticks = list(timeline.iter_ticks(max_frames=5))

    assert len(ticks) == 5
    # Progress is still relative to the full timeline.
    assert ticks[-1].progress_percent == pytest.approx(4 / 299 * 100)
