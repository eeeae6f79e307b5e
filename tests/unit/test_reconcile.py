"""Tests for the pure countdown arithmetic."""

import pytest
from whenever import Instant, TimeDelta

from meditimer.engine.reconcile import elapsed, is_complete, progress, recompute, resume_anchor

START = Instant.from_utc(2030, 1, 1, 6, 0, 0)


def at(seconds: float) -> Instant:
    return START + TimeDelta(seconds=seconds)


class TestRecompute:
    def test_full_duration_at_start(self) -> None:
        assert recompute(START, START, 600) == 600

    def test_partial_elapsed(self) -> None:
        assert recompute(at(90), START, 600) == pytest.approx(510)

    def test_clamped_to_zero_after_end(self) -> None:
        assert recompute(at(601), START, 600) == 0
        assert recompute(at(10_000), START, 600) == 0

    def test_exactly_at_end_is_zero(self) -> None:
        assert recompute(at(600), START, 600) == 0
        assert is_complete(at(600), START, 600) is True

    def test_clock_before_start_does_not_add_time(self) -> None:
        """A clock that went backwards never yields more than the full duration."""
        assert recompute(at(-30), START, 600) == 600
        assert elapsed(at(-30), START) == 0

    @pytest.mark.parametrize("duration", [1, 59.5, 600, 3 * 3600])
    def test_independent_of_tick_history(self, duration: float) -> None:
        """Sampling at many intermediate points gives the same answer as sampling once."""
        for step in range(0, int(duration) + 1, max(1, int(duration) // 7)):
            recompute(at(step), START, duration)
        assert recompute(at(duration / 2), START, duration) == pytest.approx(duration / 2)


class TestProgress:
    def test_progress_bounds(self) -> None:
        assert progress(600, 600) == 0
        assert progress(300, 600) == pytest.approx(0.5)
        assert progress(0, 600) == 1

    def test_zero_duration_is_complete(self) -> None:
        assert progress(0, 0) == 1


class TestResumeAnchor:
    def test_anchor_reproduces_remaining(self) -> None:
        now = at(5_000)
        anchor = resume_anchor(now, 600, 420)
        assert recompute(now, anchor, 600) == pytest.approx(420)

    def test_anchor_excludes_paused_time(self) -> None:
        """Paused at elapsed 180, resumed an hour later: 420 seconds are still left."""
        remaining_at_pause = recompute(at(180), START, 600)
        anchor = resume_anchor(at(180 + 3600), 600, remaining_at_pause)

        assert recompute(at(180 + 3600), anchor, 600) == pytest.approx(420)
        assert recompute(at(180 + 3600 + 420), anchor, 600) == 0
