"""
Tests for PositionAnimator.

Covers:
- Target selection and clamping (first/last/next/prev/exact)
- Convergence toward the target without overshoot
- Whole-leg velocity (multi-slide jumps take one duration)
- Re-anchoring of the leg start on arrival
"""

import math

import pytest

from slidedeck.engine.position_animator import PositionAnimator, clamp


class TestClamp:
    def test_inside_range(self):
        assert clamp(0, 4, 2) == 2

    def test_below_and_above(self):
        assert clamp(0, 4, -3) == 0
        assert clamp(0, 4, 9) == 4


class TestSelection:
    """Target selection never leaves [0, max_position]."""

    def test_new_animator_rests_at_position(self):
        animator = PositionAnimator(3)
        assert animator.initial_position == 3
        assert animator.target_position == 3
        assert animator.current_position == 3.0
        assert not animator.is_moving

    def test_next_and_prev_clamp(self):
        animator = PositionAnimator(0)
        animator.select_prev(max_position=4)
        assert animator.target_position == 0

        for _ in range(10):
            animator.select_next(max_position=4)
        assert animator.target_position == 4

    def test_next_then_prev_round_trip(self):
        animator = PositionAnimator(2)
        animator.select_next(max_position=4)
        animator.select_prev(max_position=4)
        assert animator.target_position == 2

    @pytest.mark.parametrize("max_position", [0, 1, 4, 17])
    def test_first_and_last(self, max_position):
        animator = PositionAnimator(0)
        animator.select_last(max_position)
        assert animator.target_position == max_position
        animator.select_first(max_position)
        assert animator.target_position == 0

    def test_exact_is_clamped(self):
        animator = PositionAnimator(0)
        animator.select_exact(9, max_position=4)
        assert animator.target_position == 4
        animator.select_exact(-2, max_position=4)
        assert animator.target_position == 0

    def test_negative_max_is_treated_as_zero(self):
        animator = PositionAnimator(0)
        animator.select_next(max_position=-1)
        assert animator.target_position == 0

    def test_selection_does_not_move_current(self):
        animator = PositionAnimator(0)
        animator.select_next(max_position=4)
        assert animator.current_position == 0.0
        assert animator.is_moving
        assert animator.distance == 1.0


class TestAdvance:
    """advance() interpolates toward the target at a whole-leg velocity."""

    def test_half_duration_is_half_way(self):
        animator = PositionAnimator(0)
        animator.select_next(max_position=4)
        animator.advance(250, duration=500, max_position=4)
        assert animator.current_position == pytest.approx(0.5)
        assert animator.initial_position == 0

    def test_arrival_reanchors_leg(self):
        animator = PositionAnimator(0)
        animator.select_next(max_position=4)
        animator.advance(250, duration=500, max_position=4)
        animator.advance(250, duration=500, max_position=4)
        assert animator.current_position == 1.0
        assert animator.initial_position == 1
        assert not animator.is_moving

    def test_never_overshoots(self):
        animator = PositionAnimator(0)
        animator.select_next(max_position=4)
        animator.advance(10_000, duration=500, max_position=4)
        assert animator.current_position == 1.0

    def test_backwards(self):
        animator = PositionAnimator(3)
        animator.select_prev(max_position=4)
        animator.advance(100, duration=500, max_position=4)
        assert animator.current_position == pytest.approx(2.8)
        animator.advance(10_000, duration=500, max_position=4)
        assert animator.current_position == 2.0
        assert animator.initial_position == 2

    def test_multi_step_jump_takes_one_duration(self):
        animator = PositionAnimator(0)
        animator.select_exact(4, max_position=4)
        animator.advance(250, duration=500, max_position=4)
        assert animator.current_position == pytest.approx(2.0)
        animator.advance(250, duration=500, max_position=4)
        assert animator.current_position == 4.0
        assert animator.initial_position == 4

    def test_retarget_mid_flight_uses_whole_leg_distance(self):
        """A second hop before arrival speeds up: the leg is now 0 → 2."""
        animator = PositionAnimator(0)
        animator.select_next(max_position=4)
        animator.advance(250, duration=500, max_position=4)
        animator.select_next(max_position=4)
        animator.advance(250, duration=500, max_position=4)
        assert animator.current_position == pytest.approx(1.5)

    def test_reversal_back_to_leg_start_moves_at_unit_speed(self):
        animator = PositionAnimator(0)
        animator.select_next(max_position=4)
        animator.advance(250, duration=500, max_position=4)
        animator.select_prev(max_position=4)
        animator.advance(100, duration=500, max_position=4)
        assert animator.current_position == pytest.approx(0.3)

    def test_at_rest_stays_put(self):
        animator = PositionAnimator(2)
        animator.advance(100, duration=500, max_position=4)
        assert animator.current_position == 2.0
        assert animator.initial_position == 2

    def test_zero_duration_snaps(self):
        animator = PositionAnimator(0)
        animator.select_last(max_position=4)
        animator.advance(1, duration=0, max_position=4)
        assert animator.current_position == 4.0
        assert animator.initial_position == 4

    def test_target_reclamped_when_bound_shrinks(self):
        animator = PositionAnimator(0)
        animator.select_exact(3, max_position=4)
        animator.advance(10_000, duration=500, max_position=1)
        assert animator.target_position == 1
        assert animator.current_position == 1.0

    def test_converges_monotonically_within_bounded_ticks(self):
        animator = PositionAnimator(0)
        animator.select_next(max_position=4)
        frame_ms = 1000 / 60
        bound = math.ceil(500 / frame_ms) + 1

        previous = animator.current_position
        for _ in range(bound):
            animator.advance(frame_ms, duration=500, max_position=4)
            assert previous <= animator.current_position <= 1.0
            previous = animator.current_position

        assert animator.current_position == 1.0

    def test_current_stays_between_initial_and_target(self):
        animator = PositionAnimator(4)
        animator.select_first(max_position=4)
        for _ in range(20):
            animator.advance(37, duration=500, max_position=4)
            assert 0.0 <= animator.current_position <= 4.0


class TestSnapAndCopy:
    def test_snap(self):
        animator = PositionAnimator(0)
        animator.select_exact(2, max_position=4)
        animator.snap()
        assert animator.current_position == 2.0
        assert animator.initial_position == 2
        assert not animator.is_moving

    def test_copy_is_independent(self):
        animator = PositionAnimator(1)
        animator.select_next(max_position=4)
        clone = animator.copy()
        assert clone == animator

        clone.advance(100, duration=500, max_position=4)
        assert clone != animator
        assert animator.current_position == 1.0
