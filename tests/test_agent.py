"""Tests for ant_ring.model.agent module."""

from __future__ import annotations

import math

import pytest

from ant_ring.model.agent import (
    Agent,
    Orientation,
    arc_length,
    interpolate_position,
    wrap,
)

F = Orientation.FORWARD
R = Orientation.REVERSE


class TestOrientation:
    def test_flip_swaps_variants(self) -> None:
        assert F.flip() is R
        assert R.flip() is F

    def test_double_flip_is_identity(self) -> None:
        for o in Orientation:
            assert o.flip().flip() is o

    def test_sign(self) -> None:
        assert F.sign == 1.0
        assert R.sign == -1.0


class TestAgentConstruction:
    def test_position_taken_modulo_one(self) -> None:
        assert Agent(1.25, F, 0).position == pytest.approx(0.25)
        assert Agent(-0.25, F, 0).position == pytest.approx(0.75)

    def test_tiny_negative_position_stays_below_one(self) -> None:
        agent = Agent(-1e-18, R, 0)
        assert 0.0 <= agent.position < 1.0

    def test_wrap_of_exact_one_is_zero(self) -> None:
        assert wrap(1.0) == 0.0

    def test_rejects_non_enum_orientation(self) -> None:
        with pytest.raises(ValueError):
            Agent(0.5, 0, 0)

    def test_equality_by_value(self) -> None:
        assert Agent(0.5, F, 3) == Agent(0.5, F, 3)
        assert Agent(0.5, F, 3) != Agent(0.5, R, 3)


class TestDistance:
    def test_same_orientation_is_nan(self) -> None:
        for p, q in [(0.1, 0.2), (0.9, 0.1), (0.5, 0.5)]:
            assert math.isnan(Agent(p, F, 0).distance(Agent(q, F, 1)))
            assert math.isnan(Agent(p, R, 0).distance(Agent(q, R, 1)))

    def test_forward_towards_higher_position(self) -> None:
        assert Agent(0.25, F, 0).distance(Agent(0.5, R, 1)) == 0.25

    def test_forward_wraps_around_boundary(self) -> None:
        assert Agent(0.75, F, 0).distance(Agent(0.25, R, 1)) == 0.5
        assert Agent(0.875, F, 0).distance(Agent(0.125, R, 1)) == 0.25

    def test_reverse_towards_lower_position(self) -> None:
        assert Agent(0.5, R, 0).distance(Agent(0.25, F, 1)) == 0.25

    def test_reverse_wraps_around_boundary(self) -> None:
        assert Agent(0.125, R, 0).distance(Agent(0.875, F, 1)) == 0.25

    def test_coincident_ants_report_full_lap(self) -> None:
        assert Agent(0.3, F, 0).distance(Agent(0.3, R, 1)) == 1.0
        assert Agent(0.3, R, 0).distance(Agent(0.3, F, 1)) == 1.0

    def test_approach_distance_is_symmetric(self) -> None:
        a = Agent(0.2, F, 0)
        b = Agent(0.7, R, 1)
        assert a.distance(b) == pytest.approx(b.distance(a))

    def test_two_arcs_between_opposite_ants_sum_to_one(self) -> None:
        positions = [0.0, 0.05, 0.3, 0.5, 0.77, 0.99]
        for p in positions:
            for q in positions:
                if p == q:
                    continue
                a = Agent(p, F, 0)
                b = Agent(q, R, 1)
                ahead = a.distance(b)
                behind = arc_length(b.position, a.position, a.orientation)
                assert ahead + behind == pytest.approx(1.0)


class TestArcLength:
    def test_zero_separation_is_full_lap(self) -> None:
        assert arc_length(0.4, 0.4, F) == 1.0
        assert arc_length(0.4, 0.4, R) == 1.0

    def test_result_in_half_open_unit_interval(self) -> None:
        for start in [0.0, 0.1, 0.6, 0.95]:
            for end in [0.0, 0.2, 0.6, 0.99]:
                for o in Orientation:
                    d = arc_length(start, end, o)
                    assert 0.0 < d <= 1.0


class TestAdvance:
    def test_advanced_follows_orientation(self) -> None:
        assert Agent(0.5, F, 0).advanced(0.25).position == 0.75
        assert Agent(0.5, R, 0).advanced(0.25).position == 0.25

    def test_advanced_wraps(self) -> None:
        assert Agent(0.875, F, 0).advanced(0.25).position == 0.125
        assert Agent(0.125, R, 0).advanced(0.25).position == 0.875

    def test_flipped_keeps_position_and_tag(self) -> None:
        flipped = Agent(0.5, F, 7).flipped()
        assert flipped.position == 0.5
        assert flipped.orientation is R
        assert flipped.tag == 7

    def test_flipped_onto_new_position(self) -> None:
        flipped = Agent(0.5, R, 2).flipped(1.25)
        assert flipped.position == 0.25
        assert flipped.orientation is F
        assert flipped.tag == 2


class TestInterpolatePosition:
    def test_endpoints(self) -> None:
        current = Agent(0.25, F, 0)
        target = Agent(0.5, R, 0)
        assert interpolate_position(current, target, 0.0) == 0.25
        assert interpolate_position(current, target, 1.0) == 0.5

    def test_midpoint_uses_current_orientation(self) -> None:
        current = Agent(0.5, R, 0)
        target = Agent(0.25, F, 0)
        assert interpolate_position(current, target, 0.5) == 0.375

    def test_wraps_across_boundary(self) -> None:
        current = Agent(0.875, F, 0)
        target = Agent(0.125, F, 0)
        assert interpolate_position(current, target, 0.5) == 0.0

    def test_identical_positions_travel_full_lap(self) -> None:
        current = Agent(0.25, F, 0)
        assert interpolate_position(current, current, 0.5) == 0.75
        assert interpolate_position(current, current, 0.25) == 0.5
