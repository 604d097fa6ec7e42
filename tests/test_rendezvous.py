"""
Test suite for closest-approach search against circular target orbits.

Tests cover:
- No-intersection cases
- Planned orbit touching the target radius at apoapsis
- Two crossings for elliptical plans, one for escape trajectories
- Separation reporting
"""

import pytest
import numpy as np
from apsis import (
    Orbit, Approach, EARTH, circular_orbit, leo_orbit, apply_maneuver,
    closest_approach_to_circular_orbit, distance_to_target_at_time, temp_config,
)


# =============================================================================
# Test Configuration
# =============================================================================

TARGET_ALTITUDE = 4000.0
TARGET_RADIUS = EARTH.radius + TARGET_ALTITUDE
PARKING_RADIUS = EARTH.radius + 420.0


def transfer_orbit(periapsis, apoapsis, periapsis_time=0.0):
    """Equatorial ellipse with periapsis on +x."""
    a = 0.5 * (periapsis + apoapsis)
    e = (apoapsis - periapsis) / (apoapsis + periapsis)
    return Orbit.from_elements(e, a, 0.0, 0.0, 0.0, EARTH, periapsis_time)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def target():
    """Circular target orbit at 4000 km altitude."""
    return circular_orbit(TARGET_RADIUS)


# =============================================================================
# Test No Intersection
# =============================================================================

class TestNoIntersection:
    """Plans that never come near the target radius."""

    def test_far_inside(self, target):
        """Apoapsis below 95% of the target radius."""
        assert closest_approach_to_circular_orbit(leo_orbit(420.0), target, 0.0) == []

    def test_entirely_outside(self, target):
        """Periapsis above the target radius."""
        high = circular_orbit(TARGET_RADIUS + 2000.0)
        assert closest_approach_to_circular_orbit(high, target, 0.0) == []

    def test_fraction_configurable(self, target):
        """The cut-off fraction comes from config."""
        plan = transfer_orbit(PARKING_RADIUS, 0.9 * TARGET_RADIUS)
        assert closest_approach_to_circular_orbit(plan, target, 0.0) == []
        with temp_config(NO_INTERSECTION_FRACTION=0.85):
            assert len(closest_approach_to_circular_orbit(plan, target, 0.0)) == 1


# =============================================================================
# Test Apoapsis Approach
# =============================================================================

class TestApoapsisApproach:
    """Plans that stay inside or graze the target radius."""

    def test_apoapsis_touches_target(self, target):
        """Apoapsis equal to the target radius gives one zero-distance approach."""
        plan = transfer_orbit(PARKING_RADIUS, TARGET_RADIUS)
        approaches = closest_approach_to_circular_orbit(plan, target, 0.0)
        assert len(approaches) == 1
        approach = approaches[0]
        assert isinstance(approach, Approach)
        assert approach.time == pytest.approx(0.5 * plan.orbital_period)
        assert approach.radial_gap == pytest.approx(0.0, abs=1e-6)
        assert np.linalg.norm(approach.planned_position) == pytest.approx(TARGET_RADIUS)

    def test_inside_target(self, target):
        """A plan just inside the target radius reports its apoapsis passage."""
        plan = transfer_orbit(PARKING_RADIUS, 0.97 * TARGET_RADIUS)
        approaches = closest_approach_to_circular_orbit(plan, target, 0.0)
        assert len(approaches) == 1
        assert approaches[0].radial_gap == pytest.approx(0.03 * TARGET_RADIUS)

    def test_next_apoapsis_after_maneuver(self, target):
        """The reported apoapsis passage is the next one after the maneuver."""
        plan = transfer_orbit(PARKING_RADIUS, TARGET_RADIUS)
        P = plan.orbital_period
        maneuver_time = 2.7 * P
        (approach,) = closest_approach_to_circular_orbit(plan, target, maneuver_time)
        assert approach.time == pytest.approx(3.5 * P)


# =============================================================================
# Test Crossings
# =============================================================================

class TestCrossings:
    """Plans that cross the target radius."""

    def test_elliptical_two_crossings(self, target):
        plan = transfer_orbit(PARKING_RADIUS, 15000.0)
        approaches = closest_approach_to_circular_orbit(plan, target, 0.0)
        assert len(approaches) == 2
        first, second = approaches
        assert 0.0 <= first.time < second.time < plan.orbital_period
        for approach in approaches:
            assert approach.radial_gap == pytest.approx(0.0, abs=1e-5)

    def test_crossings_symmetric_about_apoapsis(self, target):
        plan = transfer_orbit(PARKING_RADIUS, 15000.0)
        first, second = closest_approach_to_circular_orbit(plan, target, 0.0)
        half = 0.5 * plan.orbital_period
        assert half - first.time == pytest.approx(second.time - half)

    def test_only_future_crossings(self, target):
        """Crossings are reported at or after the maneuver time."""
        plan = transfer_orbit(PARKING_RADIUS, 15000.0)
        first, second = closest_approach_to_circular_orbit(plan, target, 0.0)
        midway = 0.5 * (first.time + second.time)
        later = closest_approach_to_circular_orbit(plan, target, midway)
        assert len(later) == 2
        assert later[0].time == pytest.approx(second.time)
        assert later[1].time == pytest.approx(first.time + plan.orbital_period)

    def test_escape_single_crossing(self, target):
        """Open orbits report only the outbound crossing."""
        plan = Orbit.from_state_vector([PARKING_RADIUS, 0.0, 0.0], [0.0, 11.5, 0.0], EARTH)
        assert plan.eccentricity > 1.0
        approaches = closest_approach_to_circular_orbit(plan, target, 0.0)
        assert len(approaches) == 1
        assert approaches[0].time > 0.0
        assert approaches[0].radial_gap == pytest.approx(0.0, abs=1e-3)

    def test_escape_crossing_in_past(self, target):
        plan = Orbit.from_state_vector([PARKING_RADIUS, 0.0, 0.0], [0.0, 11.5, 0.0], EARTH)
        assert closest_approach_to_circular_orbit(plan, target, 1e6) == []

    def test_after_maneuver(self, target):
        """Hohmann-like burn from the parking orbit reaches the target radius."""
        parking = leo_orbit(420.0)
        plan = apply_maneuver(parking, 0.0, prograde=1.0)
        approaches = closest_approach_to_circular_orbit(plan, target, 0.0)
        assert 1 <= len(approaches) <= 2
        for approach in approaches:
            assert approach.time >= 0.0
            assert approach.radial_gap == pytest.approx(0.0, abs=1e-5)


# =============================================================================
# Test Separation
# =============================================================================

class TestSeparation:
    """Test straight-line separation reporting."""

    def test_separation_matches_helper(self, target):
        plan = transfer_orbit(PARKING_RADIUS, 15000.0)
        for approach in closest_approach_to_circular_orbit(plan, target, 0.0):
            expected = distance_to_target_at_time(plan, target, approach.time)
            assert approach.separation == pytest.approx(expected)
            assert approach.separation >= approach.radial_gap - 1e-6

    def test_distance_to_target(self, target):
        """Co-located bodies have zero separation."""
        assert distance_to_target_at_time(target, target.copy(), 1234.0) == 0.0

    def test_opposite_sides(self, target):
        plan = circular_orbit(TARGET_RADIUS, arg_of_perifocus=np.pi)
        assert distance_to_target_at_time(plan, target, 0.0) == pytest.approx(2 * TARGET_RADIUS)

    def test_open_target_rejected(self):
        plan = transfer_orbit(PARKING_RADIUS, 15000.0)
        escape = Orbit.from_state_vector([PARKING_RADIUS, 0.0, 0.0], [0.0, 11.5, 0.0], EARTH)
        with pytest.raises(ValueError, match="must be closed"):
            closest_approach_to_circular_orbit(plan, escape, 0.0)
