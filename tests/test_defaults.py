"""
Test suite for default attractors and orbit factories.
"""

import pytest
import numpy as np
from apsis import (
    SUN, EARTH, MOON, MARS, PLANET_ELEMENTS, Regime,
    circular_orbit, leo_orbit, moon_orbit, planet_orbit,
)
from apsis.defaults import PLANETS, MOON_DISTANCE
from apsis.kepler import G, TWO_PI, normalize_anomaly, normalize_angle

DAY = 86400.0


class TestAttractors:
    """Test predefined attractors."""

    def test_earth(self):
        assert EARTH.mass == 5.9722e24
        assert EARTH.radius == 6378.0
        assert EARTH.influence_radius == 9.29e5
        assert EARTH.name == 'Earth'

    def test_sun(self):
        assert SUN.mass == 1.9885e30
        assert SUN.mu == pytest.approx(G * 1.9885e30)

    def test_moon_inside_earth_influence(self):
        assert MOON_DISTANCE < EARTH.influence_radius
        assert MOON.influence_radius < MOON_DISTANCE

    def test_planet_catalog(self):
        assert set(PLANETS) == set(PLANET_ELEMENTS)
        assert PLANETS['Mars'] is MARS


class TestOrbitFactories:
    """Test orbit factory functions."""

    def test_leo_period(self):
        """420 km parking orbit: period about 93 minutes."""
        orbit = leo_orbit()
        assert orbit.semi_major_axis == pytest.approx(6798.0)
        assert orbit.eccentricity == 0.0
        assert orbit.orbital_period == pytest.approx(5578.04, abs=0.01)

    def test_leo_starts_on_negative_x(self):
        orbit = leo_orbit(420.0)
        assert np.allclose(orbit.position_at_time(0.0), [-6798.0, 0.0, 0.0], atol=1e-9)

    def test_factories_return_fresh_orbits(self):
        a = leo_orbit()
        b = leo_orbit()
        a.advance_periapsis_time(10.0)
        assert b.periapsis_time == 0.0

    def test_circular_orbit(self):
        orbit = circular_orbit(10378.0, inclination=0.2)
        assert orbit.periapsis_distance == pytest.approx(10378.0)
        assert orbit.apoapsis_distance == pytest.approx(10378.0)
        assert orbit.inclination == pytest.approx(0.2)

    def test_moon_orbit(self):
        orbit = moon_orbit()
        assert orbit.semi_major_axis == pytest.approx(384400.0)
        assert orbit.orbital_period / DAY == pytest.approx(27.4, rel=2e-2)


class TestPlanetOrbits:
    """Test heliocentric planet orbits built from J2000 elements."""

    @pytest.mark.parametrize("name", list(PLANET_ELEMENTS))
    def test_elements(self, name):
        e, a, i, w, omega, _ = PLANET_ELEMENTS[name]
        orbit = planet_orbit(name)
        assert orbit.attractor is SUN
        assert orbit.regime is Regime.ELLIPTICAL
        assert orbit.eccentricity == e
        assert orbit.semi_major_axis == pytest.approx(a, rel=1e-12)
        assert orbit.inclination == pytest.approx(np.radians(i), abs=1e-12)

    def test_orientation(self):
        orbit = planet_orbit('Mars')
        assert orbit.ascending_node == pytest.approx(np.radians(49.71), abs=1e-12)
        assert orbit.arg_of_perifocus == pytest.approx(normalize_angle(np.radians(286.50)),
                                                       abs=1e-12)

    def test_mean_anomaly_at_epoch(self):
        """Mean anomaly at epoch is mean longitude minus longitude of perifocus."""
        orbit = planet_orbit('Mars')
        expected = normalize_anomaly(np.radians(355.43 - (49.71 + 286.50)))
        assert orbit.mean_anomaly_at_time(0.0) == pytest.approx(expected, abs=1e-9)

    def test_epoch_offset(self):
        orbit = planet_orbit('Venus', epoch=1000.0)
        expected = normalize_anomaly(np.radians(181.98 - (76.67 + 54.88)))
        assert orbit.mean_anomaly_at_time(1000.0) == pytest.approx(expected, abs=1e-9)

    def test_earth_year(self):
        orbit = planet_orbit('Earth')
        assert orbit.orbital_period / DAY == pytest.approx(365.25, rel=1e-3)

    def test_case_insensitive(self):
        assert planet_orbit('jupiter') == planet_orbit('Jupiter')

    def test_unknown_planet(self):
        with pytest.raises(KeyError, match="Unknown planet"):
            planet_orbit('Pluto')

    def test_earth_distance_at_epoch(self):
        """Earth is between periapsis and apoapsis distance at J2000."""
        orbit = planet_orbit('Earth')
        r = np.linalg.norm(orbit.position_at_time(0.0))
        assert orbit.periapsis_distance <= r <= orbit.apoapsis_distance
        assert orbit.true_anomaly_at_time(0.0) < TWO_PI
