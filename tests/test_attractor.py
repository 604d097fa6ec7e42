"""
Test suite for Attractor.
"""

import dataclasses
import pytest
import numpy as np
from apsis import Attractor, EARTH
from apsis.kepler import G


class TestAttractor:
    """Test construction, validation and derived values."""

    def test_mu(self):
        """Gravitational parameter is G times mass."""
        assert EARTH.mu == pytest.approx(G * 5.9722e24)
        assert EARTH.mu == pytest.approx(398603.0, rel=1e-5)

    def test_frozen(self):
        """Attractors are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            EARTH.mass = 1.0

    def test_equality(self):
        """Attractors compare by value."""
        other = Attractor(mass=5.9722e24, radius=6378.0, influence_radius=9.29e5, name='Earth')
        assert other == EARTH

    @pytest.mark.parametrize("mass", [0.0, -1.0, np.nan, np.inf])
    def test_invalid_mass(self, mass):
        with pytest.raises(ValueError, match="Mass must be positive"):
            Attractor(mass=mass, radius=1.0, influence_radius=10.0)

    @pytest.mark.parametrize("radius", [-1.0, np.nan])
    def test_invalid_radius(self, radius):
        with pytest.raises(ValueError, match="Radius must be non-negative"):
            Attractor(mass=1.0, radius=radius, influence_radius=10.0)

    def test_influence_inside_body(self):
        """Sphere of influence cannot be smaller than the body."""
        with pytest.raises(ValueError, match="Influence radius"):
            Attractor(mass=1.0, radius=10.0, influence_radius=5.0)

    def test_point_mass(self):
        """A zero radius describes a point mass."""
        body = Attractor(mass=1.0e20, radius=0.0, influence_radius=np.inf)
        assert body.radius == 0.0

    def test_repr(self):
        text = repr(EARTH)
        assert "'Earth'" in text
        assert "5.9722e+24 kg" in text
