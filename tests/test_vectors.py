"""
Test suite for vector helpers.
"""

import pytest
import numpy as np
from apsis import temp_config
from apsis.vectors import (
    RIGHT, UP, NORMAL, ZERO, vector, magnitude, sqr_magnitude, normalize,
    distance, angle, signed_angle, rotate_about_axis, robust_direction,
)

ATOL = 1e-14


class TestConstruction:
    """Test vector() and reference directions."""

    def test_from_components(self):
        """Components build a float array."""
        v = vector(1, 2, 3)
        assert v.dtype == np.float64
        assert np.array_equal(v, [1.0, 2.0, 3.0])

    def test_from_sequence(self):
        """A three-element sequence is accepted."""
        assert np.array_equal(vector([4, 5, 6]), [4.0, 5.0, 6.0])

    def test_wrong_length(self):
        """Anything but three components is rejected."""
        with pytest.raises(ValueError, match="3 components"):
            vector([1.0, 2.0])

    def test_reference_directions_read_only(self):
        """Shared constants cannot be modified in place."""
        with pytest.raises(ValueError):
            RIGHT[0] = 2.0

    def test_reference_directions_orthonormal(self):
        """RIGHT, UP, NORMAL form a right-handed basis."""
        assert np.allclose(np.cross(RIGHT, UP), NORMAL, atol=ATOL)
        assert sqr_magnitude(ZERO) == 0.0


class TestMeasures:
    """Test magnitude, distance and angle."""

    def test_magnitude(self):
        assert magnitude([3.0, 4.0, 0.0]) == pytest.approx(5.0)
        assert sqr_magnitude([3.0, 4.0, 0.0]) == pytest.approx(25.0)

    def test_distance(self):
        assert distance([1.0, 1.0, 1.0], [1.0, 4.0, 5.0]) == pytest.approx(5.0)

    def test_angle_orthogonal(self):
        assert angle(RIGHT, UP) == pytest.approx(np.pi / 2)

    def test_angle_parallel_is_exact(self):
        """Cosine roundoff above 1 is clamped, never NaN."""
        v = np.array([0.1, 0.7, 0.3])
        assert angle(v, 3.0 * v) == pytest.approx(0.0, abs=1e-7)
        assert not np.isnan(angle(v, v))

    def test_angle_opposite(self):
        assert angle(RIGHT, -RIGHT) == pytest.approx(np.pi)


class TestNormalize:
    """Test normalize()."""

    def test_unit_length(self):
        assert magnitude(normalize([1.0, 2.0, 2.0])) == pytest.approx(1.0)

    def test_zero_vector(self):
        """The zero vector normalizes to the zero vector."""
        result = normalize(ZERO)
        assert np.array_equal(result, np.zeros(3))

    def test_below_epsilon(self):
        """Vectors at or below the epsilon normalize to zero."""
        with temp_config(NORMALIZE_EPSILON=1e-3):
            assert np.array_equal(normalize([1e-4, 0.0, 0.0]), np.zeros(3))


class TestRotation:
    """Test rotate_about_axis()."""

    def test_quarter_turn(self):
        """Right-handed quarter turn about +z takes +x to +y."""
        assert np.allclose(rotate_about_axis(RIGHT, np.pi / 2, NORMAL), UP, atol=ATOL)

    def test_axis_unchanged(self):
        """The rotation axis is invariant."""
        axis = np.array([1.0, 1.0, 0.0])
        assert np.allclose(rotate_about_axis(axis, 1.234, axis), axis, atol=ATOL)

    def test_unnormalized_axis(self):
        """The axis length does not matter."""
        a = rotate_about_axis(UP, 0.7, 5.0 * RIGHT)
        b = rotate_about_axis(UP, 0.7, RIGHT)
        assert np.allclose(a, b, atol=ATOL)

    def test_preserves_length(self):
        v = np.array([3.0, -2.0, 7.0])
        assert magnitude(rotate_about_axis(v, 2.5, [0.3, 0.1, 0.9])) == pytest.approx(magnitude(v))


class TestRobustDirection:
    """Test the fallback basis primitive."""

    def test_regular_vector(self):
        """A usable vector is normalized and not flagged."""
        direction, degenerate = robust_direction([0.0, 0.0, 10.0], UP)
        assert np.allclose(direction, NORMAL)
        assert degenerate is False

    def test_falls_back(self):
        """A zero vector is replaced by the first usable fallback."""
        direction, degenerate = robust_direction(ZERO, ZERO, [0.0, 2.0, 0.0])
        assert np.allclose(direction, UP)
        assert degenerate is True

    def test_all_degenerate(self):
        """With no usable candidate the result is the zero vector."""
        direction, degenerate = robust_direction(ZERO, ZERO)
        assert np.array_equal(direction, np.zeros(3))
        assert degenerate is True


class TestSignedAngle:
    """Test signed_angle()."""

    def test_counterclockwise_positive(self):
        assert signed_angle(RIGHT, UP, NORMAL) == pytest.approx(np.pi / 2)

    def test_clockwise_negative(self):
        assert signed_angle(RIGHT, UP, -NORMAL) == pytest.approx(-np.pi / 2)

    def test_precise_near_zero(self):
        """Tiny angles keep full precision."""
        b = rotate_about_axis(RIGHT, 1e-12, NORMAL)
        assert signed_angle(RIGHT, b, NORMAL) == pytest.approx(1e-12, rel=1e-6)

    def test_matches_unsigned(self):
        a = np.array([1.0, 2.0, 0.5])
        b = np.array([-0.3, 1.0, 2.0])
        axis = np.cross(a, b)
        assert signed_angle(a, b, axis) == pytest.approx(angle(a, b))
