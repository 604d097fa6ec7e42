"""
Test suite for utility functions.
"""

import pytest
from apsis import temp_config
from apsis.exceptions import InvalidOrbitState
from apsis.utils import validation_error, format_duration


class TestValidationError:
    """Test strict/lenient validation."""

    def test_strict_raises_value_error(self):
        """Strict mode raises ValueError by default."""
        with pytest.raises(ValueError, match="bad value"):
            validation_error("bad value")

    def test_strict_raises_given_class(self):
        """Strict mode raises the requested exception class."""
        with pytest.raises(InvalidOrbitState):
            validation_error("bad state", InvalidOrbitState)

    def test_lenient_warns(self):
        """Lenient mode issues a UserWarning instead."""
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="bad value"):
                validation_error("bad value", InvalidOrbitState)


class TestFormatDuration:
    """Test duration labels."""

    @pytest.mark.parametrize("seconds,expected", [
        (5554.3, "1h 32m 34s"),
        (90061.0, "1d 1h 1m 1s"),
        (86400.0, "1d 0h 0m 0s"),
        (75.0, "1m 15s"),
        (60.0, "1m 0s"),
        (12.5, "12.50s"),
        (0.0, "0.00s"),
        (-75.0, "-1m 15s"),
    ])
    def test_finite(self, seconds, expected):
        """Finite durations use whole units above one minute."""
        assert format_duration(seconds) == expected

    @pytest.mark.parametrize("seconds", [float('inf'), float('-inf'), float('nan')])
    def test_non_finite(self, seconds):
        """Non-finite durations read as Infinite."""
        assert format_duration(seconds) == "Infinite"
