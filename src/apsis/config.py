"""
Global Configuration for Apsis Package
======================================

This module provides package-wide configuration settings that users can modify
to control numerical tolerances, solver limits, validation behavior, and
default sampling options.

Examples
--------
View current configuration:

>>> import apsis
>>> print(apsis.config)

Modify settings:

>>> apsis.config.HYPERBOLIC_MAX_ITERATIONS = 50  # Fail faster
>>> apsis.config.DEFAULT_SAMPLE_POINTS = 360     # Smoother samples

Reset to defaults:

>>> apsis.config.reset()

Temporarily modify settings:

>>> with apsis.temp_config(EQUALITY_RTOL=1e-6):
...     # Relaxed tolerance for this block only
...     orbit1 == orbit2

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class ApsisConfig:
    """
    Global configuration for Apsis package.

    Attributes
    ----------
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12 (approximately millimeter-level at LEO distances)
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    NORMALIZE_EPSILON : float
        Vectors with magnitude at or below this value normalize to the
        zero vector instead of dividing by (almost) zero.
        Default: 1.401298e-45
    DEGENERATE_BASIS_THRESHOLD : float
        A normalized cross product whose squared magnitude falls below this
        value is treated as degenerate and replaced by a fallback direction.
        Default: 0.99
    SNAP_TO_EQUATORIAL : float
        Orbits whose normal leans less than this (in-plane component of the
        unit normal) are treated as equatorial, with ascending node 0.
        Default: 1e-8
    HYPERBOLIC_TOLERANCE : float
        Step size below which the hyperbolic Kepler solver has converged.
        Default: 1e-8
    HYPERBOLIC_MAX_ITERATIONS : int
        Maximum number of hyperbolic solver steps before raising
        ConvergenceFailure.
        Default: 1000
    APPROACH_RTOL : float
        Relative tolerance used when deciding whether a planned apoapsis
        touches a target radius rather than crossing it.
        Default: 1e-9
    NO_INTERSECTION_FRACTION : float
        A planned apoapsis below this fraction of the target radius is
        considered too far inside the target orbit to report an approach.
        Default: 0.95
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    DEFAULT_SAMPLE_POINTS : int
        Default number of points returned by Orbit.sample_points.
        Default: 180
    DEFAULT_MAX_DISTANCE : float
        Default clipping distance [km] for Orbit.sample_points.
        Default: 1.0e6
    """

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Vector math thresholds
    NORMALIZE_EPSILON: float = 1.401298e-45
    DEGENERATE_BASIS_THRESHOLD: float = 0.99
    SNAP_TO_EQUATORIAL: float = 1e-8

    # Kepler solver limits
    HYPERBOLIC_TOLERANCE: float = 1e-8
    HYPERBOLIC_MAX_ITERATIONS: int = 1000

    # Rendezvous search
    APPROACH_RTOL: float = 1e-9
    NO_INTERSECTION_FRACTION: float = 0.95

    # Validation behavior
    STRICT_VALIDATION: bool = True

    # Sampling defaults
    DEFAULT_SAMPLE_POINTS: int = 180
    DEFAULT_MAX_DISTANCE: float = 1.0e6

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import apsis
        >>> apsis.config.EQUALITY_RTOL = 1e-6  # Modify
        >>> apsis.config.reset()  # Back to defaults
        >>> apsis.config.EQUALITY_RTOL
        1e-12
        """
        defaults = ApsisConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["ApsisConfig:"]
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append(f"    NORMALIZE_EPSILON = {self.NORMALIZE_EPSILON}")
        lines.append(f"    DEGENERATE_BASIS_THRESHOLD = {self.DEGENERATE_BASIS_THRESHOLD}")
        lines.append(f"    SNAP_TO_EQUATORIAL = {self.SNAP_TO_EQUATORIAL}")
        lines.append("  Kepler Solver:")
        lines.append(f"    HYPERBOLIC_TOLERANCE = {self.HYPERBOLIC_TOLERANCE}")
        lines.append(f"    HYPERBOLIC_MAX_ITERATIONS = {self.HYPERBOLIC_MAX_ITERATIONS}")
        lines.append("  Rendezvous:")
        lines.append(f"    APPROACH_RTOL = {self.APPROACH_RTOL}")
        lines.append(f"    NO_INTERSECTION_FRACTION = {self.NO_INTERSECTION_FRACTION}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append("  Sampling:")
        lines.append(f"    DEFAULT_SAMPLE_POINTS = {self.DEFAULT_SAMPLE_POINTS}")
        lines.append(f"    DEFAULT_MAX_DISTANCE = {self.DEFAULT_MAX_DISTANCE}")
        return "\n".join(lines)


# Global configuration instance
config = ApsisConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import apsis
    >>> with apsis.temp_config(HYPERBOLIC_MAX_ITERATIONS=1):
    ...     # Solver gives up after a single step in this block
    ...     apsis.kepler.eccentric_from_mean(40.0, 1.001)
    Traceback (most recent call last):
    ...
    apsis.exceptions.ConvergenceFailure: ...

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"ApsisConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
