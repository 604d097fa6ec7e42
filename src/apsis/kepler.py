'''Anomaly conversions and Kepler's equation solvers
Pure functions relating true, eccentric and mean anomaly for elliptical,
parabolic and hyperbolic orbits. All angles are in radians.'''

import logging
import numpy as np
from enum import Enum
from .config import config
from .exceptions import ConvergenceFailure

logger = logging.getLogger(__name__)

# ========== CONSTANTS ==========
TWO_PI = 2.0 * np.pi
G = 6.6743e-20  # Gravitational constant [km³/(kg·s²)]


# define an enumerated list of conic regimes
class Regime(Enum):
    ELLIPTICAL = 'elliptical'   # 0 <= e < 1
    PARABOLIC = 'parabolic'     # e == 1
    HYPERBOLIC = 'hyperbolic'   # e > 1

    @classmethod
    def of(cls, eccentricity):
        """Regime for a given eccentricity"""
        if eccentricity < 1.0:
            return cls.ELLIPTICAL
        elif eccentricity > 1.0:
            return cls.HYPERBOLIC
        else:
            return cls.PARABOLIC


def _unhandled(regime):
    return ValueError(f"Unhandled conic regime: {regime!r}")


# ========== ANGLE HELPERS ==========
def acosh_extended(x):
    """
    Inverse hyperbolic cosine that returns 0 instead of failing for x < 1.

    Near-parabolic trajectories can push the argument marginally below 1
    through roundoff; those inputs are treated as the boundary value.
    """
    if x < 1.0:
        return 0.0
    return float(np.log(x + np.sqrt(x * x - 1.0)))


def normalize_anomaly(angle):
    """Wrap an angle into [0, 2π)"""
    wrapped = float(angle) % TWO_PI
    # x % 2π can round up to exactly 2π for tiny negative x
    return 0.0 if wrapped >= TWO_PI else wrapped


def normalize_angle(angle):
    """Wrap an angle into (-π, π]"""
    wrapped = normalize_anomaly(angle)
    if wrapped > np.pi:
        wrapped -= TWO_PI
    return wrapped


# ========== ANOMALY CONVERSIONS ==========
def true_from_eccentric(eccentric_anomaly, eccentricity):
    """
    Convert eccentric anomaly to true anomaly.

    For parabolic orbits no distinct eccentric anomaly exists and the value
    is returned unchanged (it is treated as the true anomaly).

    Parameters
    ----------
    eccentric_anomaly : float
        Eccentric (or hyperbolic) anomaly [rad]
    eccentricity : float
        Orbit eccentricity

    Returns
    -------
    float
        True anomaly [rad]; in [0, 2π) for elliptical orbits
    """
    E = float(eccentric_anomaly)
    e = float(eccentricity)
    regime = Regime.of(e)
    if regime is Regime.ELLIPTICAL:
        E = normalize_anomaly(E)
        cos_E = np.cos(E)
        nu = np.arccos(np.clip((cos_E - e) / (1.0 - e * cos_E), -1.0, 1.0))
        # acos only covers [0, π]; reflect the second half of the orbit
        if E > np.pi:
            nu = TWO_PI - nu
        return float(nu)
    elif regime is Regime.HYPERBOLIC:
        return float(np.arctan2(np.sqrt(e * e - 1.0) * np.sinh(E), e - np.cosh(E)))
    elif regime is Regime.PARABOLIC:
        return E
    raise _unhandled(regime)


def eccentric_from_true(true_anomaly, eccentricity):
    """
    Convert true anomaly to eccentric anomaly.

    Parameters
    ----------
    true_anomaly : float
        True anomaly [rad]
    eccentricity : float
        Orbit eccentricity

    Returns
    -------
    float
        Eccentric anomaly [rad]. In [0, 2π) for elliptical orbits, signed
        for hyperbolic orbits, equal to the true anomaly for parabolic ones.
    """
    nu = float(true_anomaly)
    e = float(eccentricity)
    if not np.isfinite(e):
        return nu

    regime = Regime.of(e)
    if regime is Regime.ELLIPTICAL:
        nu = normalize_anomaly(nu)
        cos_nu = np.cos(nu)
        E = np.arccos(np.clip((e + cos_nu) / (1.0 + e * cos_nu), -1.0, 1.0))
        if nu > np.pi:
            E = TWO_PI - E
        return float(E)
    elif regime is Regime.HYPERBOLIC:
        nu = normalize_angle(nu)
        cos_nu = np.cos(nu)
        return acosh_extended((e + cos_nu) / (1.0 + e * cos_nu)) * float(np.sign(nu))
    elif regime is Regime.PARABOLIC:
        return nu
    raise _unhandled(regime)


def mean_from_eccentric(eccentric_anomaly, eccentricity):
    """
    Convert eccentric anomaly to mean anomaly (Kepler's equation).

    Elliptical: M = E - e sin E
    Hyperbolic: M = e sinh E - E
    Parabolic:  M = (t + t³/3) / 2, with t = tan(ν/2)  (Barker's equation)
    """
    E = float(eccentric_anomaly)
    e = float(eccentricity)
    regime = Regime.of(e)
    if regime is Regime.ELLIPTICAL:
        return float(E - e * np.sin(E))
    elif regime is Regime.HYPERBOLIC:
        return float(e * np.sinh(E) - E)
    elif regime is Regime.PARABOLIC:
        t = np.tan(0.5 * E)
        return float(0.5 * (t + t * t * t / 3.0))
    raise _unhandled(regime)


def eccentric_from_mean(mean_anomaly, eccentricity):
    """
    Solve Kepler's equation for the eccentric anomaly.

    Parameters
    ----------
    mean_anomaly : float
        Mean anomaly [rad]
    eccentricity : float
        Orbit eccentricity

    Returns
    -------
    float
        Eccentric anomaly [rad] (true anomaly for parabolic orbits)

    Raises
    ------
    ConvergenceFailure
        If the hyperbolic solver exceeds config.HYPERBOLIC_MAX_ITERATIONS

    Notes
    -----
    - Elliptical: fixed-count Laguerre-Conway iteration, 2 to 6 steps
      depending on eccentricity. Bounded cost, no convergence check.
    - Hyperbolic: Newton iteration from Danby's starting guess until the
      step is below config.HYPERBOLIC_TOLERANCE.
    - Parabolic: closed-form solution of the cubic in tan(ν/2).
    """
    M = float(mean_anomaly)
    e = float(eccentricity)
    regime = Regime.of(e)
    if regime is Regime.ELLIPTICAL:
        return _eccentric_from_mean_elliptical(M, e)
    elif regime is Regime.HYPERBOLIC:
        return _eccentric_from_mean_hyperbolic(M, e)
    elif regime is Regime.PARABOLIC:
        m = 2.0 * M
        v = 12.0 * m + 4.0 * np.sqrt(4.0 + 9.0 * m * m)
        root = np.cbrt(v)
        t = 0.5 * root - 2.0 / root
        return float(2.0 * np.arctan(t))
    raise _unhandled(regime)


def _eccentric_from_mean_elliptical(M, e):
    """Laguerre-Conway iteration for e < 1"""
    iterations = 2 * int(np.ceil((e + 0.7) * 1.25))
    m = M
    for _ in range(iterations):
        esin_E = e * np.sin(m)
        ecos_E = e * np.cos(m)
        delta = m - esin_E - M
        n = 1.0 - ecos_E
        m += -5.0 * delta / (n + np.sign(n) * np.sqrt(abs(16.0 * n * n - 20.0 * delta * esin_E)))
    return float(m)


def _eccentric_from_mean_hyperbolic(M, e):
    """Newton iteration for e > 1, seeded with Danby's guess"""
    F = np.log(2.0 * abs(M) / e + 1.8)
    if not np.isfinite(F):
        logger.debug("Non-finite hyperbolic seed for M=%r, e=%r; returning M", M, e)
        return M
    F = float(F * np.sign(M))

    max_iterations = config.HYPERBOLIC_MAX_ITERATIONS
    tolerance = config.HYPERBOLIC_TOLERANCE
    delta = np.inf
    for _ in range(max_iterations):
        delta = (e * np.sinh(F) - F - M) / (e * np.cosh(F) - 1.0)
        F -= delta
        if abs(delta) <= tolerance:
            return float(F)

    logger.warning("Hyperbolic Kepler solver did not converge: M=%r, e=%r, last step=%r",
                   M, e, delta)
    raise ConvergenceFailure(
        f"Hyperbolic Kepler solver did not converge within {max_iterations} "
        f"iterations (M={M}, e={e}, last step={delta})",
        mean_anomaly=M, eccentricity=e, iterations=max_iterations)


def true_from_mean(mean_anomaly, eccentricity):
    """Convert mean anomaly to true anomaly"""
    E = eccentric_from_mean(mean_anomaly, eccentricity)
    return true_from_eccentric(E, eccentricity)


def mean_from_true(true_anomaly, eccentricity):
    """Convert true anomaly to mean anomaly"""
    E = eccentric_from_true(true_anomaly, eccentricity)
    return mean_from_eccentric(E, eccentricity)


# ========== ORBIT GEOMETRY ==========
def true_anomaly_for_distance(distance, eccentricity, semi_major_axis, periapsis_distance):
    """
    True anomaly at which an orbit reaches a given distance from its focus.

    Inverts the orbit equation r = p / (1 + e cos ν). Only the solution in
    [0, π] is returned; the symmetric crossing on the other side of the
    major axis is at 2π minus (or the negative of) this value.

    Parameters
    ----------
    distance : float
        Radial distance from the focus [km]
    eccentricity : float
        Orbit eccentricity
    semi_major_axis : float
        Semi-major axis length [km] (unused for parabolic orbits)
    periapsis_distance : float
        Periapsis distance [km] (used for parabolic orbits)

    Returns
    -------
    float
        True anomaly in [0, π]. Distances inside periapsis give 0; distances
        beyond reach give π (elliptical) or the asymptotic limit (open orbits).
    """
    r = float(distance)
    e = float(eccentricity)
    a = float(semi_major_axis)
    if r <= 0.0:
        return 0.0

    regime = Regime.of(e)
    if regime is Regime.ELLIPTICAL:
        if e == 0.0:
            # every point of a circle is at distance a
            return float(np.pi) if r >= a else 0.0
        cos_nu = (a * (1.0 - e * e) - r) / (r * e)
    elif regime is Regime.HYPERBOLIC:
        cos_nu = (a * (e * e - 1.0) - r) / (r * e)
    elif regime is Regime.PARABOLIC:
        cos_nu = 2.0 * float(periapsis_distance) / r - 1.0
    else:
        raise _unhandled(regime)
    return float(np.arccos(np.clip(cos_nu, -1.0, 1.0)))


def orbital_period(semi_major_axis, mass):
    """
    Period of an elliptical orbit.

    Parameters
    ----------
    semi_major_axis : float
        Semi-major axis [km]
    mass : float
        Mass of the attracting body [kg]

    Returns
    -------
    float
        Orbital period [s]
    """
    a = float(semi_major_axis)
    return float(TWO_PI * np.sqrt(a * a * a / (G * mass)))
