'''Orbit class definition
Conic orbit around an attractor, built from classical elements or a
position/velocity sample, with time-driven position and velocity queries'''

import logging
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Optional, Tuple

from .attractor import Attractor
from .config import config
from .exceptions import InvalidOrbitState
from .kepler import (
    Regime, TWO_PI, normalize_angle, normalize_anomaly,
    true_from_eccentric, eccentric_from_true, mean_from_eccentric,
    eccentric_from_mean, true_anomaly_for_distance, orbital_period,
)
from .utils import validation_error, format_duration
from .vectors import (
    RIGHT, UP, NORMAL, normalize, signed_angle, rotate_about_axis, robust_direction,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitSample:
    """
    Ordered points along an orbit, relative to the focus.

    Attributes
    ----------
    true_anomalies : np.ndarray
        True anomaly of each point [rad], shape (n,)
    points : np.ndarray
        Focus-relative positions [km], shape (n, 3)
    closed : bool
        True if the points go once around a complete ellipse (the last point
        connects back to the first); False if they span an open arc whose
        endpoints are the furthest visible points
    """
    true_anomalies: np.ndarray
    points: np.ndarray
    closed: bool = False

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the sample to a pandas DataFrame.

        Returns
        -------
        pd.DataFrame
            Columns 'true_anomaly', 'x', 'y', 'z'
        """
        points = np.asarray(self.points).reshape(-1, 3)
        return pd.DataFrame({
            'true_anomaly': self.true_anomalies,
            'x': points[:, 0],
            'y': points[:, 1],
            'z': points[:, 2],
        })


class Orbit:
    """
    Orbit of a body around an attractor.

    The conic is stored as a semi-major axis vector (from the geometric
    center toward periapsis), a semi-minor axis vector, the eccentricity,
    the periapsis distance and the time of periapsis passage. Anomalies are
    never stored; they are derived on demand from a query time and the
    periapsis time, so they cannot go stale.

    Uses the ecliptic convention where +z is north.

    Build instances with Orbit.from_elements() or Orbit.from_state_vector().
    An orbit is mutated only by set_by_state_vector(), set_by_maneuver() and
    the periapsis-time setters, and each of those replaces the complete set
    of primary fields at once.
    """

    # ========== CONSTRUCTION ==========
    def __init__(self, attractor: Attractor, semi_major_axis_vector, semi_minor_axis_vector,
                 eccentricity: float, periapsis_distance: float, periapsis_time: float = 0.0):
        """
        Create an orbit directly from its primary fields.

        Parameters
        ----------
        attractor : Attractor
            Gravitating body at the focus (shared, never modified)
        semi_major_axis_vector : array-like
            Vector from the center toward periapsis, length a [km]
        semi_minor_axis_vector : array-like
            In-plane vector orthogonal to the above, length b [km]
        eccentricity : float
            Orbit eccentricity (>= 0)
        periapsis_distance : float
            Periapsis distance [km]; authoritative for parabolic orbits
        periapsis_time : float, optional
            Time of periapsis passage [s] (default 0)
        """
        self._attractor = attractor
        self._validate_attractor(attractor)
        if not np.isfinite(eccentricity) or eccentricity < 0:
            validation_error(f"Eccentricity must be a finite value >= 0, got {eccentricity}",
                             InvalidOrbitState)
        self._set_primary(np.array(semi_major_axis_vector, dtype=float),
                          np.array(semi_minor_axis_vector, dtype=float),
                          float(eccentricity), float(periapsis_distance),
                          float(periapsis_time))

    @classmethod
    def from_elements(cls, eccentricity, semi_major_axis, inclination, arg_of_perifocus,
                      ascending_node, attractor, periapsis_time=0.0):
        """
        Construct an orbit from classical orbital elements.

        Parameters
        ----------
        eccentricity : float
            Eccentricity (0 circle, <1 ellipse, 1 parabola, >1 hyperbola)
        semi_major_axis : float
            Semi-major axis length [km]. Hyperbolic orbits accept either
            sign. For a parabolic orbit this is the periapsis distance.
        inclination : float
            Inclination from the ecliptic [rad]
        arg_of_perifocus : float
            Argument of perifocus [rad]
        ascending_node : float
            Longitude of the ascending node [rad]
        attractor : Attractor
            Body at the focus
        periapsis_time : float, optional
            Time of periapsis passage [s] (default 0)

        Returns
        -------
        Orbit
        """
        e = float(eccentricity)
        a = abs(float(semi_major_axis)) if e > 1.0 else float(semi_major_axis)
        values = np.array([e, a, inclination, arg_of_perifocus, ascending_node], dtype=float)
        if not np.all(np.isfinite(values)):
            validation_error(f"Orbital elements contain NaN or Inf: {values}", InvalidOrbitState)
        if e < 0:
            validation_error(f"Eccentricity must be >= 0, got {e}", InvalidOrbitState)
        if a <= 0:
            validation_error(f"Semi-major axis must be positive, got {semi_major_axis}",
                             InvalidOrbitState)

        # semi-minor axis length by regime
        regime = Regime.of(e)
        if regime is Regime.ELLIPTICAL:
            b = a * np.sqrt(1.0 - e * e)
            periapsis = a * (1.0 - e)
        elif regime is Regime.HYPERBOLIC:
            b = a * np.sqrt(e * e - 1.0)
            periapsis = a * (e - 1.0)
        else:
            # placeholder lengths; parabolic geometry only uses the directions
            periapsis = a
            a = b = 1.0

        ascending_node = normalize_angle(ascending_node)
        inclination = normalize_angle(inclination)
        arg_of_perifocus = normalize_angle(arg_of_perifocus)

        node_vec = normalize(rotate_about_axis(RIGHT, ascending_node, NORMAL))
        normal_vec = normalize(rotate_about_axis(NORMAL, inclination, node_vec))
        periapsis_vec = normalize(rotate_about_axis(node_vec, arg_of_perifocus, normal_vec))

        return cls(attractor,
                   periapsis_vec * a,
                   np.cross(periapsis_vec, normal_vec) * b,
                   e, periapsis, periapsis_time)

    @classmethod
    def from_state_vector(cls, position, velocity, attractor, at_time=0.0):
        """
        Construct the orbit through a position and velocity at a point in time.

        Parameters
        ----------
        position : array-like
            Position relative to the focus [km]
        velocity : array-like
            Velocity relative to the focus [km/s]
        attractor : Attractor
            Body at the focus
        at_time : float, optional
            Time of the sample [s] (default 0)

        Returns
        -------
        Orbit

        Raises
        ------
        InvalidOrbitState
            If position or velocity are non-finite, position is zero, or the
            attractor has no positive mass
        """
        orbit = cls.__new__(cls)
        orbit._attractor = attractor
        cls._validate_attractor(attractor)
        orbit.set_by_state_vector(position, velocity, at_time)
        return orbit

    # ========== VALIDATION ==========
    @staticmethod
    def _validate_attractor(attractor):
        mass = getattr(attractor, 'mass', None)
        if mass is None or not np.isfinite(mass) or mass <= 0:
            validation_error(f"Attractor must have a finite positive mass, got {mass}",
                             InvalidOrbitState)

    @staticmethod
    def _validate_state(position, velocity, at_time):
        if position.shape != (3,) or velocity.shape != (3,):
            raise InvalidOrbitState(
                f"Position and velocity must be 3-vectors, got shapes "
                f"{position.shape} and {velocity.shape}")
        if not (np.all(np.isfinite(position)) and np.all(np.isfinite(velocity))):
            validation_error(
                f"State vector contains NaN or Inf: r={position}, v={velocity}",
                InvalidOrbitState)
        elif not np.any(position):
            validation_error("Position must not be the zero vector", InvalidOrbitState)
        if not np.isfinite(at_time):
            validation_error(f"Time must be finite, got {at_time}", InvalidOrbitState)

    # ========== MUTATION ==========
    def _set_primary(self, semi_major_axis_vec, semi_minor_axis_vec, eccentricity,
                     periapsis_distance, periapsis_time, attractor=None):
        # every primary field is replaced together
        if attractor is None:
            attractor = self._attractor
        semi_major_axis_vec.flags.writeable = False
        semi_minor_axis_vec.flags.writeable = False
        (self._attractor, self._semi_major_axis_vec, self._semi_minor_axis_vec,
         self._eccentricity, self._periapsis_distance, self._periapsis_time) = (
            attractor, semi_major_axis_vec, semi_minor_axis_vec, eccentricity,
            periapsis_distance, periapsis_time)

    def set_by_state_vector(self, position, velocity, at_time=0.0):
        """
        Recompute the orbit from a position and velocity at a point in time.

        Parameters
        ----------
        position : array-like
            Position relative to the focus [km]
        velocity : array-like
            Velocity relative to the focus [km/s]
        at_time : float, optional
            Time of the sample [s] (default 0)

        Returns
        -------
        self
            Returns self for method chaining

        Notes
        -----
        A purely radial trajectory has no angular momentum; its plane falls
        back to one containing the position and the ecliptic up axis and its
        eccentricity vector is taken as zero. This is a degraded result, not
        an error.
        """
        return self._fit_state_vector(self._attractor, position, velocity, at_time)

    def _fit_state_vector(self, attractor, position, velocity, at_time):
        # nothing is assigned until the state has been validated and solved
        position = np.array(position, dtype=float)
        velocity = np.array(velocity, dtype=float)
        at_time = float(at_time)
        self._validate_state(position, velocity, at_time)

        mu = attractor.mu
        distance = np.linalg.norm(position)
        angular_momentum = np.cross(position, velocity)

        orbit_normal, degenerate = robust_direction(
            angular_momentum, np.cross(position, UP), np.cross(position, RIGHT))
        if degenerate:
            logger.warning("Near-zero angular momentum for r=%s, v=%s; "
                           "using fallback orbit plane", position, velocity)
            ecc_vector = np.zeros(3)
        else:
            ecc_vector = np.cross(velocity, angular_momentum) / mu - position / distance

        focal_parameter = np.dot(angular_momentum, angular_momentum) / mu
        e = float(np.linalg.norm(ecc_vector))

        minor_dir, _ = robust_direction(np.cross(angular_momentum, -ecc_vector),
                                        np.cross(orbit_normal, position))
        major_dir = normalize(np.cross(orbit_normal, minor_dir))

        regime = Regime.of(e)
        if regime is Regime.ELLIPTICAL:
            compression = 1.0 - e * e
            a = focal_parameter / compression
            b = a * np.sqrt(compression)
            periapsis = a * (1.0 - e)
        elif regime is Regime.HYPERBOLIC:
            compression = e * e - 1.0
            a = focal_parameter / compression
            b = a * np.sqrt(compression)
            periapsis = a * (e - 1.0)
        else:
            logger.debug("Parabolic state vector r=%s, v=%s", position, velocity)
            a = b = 1.0
            periapsis = 0.5 * focal_parameter

        # signed true anomaly of the sample
        nu = signed_angle(major_dir, position, orbit_normal)
        if regime is Regime.ELLIPTICAL:
            nu = normalize_anomaly(nu)

        n = _mean_motion(regime, a, periapsis, mu)
        if np.isfinite(n):
            mean_anomaly = mean_from_eccentric(eccentric_from_true(nu, e), e)
            periapsis_time = at_time - mean_anomaly / n
        else:
            # zero-length orbit; the sample point is its periapsis
            periapsis_time = at_time

        self._set_primary(major_dir * a, minor_dir * b, e, float(periapsis),
                          float(periapsis_time), attractor=attractor)
        return self

    def set_by_maneuver(self, base_orbit, mean_anomaly_at_node, burn_time,
                        prograde=0.0, normal=0.0, inward=0.0):
        """
        Replace this orbit with the result of a burn on base_orbit.

        See apsis.maneuver.apply_maneuver for the parameters. base_orbit is
        not modified, and may be this orbit itself.

        Returns
        -------
        self
            Returns self for method chaining
        """
        from .maneuver import maneuver_state
        position, velocity = maneuver_state(base_orbit, mean_anomaly_at_node,
                                            prograde, normal, inward)
        return self._fit_state_vector(base_orbit.attractor, position, velocity, burn_time)

    def set_periapsis_time_with_mean_anomaly(self, mean_anomaly, at_time=0.0):
        """
        Set the periapsis time so that the orbit has mean_anomaly at at_time.

        Returns
        -------
        self
            Returns self for method chaining
        """
        self.periapsis_time = float(at_time) - float(mean_anomaly) / self.mean_motion
        return self

    def advance_periapsis_time(self, delta_time):
        """
        Shift the time of periapsis passage by delta_time [s].

        Returns
        -------
        self
            Returns self for method chaining
        """
        self.periapsis_time = self._periapsis_time + float(delta_time)
        return self

    # ========== PROPERTY ACCESS ==========
    @property
    def attractor(self) -> Attractor:
        """Gravitating body at the focus"""
        return self._attractor

    @property
    def mu(self) -> float:
        """Gravitational parameter of the attractor [km³/s²]"""
        return self._attractor.mu

    @property
    def eccentricity(self) -> float:
        """Eccentricity"""
        return self._eccentricity

    @property
    def regime(self) -> Regime:
        """Conic regime (elliptical, parabolic or hyperbolic)"""
        return Regime.of(self._eccentricity)

    @property
    def periapsis_time(self) -> float:
        """Time of periapsis passage [s]"""
        return self._periapsis_time

    @periapsis_time.setter
    def periapsis_time(self, value):
        value = float(value)
        if not np.isfinite(value):
            validation_error(f"Periapsis time must be finite, got {value}", InvalidOrbitState)
        self._periapsis_time = value

    @property
    def semi_major_axis_vector(self) -> np.ndarray:
        """Vector from the orbit center toward periapsis (read-only)"""
        return self._semi_major_axis_vec

    @property
    def semi_minor_axis_vector(self) -> np.ndarray:
        """In-plane vector orthogonal to the semi-major axis vector (read-only)"""
        return self._semi_minor_axis_vec

    # ========== ORBITAL PROPERTIES ==========
    @property
    def semi_major_axis(self) -> float:
        """Semi-major axis length [km] (0 for parabolic orbits)"""
        if self.regime is Regime.PARABOLIC:
            return 0.0
        return float(np.linalg.norm(self._semi_major_axis_vec))

    @property
    def semi_minor_axis(self) -> float:
        """Semi-minor axis length [km] (0 for parabolic orbits)"""
        if self.regime is Regime.PARABOLIC:
            return 0.0
        return float(np.linalg.norm(self._semi_minor_axis_vec))

    @property
    def periapsis_direction(self) -> np.ndarray:
        """Unit vector from the focus toward periapsis"""
        return normalize(self._semi_major_axis_vec)

    @property
    def orbit_normal(self) -> np.ndarray:
        """Unit vector along the angular momentum"""
        return normalize(np.cross(self._semi_minor_axis_vec, self._semi_major_axis_vec))

    @property
    def center_point(self) -> np.ndarray:
        """Geometric center of the conic, relative to the focus [km]"""
        regime = self.regime
        if regime is Regime.ELLIPTICAL:
            return -self._semi_major_axis_vec * self._eccentricity
        elif regime is Regime.HYPERBOLIC:
            return self._semi_major_axis_vec * self._eccentricity
        return np.zeros(3)

    @property
    def periapsis_distance(self) -> float:
        """Closest distance to the focus [km]"""
        regime = self.regime
        if regime is Regime.ELLIPTICAL:
            return self.semi_major_axis * (1.0 - self._eccentricity)
        elif regime is Regime.HYPERBOLIC:
            return self.semi_major_axis * (self._eccentricity - 1.0)
        return self._periapsis_distance

    @property
    def apoapsis_distance(self) -> float:
        """Farthest distance from the focus [km] (infinite for open orbits)"""
        if self.regime is Regime.ELLIPTICAL:
            return self.semi_major_axis * (1.0 + self._eccentricity)
        return np.inf

    @property
    def periapsis_altitude(self) -> float:
        """Periapsis height above the attractor's surface [km]"""
        return self.periapsis_distance - self._attractor.radius

    @property
    def apoapsis_altitude(self) -> float:
        """Apoapsis height above the attractor's surface [km]"""
        return self.apoapsis_distance - self._attractor.radius

    @property
    def focal_parameter(self) -> float:
        """Semi-latus rectum p [km]"""
        regime = self.regime
        e = self._eccentricity
        if regime is Regime.ELLIPTICAL:
            return self.semi_major_axis * (1.0 - e * e)
        elif regime is Regime.HYPERBOLIC:
            return self.semi_major_axis * (e * e - 1.0)
        return 2.0 * self._periapsis_distance

    @property
    def orbital_period(self) -> float:
        """Time for one revolution [s] (infinite for open orbits)"""
        if self.regime is Regime.ELLIPTICAL:
            return orbital_period(self.semi_major_axis, self._attractor.mass)
        return np.inf

    @property
    def mean_motion(self) -> float:
        """Rate of change of the mean anomaly [rad/s]"""
        return _mean_motion(self.regime, self.semi_major_axis,
                            self._periapsis_distance, self.mu)

    @property
    def specific_energy(self) -> float:
        """Specific orbital energy [km²/s²]"""
        regime = self.regime
        if regime is Regime.ELLIPTICAL:
            return -self.mu / (2.0 * self.semi_major_axis)
        elif regime is Regime.HYPERBOLIC:
            return self.mu / (2.0 * self.semi_major_axis)
        return 0.0

    @property
    def specific_angular_momentum(self) -> float:
        """Magnitude of the specific angular momentum [km²/s]"""
        return float(np.sqrt(self.mu * max(self.focal_parameter, 0.0)))

    @property
    def inclination(self) -> float:
        """Inclination from the ecliptic [rad], in [0, π]"""
        h = self.orbit_normal
        return float(np.arctan2(np.hypot(h[0], h[1]), h[2]))

    @property
    def ascending_node(self) -> float:
        """Longitude of the ascending node [rad] (0 for ecliptic orbits)"""
        h = self.orbit_normal
        if np.hypot(h[0], h[1]) < config.SNAP_TO_EQUATORIAL:
            return 0.0
        return float(np.arctan2(h[0], -h[1]))

    @property
    def arg_of_perifocus(self) -> float:
        """Argument of perifocus, measured from the ascending node [rad]"""
        omega = self.ascending_node
        node = np.array([np.cos(omega), np.sin(omega), 0.0])
        b_hat = np.cross(self.orbit_normal, node)
        p_hat = self.periapsis_direction
        return float(np.arctan2(np.dot(p_hat, b_hat), np.dot(p_hat, node)))

    # ========== ANOMALY CONVERSIONS ==========
    def mean_anomaly_at_time(self, at_time) -> float:
        """
        Mean anomaly at a point in time [rad].

        Wrapped into [0, 2π) for elliptical orbits only; open orbits have an
        unbounded mean anomaly.
        """
        n = self.mean_motion
        if not np.isfinite(n):
            # zero-length orbit, always at its periapsis
            return 0.0
        mean_anomaly = (float(at_time) - self._periapsis_time) * n
        if self.regime is Regime.ELLIPTICAL:
            mean_anomaly = normalize_anomaly(mean_anomaly)
        return mean_anomaly

    def eccentric_anomaly_at_time(self, at_time) -> float:
        """Eccentric anomaly at a point in time [rad]"""
        return eccentric_from_mean(self.mean_anomaly_at_time(at_time), self._eccentricity)

    def true_anomaly_at_time(self, at_time) -> float:
        """True anomaly at a point in time [rad]"""
        return true_from_eccentric(self.eccentric_anomaly_at_time(at_time), self._eccentricity)

    def mean_anomaly_to_eccentric(self, mean_anomaly) -> float:
        """Convert a mean anomaly on this orbit to eccentric anomaly"""
        return eccentric_from_mean(mean_anomaly, self._eccentricity)

    def eccentric_anomaly_to_true(self, eccentric_anomaly) -> float:
        """Convert an eccentric anomaly on this orbit to true anomaly"""
        return true_from_eccentric(eccentric_anomaly, self._eccentricity)

    def true_anomaly_to_eccentric(self, true_anomaly) -> float:
        """Convert a true anomaly on this orbit to eccentric anomaly"""
        return eccentric_from_true(true_anomaly, self._eccentricity)

    def true_anomaly_to_mean(self, true_anomaly) -> float:
        """Convert a true anomaly on this orbit to mean anomaly"""
        return mean_from_eccentric(self.true_anomaly_to_eccentric(true_anomaly),
                                   self._eccentricity)

    def time_at_mean_anomaly(self, mean_anomaly, after: Optional[float] = None) -> float:
        """
        Time at which the orbit reaches a mean anomaly.

        Parameters
        ----------
        mean_anomaly : float
            Mean anomaly [rad]
        after : float, optional
            For elliptical orbits, return the first such time at or after
            this time instead of the one in the current revolution

        Returns
        -------
        float
            Time [s]
        """
        t = self._periapsis_time + float(mean_anomaly) / self.mean_motion
        period = self.orbital_period
        if after is not None and self.regime is Regime.ELLIPTICAL and period > 0.0:
            t += np.ceil((float(after) - t) / period) * period
        return float(t)

    def true_anomaly_for_distance(self, distance) -> float:
        """True anomaly in [0, π] at which the orbit is distance [km] from the focus"""
        return true_anomaly_for_distance(distance, self._eccentricity,
                                         self.semi_major_axis, self._periapsis_distance)

    # ========== POSITION & VELOCITY ==========
    def central_position_at_eccentric_anomaly(self, eccentric_anomaly) -> np.ndarray:
        """
        Position relative to the orbit center at an eccentric anomaly [km].

        Note that this is not the focal position; see
        position_at_eccentric_anomaly(). Parabolic orbits have no center, so
        their position is returned relative to the focus.
        """
        E = float(eccentric_anomaly)
        major = normalize(self._semi_major_axis_vec)
        minor = normalize(self._semi_minor_axis_vec)
        regime = self.regime
        if regime is Regime.ELLIPTICAL:
            x = np.cos(E) * self.semi_major_axis
            y = np.sin(E) * self.semi_minor_axis
        elif regime is Regime.HYPERBOLIC:
            x = -np.cosh(E) * self.semi_major_axis
            y = np.sinh(E) * self.semi_minor_axis
        else:
            # E is the true anomaly here; r = p / (1 + cos ν)
            with np.errstate(divide='ignore', invalid='ignore'):
                r = np.float64(2.0 * self._periapsis_distance) / (1.0 + np.cos(E))
            x = r * np.cos(E)
            y = r * np.sin(E)
        # the minor axis vector points against the direction of motion
        return major * x - minor * y

    def position_at_eccentric_anomaly(self, eccentric_anomaly) -> np.ndarray:
        """Position relative to the focus at an eccentric anomaly [km]"""
        return self.central_position_at_eccentric_anomaly(eccentric_anomaly) + self.center_point

    def position_at_true_anomaly(self, true_anomaly) -> np.ndarray:
        """Position relative to the focus at a true anomaly [km]"""
        return self.position_at_eccentric_anomaly(self.true_anomaly_to_eccentric(true_anomaly))

    def position_at_time(self, at_time) -> np.ndarray:
        """Position relative to the focus at a point in time [km]"""
        return self.position_at_eccentric_anomaly(self.eccentric_anomaly_at_time(at_time))

    def velocity_at_true_anomaly(self, true_anomaly) -> np.ndarray:
        """
        Velocity relative to the focus at a true anomaly [km/s].

        Returns the zero vector for a degenerate orbit with no focal
        parameter.
        """
        p = self.focal_parameter
        if p <= 0.0:
            return np.zeros(3)
        nu = float(true_anomaly)
        v = np.sqrt(self.mu / p)
        v_x = v * np.sin(nu)
        v_y = v * (self._eccentricity + np.cos(nu))
        major = normalize(self._semi_major_axis_vec)
        minor = normalize(self._semi_minor_axis_vec)
        return -major * v_x - minor * v_y

    def velocity_at_eccentric_anomaly(self, eccentric_anomaly) -> np.ndarray:
        """Velocity relative to the focus at an eccentric anomaly [km/s]"""
        return self.velocity_at_true_anomaly(self.eccentric_anomaly_to_true(eccentric_anomaly))

    def velocity_at_time(self, at_time) -> np.ndarray:
        """Velocity relative to the focus at a point in time [km/s]"""
        return self.velocity_at_true_anomaly(self.true_anomaly_at_time(at_time))

    def state_at_time(self, at_time) -> Tuple[np.ndarray, np.ndarray]:
        """Position [km] and velocity [km/s] relative to the focus at a point in time"""
        E = self.eccentric_anomaly_at_time(at_time)
        return (self.position_at_eccentric_anomaly(E),
                self.velocity_at_eccentric_anomaly(E))

    # ========== SAMPLING ==========
    def sample_points(self, count: Optional[int] = None,
                      max_distance: Optional[float] = None) -> OrbitSample:
        """
        Sample points along the orbit, clipped to a maximum distance.

        Parameters
        ----------
        count : int, optional
            Number of points (default: config.DEFAULT_SAMPLE_POINTS)
        max_distance : float, optional
            Maximum distance from the focus [km]
            (default: config.DEFAULT_MAX_DISTANCE)

        Returns
        -------
        OrbitSample
            A closed loop over true anomaly [0, 2π) when the orbit is an
            ellipse whose apoapsis is within max_distance; otherwise an open
            arc over [-θ, θ] where θ is the true anomaly at max_distance.
            Empty if count < 2 or max_distance is inside periapsis.
        """
        if count is None:
            count = config.DEFAULT_SAMPLE_POINTS
        if max_distance is None:
            max_distance = config.DEFAULT_MAX_DISTANCE

        if count < 2 or max_distance < self.periapsis_distance:
            return OrbitSample(np.empty(0), np.empty((0, 3)), closed=False)

        closed = self.regime is Regime.ELLIPTICAL and self.apoapsis_distance <= max_distance
        if closed:
            anomalies = np.arange(count) * (TWO_PI / count)
        else:
            max_angle = self.true_anomaly_for_distance(max_distance)
            anomalies = np.linspace(-max_angle, max_angle, count)

        points = np.array([self.position_at_true_anomaly(nu) for nu in anomalies])
        return OrbitSample(anomalies, points, closed=closed)

    # ========== UTILITY METHODS ==========
    def copy(self) -> "Orbit":
        """Create an independent copy sharing the same attractor"""
        return Orbit(self._attractor, self._semi_major_axis_vec.copy(),
                     self._semi_minor_axis_vec.copy(), self._eccentricity,
                     self._periapsis_distance, self._periapsis_time)

    def summary(self) -> dict:
        """
        Descriptive statistics of the orbit.

        Returns
        -------
        dict
            regime, eccentricity, periapsis/apoapsis distance and altitude [km],
            orbital period [s], mean motion [rad/s], periapsis time [s]
        """
        return {
            'regime': self.regime.value,
            'eccentricity': self._eccentricity,
            'periapsis_distance': self.periapsis_distance,
            'apoapsis_distance': self.apoapsis_distance,
            'periapsis_altitude': self.periapsis_altitude,
            'apoapsis_altitude': self.apoapsis_altitude,
            'orbital_period': self.orbital_period,
            'mean_motion': self.mean_motion,
            'periapsis_time': self._periapsis_time,
        }

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        #Machine-readable representation
        return (f"Orbit(e={self._eccentricity!r}, a={self.semi_major_axis!r}, "
                f"periapsis={self.periapsis_distance!r}, "
                f"periapsis_time={self._periapsis_time!r}, attractor={self._attractor!r})")

    def __str__(self):
        #Human-readable representation
        if self.regime is Regime.ELLIPTICAL:
            apoapsis = f"{self.apoapsis_altitude:,.0f} km"
        else:
            apoapsis = "Infinite"
        return (f"Apoapsis: {apoapsis}\n"
                f"Periapsis: {self.periapsis_altitude:,.0f} km\n"
                f"Period: {format_duration(self.orbital_period)}")

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, Orbit):
            return NotImplemented
        rtol, atol = config.EQUALITY_RTOL, config.EQUALITY_ATOL
        return (self._attractor == other._attractor and
                np.allclose([self._eccentricity, self._periapsis_distance, self._periapsis_time],
                            [other._eccentricity, other._periapsis_distance,
                             other._periapsis_time], rtol=rtol, atol=atol) and
                np.allclose(self._semi_major_axis_vec, other._semi_major_axis_vec,
                            rtol=rtol, atol=atol) and
                np.allclose(self._semi_minor_axis_vec, other._semi_minor_axis_vec,
                            rtol=rtol, atol=atol))

    # orbits are mutable
    __hash__ = None


def _mean_motion(regime, semi_major_axis, periapsis_distance, mu):
    """Mean motion for a set of orbit lengths [rad/s]"""
    if regime is Regime.ELLIPTICAL:
        a = semi_major_axis
        if a <= 0.0:
            return np.inf
        return float(np.sqrt(mu / (a * a * a)))
    elif regime is Regime.HYPERBOLIC:
        return float(np.sqrt(mu / semi_major_axis ** 3))
    # scaled to match the factor 1/2 in the parabolic mean anomaly
    return float(np.sqrt(mu / (8.0 * periapsis_distance ** 3)))
