'''Impulsive maneuver planning
Delta-v burns expressed in a prograde/normal/inward frame, and the orbit that
results from applying one'''

import logging
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from .orbit import Orbit
from .vectors import normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Maneuver:
    """
    Impulsive burn at a point on an orbit.

    Attributes
    ----------
    mean_anomaly : float
        Mean anomaly of the burn node on the base orbit [rad]
    prograde : float
        Delta-v along the velocity [km/s]
    normal : float
        Delta-v along the orbit normal [km/s]
    inward : float
        Delta-v toward the attractor, perpendicular to the velocity [km/s]
    """
    mean_anomaly: float
    prograde: float = 0.0
    normal: float = 0.0
    inward: float = 0.0

    @property
    def delta_v(self) -> float:
        """Total delta-v magnitude [km/s]"""
        return float(np.linalg.norm([self.prograde, self.normal, self.inward]))

    def time_on(self, orbit: Orbit, after: Optional[float] = None) -> float:
        """Time at which the burn node is reached on orbit [s]"""
        return maneuver_time(orbit, self.mean_anomaly, after)

    def apply(self, orbit: Orbit, burn_time: Optional[float] = None) -> Orbit:
        """Orbit after performing this burn on orbit (which is not modified)"""
        return apply_maneuver(orbit, self.mean_anomaly, burn_time,
                              self.prograde, self.normal, self.inward)


def maneuver_time(orbit, mean_anomaly, after=None):
    """
    Time at which orbit reaches the burn node.

    Parameters
    ----------
    orbit : Orbit
        Orbit the burn is performed on
    mean_anomaly : float
        Mean anomaly of the node [rad]
    after : float, optional
        For elliptical orbits, pick the first passage at or after this time

    Returns
    -------
    float
        periapsis_time + mean_anomaly / mean_motion [s], shifted by whole
        periods if after is given
    """
    return orbit.time_at_mean_anomaly(mean_anomaly, after)


def burn_frame(orbit, eccentric_anomaly) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Orthonormal maneuver frame at a point on an orbit.

    Returns
    -------
    prograde : np.ndarray
        Unit vector along the velocity
    normal : np.ndarray
        Unit vector along the orbit normal
    inward : np.ndarray
        normal x prograde; points at the attractor where the velocity is
        horizontal (periapsis, apoapsis, anywhere on a circle)
    """
    prograde = normalize(orbit.velocity_at_eccentric_anomaly(eccentric_anomaly))
    normal = normalize(orbit.orbit_normal)
    inward = np.cross(normal, prograde)
    return prograde, normal, inward


def delta_v_vector(orbit, eccentric_anomaly, prograde=0.0, normal=0.0, inward=0.0):
    """
    Delta-v components resolved into an inertial vector [km/s].

    Parameters
    ----------
    orbit : Orbit
        Orbit the burn is performed on
    eccentric_anomaly : float
        Eccentric anomaly of the burn point [rad]
    prograde, normal, inward : float
        Delta-v components [km/s]

    Returns
    -------
    np.ndarray
        Delta-v vector
    """
    pro_hat, normal_hat, inward_hat = burn_frame(orbit, eccentric_anomaly)
    return pro_hat * prograde + normal_hat * normal + inward_hat * inward


def maneuver_state(orbit, mean_anomaly, prograde=0.0, normal=0.0, inward=0.0):
    """Position [km] and post-burn velocity [km/s] at the burn node"""
    E = orbit.mean_anomaly_to_eccentric(mean_anomaly)
    position = orbit.position_at_eccentric_anomaly(E)
    velocity = orbit.velocity_at_eccentric_anomaly(E)
    return position, velocity + delta_v_vector(orbit, E, prograde, normal, inward)


def apply_maneuver(base_orbit, mean_anomaly_at_node, burn_time=None,
                   prograde=0.0, normal=0.0, inward=0.0):
    """
    New orbit resulting from an impulsive burn on base_orbit.

    Parameters
    ----------
    base_orbit : Orbit
        Orbit before the burn; never modified
    mean_anomaly_at_node : float
        Mean anomaly of the burn point on base_orbit [rad]
    burn_time : float, optional
        Time of the burn [s] (default: maneuver_time(base_orbit, mean_anomaly_at_node))
    prograde, normal, inward : float
        Delta-v components [km/s]

    Returns
    -------
    Orbit
        A fresh orbit through the burn point with the modified velocity

    Examples
    --------
    >>> from apsis import EARTH, leo_orbit, apply_maneuver
    >>> parking = leo_orbit(420.0)
    >>> transfer = apply_maneuver(parking, 0.0, prograde=0.1)
    >>> transfer.apoapsis_altitude > parking.apoapsis_altitude
    True
    """
    if burn_time is None:
        burn_time = maneuver_time(base_orbit, mean_anomaly_at_node)
    position, velocity = maneuver_state(base_orbit, mean_anomaly_at_node,
                                        prograde, normal, inward)
    logger.debug("Burn at M=%r, t=%r: dv=(%r, %r, %r)", mean_anomaly_at_node, burn_time,
                 prograde, normal, inward)
    return Orbit.from_state_vector(position, velocity, base_orbit.attractor, burn_time)
