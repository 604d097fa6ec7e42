'''Closest-approach search against a circular target orbit

The search assumes the target orbit is circular and coplanar with the planned
orbit. Under that assumption the two paths come closest where the planned
orbit's distance from the attractor equals the target radius, so closest
approach reduces to inverting the orbit equation. For any other target the
returned times are only an approximation.'''

import logging
import numpy as np
from dataclasses import dataclass
from typing import List

from .config import config
from .kepler import Regime, TWO_PI
from .utils import validation_error
from .vectors import distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Approach:
    """
    Candidate closest-approach event.

    Attributes
    ----------
    time : float
        Time of the event [s]
    planned_position : np.ndarray
        Position on the planned orbit at that time [km]
    target_position : np.ndarray
        Position of the target at that time [km]
    radial_gap : float
        Difference between the planned orbit's distance from the attractor and
        the target radius [km]; zero at a true crossing
    separation : float
        Straight-line distance between the two positions [km]
    """
    time: float
    planned_position: np.ndarray
    target_position: np.ndarray
    radial_gap: float
    separation: float


def distance_to_target_at_time(planned, target, at_time):
    """Separation between the planned and target orbits' positions at a time [km]"""
    return distance(planned.position_at_time(at_time), target.position_at_time(at_time))


def _approach(planned, target, target_radius, at_time):
    planned_position = planned.position_at_time(at_time)
    target_position = target.position_at_time(at_time)
    return Approach(
        time=float(at_time),
        planned_position=planned_position,
        target_position=target_position,
        radial_gap=float(abs(np.linalg.norm(planned_position) - target_radius)),
        separation=distance(planned_position, target_position),
    )


def closest_approach_to_circular_orbit(planned, target, maneuver_time) -> List[Approach]:
    """
    Candidate closest approaches between a planned orbit and a circular target.

    Parameters
    ----------
    planned : Orbit
        Orbit after the maneuver
    target : Orbit
        Circular orbit around the same attractor; its semi-major axis is taken
        as the target radius
    maneuver_time : float
        Time of the maneuver [s]; only events at or after it are reported

    Returns
    -------
    list of Approach
        Zero, one or two events ordered by time:

        - none if the planned apoapsis is below
          config.NO_INTERSECTION_FRACTION of the target radius, or the planned
          periapsis is above it
        - the next apoapsis passage if the planned orbit stays inside (or
          just touches) the target radius
        - otherwise the next outbound and inbound radius crossings of an
          elliptical orbit, or the single outbound crossing of an open one

    Raises
    ------
    ValueError
        If the target orbit is not closed
    """
    if target.regime is not Regime.ELLIPTICAL:
        validation_error(f"Target orbit must be closed, got {target.regime.value} orbit")
        return []
    if target.eccentricity > 1e-3:
        logger.warning("Target orbit eccentricity %.3g is not circular; "
                       "approach times are approximate", target.eccentricity)

    target_radius = target.semi_major_axis
    apoapsis = planned.apoapsis_distance
    periapsis = planned.periapsis_distance
    maneuver_time = float(maneuver_time)

    if apoapsis < config.NO_INTERSECTION_FRACTION * target_radius or periapsis > target_radius:
        logger.debug("No approach: periapsis %r, apoapsis %r, target radius %r",
                     periapsis, apoapsis, target_radius)
        return []

    # planned orbit stays inside, or grazes, the target radius
    if apoapsis <= target_radius * (1.0 + config.APPROACH_RTOL):
        t = planned.time_at_mean_anomaly(np.pi, after=maneuver_time)
        return [_approach(planned, target, target_radius, t)]

    nu = planned.true_anomaly_for_distance(target_radius)
    if planned.regime is Regime.ELLIPTICAL:
        crossings = (nu, TWO_PI - nu)
    else:
        crossings = (nu,)

    times = []
    for crossing in crossings:
        t = planned.time_at_mean_anomaly(planned.true_anomaly_to_mean(crossing),
                                         after=maneuver_time)
        if t >= maneuver_time:
            times.append(t)
    return [_approach(planned, target, target_radius, t) for t in sorted(times)]
