"""
Default Attractors and Orbits
==============================

Predefined Solar System attractors, the J2000 element set of the planets
around the Sun, and factory functions for commonly-used orbits.

Orbits are mutable, so they are created on demand by factory functions
rather than shared as module-level constants.

Examples
--------
>>> from apsis import EARTH, leo_orbit, circular_orbit
>>> parking = leo_orbit(420.0)
>>> target = circular_orbit(EARTH.radius + 4000.0)
>>> earth = planet_orbit('Earth')
"""
import numpy as np
from .attractor import Attractor
from .kepler import normalize_anomaly
from .orbit import Orbit

"""
Predefined Solar System attractors
Masses in kg, radii and sphere-of-influence radii in km
"""
SUN = Attractor(
    mass=1.9885e30,
    radius=1.3914e6,
    influence_radius=1.0e12,
    name='Sun'
)

MERCURY = Attractor(
    mass=3.3011e23,
    radius=2439.7,
    influence_radius=1.124e5,
    name='Mercury'
)

VENUS = Attractor(
    mass=4.8675e24,
    radius=6051.8,
    influence_radius=6.16e5,
    name='Venus'
)

EARTH = Attractor(
    mass=5.9722e24,
    radius=6378.0,
    influence_radius=9.29e5,
    name='Earth'
)

MOON = Attractor(
    mass=7.342e22,
    radius=1737.4,
    influence_radius=6.61e4,
    name='Moon'
)

MARS = Attractor(
    mass=6.4171e23,
    radius=3389.5,
    influence_radius=5.77e5,
    name='Mars'
)

JUPITER = Attractor(
    mass=1.8982e27,
    radius=69911.0,
    influence_radius=4.82e7,
    name='Jupiter'
)

SATURN = Attractor(
    mass=5.6834e26,
    radius=58232.0,
    influence_radius=5.48e7,
    name='Saturn'
)

URANUS = Attractor(
    mass=8.6810e25,
    radius=25362.0,
    influence_radius=5.18e7,
    name='Uranus'
)

NEPTUNE = Attractor(
    mass=1.02413e26,
    radius=24622.0,
    influence_radius=8.66e7,
    name='Neptune'
)

PLANETS = {body.name: body for body in
           (MERCURY, VENUS, EARTH, MARS, JUPITER, SATURN, URANUS, NEPTUNE)}

"""
Heliocentric planet elements at epoch J2000
(eccentricity, semi-major axis [km], inclination [deg], argument of
perifocus [deg], longitude of ascending node [deg], mean longitude [deg])
"""
PLANET_ELEMENTS = {
    'Mercury': (0.2056, 5.79091e7, 7.006, 29.12, 48.34, 252.25),
    'Venus': (0.0068, 1.08209e8, 3.398, 54.88, 76.67, 181.98),
    'Earth': (0.0167, 1.49598e8, 0.000, 114.21, 0.00, 100.47),
    'Mars': (0.0934, 2.27940e8, 1.852, 286.50, 49.71, 355.43),
    'Jupiter': (0.0489, 7.78478e8, 1.299, 273.87, 100.29, 34.33),
    'Saturn': (0.0565, 1.43354e9, 2.494, 339.39, 113.64, 50.08),
    'Uranus': (0.0472, 2.87097e9, 0.077, 97.00, 73.96, 314.20),
    'Neptune': (0.0087, 4.49841e9, 1.770, 273.19, 131.79, 304.22),
}

MOON_DISTANCE = 384400.0  # Mean Earth-Moon distance [km]


def circular_orbit(radius, attractor=EARTH, inclination=0.0, ascending_node=0.0,
                   arg_of_perifocus=0.0, periapsis_time=0.0):
    """
    Create a circular orbit.

    Parameters
    ----------
    radius : float
        Orbit radius from the attractor's center [km]
    attractor : Attractor, optional
        Central body (default EARTH)
    inclination, ascending_node, arg_of_perifocus : float, optional
        Orientation angles [rad]; the argument of perifocus fixes where
        true anomaly 0 lies on the circle
    periapsis_time : float, optional
        Time at which the body is at true anomaly 0 [s]

    Returns
    -------
    Orbit
    """
    return Orbit.from_elements(0.0, radius, inclination, arg_of_perifocus,
                               ascending_node, attractor, periapsis_time)


def leo_orbit(altitude=420.0, attractor=EARTH):
    """
    Create a circular low orbit at a given altitude.

    The reference point is placed opposite the x axis (argument of
    perifocus 180 deg), so the body starts at -x at time 0.

    Parameters
    ----------
    altitude : float, optional
        Height above the attractor's surface [km] (default 420)
    attractor : Attractor, optional
        Central body (default EARTH)

    Returns
    -------
    Orbit
    """
    return circular_orbit(attractor.radius + altitude, attractor,
                          arg_of_perifocus=np.pi)


def moon_orbit():
    """Create the Moon's orbit around Earth, circular at its mean distance"""
    return circular_orbit(MOON_DISTANCE, EARTH)


def planet_orbit(name, epoch=0.0):
    """
    Create a planet's heliocentric orbit from its J2000 elements.

    The mean longitude L fixes the mean anomaly at the epoch,
    M0 = L - (ascending node + argument of perifocus).

    Parameters
    ----------
    name : str
        Planet name, e.g. 'Earth' (case-insensitive)
    epoch : float, optional
        Time [s] that corresponds to J2000 (default 0)

    Returns
    -------
    Orbit

    Raises
    ------
    KeyError
        If name is not one of the eight planets
    """
    key = name.capitalize()
    if key not in PLANET_ELEMENTS:
        raise KeyError(f"Unknown planet '{name}'. Valid planets: {list(PLANET_ELEMENTS)}")
    e, a, i, w, omega, mean_longitude = PLANET_ELEMENTS[key]
    orbit = Orbit.from_elements(e, a, np.radians(i), np.radians(w), np.radians(omega), SUN)
    mean_anomaly = normalize_anomaly(np.radians(mean_longitude - (omega + w)))
    return orbit.set_periapsis_time_with_mean_anomaly(mean_anomaly, epoch)
