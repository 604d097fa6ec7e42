"""
Apsis: Keplerian Orbit Propagation and Maneuver Planning

A Python package for two-body orbits around a single attractor: anomaly
conversions for elliptical, parabolic and hyperbolic conics, orbits from
classical elements or state vectors, impulsive maneuvers and closest-approach
search against circular target orbits.
"""
import logging

# Core classes
from .attractor import Attractor
from .orbit import Orbit, Orbit as Orb, OrbitSample
from .maneuver import Maneuver, maneuver_time, delta_v_vector, apply_maneuver
from .rendezvous import Approach, closest_approach_to_circular_orbit, distance_to_target_at_time
from .kepler import Regime

# Commonly-used celestial bodies and orbits
from .defaults import (
    SUN, MERCURY, VENUS, EARTH, MOON, MARS, JUPITER, SATURN, URANUS, NEPTUNE,
    PLANET_ELEMENTS, circular_orbit, leo_orbit, moon_orbit, planet_orbit,
)

# Configuration and errors
from .config import config, temp_config
from .exceptions import ApsisError, InvalidOrbitState, ConvergenceFailure

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from apsis import *"
__all__ = [
    # Classes
    "Attractor",
    "Orbit",
    "OrbitSample",
    "Maneuver",
    "Approach",
    "Regime",
    # Abbreviations
    "Orb",
    # Functions
    "maneuver_time",
    "delta_v_vector",
    "apply_maneuver",
    "closest_approach_to_circular_orbit",
    "distance_to_target_at_time",
    "circular_orbit",
    "leo_orbit",
    "moon_orbit",
    "planet_orbit",
    # Constants
    "SUN",
    "MERCURY",
    "VENUS",
    "EARTH",
    "MOON",
    "MARS",
    "JUPITER",
    "SATURN",
    "URANUS",
    "NEPTUNE",
    "PLANET_ELEMENTS",
    # Configuration and errors
    "config",
    "temp_config",
    "ApsisError",
    "InvalidOrbitState",
    "ConvergenceFailure",
]
