"""
Vector math helpers for 3D double-precision vectors.

Vectors are plain numpy float64 arrays of shape (3,), so addition,
subtraction and scaling use numpy operators directly. The functions here add
the operations whose edge cases matter for orbit geometry: normalization of
(near) zero vectors, clamped angles, axis-angle rotation and a cross-product
basis with fallback for degenerate configurations.
"""

import numpy as np
from .config import config

# Reference directions (ecliptic convention: +z is north)
RIGHT = np.array([1.0, 0.0, 0.0])
UP = np.array([0.0, 1.0, 0.0])
NORMAL = np.array([0.0, 0.0, 1.0])
ZERO = np.zeros(3)

for _v in (RIGHT, UP, NORMAL, ZERO):
    _v.flags.writeable = False


def vector(x, y=None, z=None) -> np.ndarray:
    """
    Build a float64 3-vector from components or from any 3-element sequence.

    Raises
    ------
    ValueError
        If the input does not have exactly three components
    """
    if y is None and z is None:
        v = np.array(x, dtype=float)
    else:
        v = np.array([x, y, z], dtype=float)
    if v.shape != (3,):
        raise ValueError(f"Vector must have 3 components, got shape {v.shape}")
    return v


def magnitude(v) -> float:
    """Euclidean length of v"""
    return float(np.linalg.norm(v))


def sqr_magnitude(v) -> float:
    """Squared Euclidean length of v"""
    return float(np.dot(v, v))


def normalize(v) -> np.ndarray:
    """
    Unit vector along v.

    Returns the zero vector, rather than dividing by zero, when the magnitude
    of v is at or below config.NORMALIZE_EPSILON.
    """
    v = np.asarray(v, dtype=float)
    mag = np.linalg.norm(v)
    if mag > config.NORMALIZE_EPSILON:
        return v / mag
    return np.zeros(3)


def distance(a, b) -> float:
    """Distance between points a and b"""
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


def angle(a, b) -> float:
    """
    Unsigned angle between a and b in radians, in [0, pi].

    The cosine is clamped to [-1, 1] before acos; roundoff can otherwise
    push it just outside that range and produce NaN.
    """
    cos_angle = np.dot(normalize(a), normalize(b))
    return float(np.arccos(np.clip(cos_angle, -1.0, 1.0)))


def rotate_about_axis(v, angle_rad, axis) -> np.ndarray:
    """
    Rotate v by angle_rad (right-handed) about axis, using Rodrigues' formula.

    Parameters
    ----------
    v : array-like
        Vector to rotate
    angle_rad : float
        Rotation angle [rad]
    axis : array-like
        Rotation axis, normalized internally

    Returns
    -------
    np.ndarray
        Rotated vector
    """
    v = np.asarray(v, dtype=float)
    k = normalize(axis)
    cos_t = np.cos(angle_rad)
    sin_t = np.sin(angle_rad)
    return v * cos_t + np.cross(k, v) * sin_t + k * np.dot(k, v) * (1.0 - cos_t)


def robust_direction(v, *fallbacks):
    """
    Normalize v, falling back to other candidate directions when v is degenerate.

    A candidate is degenerate when its normalized squared magnitude is below
    config.DEGENERATE_BASIS_THRESHOLD, i.e. when it normalized to the zero
    vector. Candidates are tried in order; if all of them are degenerate the
    last normalized candidate (possibly the zero vector) is returned.

    Parameters
    ----------
    v : array-like
        Preferred (unnormalized) direction, typically a cross product
    *fallbacks : array-like
        Replacement directions, tried in order

    Returns
    -------
    direction : np.ndarray
        Unit vector (or zero vector if every candidate is degenerate)
    degenerate : bool
        True if v itself was degenerate and a fallback was used
    """
    direction = normalize(v)
    if sqr_magnitude(direction) >= config.DEGENERATE_BASIS_THRESHOLD:
        return direction, False
    for candidate in fallbacks:
        direction = normalize(candidate)
        if sqr_magnitude(direction) >= config.DEGENERATE_BASIS_THRESHOLD:
            break
    return direction, True


def signed_angle(a, b, axis) -> float:
    """
    Angle from a to b in radians, in (-pi, pi], positive for a right-handed
    rotation about axis.

    Uses atan2 of the sine and cosine components, which keeps full precision
    near 0 and pi where acos does not.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    sin_part = np.dot(np.cross(a, b), normalize(axis))
    cos_part = np.dot(a, b)
    return float(np.arctan2(sin_part, cos_part))
