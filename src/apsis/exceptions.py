"""
Exception types raised by the Apsis package.

Numerically degenerate but physically meaningful inputs never raise; they
resolve to a defined fallback value instead. The exceptions here cover the
two genuine failure modes: construction from an invalid state, and a solver
that cannot converge.
"""


class ApsisError(Exception):
    """Base class for all Apsis errors."""


class InvalidOrbitState(ApsisError, ValueError):
    """
    Raised when an Orbit is built from inputs that cannot describe a
    trajectory (non-finite vectors, zero-length position, massless
    attractor, negative eccentricity).
    """


class ConvergenceFailure(ApsisError, RuntimeError):
    """
    Raised when an iterative anomaly solver exceeds its iteration cap.

    Attributes
    ----------
    mean_anomaly : float
        Mean anomaly the solver was inverting [rad]
    eccentricity : float
        Eccentricity of the orbit
    iterations : int
        Number of iterations performed before giving up
    """

    def __init__(self, message, mean_anomaly=None, eccentricity=None, iterations=None):
        super().__init__(message)
        self.mean_anomaly = mean_anomaly
        self.eccentricity = eccentricity
        self.iterations = iterations
