"""
Utility functions for the Apsis package.
"""

import math
import warnings
from typing import Type
from .config import config


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from apsis.utils import validation_error
    >>> from apsis import config
    >>> from apsis.exceptions import InvalidOrbitState
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError
    >>> validation_error("Bad state", InvalidOrbitState)  # Raises InvalidOrbitState

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=2)


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds as a labelled string.

    Durations of a minute or more are shown as whole days, hours, minutes
    and seconds (``"1d 2h 3m 4s"``); shorter durations keep two decimals
    (``"12.34s"``). Non-finite durations, such as the period of an open
    orbit, are shown as ``"Infinite"``.

    Parameters
    ----------
    seconds : float
        Duration [s]

    Returns
    -------
    str
        Formatted duration

    Examples
    --------
    >>> format_duration(5554.3)
    '1h 32m 34s'
    >>> format_duration(float('inf'))
    'Infinite'
    """
    if not math.isfinite(seconds):
        return "Infinite"

    sign = "-" if seconds < 0 else ""
    t = abs(seconds)
    if t < 60.0:
        return f"{sign}{t:.2f}s"

    parts = []
    for label, size in (("d", 86400.0), ("h", 3600.0), ("m", 60.0)):
        # only show leading units that are reached
        if t >= size or parts:
            count = math.floor(t / size)
            parts.append(f"{count}{label}")
            t -= count * size
    parts.append(f"{math.floor(t)}s")
    return sign + " ".join(parts)
