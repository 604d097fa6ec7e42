'''Attractor dataclass definition
Immutable description of a gravitating body at the focus of an orbit'''

import numpy as np
from dataclasses import dataclass
from typing import Optional
from .kepler import G


@dataclass(frozen=True)
class Attractor:
    """
    Immutable parameters for a gravitating body.

    Attributes
    ----------
    mass : float
        Mass of the body [kg]
    radius : float
        Mean radius [km]
    influence_radius : float
        Sphere-of-influence radius [km]; beyond this distance the two-body
        model around this attractor is not trusted
    name : str, optional
        Body identifier
    """
    mass: float
    radius: float
    influence_radius: float
    name: Optional[str] = None

    def __post_init__(self):
        #Validate parameters
        if not np.isfinite(self.mass) or self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if not np.isfinite(self.radius) or self.radius < 0:
            raise ValueError(f"Radius must be non-negative, got {self.radius}")
        if np.isnan(self.influence_radius) or self.influence_radius < self.radius:
            raise ValueError(
                f"Influence radius ({self.influence_radius}) must be at least "
                f"the body radius ({self.radius})"
            )

    @property
    def mu(self) -> float:
        """Gravitational parameter G·M [km³/s²]"""
        return G * self.mass

    def __repr__(self) -> str:
        name_str = f"'{self.name}'" if self.name else "unnamed"
        return (f"Attractor({name_str}, mass={self.mass:.4e} kg, "
                f"radius={self.radius:.1f} km, influence={self.influence_radius:.3e} km)")
