"""Value types exchanged with the frame converter.

All types are immutable; a state only lives for the duration of a single
conversion call.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np
from dataclasses_json import dataclass_json


@dataclass_json
@dataclass(frozen=True)
class ReferencePoint:
    """Point on the reference path.

    Attributes:
        s: Arc length [m]
        x: X coordinate in global frame [m]
        y: Y coordinate in global frame [m]
        theta: Heading [rad]
        kappa: Curvature [1/m]
        dkappa: Curvature derivative w.r.t. arc length [1/m²]
    """
    s: float
    x: float
    y: float
    theta: float
    kappa: float
    dkappa: float

    def to_array(self) -> np.ndarray:
        """Convert to numpy array [s, x, y, theta, kappa, dkappa]."""
        return np.array([self.s, self.x, self.y, self.theta, self.kappa, self.dkappa])

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> 'ReferencePoint':
        """Create from array [s, x, y, theta, kappa, dkappa]."""
        return cls(s=float(arr[0]), x=float(arr[1]), y=float(arr[2]),
                   theta=float(arr[3]), kappa=float(arr[4]), dkappa=float(arr[5]))


@dataclass_json
@dataclass(frozen=True)
class CartesianState:
    """Vehicle state in the global frame.

    Attributes:
        x: X coordinate [m]
        y: Y coordinate [m]
        theta: Heading [rad]
        kappa: Curvature [1/m]
        v: Signed speed along heading [m/s]
        a: Signed acceleration along heading [m/s²]
    """
    x: float
    y: float
    theta: float
    kappa: float
    v: float
    a: float

    def to_array(self) -> np.ndarray:
        """Convert to numpy array [x, y, theta, kappa, v, a]."""
        return np.array([self.x, self.y, self.theta, self.kappa, self.v, self.a])

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> 'CartesianState':
        """Create from array [x, y, theta, kappa, v, a]."""
        return cls(x=float(arr[0]), y=float(arr[1]), theta=float(arr[2]),
                   kappa=float(arr[3]), v=float(arr[4]), a=float(arr[5]))


@dataclass_json
@dataclass(frozen=True)
class FrenetState:
    """State in Frenet coordinate frame.

    Attributes:
        s: Longitudinal position along reference path [m]
        s_d: Longitudinal velocity [m/s]
        s_dd: Longitudinal acceleration [m/s²]
        d: Lateral offset from reference path, left positive [m]
        d_d: Lateral derivative w.r.t. s
        d_dd: Second lateral derivative w.r.t. s [1/m]
    """
    s: float
    s_d: float
    s_dd: float
    d: float
    d_d: float
    d_dd: float

    @property
    def s_condition(self) -> Tuple[float, float, float]:
        return (self.s, self.s_d, self.s_dd)

    @property
    def d_condition(self) -> Tuple[float, float, float]:
        return (self.d, self.d_d, self.d_dd)

    def to_array(self) -> np.ndarray:
        """Convert to numpy array [s, s_d, s_dd, d, d_d, d_dd]."""
        return np.array([self.s, self.s_d, self.s_dd, self.d, self.d_d, self.d_dd])

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> 'FrenetState':
        """Create from array [s, s_d, s_dd, d, d_d, d_dd]."""
        return cls(s=float(arr[0]), s_d=float(arr[1]), s_dd=float(arr[2]),
                   d=float(arr[3]), d_d=float(arr[4]), d_dd=float(arr[5]))

    @classmethod
    def from_conditions(cls, s_condition: Sequence[float],
                        d_condition: Sequence[float]) -> 'FrenetState':
        """Create from (s, s', s'') and (d, d', d'') triples."""
        return cls.from_array(list(s_condition) + list(d_condition))
