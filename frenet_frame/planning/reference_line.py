"""Reference line built from waypoints.

Provides, for any arc length ``s``, the tuple ``(s, x, y, theta, kappa,
dkappa)`` consumed by the frame converter, and projects Cartesian points onto
the line.
"""

import numpy as np
from typing import Optional, Sequence, Tuple, Union
from loguru import logger
from scipy.interpolate import CubicSpline
from scipy.optimize import minimize_scalar

from ..core.data_structures import ReferencePoint


ArrayLike = Union[float, np.ndarray]


class ReferenceLine:
    """2D reference path parameterized by arc length.

    x(s) and y(s) are natural cubic splines over the cumulative chord length
    of the waypoints.

    Args:
        x: x coordinates of waypoints
        y: y coordinates of waypoints
    """

    def __init__(self, x: Sequence[float], y: Sequence[float]):
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        if x.shape != y.shape or x.ndim != 1:
            raise ValueError(f"Waypoint arrays must be 1D with equal length, got {x.shape} and {y.shape}")
        if len(x) < 2:
            raise ValueError(f"At least 2 waypoints are required, got {len(x)}")

        ds = np.hypot(np.diff(x), np.diff(y))
        if np.any(ds <= 0.0):
            raise ValueError("Consecutive waypoints must be distinct")

        self.s = np.concatenate(([0.0], np.cumsum(ds)))
        self.sx = CubicSpline(self.s, x, bc_type='natural')
        self.sy = CubicSpline(self.s, y, bc_type='natural')

        logger.info(f"Reference line created from {len(x)} waypoints, length={self.length:.2f}m")

    @property
    def length(self) -> float:
        return float(self.s[-1])

    def _eval(self, spline: CubicSpline, s: ArrayLike, nu: int = 0) -> ArrayLike:
        value = spline(np.clip(s, 0.0, self.length), nu)
        if np.ndim(value) == 0:
            return float(value)
        return value

    def calc_position(self, s: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
        """Position at arc length s (clamped to the line)."""
        return self._eval(self.sx, s), self._eval(self.sy, s)

    def calc_yaw(self, s: ArrayLike) -> ArrayLike:
        """Heading angle in radians at arc length s."""
        dx = self._eval(self.sx, s, 1)
        dy = self._eval(self.sy, s, 1)
        yaw = np.arctan2(dy, dx)
        return yaw if isinstance(yaw, np.ndarray) else float(yaw)

    def calc_curvature(self, s: ArrayLike) -> ArrayLike:
        """Signed curvature at arc length s."""
        dx = self._eval(self.sx, s, 1)
        ddx = self._eval(self.sx, s, 2)
        dy = self._eval(self.sy, s, 1)
        ddy = self._eval(self.sy, s, 2)
        return (ddy * dx - ddx * dy) / ((dx ** 2 + dy ** 2) ** 1.5)

    def calc_curvature_rate(self, s: ArrayLike) -> ArrayLike:
        """Derivative of curvature w.r.t. arc length at s."""
        dx = self._eval(self.sx, s, 1)
        dy = self._eval(self.sy, s, 1)
        ddx = self._eval(self.sx, s, 2)
        ddy = self._eval(self.sy, s, 2)
        dddx = self._eval(self.sx, s, 3)
        dddy = self._eval(self.sy, s, 3)

        a = dx * ddy - dy * ddx
        b = dx * dddy - dy * dddx
        c = dx * ddx + dy * ddy
        d = dx * dx + dy * dy
        # dkappa/dt / |r'|, i.e. derivative w.r.t. true arc length
        return (b * d - 3.0 * a * c) / (d * d * d)

    def calc_reference_point(self, s: float) -> ReferencePoint:
        """Reference point (s, x, y, theta, kappa, dkappa) at arc length s."""
        s = float(np.clip(s, 0.0, self.length))
        x, y = self.calc_position(s)
        return ReferencePoint(
            s=s,
            x=x,
            y=y,
            theta=self.calc_yaw(s),
            kappa=float(self.calc_curvature(s)),
            dkappa=float(self.calc_curvature_rate(s)),
        )

    def sample(self, ds: float = 0.1) -> np.ndarray:
        """Sample the line every ds meters.

        Returns:
            Array of shape (n, 6) with rows [s, x, y, theta, kappa, dkappa]
        """
        s = np.append(np.arange(0.0, self.length, ds), self.length)
        x, y = self.calc_position(s)
        return np.column_stack([
            s, x, y,
            self.calc_yaw(s),
            self.calc_curvature(s),
            self.calc_curvature_rate(s),
        ])

    def find_nearest_s(
        self,
        x: float,
        y: float,
        samples: int = 200,
        window: float = 10.0,
        hint: Optional[float] = None
    ) -> float:
        """Arc length of the point on the line nearest to (x, y).

        With a hint (usually the previous match), searches a window around it
        first. Falls back to a global search when the local minimum sits on
        the window edge or is farther than a coarse global sample.
        """
        if hint is None:
            return self._search(x, y, 0.0, self.length, samples)[0]

        s_min = max(0.0, hint - window)
        s_max = min(self.length, hint + window)
        best_s, best_dist_sq = self._search(x, y, s_min, s_max, samples)

        at_lower_edge = abs(best_s - s_min) < 1e-3 and s_min > 0.0
        at_upper_edge = abs(best_s - s_max) < 1e-3 and s_max < self.length
        if at_lower_edge or at_upper_edge:
            logger.debug("Local search hit boundary, falling back to global search")
            return self._search(x, y, 0.0, self.length, samples)[0]

        _, coarse_dist_sq = self._sample_distances(x, y, 0.0, self.length, samples)
        if best_dist_sq > coarse_dist_sq.min():
            logger.debug("Local match farther than global samples, falling back to global search")
            return self._search(x, y, 0.0, self.length, samples)[0]

        return best_s

    def _sample_distances(self, x: float, y: float, s_min: float, s_max: float,
                          samples: int) -> Tuple[np.ndarray, np.ndarray]:
        s_samples = np.linspace(s_min, s_max, samples)
        px, py = self.calc_position(s_samples)
        return s_samples, (px - x) ** 2 + (py - y) ** 2

    def _search(self, x: float, y: float, s_min: float, s_max: float,
                samples: int) -> Tuple[float, float]:
        """Coarse sampling then bounded refinement; returns (s, squared distance)."""
        s_samples, dist_sq = self._sample_distances(x, y, s_min, s_max, samples)
        idx = int(np.argmin(dist_sq))
        best_s = float(s_samples[idx])
        best_dist_sq = float(dist_sq[idx])

        lo = s_samples[max(idx - 1, 0)]
        hi = s_samples[min(idx + 1, samples - 1)]
        if hi <= lo:
            return best_s, best_dist_sq

        def distance_sq(s: float) -> float:
            qx, qy = self.calc_position(s)
            return (qx - x) ** 2 + (qy - y) ** 2

        result = minimize_scalar(distance_sq, bounds=(lo, hi), method='bounded',
                                 options={'xatol': 1e-9})
        if result.success and result.fun <= best_dist_sq:
            return float(result.x), float(result.fun)
        return best_s, best_dist_sq
