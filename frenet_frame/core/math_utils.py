"""Numeric helpers shared by the frame conversion code."""

import numpy as np
from typing import Union


def normalize_angle(angle: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Normalize angle to the (-pi, pi] range.

    Args:
        angle: Input angle(s) in radians

    Returns:
        Normalized angle(s) in (-pi, pi]
    """
    two_pi = 2.0 * np.pi

    # np.mod with a positive divisor lands in [0, 2pi), so pi - mod is in (-pi, pi]
    a = np.pi - np.mod(np.pi - angle, two_pi)

    if np.isscalar(a) or np.ndim(a) == 0:
        a = float(a)
        if a <= -np.pi:
            a += two_pi
        return a

    # Rounding in np.mod can return exactly 2pi for tiny negative inputs
    a[a <= -np.pi] += two_pi
    return a


def float_compare(a: float, b: float, epsilon: float) -> int:
    """Three-way comparison of two floats with a tolerance.

    Returns:
        0 if |a - b| <= epsilon, -1 if a < b, 1 otherwise
    """
    if abs(a - b) <= epsilon:
        return 0
    return -1 if a < b else 1


def is_close(a: float, b: float, epsilon: float) -> bool:
    """True when a and b are equal within epsilon."""
    return float_compare(a, b, epsilon) == 0
