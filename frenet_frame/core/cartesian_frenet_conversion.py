"""Conversion between Cartesian and Frenet frames.

The Frenet frame is anchored to a reference path: ``s`` is the arc length
along the path and ``d`` the signed lateral offset, positive to the left of
the direction of travel. Lateral derivatives ``d'`` and ``d''`` are taken with
respect to ``s``, longitudinal derivatives ``s'`` and ``s''`` with respect
to time.

All functions are stateless. The reference point ``(rs, rx, ry, rtheta,
rkappa, rdkappa)`` must already be the projection of the Cartesian point onto
the reference path; no search is performed here.

Reference:
Werling et al., "Optimal Trajectory Generation for Dynamic Street Scenarios
in a Frenet Frame" (2010)
"""

import numpy as np
from typing import Sequence, Tuple, Union
from loguru import logger

from .math_utils import float_compare, normalize_angle


REFERENCE_S_TOLERANCE = 1.0e-6  # Allowed mismatch between rs and s_condition[0]
KAPPA_DENOMINATOR_EPSILON = 1.0e-8  # Below this, calculate_kappa returns 0.0

Scalar = Union[float, np.ndarray]
Condition = Tuple[Scalar, Scalar, Scalar]


class FrameConversionError(ValueError):
    """Base class for frame conversion failures."""
    pass


class ReferencePointMismatchError(FrameConversionError):
    """Raised when the reference point does not sit at s_condition[0].

    This is a caller bug, not a transient numeric condition; retrying with
    the same inputs always fails.
    """
    pass


class CartesianFrenetConverter:
    """Converter between Cartesian and Frenet coordinate systems.

    Singular configurations (heading deviation near +-pi/2, lateral offset
    near the reference radius of curvature) are not guarded: results grow
    large or become infinite. Callers must keep inputs away from them.
    """

    @staticmethod
    def cartesian_to_frenet(
        rs: float,
        rx: Scalar,
        ry: Scalar,
        rtheta: Scalar,
        rkappa: Scalar,
        rdkappa: Scalar,
        x: Scalar,
        y: Scalar,
        v: Scalar,
        a: Scalar,
        theta: Scalar,
        kappa: Scalar
    ) -> Tuple[Condition, Condition]:
        """Convert state from Cartesian to Frenet coordinate system.

        Args:
            rs: Arc length of the reference point
            rx, ry: Reference point coordinates
            rtheta: Reference point heading
            rkappa: Reference point curvature
            rdkappa: Reference point curvature derivative w.r.t. s
            x, y: Current position
            v: Speed along heading (signed)
            a: Acceleration along heading (signed)
            theta: Heading angle
            kappa: Curvature

        Returns:
            s_condition: (s, s', s'')
            d_condition: (d, d', d'')
        """
        dx = x - rx
        dy = y - ry

        cos_theta_r = np.cos(rtheta)
        sin_theta_r = np.sin(rtheta)

        cross_rd_nd = cos_theta_r * dy - sin_theta_r * dx
        d = np.copysign(np.hypot(dx, dy), cross_rd_nd)

        delta_theta = theta - rtheta
        tan_delta_theta = np.tan(delta_theta)
        cos_delta_theta = np.cos(delta_theta)

        one_minus_kappa_r_d = 1 - rkappa * d
        d_dot = one_minus_kappa_r_d * tan_delta_theta

        kappa_r_d_prime = rdkappa * d + rkappa * d_dot

        d_ddot = (-kappa_r_d_prime * tan_delta_theta +
                  one_minus_kappa_r_d / cos_delta_theta / cos_delta_theta *
                  (kappa * one_minus_kappa_r_d / cos_delta_theta - rkappa))

        s = rs
        s_dot = v * cos_delta_theta / one_minus_kappa_r_d

        delta_theta_prime = one_minus_kappa_r_d / cos_delta_theta * kappa - rkappa
        s_ddot = (a * cos_delta_theta -
                  s_dot * s_dot *
                  (d_dot * delta_theta_prime - kappa_r_d_prime)) / one_minus_kappa_r_d

        return (s, s_dot, s_ddot), (d, d_dot, d_ddot)

    @staticmethod
    def frenet_to_cartesian(
        rs: Scalar,
        rx: Scalar,
        ry: Scalar,
        rtheta: Scalar,
        rkappa: Scalar,
        rdkappa: Scalar,
        s_condition: Sequence[Scalar],
        d_condition: Sequence[Scalar],
        tolerance: float = REFERENCE_S_TOLERANCE
    ) -> Tuple[Scalar, Scalar, Scalar, Scalar, Scalar, Scalar]:
        """Convert state from Frenet to Cartesian coordinate system.

        Args:
            rs: Arc length of the reference point, must match s_condition[0]
            rx, ry: Reference point coordinates
            rtheta: Reference point heading
            rkappa: Reference point curvature
            rdkappa: Reference point curvature derivative w.r.t. s
            s_condition: (s, s', s'')
            d_condition: (d, d', d'')
            tolerance: Allowed |rs - s_condition[0]|

        Returns:
            x, y: Position
            theta: Heading angle in (-pi, pi]
            kappa: Curvature
            v: Speed (non-negative)
            a: Acceleration

        Raises:
            ReferencePointMismatchError: If rs and s_condition[0] differ
        """
        # NaN must fail this check
        if not np.all(np.abs(rs - s_condition[0]) < tolerance):
            logger.error(
                f"Reference point s={rs} does not match s_condition[0]={s_condition[0]}"
            )
            raise ReferencePointMismatchError(
                "The reference point s and s_condition[0] don't match"
            )

        cos_theta_r = np.cos(rtheta)
        sin_theta_r = np.sin(rtheta)

        x = rx - sin_theta_r * d_condition[0]
        y = ry + cos_theta_r * d_condition[0]

        one_minus_kappa_r_d = 1 - rkappa * d_condition[0]

        tan_delta_theta = d_condition[1] / one_minus_kappa_r_d
        delta_theta = np.arctan2(d_condition[1], one_minus_kappa_r_d)
        cos_delta_theta = np.cos(delta_theta)

        theta = normalize_angle(delta_theta + rtheta)

        kappa_r_d_prime = rdkappa * d_condition[0] + rkappa * d_condition[1]

        # Multiply by cos^2 before dividing by one_minus_kappa_r_d
        kappa = (((d_condition[2] + kappa_r_d_prime * tan_delta_theta) *
                  cos_delta_theta * cos_delta_theta) / one_minus_kappa_r_d + rkappa) * \
            cos_delta_theta / one_minus_kappa_r_d

        d_dot = d_condition[1] * s_condition[1]
        v = np.sqrt(one_minus_kappa_r_d * one_minus_kappa_r_d *
                    s_condition[1] * s_condition[1] + d_dot * d_dot)

        delta_theta_prime = one_minus_kappa_r_d / cos_delta_theta * kappa - rkappa

        a = (s_condition[2] * one_minus_kappa_r_d / cos_delta_theta +
             s_condition[1] * s_condition[1] / cos_delta_theta *
             (d_condition[1] * delta_theta_prime - kappa_r_d_prime))

        return x, y, theta, kappa, v, a

    @staticmethod
    def calculate_theta(rtheta: Scalar, rkappa: Scalar, l: Scalar, dl: Scalar) -> Scalar:
        """Heading of a point at lateral offset l with lateral slope dl."""
        return normalize_angle(rtheta + np.arctan2(dl, 1 - l * rkappa))

    @staticmethod
    def calculate_kappa(
        rkappa: float,
        rdkappa: float,
        l: float,
        dl: float,
        ddl: float,
        epsilon: float = KAPPA_DENOMINATOR_EPSILON
    ) -> float:
        """Curvature of a point given its lateral offset and derivatives.

        Returns 0.0 when dl^2 + (1 - l*rkappa)^2 is within epsilon of zero.
        """
        denominator = dl * dl + (1 - l * rkappa) * (1 - l * rkappa)
        if float_compare(denominator, 0.0, epsilon) == 0:
            logger.debug(f"Degenerate curvature denominator {denominator:.3e}, returning 0.0")
            return 0.0
        denominator = denominator ** 1.5
        numerator = (rkappa + ddl - 2 * l * rkappa * rkappa -
                     l * ddl * rkappa +
                     l * l * rkappa * rkappa * rkappa +
                     l * dl * rdkappa + 2 * dl * dl * rkappa)
        return numerator / denominator

    @staticmethod
    def calculate_cartesian_point(rtheta: float, rpoint: Sequence[float], l: float) -> np.ndarray:
        """Offset a reference point by l along its left normal."""
        x = rpoint[0] - l * np.sin(rtheta)
        y = rpoint[1] + l * np.cos(rtheta)
        return np.array([x, y])

    @staticmethod
    def calculate_lateral_derivative(rtheta: Scalar, theta: Scalar, l: Scalar, rkappa: Scalar) -> Scalar:
        """Lateral derivative d' from the heading deviation theta - rtheta."""
        return (1 - rkappa * l) * np.tan(theta - rtheta)

    @staticmethod
    def calculate_second_order_lateral_derivative(
        rtheta: Scalar,
        theta: Scalar,
        rkappa: Scalar,
        kappa: Scalar,
        rdkappa: Scalar,
        l: Scalar
    ) -> Scalar:
        """Second lateral derivative d'' from Cartesian heading and curvature."""
        dl = CartesianFrenetConverter.calculate_lateral_derivative(rtheta, theta, l, rkappa)
        theta_diff = theta - rtheta
        cos_theta_diff = np.cos(theta_diff)
        return (-(rdkappa * l + rkappa * dl) * np.tan(theta_diff) +
                (1 - rkappa * l) / (cos_theta_diff * cos_theta_diff) *
                (kappa * (1 - rkappa * l) / cos_theta_diff - rkappa))
