"""Tests for the Cartesian/Frenet conversion math."""

import numpy as np
import pytest
from loguru import logger

from frenet_frame.core.cartesian_frenet_conversion import (
    CartesianFrenetConverter,
    FrameConversionError,
    ReferencePointMismatchError,
)
from frenet_frame.core.math_utils import normalize_angle


# rs, rx, ry, rtheta, rkappa, rdkappa
CURVED_REF = (10.0, 1.0, 2.0, 0.5, 0.05, 0.01)


def _state_on_normal(ref, d, delta_theta, kappa, v, a):
    """Cartesian state at lateral offset d from the reference point."""
    _, rx, ry, rtheta, _, _ = ref
    x = rx - np.sin(rtheta) * d
    y = ry + np.cos(rtheta) * d
    return x, y, v, a, rtheta + delta_theta, kappa


def test_concrete_scenario():
    """1 m left of a straight path, moving parallel at speed 2."""
    s_condition, d_condition = CartesianFrenetConverter.cartesian_to_frenet(
        0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
        x=0.0, y=1.0, v=2.0, a=0.0, theta=0.0, kappa=0.0
    )
    assert d_condition == pytest.approx((1.0, 0.0, 0.0))
    assert s_condition == pytest.approx((0.0, 2.0, 0.0))


def test_straight_reference_reduces_to_offset():
    rs, rx, ry = 3.0, 3.0, 1.0
    theta, v = 0.3, 4.0
    s_condition, d_condition = CartesianFrenetConverter.cartesian_to_frenet(
        rs, rx, ry, 0.0, 0.0, 0.0,
        x=rx, y=-0.5, v=v, a=1.0, theta=theta, kappa=0.0
    )
    assert d_condition[0] == -0.5 - ry
    assert s_condition[0] == rs
    assert s_condition[1] == pytest.approx(v * np.cos(theta))


def test_lateral_sign_is_left_positive():
    # Reference heading north: west is left, east is right
    ref = (0.0, 0.0, 0.0, np.pi / 2, 0.0, 0.0)
    _, d_left = CartesianFrenetConverter.cartesian_to_frenet(*ref, -1.0, 0.0, 1.0, 0.0, np.pi / 2, 0.0)
    _, d_right = CartesianFrenetConverter.cartesian_to_frenet(*ref, 1.0, 0.0, 1.0, 0.0, np.pi / 2, 0.0)
    assert d_left[0] == pytest.approx(1.0)
    assert d_right[0] == pytest.approx(-1.0)


def test_zero_displacement_has_zero_offset():
    _, d_condition = CartesianFrenetConverter.cartesian_to_frenet(
        *CURVED_REF, CURVED_REF[1], CURVED_REF[2], 3.0, 0.0, CURVED_REF[3], CURVED_REF[4]
    )
    assert d_condition[0] == 0.0


def test_zero_offset_identity():
    rs, rx, ry, rtheta, rkappa, rdkappa = CURVED_REF
    x, y, theta, kappa, v, a = CartesianFrenetConverter.frenet_to_cartesian(
        rs, rx, ry, rtheta, rkappa, rdkappa,
        s_condition=(rs, 7.0, -0.5),
        d_condition=(0.0, 0.0, 0.0)
    )
    assert (x, y) == pytest.approx((rx, ry))
    assert theta == pytest.approx(rtheta)
    assert kappa == pytest.approx(rkappa)
    assert v == pytest.approx(7.0)
    assert a == pytest.approx(-0.5)


@pytest.mark.parametrize("d", [-2.0, 0.5, 3.0])
@pytest.mark.parametrize("delta_theta", [-0.4, 0.1, 0.6])
def test_cartesian_round_trip(d, delta_theta):
    state = _state_on_normal(CURVED_REF, d, delta_theta, kappa=0.03, v=6.0, a=-1.2)
    s_condition, d_condition = CartesianFrenetConverter.cartesian_to_frenet(*CURVED_REF, *state)

    x, y, theta, kappa, v, a = CartesianFrenetConverter.frenet_to_cartesian(
        *CURVED_REF, s_condition, d_condition
    )
    x0, y0, v0, a0, theta0, kappa0 = state
    np.testing.assert_allclose(
        [x, y, theta, kappa, v, a],
        [x0, y0, normalize_angle(theta0), kappa0, v0, a0],
        atol=1e-6
    )


def test_frenet_round_trip():
    s_condition = (CURVED_REF[0], 5.0, 0.8)
    d_condition = (1.5, -0.2, 0.05)
    cartesian = CartesianFrenetConverter.frenet_to_cartesian(*CURVED_REF, s_condition, d_condition)
    x, y, theta, kappa, v, a = cartesian

    s_back, d_back = CartesianFrenetConverter.cartesian_to_frenet(
        *CURVED_REF, x, y, v, a, theta, kappa
    )
    np.testing.assert_allclose(s_back, s_condition, atol=1e-6)
    np.testing.assert_allclose(d_back, d_condition, atol=1e-6)


def test_speed_is_non_negative():
    *_, v, _ = CartesianFrenetConverter.frenet_to_cartesian(
        *CURVED_REF, (CURVED_REF[0], -3.0, 0.0), (0.5, 0.1, 0.0)
    )
    assert v > 0.0


def test_reference_mismatch_raises():
    with pytest.raises(ReferencePointMismatchError):
        CartesianFrenetConverter.frenet_to_cartesian(
            *CURVED_REF, (CURVED_REF[0] + 1e-3, 1.0, 0.0), (0.0, 0.0, 0.0)
        )


def test_nan_reference_s_raises():
    with pytest.raises(ReferencePointMismatchError):
        CartesianFrenetConverter.frenet_to_cartesian(
            np.nan, 0.0, 0.0, 0.0, 0.0, 0.0, (0.0, 1.0, 0.0), (0.0, 0.0, 0.0)
        )
    with pytest.raises(ReferencePointMismatchError):
        CartesianFrenetConverter.frenet_to_cartesian(
            *CURVED_REF, (np.nan, 1.0, 0.0), (0.0, 0.0, 0.0)
        )


def test_reference_mismatch_is_value_error():
    assert issubclass(ReferencePointMismatchError, FrameConversionError)
    assert issubclass(ReferencePointMismatchError, ValueError)


def test_reference_mismatch_within_tolerance_accepted():
    x, y, *_ = CartesianFrenetConverter.frenet_to_cartesian(
        *CURVED_REF, (CURVED_REF[0] + 5e-7, 1.0, 0.0), (0.0, 0.0, 0.0)
    )
    assert (x, y) == pytest.approx((CURVED_REF[1], CURVED_REF[2]))


def test_reference_mismatch_is_logged():
    messages = []
    handler_id = logger.add(messages.append, level="ERROR")
    try:
        with pytest.raises(ReferencePointMismatchError):
            CartesianFrenetConverter.frenet_to_cartesian(
                0.0, 0.0, 0.0, 0.0, 0.0, 0.0, (1.0, 1.0, 0.0), (0.0, 0.0, 0.0)
            )
    finally:
        logger.remove(handler_id)
    assert any("does not match" in str(m) for m in messages)


def test_singular_offset_does_not_raise():
    # Offset equal to the reference radius of curvature
    rkappa = 0.5
    with np.errstate(divide='ignore', invalid='ignore'):
        s_condition, _ = CartesianFrenetConverter.cartesian_to_frenet(
            0.0, 0.0, 0.0, 0.0, rkappa, 0.0,
            x=0.0, y=1.0 / rkappa, v=1.0, a=0.0, theta=0.0, kappa=0.0
        )
    assert not np.isfinite(s_condition[1]) or abs(s_condition[1]) > 1e6


def test_vectorized_matches_scalar():
    ds = np.array([-1.0, 0.0, 2.0])
    d_dots = np.array([0.1, -0.05, 0.2])
    rs = CURVED_REF[0]
    s_condition = (np.full(3, rs), np.array([3.0, 4.0, 5.0]), np.array([0.1, 0.0, -0.3]))
    d_condition = (ds, d_dots, np.zeros(3))

    batched = CartesianFrenetConverter.frenet_to_cartesian(*CURVED_REF, s_condition, d_condition)
    for i in range(3):
        single = CartesianFrenetConverter.frenet_to_cartesian(
            *CURVED_REF,
            [c[i] for c in s_condition],
            [c[i] for c in d_condition]
        )
        np.testing.assert_allclose([b[i] for b in batched], single)


def test_calculate_theta_wraps_multiple_turns():
    for k in range(-3, 4):
        rtheta = 0.3 + 2.0 * np.pi * k
        theta = CartesianFrenetConverter.calculate_theta(rtheta, 0.0, 0.0, 0.0)
        assert -np.pi < theta <= np.pi
        assert theta == pytest.approx(0.3)

    theta = CartesianFrenetConverter.calculate_theta(7.5 * np.pi, 0.1, 1.0, 0.4)
    assert -np.pi < theta <= np.pi


def test_calculate_theta_matches_frenet_to_cartesian():
    rs, rx, ry, rtheta, rkappa, rdkappa = CURVED_REF
    l, dl = 1.2, 0.15
    _, _, theta, *_ = CartesianFrenetConverter.frenet_to_cartesian(
        *CURVED_REF, (rs, 1.0, 0.0), (l, dl, 0.0)
    )
    assert CartesianFrenetConverter.calculate_theta(rtheta, rkappa, l, dl) == pytest.approx(theta)


def test_calculate_kappa_matches_frenet_to_cartesian():
    rs, rx, ry, rtheta, rkappa, rdkappa = CURVED_REF
    l, dl, ddl = -1.5, 0.2, 0.03
    _, _, _, kappa, _, _ = CartesianFrenetConverter.frenet_to_cartesian(
        *CURVED_REF, (rs, 1.0, 0.0), (l, dl, ddl)
    )
    assert CartesianFrenetConverter.calculate_kappa(rkappa, rdkappa, l, dl, ddl) == pytest.approx(kappa)


@pytest.mark.parametrize("rkappa, rdkappa, l, dl, ddl", [
    (1.0, 0.0, 1.0, 0.0, 0.0),
    (0.5, 0.3, 2.0, 1e-5, 4.0),
    (-0.25, -1.0, -4.0, 5e-5, -2.0),
])
def test_calculate_kappa_degenerate_returns_zero(rkappa, rdkappa, l, dl, ddl):
    assert CartesianFrenetConverter.calculate_kappa(rkappa, rdkappa, l, dl, ddl) == 0.0


def test_calculate_kappa_on_reference():
    assert CartesianFrenetConverter.calculate_kappa(0.2, 0.1, 0.0, 0.0, 0.0) == pytest.approx(0.2)


def test_calculate_cartesian_point():
    point = CartesianFrenetConverter.calculate_cartesian_point(np.pi / 2, np.array([1.0, 2.0]), 3.0)
    np.testing.assert_allclose(point, [-2.0, 2.0], atol=1e-12)


def test_lateral_derivatives_match_cartesian_to_frenet():
    rs, rx, ry, rtheta, rkappa, rdkappa = CURVED_REF
    state = _state_on_normal(CURVED_REF, 1.1, 0.25, kappa=-0.02, v=3.0, a=0.0)
    _, d_condition = CartesianFrenetConverter.cartesian_to_frenet(*CURVED_REF, *state)
    theta, kappa = state[4], state[5]

    dl = CartesianFrenetConverter.calculate_lateral_derivative(rtheta, theta, d_condition[0], rkappa)
    ddl = CartesianFrenetConverter.calculate_second_order_lateral_derivative(
        rtheta, theta, rkappa, kappa, rdkappa, d_condition[0]
    )
    assert dl == pytest.approx(d_condition[1])
    assert ddl == pytest.approx(d_condition[2])
