"""Tests for numeric helpers."""

import numpy as np
import pytest

from frenet_frame.core.math_utils import normalize_angle, float_compare, is_close


def test_normalize_angle():
    """Test angle normalization."""
    assert abs(normalize_angle(0.0)) < 1e-6
    assert abs(normalize_angle(2 * np.pi)) < 1e-6
    assert abs(normalize_angle(np.pi) - np.pi) < 1e-6
    assert abs(normalize_angle(-np.pi) - np.pi) < 1e-6
    assert abs(normalize_angle(3 * np.pi) - np.pi) < 1e-6
    assert abs(normalize_angle(-0.5) - (-0.5)) < 1e-12


def test_normalize_angle_range():
    angles = np.linspace(-20.0, 20.0, 4001)
    normalized = normalize_angle(angles)
    assert isinstance(normalized, np.ndarray)
    assert np.all(normalized > -np.pi)
    assert np.all(normalized <= np.pi)
    np.testing.assert_allclose(np.cos(normalized), np.cos(angles), atol=1e-9)
    np.testing.assert_allclose(np.sin(normalized), np.sin(angles), atol=1e-9)


def test_normalize_angle_scalar_returns_float():
    assert isinstance(normalize_angle(np.float64(4.0)), float)
    assert isinstance(normalize_angle(4), float)


def test_normalize_angle_tiny_negative():
    assert -np.pi < normalize_angle(-1e-300) <= np.pi
    assert np.all(normalize_angle(np.array([-1e-300, -np.pi])) > -np.pi)


def test_float_compare():
    assert float_compare(1.0, 1.0 + 1e-9, 1e-8) == 0
    assert float_compare(1.0, 1.1, 1e-8) == -1
    assert float_compare(1.1, 1.0, 1e-8) == 1
    assert float_compare(5e-9, 0.0, 1e-8) == 0


def test_is_close():
    assert is_close(0.0, 1e-9, 1e-8)
    assert not is_close(0.0, 1e-7, 1e-8)
