"""Shared fixtures for frame conversion tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from frenet_frame.planning.reference_line import ReferenceLine


@pytest.fixture
def straight_line():
    """Straight reference line along the x axis, 20 m long."""
    return ReferenceLine([0.0, 10.0, 20.0], [0.0, 0.0, 0.0])


@pytest.fixture
def arc_line():
    """Quarter circle of radius 20 m, counter-clockwise from (20, 0)."""
    angles = np.linspace(0.0, np.pi / 2, 60)
    return ReferenceLine(20.0 * np.cos(angles), 20.0 * np.sin(angles))


@pytest.fixture
def curved_line():
    """S-shaped reference line."""
    x = [0.0, 10.0, 20.5, 35.0, 50.0]
    y = [0.0, -4.0, 2.0, 5.0, 0.0]
    return ReferenceLine(x, y)


@pytest.fixture
def hairpin_line():
    """Lower branch on y=0 heading east, U-turn of radius 3, upper branch on y=6 heading west."""
    lower_x = np.arange(0.0, 11.0)
    angles = np.linspace(-np.pi / 2, np.pi / 2, 9)[1:-1]
    upper_x = np.arange(10.0, -1.0, -1.0)
    x = np.concatenate([lower_x, 10.0 + 3.0 * np.cos(angles), upper_x])
    y = np.concatenate([np.zeros_like(lower_x), 3.0 + 3.0 * np.sin(angles), np.full_like(upper_x, 6.0)])
    return ReferenceLine(x, y)
