"""Debug plots for Cartesian/Frenet conversions."""

from typing import Iterable, Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from loguru import logger

from ..core.coordinate_converter import CoordinateConverter
from ..core.data_structures import CartesianState


def plot_frenet_conversion(
    converter: CoordinateConverter,
    states: Iterable[CartesianState],
    ax: Optional[Axes] = None,
    ds: float = 0.1,
    arrow_length: float = 1.0
) -> Axes:
    """Draw the reference line, the states and their projections.

    Each state is connected to its matched reference point; the label shows
    the resulting (s, d).

    Args:
        converter: Converter bound to the reference line to draw
        states: Cartesian states to project
        ax: Axes to draw into (a new figure is created if None)
        ds: Sampling step for drawing the reference line [m]
        arrow_length: Length of heading arrows [m]

    Returns:
        The axes drawn into
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 6))

    samples = converter.reference_line.sample(ds)
    ax.plot(samples[:, 1], samples[:, 2], 'k--', linewidth=1.0, label='Reference line')

    n_states = 0
    for state in states:
        frenet = converter.to_frenet(state)
        ref = converter.reference_line.calc_reference_point(frenet.s)

        ax.plot([ref.x, state.x], [ref.y, state.y], color='tab:gray', linewidth=0.8)
        ax.plot(state.x, state.y, 'o', color='tab:blue', markersize=4)
        ax.annotate('', xy=(state.x + arrow_length * np.cos(state.theta),
                            state.y + arrow_length * np.sin(state.theta)),
                    xytext=(state.x, state.y),
                    arrowprops=dict(arrowstyle='->', color='tab:blue'))
        ax.annotate(f"s={frenet.s:.1f}, d={frenet.d:.2f}", (state.x, state.y),
                    textcoords='offset points', xytext=(4, 4), fontsize=7)
        n_states += 1

    ax.set_xlabel('x [m]')
    ax.set_ylabel('y [m]')
    ax.set_aspect('equal', adjustable='datalim')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best')

    logger.debug(f"Plotted {n_states} states against reference line")
    return ax
