#!/usr/bin/env python3
"""Example script converting vehicle states along a curved reference line.

Projects a handful of Cartesian states onto the line, converts them to the
Frenet frame and back, and reports the round-trip error.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
from loguru import logger

from frenet_frame import (
    CartesianState,
    ConversionConfig,
    CoordinateConverter,
    ReferenceLine,
    configure_logging,
    load_config,
)


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description='Convert sample states between Cartesian and Frenet frames'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to conversion configuration file'
    )
    parser.add_argument(
        '--plot',
        type=str,
        default=None,
        help='Save a debug plot to this path'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (overrides config)'
    )

    args = parser.parse_args()

    config = load_config(args.config) if args.config else ConversionConfig()
    configure_logging(args.log_level or config.log_level)

    wx = [0.0, 10.0, 20.5, 35.0, 50.0]
    wy = [0.0, -4.0, 2.0, 5.0, 0.0]
    reference_line = ReferenceLine(wx, wy)
    converter = CoordinateConverter(reference_line, config)

    states = [
        CartesianState(x=5.0, y=-1.0, theta=-0.3, kappa=0.0, v=8.0, a=0.5),
        CartesianState(x=20.0, y=3.0, theta=0.4, kappa=0.02, v=10.0, a=-1.0),
        CartesianState(x=40.0, y=3.5, theta=-0.2, kappa=-0.05, v=6.0, a=0.0),
    ]

    for state in states:
        frenet = converter.to_frenet(state)
        restored = converter.to_cartesian(frenet)
        error = np.abs(restored.to_array() - state.to_array()).max()
        logger.info(f"({state.x:.1f}, {state.y:.1f}) -> s={frenet.s:.3f}, d={frenet.d:.3f}, "
                    f"s'={frenet.s_d:.3f}, d'={frenet.d_d:.4f}; round-trip error {error:.2e}")

    if args.plot is not None:
        import matplotlib
        matplotlib.use('Agg')
        from frenet_frame.visualization import plot_frenet_conversion

        ax = plot_frenet_conversion(converter, states)
        ax.figure.savefig(args.plot, dpi=150)
        logger.success(f"Plot saved to {args.plot}")


if __name__ == '__main__':
    main()
