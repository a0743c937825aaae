"""Cartesian/Frenet frame conversion for motion planning."""

import sys
from loguru import logger

from .core import (
    CartesianFrenetConverter,
    CartesianState,
    CoordinateConverter,
    FrameConversionError,
    FrenetState,
    ReferencePoint,
    ReferencePointMismatchError,
    normalize_angle,
)
from .config import ConversionConfig, load_config
from .planning import ReferenceLine

__version__ = "0.1.0"


def configure_logging(level: str = "INFO"):
    """Replace loguru's default sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )


__all__ = [
    'CartesianFrenetConverter',
    'CartesianState',
    'CoordinateConverter',
    'ConversionConfig',
    'FrameConversionError',
    'FrenetState',
    'ReferenceLine',
    'ReferencePoint',
    'ReferencePointMismatchError',
    'configure_logging',
    'load_config',
    'normalize_angle',
]
