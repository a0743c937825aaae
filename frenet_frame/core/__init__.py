"""Core frame conversion math and value types."""

from .math_utils import normalize_angle, float_compare, is_close
from .cartesian_frenet_conversion import (
    CartesianFrenetConverter,
    FrameConversionError,
    ReferencePointMismatchError,
    REFERENCE_S_TOLERANCE,
    KAPPA_DENOMINATOR_EPSILON,
)
from .data_structures import (
    ReferencePoint,
    CartesianState,
    FrenetState,
)
from .coordinate_converter import CoordinateConverter

__all__ = [
    'normalize_angle',
    'float_compare',
    'is_close',
    'CartesianFrenetConverter',
    'FrameConversionError',
    'ReferencePointMismatchError',
    'REFERENCE_S_TOLERANCE',
    'KAPPA_DENOMINATOR_EPSILON',
    'ReferencePoint',
    'CartesianState',
    'FrenetState',
    'CoordinateConverter',
]
