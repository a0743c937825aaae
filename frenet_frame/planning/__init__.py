"""Reference path module."""

from .reference_line import ReferenceLine

__all__ = ['ReferenceLine']
