"""Visualization module for frame conversion debugging."""

from .frame_plot import plot_frenet_conversion

__all__ = ['plot_frenet_conversion']
