"""
Visualization utilities.
"""

from .style import ContourStyle, build_styles
from .plotting import plot_confidence_contours

__all__ = ['ContourStyle', 'build_styles', 'plot_confidence_contours']
