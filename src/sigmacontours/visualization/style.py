"""
Per-sigma drawing styles.

Styles are given as parallel sequences indexed by sigma level (index 0 is
the 1 sigma contour). ``build_styles`` turns them into one ``ContourStyle``
per level, replicating the last entry when fewer styles than contours are
supplied.
"""

from dataclasses import dataclass, replace
import logging
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_LINE_WIDTH = 2.0

DEFAULT_LINE_COLORS = ['#0b3c8c', '#3572b0', '#6a9fd4', '#a3c5e6', '#d3e4f3']
DEFAULT_LINE_STYLES = ['solid', 'solid', 'solid', 'solid', 'solid']
DEFAULT_FILL_COLORS = ['#3572b0', '#6a9fd4', '#a3c5e6', '#d3e4f3', '#eef4fa']
DEFAULT_FILL_STYLES = ['', '', '', '', '']


@dataclass(frozen=True)
class ContourStyle:
    """
    Drawing style of one sigma contour.

    Attributes
    ----------
    line_color : str
        Any matplotlib color specification.
    line_style : str
        Matplotlib line style ('solid', 'dashed', '--', ...).
    line_width : float
        Outline width in points.
    fill_color : str or None
        Fill color; None draws no fill.
    fill_style : str
        Matplotlib hatch pattern; '' for a solid fill.
    """
    line_color: str = 'black'
    line_style: str = 'solid'
    line_width: float = DEFAULT_LINE_WIDTH
    fill_color: Optional[str] = None
    fill_style: str = ''

    def outline_only(self, line_style: str = 'dashed') -> "ContourStyle":
        """Copy of this style without fill and with another line style."""
        return replace(self, line_style=line_style, fill_color=None, fill_style='')


def build_styles(
    line_colors: Sequence,
    line_styles: Sequence,
    fill_colors: Sequence,
    fill_styles: Sequence,
    n_contours: int,
    line_width: float = DEFAULT_LINE_WIDTH
) -> List[ContourStyle]:
    """
    Build one style per sigma level.

    Parameters
    ----------
    line_colors, line_styles, fill_colors, fill_styles : sequence
        Parallel style vectors, index 0 for the 1 sigma contour.
    n_contours : int
        Number of sigma contours that will be drawn.
    line_width : float
        Width given to every level.

    Returns
    -------
    list of ContourStyle
        At least ``n_contours`` styles. Missing entries repeat the last
        supplied style.

    Raises
    ------
    ValueError
        If the vectors are empty or differ in length.
    """
    lengths = {len(line_colors), len(line_styles), len(fill_colors), len(fill_styles)}
    if len(lengths) != 1:
        raise ValueError(
            f"Style vectors must have equal length, got line_colors={len(line_colors)}, "
            f"line_styles={len(line_styles)}, fill_colors={len(fill_colors)}, "
            f"fill_styles={len(fill_styles)}"
        )

    n_given = lengths.pop()
    if n_given == 0:
        raise ValueError("At least one contour style is required")

    styles = [
        ContourStyle(
            line_color=line_colors[i],
            line_style=line_styles[i],
            line_width=line_width,
            fill_color=fill_colors[i],
            fill_style=fill_styles[i]
        )
        for i in range(n_given)
    ]

    if n_contours > n_given:
        logger.warning(
            "Not enough sigma contour styles defined for %d contours! "
            "Reusing style of %d sigma contour.",
            n_contours, n_given
        )
        styles.extend(styles[-1] for _ in range(n_contours - n_given))

    return styles
