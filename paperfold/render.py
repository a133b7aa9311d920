"""
SVG rendering of folded sheets.

Polygons are drawn as black unfilled outlines and crease lines as dashed
crimson lines with arrow heads at both ends, in a unit view box with the
y axis pointing down (SVG convention).
"""

from pathlib import Path
from typing import Iterable, Optional
import logging

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.patches import FancyArrowPatch
from matplotlib.patches import Polygon as MplPolygon

from .config import FoldConfig
from .geometry import Polygon, Skeleton

logger = logging.getLogger(__name__)

FIGURE_SIZE = 6.0  # inches
OUTLINE_COLOR = "black"
CREASE_COLOR = "crimson"


def _points_per_unit() -> float:
    # View box spans one unit across the figure
    return FIGURE_SIZE * 72.0


def draw_svg(polys: Iterable[Polygon], skeleton: Optional[Skeleton], filename: Path | str,
             config: Optional[FoldConfig] = None) -> Path:
    """
    Draw polygons and crease lines to an SVG file.

    Args:
        polys: Polygons (or a Shape) to outline
        skeleton: Crease lines to overlay, or None
        filename: Output path
        config: Stroke widths (defaults to FoldConfig())

    Returns:
        Path of the written file
    """
    config = config or FoldConfig()
    filename = Path(filename)
    scale = _points_per_unit()

    fig, ax = plt.subplots(figsize=(FIGURE_SIZE, FIGURE_SIZE))
    fig.subplots_adjust(left=0, right=1, bottom=0, top=1)

    count = 0
    for poly in polys:
        xy = [(float(p.x), float(p.y)) for p in poly]
        ax.add_patch(MplPolygon(
            xy, closed=True, fill=False,
            edgecolor=OUTLINE_COLOR,
            linewidth=config.outline_width * scale,
        ))
        count += 1

    for bone in (skeleton or ()):
        ax.add_patch(FancyArrowPatch(
            (float(bone.p1.x), float(bone.p1.y)),
            (float(bone.p2.x), float(bone.p2.y)),
            arrowstyle='<|-|>',
            mutation_scale=12,
            color=CREASE_COLOR,
            linestyle='--',
            linewidth=config.crease_width * scale,
        ))

    ax.set_xlim(0, 1)
    ax.set_ylim(1, 0)
    ax.set_aspect('equal')
    ax.axis('off')

    fig.savefig(filename, format='svg')
    plt.close(fig)

    logger.info("Rendered %d polygons to %s", count, filename)
    return filename
