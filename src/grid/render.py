"""Plain-text dump of a layout for the command line and log output."""

import numpy as np

from src.grid.types import CellKind, PuzzleLayout

EMPTY_GLYPH = "."
OBSTACLE_GLYPH = "#"
VISITED_GLYPH = "*"


def format_layout(
    layout: PuzzleLayout,
    visited: np.ndarray | None = None,
    show_obstacles: bool = True,
) -> str:
    """Render a layout as fixed-width text, one grid row per line.

    Waypoints print their number, obstacles ``#`` (or ``.`` when hidden),
    visited empty cells ``*``.
    """
    width = len(str(layout.waypoint_count))
    lines = []
    for row in range(layout.size):
        glyphs = []
        for col in range(layout.size):
            cell = (row, col)
            kind = layout.kind_at(cell)
            if kind is CellKind.WAYPOINT:
                glyph = str(layout.waypoint_number_at(cell))
            elif kind is CellKind.OBSTACLE and show_obstacles:
                glyph = OBSTACLE_GLYPH
            elif visited is not None and visited[cell]:
                glyph = VISITED_GLYPH
            else:
                glyph = EMPTY_GLYPH
            glyphs.append(glyph.rjust(width))
        lines.append(" ".join(glyphs))
    return "\n".join(lines)
