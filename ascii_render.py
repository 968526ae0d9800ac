"""
ASCII rendering of street maps annotated with route counts.

Each intersection is drawn three characters wide and shows:
- '@' for the start intersection
- the route count from the start, inside the reachable quadrant
- '+' above or to the left of the start, where no route can arrive

Blocked streets are drawn as 'X' on the connector; blocked intersections
of legacy maps are drawn as '#'.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from route_types import Coord, Street
from routecount import new_counter, num_routes
from street_map import EdgeBlockedGrid, NodeBlockedGrid, StreetMap

__all__ = ["RenderOptions", "render_counts"]

logger = logging.getLogger(__name__)

CELL_WIDTH = 3


@dataclass(frozen=True)
class RenderOptions:
    """Options controlling how a map is rendered."""

    color: bool = True
    shared_counter: bool = False  # One counter for the whole pass instead of one per cell


def _plain(s: str) -> str:
    return s


def _street_blocked(grid: StreetMap, coord: Coord, street: Street) -> bool:
    if isinstance(grid, EdgeBlockedGrid):
        return bool(grid.incoming_blocked(coord) & street)
    return False


def render_counts(grid: StreetMap, start: Coord, options: RenderOptions = RenderOptions()) -> str:
    """
    Render grid as ASCII art, labelling every intersection with its route count.

    With options.shared_counter unset, every intersection is counted with a
    fresh counter. Setting it reuses one counter for the whole pass, which is
    faster but lets earlier cells' memo entries feed into later ones, so
    edge-blocked maps can show different numbers.

    Args:
        grid: The map to draw
        start: Intersection routes are counted from
        options: Rendering options

    Returns:
        Rendered string, one line per text row, with ANSI colors if enabled
    """
    width, height = grid.bounds()

    start_color: Callable[[str], str] = chalk.yellowBright if options.color else _plain
    block_color: Callable[[str], str] = chalk.red if options.color else _plain

    counter = new_counter(grid, start) if options.shared_counter else None

    def label(coord: Coord) -> tuple[str, Callable[[str], str]]:
        if coord == start:
            return "@", start_color
        if isinstance(grid, NodeBlockedGrid) and grid.is_blocked(coord):
            return "#", block_color
        if coord.x >= start.x and coord.y >= start.y:
            count = counter.count(coord) if counter is not None else num_routes(grid, start, coord)
            return str(count), _plain
        return "+", _plain

    lines: list[str] = []

    for y in range(height):
        if y > 0:
            for vline in range(3):
                parts: list[str] = []
                for x in range(width):
                    if x > 0:
                        parts.append(" " * CELL_WIDTH)
                    if vline == 1 and _street_blocked(grid, Coord(x, y), Street.VERT):
                        parts.append("  " + block_color("X"))
                    else:
                        parts.append("  |")
                lines.append("".join(parts))

        parts = []
        for x in range(width):
            coord = Coord(x, y)
            if x > 0:
                if _street_blocked(grid, coord, Street.HORIZ):
                    parts.append("-" + block_color("X") + "-")
                else:
                    parts.append("-" * CELL_WIDTH)

            text, colorize = label(coord)
            fill = " " if x == 0 else "-"
            parts.append(fill * (CELL_WIDTH - len(text)) + colorize(text))
        lines.append("".join(parts))

    logger.info(
        "render_counts: %dx%d map from %s (shared_counter=%s)",
        width,
        height,
        start,
        options.shared_counter,
    )
    return "\n".join(lines)
