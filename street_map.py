"""
Street maps: rectangular grids of intersections with obstructions.

Two obstruction models are supported:
1. NodeBlockedGrid - whole intersections are impassable (legacy maps)
2. EdgeBlockedGrid - the street from the left and the street from above
   can be closed independently for each intersection

Both are read-only once counting starts, so any number of route
counters may share one map.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from route_types import ALL_STREETS, NO_STREETS, Coord, InvalidGrid, Street

__all__ = ["NodeBlockedGrid", "EdgeBlockedGrid", "StreetMap"]

logger = logging.getLogger(__name__)


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidGrid(
            f"Invalid map size {width}x{height}\n"
            f"  Width and height must both be at least 1"
        )


def _check_coord(coord: Coord, width: int, height: int, what: str) -> None:
    if not (0 <= coord.x < width and 0 <= coord.y < height):
        raise InvalidGrid(
            f"{what} at {coord} is outside the map\n"
            f"  Valid x: 0..{width - 1}, valid y: 0..{height - 1}"
        )


# =============================================================================
# Node-Blocked Grid
# =============================================================================


@dataclass(frozen=True)
class NodeBlockedGrid:
    """A map whose obstructions are whole intersections."""

    width: int
    height: int
    blocks: frozenset[Coord] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        _check_size(self.width, self.height)
        # Accept any iterable of coordinates, store a frozenset
        blocks = frozenset(self.blocks)
        for coord in blocks:
            _check_coord(coord, self.width, self.height, "Blocked intersection")
        object.__setattr__(self, "blocks", blocks)
        logger.debug(
            "NodeBlockedGrid %dx%d with %d blocked intersections",
            self.width,
            self.height,
            len(blocks),
        )

    def bounds(self) -> tuple[int, int]:
        return (self.width, self.height)

    def contains(self, coord: Coord) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def is_blocked(self, coord: Coord) -> bool:
        return coord in self.blocks


# =============================================================================
# Edge-Blocked Grid
# =============================================================================


class EdgeBlockedGrid:
    """
    A map whose obstructions are individual incoming streets.

    For each intersection the blocked streets *leading to it* are recorded:
    Street.HORIZ means the street to the left is closed, Street.VERT the
    street above. Intersections with no entry have both streets open.

    Streets that would come from outside the map are always reported as
    blocked by incoming_blocked(); those bits are never stored.
    """

    def __init__(self, width: int, height: int) -> None:
        _check_size(width, height)
        self.width = width
        self.height = height
        self._blocks: dict[Coord, Street] = {}

    @classmethod
    def from_records(
        cls, width: int, height: int, records: Iterable[tuple[Coord, int]]
    ) -> EdgeBlockedGrid:
        """Build a map from (intersection, bits) records, OR-ing repeats together."""
        grid = cls(width, height)
        for coord, bits in records:
            grid.add_block(coord, bits)
        logger.debug(
            "EdgeBlockedGrid %dx%d with %d intersections having blocked streets",
            width,
            height,
            len(grid._blocks),
        )
        return grid

    def add_block(self, coord: Coord, bits: int) -> None:
        """Remember that the incoming streets in bits are blocked at coord."""
        _check_coord(coord, self.width, self.height, "Blocked street")
        if not 0 <= bits <= ALL_STREETS:
            raise InvalidGrid(
                f"Invalid street mask {bits} at {coord}\n"
                f"  Expected 1 (from left), 2 (from above) or 3 (both)"
            )
        self._blocks[coord] = self._blocks.get(coord, NO_STREETS) | Street(bits)

    def incoming_blocked(self, coord: Coord) -> Street:
        streets = self._blocks.get(coord, NO_STREETS)

        # Nothing comes in from beyond the left or top edge
        if coord.x == 0:
            streets |= Street.HORIZ
        if coord.y == 0:
            streets |= Street.VERT

        return streets

    def bounds(self) -> tuple[int, int]:
        return (self.width, self.height)

    def contains(self, coord: Coord) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def __repr__(self) -> str:
        return f"EdgeBlockedGrid({self.width}, {self.height}, blocks={self._blocks!r})"


StreetMap = NodeBlockedGrid | EdgeBlockedGrid
