"""
Shared type definitions for the routecount system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag


class InvalidGrid(ValueError):
    """Raised when a street map cannot be built from the supplied data."""


class Street(IntFlag):
    """Incoming streets of an intersection, one bit per direction."""

    HORIZ = 1  # Street from the left (decreasing x)
    VERT = 2  # Street from above (decreasing y)


NO_STREETS = Street(0)
ALL_STREETS = Street.HORIZ | Street.VERT


@dataclass(frozen=True)
class Coord:
    """An intersection, identified by column x and row y."""

    x: int
    y: int

    def left(self) -> Coord:
        return Coord(self.x - 1, self.y)

    def above(self) -> Coord:
        return Coord(self.x, self.y - 1)

    def diagonal(self) -> Coord:
        """The intersection both above and to the left."""
        return Coord(self.x - 1, self.y - 1)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
