"""
Route counting over street maps.

Counts monotonic routes (moving only right or down) from a fixed start
intersection to any end intersection, with a per-counter memo table.

Both counters are top-down recursions over the grid DAG, but the
recursion runs on an explicit stack of suspended generator frames: each
frame yields the predecessor intersection it needs and is sent that
intersection's count back. The order in which predecessors are demanded
is therefore exactly the order of the recurrence, which matters because
the edge-blocked counter returns a different value the second time an
intersection is reached.

Neither counter computes the textbook lattice-path count. On an open
3x3 map both give 5 routes corner to corner, not 6, and they must keep
agreeing on that.
"""

from __future__ import annotations

import logging
from typing import Generator

from route_types import Coord, Street
from street_map import EdgeBlockedGrid, NodeBlockedGrid, StreetMap

__all__ = [
    "RouteCounter",
    "NodeBlockedCounter",
    "EdgeBlockedCounter",
    "new_counter",
    "num_routes",
]

logger = logging.getLogger(__name__)

# Yields a needed predecessor, is sent its count, returns this intersection's count
Frame = Generator[Coord, int, int]


class RouteCounter:
    """
    Counts routes from one start intersection on one map.

    The memo table belongs to this counter alone. Reusing a counter for
    several end points shares the memo between those queries; counting from
    a different start needs a new counter. The map is never modified.
    """

    def __init__(self, grid: StreetMap, start: Coord) -> None:
        self._grid = grid
        self._start = start
        self._cache: dict[Coord, int] = {}

    @property
    def grid(self) -> StreetMap:
        return self._grid

    @property
    def start(self) -> Coord:
        return self._start

    def cached(self, coord: Coord) -> int | None:
        """Return the memo entry for coord, or None if it has not been visited."""
        return self._cache.get(coord)

    def count(self, end: Coord) -> int:
        """Return the number of routes from the start to end."""
        result = self._evaluate(end)
        logger.debug(
            "%s: %s -> %s = %d (%d cached)",
            type(self).__name__,
            self._start,
            end,
            result,
            len(self._cache),
        )
        return result

    def _evaluate(self, end: Coord) -> int:
        stack: list[Frame] = [self._visit(end)]
        sending: int | None = None

        while True:
            try:
                needed = stack[-1].send(sending)  # type: ignore[arg-type]
            except StopIteration as done:
                stack.pop()
                if not stack:
                    return done.value
                sending = done.value
            else:
                stack.append(self._visit(needed))
                sending = None  # Fresh generators must be started with None

    def _trivial(self, end: Coord) -> int | None:
        """Resolve the cases that need neither the memo nor any predecessor."""
        start = self._start
        if end.x < start.x or end.y < start.y:
            return 0
        if end == start:
            return 1
        if not self._grid.contains(end):
            return 0
        return None

    def _visit(self, end: Coord) -> Frame:
        raise NotImplementedError


class NodeBlockedCounter(RouteCounter):
    """Route counter for maps with impassable intersections (legacy engine)."""

    _grid: NodeBlockedGrid

    def _visit(self, end: Coord) -> Frame:
        trivial = self._trivial(end)
        if trivial is not None:
            return trivial

        prev_result = self._cache.get(end)
        if prev_result is not None:
            return prev_result

        # Not cached, so blocked intersections are looked up again on every visit
        if self._grid.is_blocked(end):
            return 0

        v_count = 0 if end.y == 0 else (yield end.above())
        h_count = 0 if end.x == 0 else (yield end.left())

        count = v_count + h_count
        if v_count and h_count:
            count -= yield end.diagonal()
            count += 1

        self._cache[end] = count
        return count


class EdgeBlockedCounter(RouteCounter):
    """
    Route counter for maps with blocked incoming streets (current engine).

    An intersection reached a second time is a shared segment: its routes
    were already counted through whichever caller reached it first. Later
    callers get 0 if it is unreachable and 1 otherwise, which counts only the
    new route from there to the caller.
    """

    _grid: EdgeBlockedGrid

    def _visit(self, end: Coord) -> Frame:
        trivial = self._trivial(end)
        if trivial is not None:
            return trivial

        prev_result = self._cache.get(end)
        if prev_result is not None:
            return prev_result

        incoming_blocks = self._grid.incoming_blocked(end)

        count = 0
        if not incoming_blocks & Street.HORIZ:
            count += yield end.left()
        if not incoming_blocks & Street.VERT:
            count += yield end.above()

        self._cache[end] = 0 if count == 0 else 1
        return count


def new_counter(grid: StreetMap, start: Coord) -> RouteCounter:
    """Create a fresh counter from start, matching the map's obstruction model."""
    if isinstance(grid, NodeBlockedGrid):
        return NodeBlockedCounter(grid, start)
    if isinstance(grid, EdgeBlockedGrid):
        return EdgeBlockedCounter(grid, start)
    raise TypeError(f"Unsupported map type: {type(grid).__name__}")


def num_routes(grid: StreetMap, start: Coord, end: Coord) -> int:
    """Count routes from start to end with a counter used for this query only."""
    return new_counter(grid, start).count(end)
