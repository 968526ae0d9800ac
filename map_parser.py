"""
Map parsing utilities for routecount.

Maps are whitespace-separated integers:

    WIDTH HEIGHT
    X Y [BITS]
    ...

Legacy (node-blocked) maps list one blocked intersection per record.
Edge-blocked maps add BITS to each record: 1 is the street from the left,
2 the street from above, 3 both. '#' starts a comment to end of line.
"""

from __future__ import annotations

from route_types import Coord, InvalidGrid
from street_map import EdgeBlockedGrid, NodeBlockedGrid

__all__ = ["parse_node_map", "parse_edge_map"]


def _tokenize(text: str) -> list[tuple[int, int]]:
    """Split map text into (line number, value) pairs, dropping comments."""
    values: list[tuple[int, int]] = []

    for line_idx, line in enumerate(text.splitlines()):
        content = line.split("#", 1)[0]
        for token in content.split():
            try:
                value = int(token)
            except ValueError:
                raise InvalidGrid(
                    f"Invalid token '{token}' on line {line_idx + 1}: '{line.strip()}'\n"
                    f"  Map files contain only whitespace-separated integers"
                ) from None
            values.append((line_idx + 1, value))

    return values


def _parse(text: str, record_size: int) -> tuple[int, int, list[tuple[Coord, int]]]:
    values = _tokenize(text)

    if len(values) < 2:
        raise InvalidGrid(
            f"Missing map size\n"
            f"  Expected 'WIDTH HEIGHT' before any blocks, found {len(values)} value(s)"
        )

    width, height = values[0][1], values[1][1]
    body = values[2:]

    if len(body) % record_size:
        line_no = body[-(len(body) % record_size)][0]
        raise InvalidGrid(
            f"Incomplete block record starting on line {line_no}\n"
            f"  Each record needs {record_size} values"
        )

    records: list[tuple[Coord, int]] = []
    for i in range(0, len(body), record_size):
        record = [value for _, value in body[i : i + record_size]]
        bits = record[2] if record_size == 3 else 0
        records.append((Coord(record[0], record[1]), bits))

    return width, height, records


def parse_node_map(text: str) -> NodeBlockedGrid:
    """
    Parse a legacy map, where each record is a blocked intersection.

    Example:
        \"\"\"
        3 3
        1 0
        1 1
        \"\"\"
        Creates a 3x3 map with (1, 0) and (1, 1) impassable.

    Raises:
        InvalidGrid: If the text is malformed or a block lies outside the map
    """
    width, height, records = _parse(text, 2)
    return NodeBlockedGrid(width, height, frozenset(coord for coord, _ in records))


def parse_edge_map(text: str) -> EdgeBlockedGrid:
    """
    Parse a map where each record closes incoming streets of an intersection.

    Records naming the same intersection accumulate, so "1 1 1" followed by
    "1 1 2" blocks both streets into (1, 1).

    Raises:
        InvalidGrid: If the text is malformed, a block lies outside the map,
            or a street mask is not 0-3
    """
    width, height, records = _parse(text, 3)
    return EdgeBlockedGrid.from_records(width, height, records)
