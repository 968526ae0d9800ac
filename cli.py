#!/usr/bin/env python3
"""
Command line route counter.

Usage:
    cli.py [--legacy] [--verbose] START_X START_Y [END_X END_Y] < MAP

Reads a map from stdin. With an end point, prints the number of routes
from start to end; without one, draws the map with the route count from
start to every intersection. --legacy reads a node-blocked map instead of
an edge-blocked one.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from ascii_render import RenderOptions, render_counts
from map_parser import parse_edge_map, parse_node_map
from route_types import Coord, InvalidGrid
from routecount import num_routes
from street_map import NodeBlockedGrid, StreetMap

USAGE = "Usage: {prog} [--legacy] [--verbose] START_X START_Y [END_X END_Y]"


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Run the route counter, returning the process exit status."""
    argv = sys.argv if argv is None else argv
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout

    prog, args = argv[0], argv[1:]
    legacy = "--legacy" in args
    verbose = "--verbose" in args
    positional = [arg for arg in args if arg not in ("--legacy", "--verbose")]

    if len(positional) not in (2, 4):
        print(USAGE.format(prog=prog), file=sys.stderr)
        return 2
    try:
        numbers = [int(arg) for arg in positional]
    except ValueError:
        print(USAGE.format(prog=prog), file=sys.stderr)
        return 2

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    text = stdin.read()
    grid: StreetMap
    try:
        grid = parse_node_map(text) if legacy else parse_edge_map(text)
    except InvalidGrid as e:
        print(f"Invalid map: {e}", file=sys.stderr)
        return 1

    width, height = grid.bounds()
    print(f"Map size: {width}, {height}", file=stdout)

    if isinstance(grid, NodeBlockedGrid):
        print("Blocks:", file=stdout)
        for block in sorted(grid.blocks, key=lambda c: (c.y, c.x)):
            print(f"  {block.x}, {block.y}", file=stdout)

    start = Coord(numbers[0], numbers[1])

    if len(numbers) == 4:
        end = Coord(numbers[2], numbers[3])
        count = num_routes(grid, start, end)
        print(
            f"Number of routes from ({start.x}, {start.y}) to ({end.x}, {end.y}): {count}",
            file=stdout,
        )
    else:
        options = RenderOptions(color=stdout.isatty())
        print(render_counts(grid, start, options), file=stdout)

    return 0


if __name__ == "__main__":
    sys.exit(main())
