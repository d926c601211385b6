"""Pre-computed neighbor tables for square Hobogo boards.

Influence tallies and the volatility flood fill touch every neighbor of
every cell many times per rollout. Building the 8-connected adjacency once
per board shape and reusing it avoids recomputing bounds checks in those
hot loops.

Usage:
    from hobogo.geometry import neighbor_table

    table = neighbor_table(9, 9)
    for neighbor_ix in table[board.index(coord)]:
        ...
"""

from __future__ import annotations

from functools import lru_cache

# 8-connected neighborhood, the cell itself excluded.
SQUARE_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


@lru_cache(maxsize=64)
def neighbor_table(width: int, height: int) -> tuple[tuple[int, ...], ...]:
    """Return, for every flat cell index, the flat indices of its neighbors.

    Neighbors are clipped at the board edge, so corner cells have three
    entries and edge cells five.
    """
    table: list[tuple[int, ...]] = []
    for y in range(height):
        for x in range(width):
            neighbors = []
            for dx, dy in SQUARE_DIRECTIONS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height:
                    neighbors.append(ny * width + nx)
            table.append(tuple(neighbors))
    return tuple(table)


def clear_geometry_cache() -> None:
    """Drop cached tables (used by tests to keep runs independent)."""
    neighbor_table.cache_clear()
