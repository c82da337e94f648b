"""A* pathfinding over the dungeon grid.

Provides a ``Pathfinder`` class that computes shortest 4-connected paths
between two cells, treating out-of-bounds cells as Wall.

Usage:
    pf = Pathfinder(grid)
    path = pf.find_path(start, goal)          # list[Vector2] or None
"""

from __future__ import annotations

import heapq
from typing import TYPE_CHECKING

from labyrinth.core.models import Vector2

if TYPE_CHECKING:
    from labyrinth.core.grid import Grid

# Cardinal directions only. Expansion order is fixed so ties are reproducible.
_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class Pathfinder:
    """A* pathfinder operating on a read-only Grid.

    Thread-safe: never writes to the grid, all search state is local.
    An optional ``max_nodes`` bounds the number of expanded cells.
    """

    __slots__ = ("_grid", "_max_nodes")

    def __init__(self, grid: Grid, max_nodes: int | None = None) -> None:
        self._grid = grid
        self._max_nodes = max_nodes

    def find_path(self, start: Vector2, goal: Vector2) -> list[Vector2] | None:
        """Compute an A* path from *start* to *goal*.

        Returns the cells from *start* to *goal*, both included, or None when
        the goal is not walkable or no route exists within the node budget.
        ``start == goal`` yields ``[start]``.
        """
        grid = self._grid
        if not grid.is_walkable_xy(goal.x, goal.y):
            return None
        if start == goal:
            return [start]

        # A* open set: (f_score, counter, x, y)
        counter = 0
        open_heap: list[tuple[int, int, int, int]] = []
        heapq.heappush(open_heap, (start.manhattan(goal), counter, start.x, start.y))

        g_score: dict[tuple[int, int], int] = {(start.x, start.y): 0}
        came_from: dict[tuple[int, int], tuple[int, int]] = {}
        closed: set[tuple[int, int]] = set()
        nodes_explored = 0
        budget = self._max_nodes

        gx, gy = goal.x, goal.y

        while open_heap:
            if budget is not None and nodes_explored >= budget:
                break
            _, _, cx, cy = heapq.heappop(open_heap)
            ckey = (cx, cy)

            if cx == gx and cy == gy:
                return self._reconstruct(came_from, ckey)

            if ckey in closed:
                continue
            closed.add(ckey)
            nodes_explored += 1

            tentative_g = g_score[ckey] + 1

            for dx, dy in _DIRS:
                nx, ny = cx + dx, cy + dy
                nkey = (nx, ny)

                if nkey in closed or not grid.is_walkable_xy(nx, ny):
                    continue

                if tentative_g < g_score.get(nkey, 1 << 62):
                    g_score[nkey] = tentative_g
                    came_from[nkey] = ckey
                    counter += 1
                    f = tentative_g + abs(nx - gx) + abs(ny - gy)
                    heapq.heappush(open_heap, (f, counter, nx, ny))

        return None

    @staticmethod
    def _reconstruct(
        came_from: dict[tuple[int, int], tuple[int, int]],
        current: tuple[int, int],
    ) -> list[Vector2]:
        """Walk back through came_from; the walk ends at the start cell."""
        path: list[Vector2] = [Vector2(current[0], current[1])]
        while current in came_from:
            current = came_from[current]
            path.append(Vector2(current[0], current[1]))
        path.reverse()
        return path


def find_path(
    grid: Grid,
    start: Vector2,
    goal: Vector2,
    max_nodes: int | None = None,
) -> list[Vector2] | None:
    """Convenience wrapper: one-shot search on *grid*."""
    return Pathfinder(grid, max_nodes).find_path(start, goal)
