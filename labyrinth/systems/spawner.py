"""Spawn placement for the tracked target and the agents."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from labyrinth.core.enums import Domain
from labyrinth.core.models import Vector2
from labyrinth.systems.rng import RngStream, normalize_seed

if TYPE_CHECKING:
    from labyrinth.core.dungeon import DungeonView

logger = logging.getLogger(__name__)


class SpawnPlanner:
    """Picks spawn cells from a finished dungeon.

    The target (player) starts at the centre of the first room. Agents are
    placed on random clearance-fitting cells, preferring rooms other than the
    first, with a hard cap on placement attempts per agent.
    """

    __slots__ = ("_rng", "_clearance", "_max_attempts")

    def __init__(self, seed: int, clearance: int = 1, max_attempts: int = 50) -> None:
        self._rng = RngStream(normalize_seed(seed), Domain.SPAWN)
        self._clearance = max(0, clearance)
        self._max_attempts = max(1, max_attempts)

    def player_spawn(self, view: DungeonView) -> Vector2 | None:
        """Centre of the first room, or the nearest Floor cell to it."""
        if not view.rooms:
            return None
        center = view.rooms[0].center
        if view.is_walkable(center.x, center.y):
            return center
        return self._nearest_walkable(view, center)

    def agent_spawns(
        self,
        view: DungeonView,
        count: int,
        avoid: Vector2 | None = None,
    ) -> list[Vector2]:
        """Up to *count* distinct spawn cells. Fewer are returned on shortfall."""
        rooms = view.rooms
        if count <= 0 or not rooms:
            if count > 0:
                logger.warning("No rooms to spawn %d agents into", count)
            return []
        pool = list(range(1, len(rooms))) or [0]

        taken: set[Vector2] = set()
        if avoid is not None:
            taken.add(avoid)
        placed: list[Vector2] = []
        for _ in range(count):
            cell = self._place_one(view, pool, taken)
            if cell is None:
                continue
            taken.add(cell)
            placed.append(cell)

        if len(placed) < count:
            logger.warning(
                "Placement shortfall: placed %d of %d agents after %d attempts each",
                len(placed), count, self._max_attempts,
            )
        return placed

    # -- internals --

    def _place_one(self, view: DungeonView, pool: list[int], taken: set[Vector2]) -> Vector2 | None:
        rng = self._rng
        for _ in range(self._max_attempts):
            room = view.rooms[rng.choice(pool)]
            cell = Vector2(
                rng.randint(room.x, room.right - 1),
                rng.randint(room.y, room.bottom - 1),
            )
            if cell in taken:
                continue
            if view.has_clearance(cell, self._clearance):
                return cell
        return None

    @staticmethod
    def _nearest_walkable(view: DungeonView, origin: Vector2) -> Vector2 | None:
        """BFS out from origin to the nearest walkable cell."""
        visited: set[tuple[int, int]] = {(origin.x, origin.y)}
        queue: deque[Vector2] = deque([origin])
        while queue:
            pos = queue.popleft()
            if view.is_walkable(pos.x, pos.y):
                return pos
            for dx, dy in ((0, -1), (1, 0), (0, 1), (-1, 0)):
                nx, ny = pos.x + dx, pos.y + dy
                if (nx, ny) not in visited and view.grid.in_bounds_xy(nx, ny):
                    visited.add((nx, ny))
                    queue.append(Vector2(nx, ny))
        return None
