"""GridModel — owner of the generated grid and room list.

The model is the single source of spatial truth. Each generation replaces the
whole ``DungeonView`` (grid + rooms + seed) under a lock: the previous view is
dropped before the builder runs and the new one is published only when
complete, so readers see either nothing or a finished dungeon.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Protocol

from labyrinth.config import RoomParams
from labyrinth.core.enums import Tile
from labyrinth.core.grid import Grid
from labyrinth.core.models import Room, Vector2
from labyrinth.systems.builder import MIN_GRID_SIZE, DungeonBuilder
from labyrinth.systems.rng import random_seed

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DungeonView:
    """Read-only result of one generation run.

    The grid must be treated as immutable by every holder of a view.
    """

    grid: Grid
    rooms: tuple[Room, ...]
    seed: int
    generation: int = 0

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def is_walkable(self, x: int, y: int) -> bool:
        return self.grid.is_walkable_xy(x, y)

    def has_clearance(self, pos: Vector2, radius: int = 1) -> bool:
        return self.grid.has_clearance(pos, radius)

    def room_index_at(self, pos: Vector2) -> int | None:
        """Index of the first room (creation order) containing *pos*."""
        for idx, room in enumerate(self.rooms):
            if room.contains(pos):
                return idx
        return None

    def room_at(self, pos: Vector2) -> Room | None:
        idx = self.room_index_at(pos)
        return self.rooms[idx] if idx is not None else None

    def connected_components(self) -> list[list[int]]:
        """Group room indices by 4-connected floor region.

        A single group means every room is reachable from every other one.
        """
        label: dict[tuple[int, int], int] = {}
        groups: list[list[int]] = []
        for idx, room in enumerate(self.rooms):
            c = room.center
            key = (c.x, c.y)
            if key not in label:
                groups.append([])
                _flood(self.grid, key, len(groups) - 1, label)
            groups[label[key]].append(idx)
        return groups


def _flood(grid: Grid, start: tuple[int, int], region: int, label: dict[tuple[int, int], int]) -> None:
    label[start] = region
    if not grid.is_walkable_xy(*start):
        return
    frontier = deque([start])
    while frontier:
        x, y = frontier.popleft()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            key = (nx, ny)
            if key not in label and grid.is_walkable_xy(nx, ny):
                label[key] = region
                frontier.append(key)


class DungeonSource(Protocol):
    """What agents and spawners need from the model: the current view."""

    def view(self) -> DungeonView | None: ...


class GridModel:
    """Holds the current dungeon and regenerates it on request."""

    __slots__ = ("_builder", "_lock", "_view", "_generation")

    def __init__(self, builder: DungeonBuilder | None = None, min_size: int = MIN_GRID_SIZE) -> None:
        self._builder = builder or DungeonBuilder(min_size)
        self._lock = threading.Lock()
        self._view: DungeonView | None = None
        self._generation = 0

    # -- lifecycle --

    def generate_dungeon(
        self,
        seed: int | None,
        width: int,
        height: int,
        room_params: RoomParams | None = None,
    ) -> DungeonView:
        """Replace the current dungeon with a freshly generated one.

        ``seed=None`` draws a random seed; the seed actually used is recorded
        on the returned view (and ``self.seed``) so the run can be replayed.
        """
        with self._lock:
            self._view = None
            if seed is None:
                seed = random_seed()
                logger.info("Random seed mode: drew seed %d", seed)
            grid, rooms = self._builder.generate(seed, width, height, room_params)
            self._generation += 1
            self._view = DungeonView(
                grid=grid, rooms=tuple(rooms), seed=seed, generation=self._generation,
            )
            return self._view

    def clear_dungeon(self) -> None:
        """Discard the grid and rooms. Safe to call at any time."""
        with self._lock:
            had_view = self._view is not None
            self._view = None
        if had_view:
            logger.info("Dungeon cleared.")

    # -- queries --

    def view(self) -> DungeonView | None:
        with self._lock:
            return self._view

    @property
    def generated(self) -> bool:
        return self.view() is not None

    @property
    def grid(self) -> Grid | None:
        v = self.view()
        return v.grid if v else None

    @property
    def rooms(self) -> tuple[Room, ...]:
        v = self.view()
        return v.rooms if v else ()

    @property
    def seed(self) -> int | None:
        v = self.view()
        return v.seed if v else None

    def tiles(self) -> list[list[Tile]]:
        """A copy of the tiles as rows (``tiles()[y][x]``); empty when cleared."""
        v = self.view()
        return v.grid.rows() if v else []

    def is_walkable(self, x: int, y: int) -> bool:
        """True iff (x, y) is in bounds and Floor."""
        v = self.view()
        return v.is_walkable(x, y) if v else False

    def has_clearance(self, pos: Vector2, radius: int = 1) -> bool:
        v = self.view()
        return v.has_clearance(pos, radius) if v else False

    def room_at(self, pos: Vector2) -> Room | None:
        v = self.view()
        return v.room_at(pos) if v else None
