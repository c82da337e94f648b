"""BSP dungeon builder.

Generation pipeline (all randomness from one ``RngStream`` in the MAP_GEN
domain, so a seed fully determines the output):

  1. Fill the grid with WALL.
  2. Recursively split the interior rectangle along its longer axis until the
     depth budget runs out or a side drops below ``min_split_span``; every
     leaf carves one room. Rooms are recorded in leaf-visitation order.
  3. Link ``rooms[i-1]`` to ``rooms[i]`` with an L-shaped corridor of random
     thickness. Rooms are linked in creation order only, not by proximity or
     a spanning tree, so two neighbouring rooms may have no direct corridor.
  4. Wall synthesis on a copy of the grid, then force the border to WALL.
"""

from __future__ import annotations

import logging

from labyrinth.config import RoomParams
from labyrinth.core.enums import Domain, Tile
from labyrinth.core.grid import Grid
from labyrinth.core.models import Room
from labyrinth.systems.rng import RngStream, normalize_seed

logger = logging.getLogger(__name__)

MIN_GRID_SIZE = 10

# 8-neighbourhood offsets used by wall synthesis
_NEIGHBORS_8 = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if dx or dy
)


class DungeonBuilder:
    """Produces a ``(Grid, rooms)`` pair from a seed and room parameters.

    A builder instance holds no state between calls; ``generate`` creates a
    fresh stream for every run.
    """

    __slots__ = ("_min_size",)

    def __init__(self, min_size: int = MIN_GRID_SIZE) -> None:
        self._min_size = max(3, min_size)

    def generate(
        self,
        seed: int,
        width: int,
        height: int,
        room_params: RoomParams | None = None,
    ) -> tuple[Grid, list[Room]]:
        """Build a dungeon. Deterministic for identical inputs."""
        params = (room_params or RoomParams()).normalized()
        width, height = self._clamp_size(width, height)
        rng = RngStream(normalize_seed(seed), Domain.MAP_GEN)

        grid = Grid(width, height, default=Tile.WALL)
        rooms: list[Room] = []

        # Outer ring is reserved for the border
        self._subdivide(grid, rooms, rng, params, 1, 1, width - 2, height - 2, params.bsp_depth)
        self._connect_rooms(grid, rooms, rng, params)
        grid = synthesize_walls(grid)

        logger.info(
            "Generated %dx%d dungeon (seed=%d): %d rooms, %d floor tiles, %d draws",
            width, height, seed, len(rooms), grid.floor_count(), rng.draws,
        )
        return grid, rooms

    # ------------------------------------------------------------------
    # Input clamping
    # ------------------------------------------------------------------

    def _clamp_size(self, width: int, height: int) -> tuple[int, int]:
        new_w = max(width, self._min_size)
        new_h = max(height, self._min_size)
        if (new_w, new_h) != (width, height):
            logger.warning(
                "Requested size %dx%d below minimum %d, clamped to %dx%d",
                width, height, self._min_size, new_w, new_h,
            )
        return new_w, new_h

    # ------------------------------------------------------------------
    # BSP partition
    # ------------------------------------------------------------------

    def _subdivide(
        self,
        grid: Grid,
        rooms: list[Room],
        rng: RngStream,
        params: RoomParams,
        x: int, y: int, w: int, h: int,
        depth: int,
    ) -> None:
        if depth <= 0 or w < params.min_split_span or h < params.min_split_span:
            room = self._make_room(rng, params, x, y, w, h)
            carve_rect(grid, room.x, room.y, room.width, room.height)
            rooms.append(room)
            return

        if w > h:
            split = _split_point(rng, w)
            self._subdivide(grid, rooms, rng, params, x, y, split, h, depth - 1)
            self._subdivide(grid, rooms, rng, params, x + split, y, w - split, h, depth - 1)
        else:
            split = _split_point(rng, h)
            self._subdivide(grid, rooms, rng, params, x, y, w, split, depth - 1)
            self._subdivide(grid, rooms, rng, params, x, y + split, w, h - split, depth - 1)

    @staticmethod
    def _make_room(rng: RngStream, params: RoomParams, x: int, y: int, w: int, h: int) -> Room:
        """Pick a room that fits inside the leaf rectangle (x, y, w, h)."""
        room_w = _room_span(rng, params, w)
        room_h = _room_span(rng, params, h)
        room_x = x + rng.randint(0, max(0, w - room_w))
        room_y = y + rng.randint(0, max(0, h - room_h))
        return Room(room_x, room_y, room_w, room_h)

    # ------------------------------------------------------------------
    # Corridors
    # ------------------------------------------------------------------

    def _connect_rooms(
        self,
        grid: Grid,
        rooms: list[Room],
        rng: RngStream,
        params: RoomParams,
    ) -> None:
        for i in range(1, len(rooms)):
            prev = rooms[i - 1].center
            curr = rooms[i].center
            if rng.chance(0.5):
                _carve_horizontal(grid, rng, params, prev.x, curr.x, prev.y)
                _carve_vertical(grid, rng, params, prev.y, curr.y, curr.x)
            else:
                _carve_vertical(grid, rng, params, prev.y, curr.y, prev.x)
                _carve_horizontal(grid, rng, params, prev.x, curr.x, curr.y)


# ----------------------------------------------------------------------
# Carving helpers
# ----------------------------------------------------------------------

def _split_point(rng: RngStream, span: int) -> int:
    """Random interior cut in [2, span-2], clamped for thin rectangles."""
    lo = min(2, span - 1)
    hi = max(lo, span - 2)
    return rng.randint(max(1, lo), max(1, hi))


def _room_span(rng: RngStream, params: RoomParams, available: int) -> int:
    """Random room side length in [min_room_size, available - margin], clamped to [1, available]."""
    available = max(1, available)
    hi = max(1, available - params.room_margin)
    lo = max(1, min(params.min_room_size, hi))
    return rng.randint(lo, hi)


def _corridor_width(rng: RngStream, params: RoomParams) -> int:
    return rng.randint(params.corridor_min_width, params.corridor_max_width)


def _carve_horizontal(grid: Grid, rng: RngStream, params: RoomParams, x_start: int, x_end: int, y: int) -> None:
    thickness = _corridor_width(rng, params)
    for x in range(min(x_start, x_end), max(x_start, x_end) + 1):
        for t in range(thickness):
            grid.set_xy(x, y + t, Tile.FLOOR)


def _carve_vertical(grid: Grid, rng: RngStream, params: RoomParams, y_start: int, y_end: int, x: int) -> None:
    thickness = _corridor_width(rng, params)
    for y in range(min(y_start, y_end), max(y_start, y_end) + 1):
        for t in range(thickness):
            grid.set_xy(x + t, y, Tile.FLOOR)


def carve_rect(grid: Grid, x: int, y: int, w: int, h: int) -> None:
    for cy in range(y, y + h):
        for cx in range(x, x + w):
            grid.set_xy(cx, cy, Tile.FLOOR)


def synthesize_walls(grid: Grid) -> Grid:
    """Wall in every non-Floor cell touching Floor, then close the border.

    Reads from *grid* and writes to a copy, so the result does not depend on
    scan order. The input grid is left untouched.
    """
    out = grid.copy()
    for y in range(grid.height):
        for x in range(grid.width):
            if grid.get_xy(x, y) != Tile.FLOOR:
                continue
            for dx, dy in _NEIGHBORS_8:
                nx, ny = x + dx, y + dy
                if grid.in_bounds_xy(nx, ny) and grid.get_xy(nx, ny) != Tile.FLOOR:
                    out.set_xy(nx, ny, Tile.WALL)

    for x in range(out.width):
        out.set_xy(x, 0, Tile.WALL)
        out.set_xy(x, out.height - 1, Tile.WALL)
    for y in range(out.height):
        out.set_xy(0, y, Tile.WALL)
        out.set_xy(out.width - 1, y, Tile.WALL)
    return out