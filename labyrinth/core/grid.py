"""Grid / map system."""

from __future__ import annotations

from labyrinth.core.enums import Tile
from labyrinth.core.models import Vector2


class Grid:
    """2D tile grid backed by a flat list for cache-friendly access."""

    __slots__ = ("width", "height", "_tiles")

    def __init__(self, width: int, height: int, default: Tile = Tile.WALL) -> None:
        self.width = width
        self.height = height
        self._tiles: list[Tile] = [default] * (width * height)

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def get(self, pos: Vector2) -> Tile:
        if not self.in_bounds(pos):
            return Tile.WALL
        return self._tiles[self._idx(pos.x, pos.y)]

    def set(self, pos: Vector2, tile: Tile) -> None:
        if self.in_bounds(pos):
            self._tiles[self._idx(pos.x, pos.y)] = tile

    def is_walkable(self, pos: Vector2) -> bool:
        return self.get(pos) == Tile.FLOOR

    # -- fast raw-coordinate access (no Vector2 alloc, for hot loops) --

    def in_bounds_xy(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_xy(self, x: int, y: int) -> Tile:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._tiles[y * self.width + x]
        return Tile.WALL

    def set_xy(self, x: int, y: int, tile: Tile) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._tiles[y * self.width + x] = tile

    def is_walkable_xy(self, x: int, y: int) -> bool:
        return self.get_xy(x, y) == Tile.FLOOR

    def has_clearance(self, pos: Vector2, radius: int = 1) -> bool:
        """True if the (2*radius+1)² block centred on *pos* is all Floor."""
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if not self.is_walkable_xy(pos.x + dx, pos.y + dy):
                    return False
        return True

    def floor_count(self) -> int:
        return sum(1 for t in self._tiles if t == Tile.FLOOR)

    # -- views --

    def rows(self) -> list[list[Tile]]:
        """Tiles as a list of rows, ``rows()[y][x]``."""
        w = self.width
        return [self._tiles[y * w:(y + 1) * w] for y in range(self.height)]

    def to_ascii(self, floor: str = ".", wall: str = "#") -> str:
        glyphs = {Tile.FLOOR: floor, Tile.WALL: wall}
        return "\n".join("".join(glyphs[t] for t in row) for row in self.rows())

    def rle(self) -> list[int]:
        """Run-length encode the tiles: ``[value, count, value, count, ...]``."""
        tiles = self._tiles
        rle: list[int] = []
        if not tiles:
            return rle
        cur_val = int(tiles[0])
        cur_count = 1
        for i in range(1, len(tiles)):
            v = int(tiles[i])
            if v == cur_val:
                cur_count += 1
            else:
                rle.append(cur_val)
                rle.append(cur_count)
                cur_val = v
                cur_count = 1
        rle.append(cur_val)
        rle.append(cur_count)
        return rle

    # -- copy / compare --

    def copy(self) -> Grid:
        new = Grid.__new__(Grid)
        new.width = self.width
        new.height = self.height
        new._tiles = list(self._tiles)
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._tiles == other._tiles
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, floor={self.floor_count()})"
