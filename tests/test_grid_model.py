"""Tests for GridModel lifecycle and the DungeonView queries."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from labyrinth.core.dungeon import DungeonView, GridModel
from labyrinth.core.enums import Tile
from labyrinth.core.grid import Grid
from labyrinth.core.models import Room, Vector2


def _make_model(seed: int | None = 42, w: int = 30, h: int = 30) -> GridModel:
    model = GridModel()
    model.generate_dungeon(seed, w, h)
    return model


class TestLifecycle:
    def test_starts_empty(self):
        model = GridModel()
        assert model.view() is None
        assert model.grid is None
        assert model.rooms == ()
        assert model.tiles() == []
        assert model.seed is None
        assert not model.is_walkable(1, 1)
        assert model.room_at(Vector2(1, 1)) is None

    def test_generate_populates(self):
        model = _make_model()
        assert model.generated
        assert model.grid is not None
        assert len(model.rooms) > 0
        assert model.seed == 42
        assert len(model.tiles()) == 30

    def test_clear_discards(self):
        model = _make_model()
        model.clear_dungeon()
        assert model.view() is None
        assert model.rooms == ()

    def test_clear_when_empty_is_safe(self):
        GridModel().clear_dungeon()

    def test_regenerate_replaces_whole_view(self):
        model = _make_model(seed=1)
        first = model.view()
        second = model.generate_dungeon(2, 30, 30)
        assert model.view() is second
        assert second.generation == first.generation + 1
        assert second.seed == 2
        assert first.grid != second.grid

    def test_random_seed_mode_records_seed(self):
        model = _make_model(seed=None)
        seed = model.seed
        assert isinstance(seed, int)
        replay = GridModel()
        replay.generate_dungeon(seed, 30, 30)
        assert replay.grid == model.grid
        assert replay.rooms == model.rooms

    def test_tiles_is_a_copy(self):
        model = _make_model()
        rows = model.tiles()
        rows[0][0] = Tile.FLOOR
        assert model.tiles()[0][0] == Tile.WALL


class TestQueries:
    def test_is_walkable_matches_grid(self):
        model = _make_model()
        center = model.rooms[0].center
        assert model.is_walkable(center.x, center.y)
        assert not model.is_walkable(0, 0)
        assert not model.is_walkable(-5, 100)

    def test_room_at(self):
        model = _make_model()
        room = model.rooms[0]
        assert model.room_at(room.center) == room
        assert model.room_at(Vector2(0, 0)) is None

    def test_has_clearance_on_empty_model(self):
        assert not GridModel().has_clearance(Vector2(5, 5))


class TestConnectedComponents:
    def test_disconnected_rooms_are_grouped_separately(self):
        g = Grid(12, 5, default=Tile.WALL)
        for x in (1, 2, 8, 9):
            for y in (1, 2):
                g.set_xy(x, y, Tile.FLOOR)
        rooms = (Room(1, 1, 2, 2), Room(8, 1, 2, 2))
        view = DungeonView(grid=g, rooms=rooms, seed=0)
        assert view.connected_components() == [[0], [1]]

    def test_joined_rooms_share_a_group(self):
        g = Grid(12, 5, default=Tile.WALL)
        for x in range(1, 10):
            g.set_xy(x, 1, Tile.FLOOR)
        rooms = (Room(1, 1, 2, 1), Room(8, 1, 2, 1))
        view = DungeonView(grid=g, rooms=rooms, seed=0)
        assert view.connected_components() == [[0, 1]]
