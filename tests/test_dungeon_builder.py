"""Tests for the BSP dungeon builder: determinism and layout invariants."""

import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from labyrinth.config import RoomParams
from labyrinth.core.dungeon import DungeonView
from labyrinth.core.enums import Tile
from labyrinth.core.grid import Grid
from labyrinth.systems.builder import DungeonBuilder, synthesize_walls


def _build(seed: int = 42, w: int = 20, h: int = 20, **params):
    return DungeonBuilder().generate(seed, w, h, RoomParams(**params))


class TestDeterminism:
    def test_seed_42_twice_identical(self):
        g1, r1 = _build(42, 20, 20, bsp_depth=5)
        g2, r2 = _build(42, 20, 20, bsp_depth=5)
        assert g1 == g2
        assert r1 == r2
        assert [r.center for r in r1] == [r.center for r in r2]

    @pytest.mark.parametrize("seed", [0, 1, -7, 123456789])
    def test_any_seed_repeatable(self, seed):
        assert _build(seed, 50, 50) == _build(seed, 50, 50)

    def test_different_seeds_differ(self):
        g1, _ = _build(1, 50, 50)
        g2, _ = _build(2, 50, 50)
        assert g1 != g2


class TestLayoutInvariants:
    @pytest.mark.parametrize("seed", [3, 42, 99])
    def test_border_is_wall(self, seed):
        g, _ = _build(seed, 30, 25)
        for x in range(g.width):
            assert g.get_xy(x, 0) == Tile.WALL
            assert g.get_xy(x, g.height - 1) == Tile.WALL
        for y in range(g.height):
            assert g.get_xy(0, y) == Tile.WALL
            assert g.get_xy(g.width - 1, y) == Tile.WALL

    def test_grid_has_requested_size(self):
        g, _ = _build(42, 37, 23)
        assert (g.width, g.height) == (37, 23)

    @pytest.mark.parametrize("seed", [5, 42])
    def test_rooms_inside_interior(self, seed):
        g, rooms = _build(seed, 40, 30)
        assert rooms
        for r in rooms:
            assert r.width >= 1 and r.height >= 1
            assert r.x >= 1 and r.y >= 1
            assert r.right <= g.width - 1
            assert r.bottom <= g.height - 1

    def test_room_cells_are_floor(self):
        g, rooms = _build(42, 40, 40)
        for r in rooms:
            assert all(g.is_walkable(c) for c in r.cells())

    def test_centers_are_floor(self):
        g, rooms = _build(42, 50, 50)
        for r in rooms:
            assert g.is_walkable(r.center)

    def test_floor_never_touches_outside(self):
        """Every neighbour of a Floor cell is in bounds: the wall ring closes the map."""
        g, _ = _build(11, 30, 30)
        for y in range(g.height):
            for x in range(g.width):
                if g.get_xy(x, y) != Tile.FLOOR:
                    continue
                for dx in (-1, 0, 1):
                    for dy in (-1, 0, 1):
                        assert g.in_bounds_xy(x + dx, y + dy)

    def test_all_rooms_connected(self):
        g, rooms = _build(42, 50, 50)
        view = DungeonView(grid=g, rooms=tuple(rooms), seed=42)
        assert view.connected_components() == [list(range(len(rooms)))]

    def test_depth_zero_single_room(self):
        _, rooms = _build(42, 30, 30, bsp_depth=0)
        assert len(rooms) == 1

    def test_room_count_bounded_by_depth(self):
        _, rooms = _build(42, 50, 50, bsp_depth=3)
        assert 1 <= len(rooms) <= 8


class TestClamping:
    def test_small_grid_clamped_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            g, rooms = _build(42, 4, 3)
        assert (g.width, g.height) == (10, 10)
        assert rooms
        assert "clamped" in caplog.text

    def test_inverted_corridor_widths_still_generate(self, caplog):
        with caplog.at_level(logging.WARNING):
            g, rooms = _build(42, 30, 30, corridor_min_width=4, corridor_max_width=1)
        assert g.floor_count() > 0
        assert "corridor_max_width" in caplog.text

    def test_thin_rectangles_never_request_empty_range(self):
        for seed in range(30):
            _build(seed, 10, 10, min_split_span=2, min_room_size=5, room_margin=3)


class TestWallSynthesis:
    def test_input_untouched_and_border_forced(self):
        g = Grid(5, 5, default=Tile.FLOOR)
        out = synthesize_walls(g)
        assert g.floor_count() == 25
        assert out.floor_count() == 9
        assert out.get_xy(2, 2) == Tile.FLOOR

    @pytest.mark.parametrize("seed", [3, 42, 977])
    def test_generated_layout_never_opens_walls(self, seed, monkeypatch):
        import labyrinth.systems.builder as builder_mod

        captured: list[tuple[Grid, Grid]] = []
        original = builder_mod.synthesize_walls

        def recording(grid: Grid) -> Grid:
            before = grid.copy()
            after = original(grid)
            captured.append((before, after))
            return after

        monkeypatch.setattr(builder_mod, "synthesize_walls", recording)
        g, _ = _build(seed, 40, 30)

        assert len(captured) == 1
        before, after = captured[0]
        assert after == g
        for y in range(before.height):
            for x in range(before.width):
                on_border = x in (0, before.width - 1) or y in (0, before.height - 1)
                if before.get_xy(x, y) == Tile.WALL:
                    assert after.get_xy(x, y) == Tile.WALL
                elif not on_border:
                    assert after.get_xy(x, y) == Tile.FLOOR
