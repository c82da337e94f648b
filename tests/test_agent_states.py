"""Tests for the WANDER / CHASE state handlers driven through AgentController."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from labyrinth.ai.agent import Agent, AgentController, TrackedTarget
from labyrinth.ai.perception import Perception
from labyrinth.ai.states import STATE_HANDLERS
from labyrinth.core.dungeon import DungeonView
from labyrinth.core.enums import AgentState, Domain, Tile
from labyrinth.core.grid import Grid
from labyrinth.core.models import Room, Vector2
from labyrinth.systems.rng import RngStream


class _StaticDungeon:
    """Minimal DungeonSource returning a fixed view."""

    def __init__(self, view: DungeonView | None) -> None:
        self._view = view

    def view(self) -> DungeonView | None:
        return self._view


def _open_view(w: int = 20, h: int = 10) -> DungeonView:
    """One walled room filling the map interior."""
    g = Grid(w, h, default=Tile.WALL)
    room = Room(1, 1, w - 2, h - 2)
    for c in room.cells():
        g.set(c, Tile.FLOOR)
    return DungeonView(grid=g, rooms=(room,), seed=0)


def _two_room_view() -> DungeonView:
    """Rooms A (x 1..5) and B (x 10..14) joined by a corridor on y=3."""
    g = Grid(20, 8, default=Tile.WALL)
    a, b = Room(1, 1, 5, 5), Room(10, 1, 5, 5)
    for room in (a, b):
        for c in room.cells():
            g.set(c, Tile.FLOOR)
    for x in range(6, 10):
        g.set_xy(x, 3, Tile.FLOOR)
    return DungeonView(grid=g, rooms=(a, b), seed=0)


def _make_controller(view, agent_pos, target=None, sight=5.0, state=AgentState.WANDER):
    agent = Agent.at(1, agent_pos, speed=3.0, sight_range=sight)
    agent.state = state
    tracked = TrackedTarget(*target) if target is not None else TrackedTarget()
    ctrl = AgentController(
        agent=agent,
        dungeon=_StaticDungeon(view),
        target=tracked,
        rng=RngStream(0, Domain.AGENT_DECISION, 1),
    )
    return ctrl, tracked


class TestRegistry:
    def test_every_state_has_a_handler(self):
        assert set(STATE_HANDLERS) == set(AgentState)


class TestWander:
    def test_sees_target_at_distance_3_with_sight_5(self):
        ctrl, _ = _make_controller(_open_view(), Vector2(5, 5), target=(8, 5), sight=5.0)
        result = ctrl.tick(0.05)
        assert result.old_state == AgentState.WANDER
        assert result.new_state == AgentState.CHASE
        assert result.transitioned
        assert ctrl.agent.path is None
        assert ctrl.agent.last_known_target == Vector2(8, 5)

    def test_target_beyond_sight_keeps_wandering(self):
        ctrl, _ = _make_controller(_open_view(), Vector2(2, 2), target=(17, 8), sight=5.0)
        result = ctrl.tick(0.05)
        assert result.new_state == AgentState.WANDER

    def test_picks_other_room_near_its_centre(self):
        view = _two_room_view()
        ctrl, _ = _make_controller(view, Vector2(3, 3))
        result = ctrl.tick(0.05)
        agent = ctrl.agent
        assert result.new_state == AgentState.WANDER
        assert agent.path is not None
        assert agent.path[-1] in {Vector2(12, 3), Vector2(12, 2), Vector2(11, 3)}
        assert result.step is not None
        assert result.step.manhattan(Vector2(3, 3)) == 1
        assert agent.path[0] == result.step

    def test_single_room_falls_back_to_current_room(self):
        view = _open_view()
        ctrl, _ = _make_controller(view, Vector2(2, 2))
        ctrl.tick(0.05)
        assert ctrl.agent.path is not None
        assert view.rooms[0].contains(ctrl.agent.path[-1])

    def test_no_clearance_cells_means_idle(self):
        g = Grid(6, 6, default=Tile.WALL)
        room = Room(1, 1, 2, 2)
        for c in room.cells():
            g.set(c, Tile.FLOOR)
        view = DungeonView(grid=g, rooms=(room,), seed=0)
        ctrl, _ = _make_controller(view, Vector2(1, 1))
        result = ctrl.tick(0.05)
        assert result.step is None
        assert ctrl.agent.path is None

    def test_no_dungeon_means_idle(self):
        ctrl, _ = _make_controller(None, Vector2(1, 1), target=(1, 1))
        result = ctrl.tick(0.05)
        assert result.new_state == AgentState.WANDER
        assert result.step is None


class TestChase:
    def test_plans_toward_visible_target(self):
        ctrl, _ = _make_controller(_open_view(), Vector2(5, 5), target=(8, 5), sight=5.0)
        ctrl.tick(0.05)  # WANDER → CHASE
        result = ctrl.tick(0.05)
        assert result.new_state == AgentState.CHASE
        assert result.step == Vector2(6, 5)
        assert ctrl.agent.path == [Vector2(6, 5), Vector2(7, 5), Vector2(8, 5)]

    def test_replans_when_target_moves(self):
        ctrl, target = _make_controller(_open_view(), Vector2(5, 5), target=(8, 5), sight=5.0)
        ctrl.tick(0.05)
        ctrl.tick(0.05)
        target.move_to(6, 7)
        ctrl.tick(0.05)
        assert ctrl.agent.path[-1] == Vector2(6, 7)
        assert ctrl.agent.last_known_target == Vector2(6, 7)

    def test_falls_back_to_last_known_then_wanders(self):
        ctrl, _ = _make_controller(
            _open_view(), Vector2(5, 5), target=(17, 8), sight=5.0, state=AgentState.CHASE,
        )
        ctrl.agent.last_known_target = Vector2(8, 5)

        states = []
        for _ in range(10):
            result = ctrl.tick(1.0)
            states.append(result.new_state)
            if result.new_state == AgentState.WANDER:
                break

        assert states[0] == AgentState.CHASE
        assert states[-1] == AgentState.WANDER
        assert ctrl.agent.grid_pos == Vector2(8, 5)
        assert ctrl.agent.path is None

    def test_unreachable_last_known_gives_up(self):
        ctrl, _ = _make_controller(
            _open_view(), Vector2(5, 5), target=(17, 8), sight=5.0, state=AgentState.CHASE,
        )
        ctrl.agent.last_known_target = Vector2(0, 0)  # border wall
        result = ctrl.tick(0.05)
        assert result.new_state == AgentState.WANDER
        assert ctrl.agent.path is None

    def test_target_removed_gives_up_after_last_known(self):
        ctrl, target = _make_controller(_open_view(), Vector2(5, 5), target=(5, 5), sight=5.0)
        ctrl.tick(0.05)  # sees target on its own cell
        target.remove()
        result = ctrl.tick(0.05)
        assert result.new_state == AgentState.WANDER


class TestPerception:
    def test_in_sight_is_euclidean_and_inclusive(self):
        assert Perception.in_sight(Vector2(0, 0), Vector2(3, 4), 5.0)
        assert not Perception.in_sight(Vector2(0, 0), Vector2(4, 4), 5.0)
        assert not Perception.in_sight(Vector2(0, 0), None, 5.0)

    def test_wander_candidates_nearest_third(self):
        view = _two_room_view()
        cells = Perception.wander_candidates(view, view.rooms[1], 1)
        assert cells == [Vector2(12, 3), Vector2(12, 2), Vector2(11, 3)]

    def test_clearance_cells(self):
        view = _two_room_view()
        cells = Perception.clearance_cells(view, view.rooms[1], 1)
        assert len(cells) == 9
        assert all(view.has_clearance(c, 1) for c in cells)
