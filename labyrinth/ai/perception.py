"""Perception system — what an agent can see of the dungeon and its target.

All methods are stateless and operate on an immutable ``DungeonView``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from labyrinth.core.models import Room, Vector2

if TYPE_CHECKING:
    from labyrinth.core.dungeon import DungeonView


class Perception:
    """Stateless perception utilities."""

    __slots__ = ()

    # ------------------------------------------------------------------
    # Vision
    # ------------------------------------------------------------------

    @staticmethod
    def in_sight(observer: Vector2, target: Vector2 | None, sight_range: float) -> bool:
        """True if *target* lies within Euclidean *sight_range* of *observer*.

        Walls do not block sight.
        """
        if target is None:
            return False
        return observer.distance(target) <= sight_range

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    @staticmethod
    def current_room_index(view: DungeonView, pos: Vector2) -> int | None:
        return view.room_index_at(pos)

    @staticmethod
    def clearance_cells(view: DungeonView, room: Room, radius: int) -> list[Vector2]:
        """Cells of *room* whose (2*radius+1)² block is entirely Floor."""
        return [cell for cell in room.cells() if view.has_clearance(cell, radius)]

    @staticmethod
    def wander_candidates(view: DungeonView, room: Room, radius: int) -> list[Vector2]:
        """The nearest third (at least one) of *room*'s clearance cells to its centre.

        Ordering is a stable sort on Euclidean distance, so equally distant
        cells keep row-major order.
        """
        cells = Perception.clearance_cells(view, room, radius)
        if not cells:
            return []
        center = room.center
        cells.sort(key=center.distance)
        return cells[:max(1, len(cells) // 3)]
