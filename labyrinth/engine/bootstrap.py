"""Assemble a runnable world from a SimulationConfig.

Shared by the API's EngineManager and the headless CLI so both build the
dungeon, the spawn points and the agents the same way.
"""

from __future__ import annotations

import logging

from labyrinth.ai.agent import Agent, AgentController, TrackedTarget
from labyrinth.config import SimulationConfig
from labyrinth.core.dungeon import GridModel
from labyrinth.core.enums import Domain
from labyrinth.engine.worker_pool import WorkerPool
from labyrinth.engine.world_loop import WorldLoop
from labyrinth.systems.rng import RngStream, normalize_seed
from labyrinth.systems.spawner import SpawnPlanner

logger = logging.getLogger(__name__)


def build_world(config: SimulationConfig, dungeon: GridModel | None = None) -> WorldLoop:
    """Generate the dungeon, place the target and agents, and wire the loop."""
    dungeon = dungeon or GridModel(min_size=config.min_grid_size)
    view = dungeon.generate_dungeon(
        config.world_seed, config.grid_width, config.grid_height, config.room_params,
    )

    planner = SpawnPlanner(view.seed, config.agent_clearance, config.max_placement_attempts)
    player = planner.player_spawn(view)
    target = TrackedTarget(player.x, player.y) if player is not None else TrackedTarget()
    cells = planner.agent_spawns(view, config.num_agents, avoid=player)

    seed = normalize_seed(view.seed)
    controllers: list[AgentController] = []
    for agent_id, cell in enumerate(cells, start=1):
        agent = Agent.at(agent_id, cell, speed=config.agent_speed, sight_range=config.sight_range)
        controllers.append(AgentController(
            agent=agent,
            dungeon=dungeon,
            target=target,
            rng=RngStream(seed, Domain.AGENT_DECISION, agent_id),
            clearance=config.agent_clearance,
        ))

    loop = WorldLoop(
        config=config, dungeon=dungeon, target=target,
        controllers=controllers, worker_pool=WorkerPool(config),
    )
    loop.emit(
        "generation",
        f"Generated {view.width}x{view.height} dungeon with {len(view.rooms)} rooms (seed={view.seed})",
    )
    loop.emit(
        "spawn",
        f"Target at {player}, {len(controllers)} agents placed",
        tuple(c.agent.id for c in controllers),
    )
    logger.info("World ready: target at %s, %d/%d agents placed", player, len(controllers), config.num_agents)
    return loop
