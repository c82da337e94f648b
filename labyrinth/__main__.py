"""Entry point: ``python -m labyrinth``.

Supports two modes:
  - ``python -m labyrinth``        → Launch the FastAPI server
  - ``python -m labyrinth cli``    → Headless run: generate, spawn, tick, log
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING"]


def _add_world_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--seed", type=int, default=42, help="World seed")
    parser.add_argument("--random-seed", action="store_true", help="Ignore --seed and draw a random one")
    parser.add_argument("--width", type=int, default=50)
    parser.add_argument("--height", type=int, default=50)
    parser.add_argument("--depth", type=int, default=5, help="BSP recursion depth")
    parser.add_argument("--agents", type=int, default=1)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--log-level", type=str, default="INFO", choices=_LOG_LEVELS)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seeded BSP dungeon generator and agent engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    _add_world_args(srv)

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless simulation")
    cli.add_argument("--ticks", type=int, default=200)
    cli.add_argument("--ascii", action="store_true", help="Print the generated map")
    _add_world_args(cli)

    return parser


def _config_from_args(args: argparse.Namespace, **extra):
    from labyrinth.config import RoomParams, SimulationConfig

    return SimulationConfig(
        world_seed=None if args.random_seed else args.seed,
        grid_width=args.width,
        grid_height=args.height,
        room_params=RoomParams(bsp_depth=args.depth),
        num_agents=args.agents,
        num_workers=args.workers,
        log_level=args.log_level,
        **extra,
    )


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from labyrinth.api.app import create_app

    config = _config_from_args(args)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from labyrinth.engine.bootstrap import build_world
    from labyrinth.utils.logging import setup_logging

    config = _config_from_args(args, max_ticks=args.ticks)
    setup_logging(config.log_level)

    loop = build_world(config)
    if args.ascii:
        grid = loop.dungeon.grid
        if grid is not None:
            print(grid.to_ascii())

    try:
        loop.run()
    finally:
        loop.worker_pool.shutdown()

    for event in loop.drain_events():
        logger.info("[tick %d] %s: %s", event.tick, event.category, event.message)
    for agent in loop.agents:
        logger.info(
            "Agent %d: %s at %s (%.2f, %.2f)",
            agent.id, agent.state.name, agent.grid_pos, agent.x, agent.y,
        )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])
    if args.command == "serve":
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
