"""Command-line launcher for the Duel Snake server."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

# CLI flag -> GameConfig field
_CONFIG_FLAGS: dict[str, str] = {
    "grid_size": "grid_size",
    "tick_rate_ms": "tick_rate_ms",
    "countdown": "countdown_seconds",
    "seed": "seed",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duel-snake",
        description="Duel Snake match server and configuration tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the match server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file; flags below override it.",
    )
    serve_p.add_argument(
        "--scores", type=str, default=None,
        help="Leaderboard JSON file (in-memory when omitted).",
    )
    serve_p.add_argument("--grid-size", type=int, default=None)
    serve_p.add_argument("--tick-rate-ms", type=int, default=None)
    serve_p.add_argument("--countdown", type=int, default=None)
    serve_p.add_argument("--seed", type=int, default=None)

    # --- write-config ---
    write_p = sub.add_parser(
        "write-config", help="Write the default config as JSON.",
    )
    write_p.add_argument("output", help="Destination path.")

    return parser


def _load_config(args: argparse.Namespace):
    from duel_snake.config import GameConfig

    config = GameConfig.load(args.config) if args.config else GameConfig()
    overrides = {
        field: getattr(args, flag)
        for flag, field in _CONFIG_FLAGS.items()
        if getattr(args, flag, None) is not None
    }
    if overrides:
        config = GameConfig(**{**config.to_dict(), **overrides})
    return config


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from duel_snake.scores import JsonScoreStore
    from duel_snake.server.app import create_app

    config = _load_config(args)
    store = JsonScoreStore(args.scores) if args.scores else None
    logger.info(
        "Serving on %s:%d (grid=%d, tick=%dms).",
        args.host, args.port, config.grid_size, config.tick_rate_ms,
    )
    uvicorn.run(create_app(config, store), host=args.host, port=args.port)
    return 0


def _run_write_config(args: argparse.Namespace) -> int:
    from duel_snake.config import GameConfig

    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``duel-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "write-config": _run_write_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
