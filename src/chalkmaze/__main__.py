from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from . import __version__
from .config import MazeSettings


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="chalk-maze",
        description="Chalk Maze - generate mazes and walk them",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--gui", action="store_true", help="Open the top-down Arcade viewer")
    parser.add_argument("--level", type=int, default=1, help="Level to generate (default: 1)")
    parser.add_argument("--seed", type=int, default=None, help="Master seed (overrides CM_SEED)")
    parser.add_argument("--config", default=None, help="Path to a settings TOML file")
    parser.add_argument("--hint", action="store_true", help="Include the start-to-exit path in the summary")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    if args.level < 1:
        parser.error("--level must be >= 1")

    settings = MazeSettings.from_sources(file_path=args.config)
    if args.seed is not None:
        settings.seed = args.seed

    if args.gui:
        from .app.arcade_app import run

        return run(settings, level=args.level)

    from .session import MazeSession

    session = MazeSession(settings)
    session.start(args.level)
    data = session.summary()
    if args.hint:
        path = session.pathfinder.shortest_path(session.grid, session.position)
        data["hint"] = [list(c) for c in path] if path else []
        data["grid"] = session.grid.to_lines(path or ())
    # Print JSON summary so it can be diffed across runs
    print(json.dumps(data, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
