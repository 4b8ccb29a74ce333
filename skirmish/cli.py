"""
Skirmish CLI - Command-line interface for the engine.

Usage:
    skirmish serve [--host H] [--port P]     Run the HTTP API
    skirmish board [--seed N] [--width W]    Print a generated board
    skirmish units                           Print the unit stat table
"""

import argparse
import logging
import sys

from .engine_core.rules import GameConfig, Terrain, UNIT_STATS, STARTING_CREDITS
from .engine_core.state import GameState

TERRAIN_SYMBOLS = {
    Terrain.GRASS: ".",
    Terrain.WATER: "~",
    Terrain.MOUNTAIN: "^",
    Terrain.ROAD: "=",
}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Skirmish - Turn-Based Grid Tactics Engine",
        prog="skirmish",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # Board command
    board_parser = subparsers.add_parser("board", help="Print a generated board")
    board_parser.add_argument("--seed", type=int, default=None, help="Terrain seed")
    board_parser.add_argument("--width", type=int, default=10, help="Board columns")
    board_parser.add_argument("--height", type=int, default=8, help="Board rows")

    # Units command
    subparsers.add_parser("units", help="Print the unit stat table")

    args = parser.parse_args(argv)

    if args.command == "serve":
        return cmd_serve(args)
    elif args.command == "board":
        return cmd_board(args)
    elif args.command == "units":
        return cmd_units(args)
    else:
        parser.print_help()
        return 1


def cmd_serve(args):
    """Run the API under uvicorn."""
    import uvicorn
    from .api.app import SKIRMISH_LOG_LEVEL

    logging.basicConfig(
        level=SKIRMISH_LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "skirmish.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=SKIRMISH_LOG_LEVEL.lower(),
    )
    return 0


def render_board(state: GameState) -> str:
    """
    Render a board as text, one row per line.

    Units are shown as the first letter of their type, upper case for
    blue and lower case for red.
    """
    lines = []
    for row in state.grid.rows:
        symbols = []
        for cell in row:
            if cell.unit is None:
                symbols.append(TERRAIN_SYMBOLS[cell.terrain])
                continue
            letter = cell.unit.unit_type.value[0]
            symbols.append(letter.upper() if cell.unit.player.value == "blue" else letter)
        lines.append(" ".join(symbols))
    return "\n".join(lines)


def cmd_board(args):
    """Print a generated board."""
    try:
        config = GameConfig(width=args.width, height=args.height, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    state = GameState.create(config=config)
    print(render_board(state))
    print()
    print("Legend: . grass  ~ water  ^ mountain  = road")
    return 0


def cmd_units(args):
    """Print the unit stat table."""
    header = f"{'type':<12}{'hp':>6}{'atk':>6}{'def':>6}{'move':>6}{'range':>7}{'cost':>6}"
    print(header)
    print("-" * len(header))
    for unit_type, stats in UNIT_STATS.items():
        print(
            f"{unit_type.value:<12}{stats.health:>6}{stats.attack:>6}{stats.defense:>6}"
            f"{stats.move_range:>6}{stats.attack_range:>7}{stats.cost:>6}"
        )
    print(f"\nStarting credits: {STARTING_CREDITS}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
