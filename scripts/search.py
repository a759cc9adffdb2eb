#!/usr/bin/env python
"""Find the best move for a chess position with UCT Monte Carlo Tree Search.

Usage:
    python scripts/search.py --fen "6k1/5ppp/3r4/8/8/8/2R2PPP/6K1 w - - 0 1" --milliseconds 4000
    python scripts/search.py --iterations 20000 --config configs/search.yaml
    python scripts/search.py --variant crazyhouse --fen "..." --iterations 5000 --seed 7

Configuration is loaded from an optional YAML file, with command-line
overrides taking precedence. The best move is printed in UCI notation
followed by the visit count of every root move.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from _01_oracle.chess_oracle import ChessOracle
from _01_oracle.exceptions import InvalidConfigError, InvalidPositionError
from _01_oracle.logging_config import setup_logging
from _02_search.config import SearchConfig, load_config_from_yaml, search_section
from _02_search.engine import Engine, Iterations, Milliseconds, Until

logger = logging.getLogger(__name__)

DEFAULT_FEN = "6k1/5ppp/3r4/8/8/8/2R2PPP/6K1 w - - 0 1"
DEFAULT_MILLISECONDS = 4_000


def merge_configs(yaml_config: dict[str, Any], cli_args: argparse.Namespace) -> dict[str, Any]:
    """Merge YAML config with CLI arguments; CLI values win when set."""
    config = search_section(yaml_config)

    if cli_args.seed is not None:
        config["seed"] = cli_args.seed
    if cli_args.exploration is not None:
        config["exploration"] = cli_args.exploration
    if cli_args.backpropagate_terminal:
        config["backpropagate_terminal"] = True

    return config


def budget_from_args(args: argparse.Namespace) -> Until:
    if args.iterations is not None:
        return Iterations(args.iterations)
    if args.milliseconds is not None:
        return Milliseconds(args.milliseconds)
    return Milliseconds(DEFAULT_MILLISECONDS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search a chess position with UCT Monte Carlo Tree Search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--fen", type=str, default=DEFAULT_FEN, help="Starting position in FEN")
    parser.add_argument(
        "--variant",
        type=str,
        default="chess",
        help="python-chess variant name (default: chess)",
    )

    budget = parser.add_mutually_exclusive_group()
    budget.add_argument("--milliseconds", type=int, default=None, help="Wall-clock budget in milliseconds")
    budget.add_argument("--iterations", type=int, default=None, help="Number of MCTS iterations")

    parser.add_argument("--config", type=str, default=None, help="Path to YAML configuration file")
    parser.add_argument("--seed", type=int, default=None, help="Override random seed from config")
    parser.add_argument("--exploration", type=float, default=None, help="Override UCT exploration constant")
    parser.add_argument(
        "--backpropagate-terminal",
        action="store_true",
        help="Score terminal leaves directly instead of skipping the iteration",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging (DEBUG level)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Search CLI entry point.

    Returns:
        Exit code (0 for success, 2 for an invalid position or configuration).
    """
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO", format_json=args.json_logs)

    try:
        yaml_config = load_config_from_yaml(args.config) if args.config else {}
        config = SearchConfig.from_dict(merge_configs(yaml_config, args))
        oracle = ChessOracle(args.variant)
        engine = Engine.from_notation(args.fen, oracle, config=config)
        budget = budget_from_args(args)
    except (InvalidConfigError, InvalidPositionError, ValueError) as exc:
        logger.error("%s", exc)
        return 2

    side = "white" if oracle.turn(engine.root_position) else "black"
    print(f"Finding best move for {side}")
    best = engine.go(budget)

    report = engine.report()
    print(f"iterations: {report.iterations}")
    for child in sorted(report.children, key=lambda c: c.simulations, reverse=True):
        print(f"  {child.move.uci():<8} visits={child.simulations:<8} win_rate={child.win_rate:.3f}")
    print(f"bestmove {best.uci() if best is not None else 'none'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
