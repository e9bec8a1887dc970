"""
Main CLI for the Stratego bot.
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from ..core.game_state import create_opening_state
from ..core.geometry import Side
from ..errors import StrategoBotError
from ..strategy import Strategy, collect_placement_statistics, default_strategy_data, load_strategy_data
from ..strategy.config import StrategyData
from ..utils.rich_display import BoardDisplay, setup_rich_logging


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load_data(args) -> StrategyData:
    if args.config:
        data = load_strategy_data(args.config)
        BoardDisplay().log_info(f"Strategy data loaded from {args.config}")
        return data
    return default_strategy_data()


def setup_command(args) -> int:
    """Initialize an engine, show the opening board and the move it would open with."""
    setup_logging(args.log_level)
    side = Side(args.side)
    display = BoardDisplay(side=side)

    strategy = Strategy(data=_load_data(args), seed=args.seed)
    display.show_header("Stratego Bot - Initial Placement", side, args.seed)
    setup = strategy.initialize(side)
    opening = create_opening_state(setup, side)

    display.show(display.state_table(opening))
    display.log_success(
        f"{len(setup)} pieces placed, "
        f"{len(strategy.beliefs.possible_flag_coordinates)} flag candidates tracked"
    )
    display.log_info(f"Opening move: {strategy.process(opening)}")
    return 0


def sample_command(args) -> int:
    """Sample many placements and show the per-cell rank distribution."""
    if args.rich_logging:
        setup_rich_logging(args.log_level)
    else:
        setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    side = Side(args.side)
    data = _load_data(args)
    if side is Side.SECOND:
        data = data.transposed()

    display = BoardDisplay(side=side)
    display.show_header("Stratego Bot - Placement Statistics", side, args.seed)
    logger.info(f"Sampling {args.samples:,} placements")

    counts = collect_placement_statistics(
        data,
        random.Random(args.seed),
        args.samples,
        include_fixed=args.include_fixed,
    )

    display.show(display.statistics_table(counts, args.samples))
    display.show(display.rank_totals_table(counts))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stratego heuristic bot")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument("--config", default=None, help="Path to a JSON strategy file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--side",
        choices=[s.value for s in Side],
        default=Side.FIRST.value,
        help="Side the bot plays",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    setup_parser = subparsers.add_parser("setup", help="Show an initial placement and opening move")
    setup_parser.set_defaults(func=setup_command)

    sample_parser = subparsers.add_parser("sample", help="Sample placement statistics")
    sample_parser.add_argument(
        "--samples", type=int, default=1000, help="Number of placements to generate"
    )
    sample_parser.add_argument(
        "--include-fixed",
        action="store_true",
        help="Mix in fixed formations with the configured chance",
    )
    sample_parser.add_argument(
        "--rich-logging", action="store_true", help="Route log output through rich"
    )
    sample_parser.set_defaults(func=sample_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except StrategoBotError as e:
        BoardDisplay().log_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
