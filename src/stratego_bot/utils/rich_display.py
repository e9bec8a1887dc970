"""
Rich-based rendering of boards and setup statistics.

Provides:
- Board tables for a GameState seen by one side, own pieces highlighted
- Per-cell rank frequency tables for the setup sampler
"""

import logging
from collections import Counter
from typing import Dict, Optional

from rich.console import Console
from rich.table import Table

from ..core.game_state import GameState
from ..core.geometry import BOARD_SIZE, LAKES, Point, Side
from ..core.rules import Rank

console = Console()

WATER = "[blue]~~[/blue]"
EMPTY = "[dim]·[/dim]"


def _board_table(title: str) -> Table:
    table = Table(title=title, show_header=True, box=None, padding=(0, 1))
    table.add_column("y", style="dim", justify="right")
    for x in range(BOARD_SIZE):
        table.add_column(str(x), justify="center")
    return table


def _rows_top_down():
    return range(BOARD_SIZE - 1, -1, -1)


class BoardDisplay:
    """Console output for the CLI."""

    def __init__(self, side: Optional[Side] = None):
        """
        Initialize display.

        Args:
            side: Side whose pieces are highlighted as own pieces
        """
        self.side = side

    def log_info(self, message: str):
        console.print(f"[blue]ℹ[/blue] {message}")

    def log_success(self, message: str):
        console.print(f"[green]✓[/green] {message}")

    def log_error(self, message: str):
        console.print(f"[red]✗[/red] {message}")

    def show_header(self, title: str, side: Side, seed: Optional[int]):
        console.rule(f"[bold blue]{title}[/bold blue]")
        console.print(f"Side: {side.value}")
        console.print(f"Seed: {seed if seed is not None else 'random'}")
        console.print()

    def state_table(self, state: GameState) -> Table:
        """Board as seen by ``self.side``; hidden opponent ranks show as '?'."""
        table = _board_table(f"Board ({state.active_player.value} to move)")
        for y in _rows_top_down():
            row = []
            for x in range(BOARD_SIZE):
                cell = state.cell_at(Point(x, y))
                if cell.is_water:
                    row.append(WATER)
                elif not cell.is_piece:
                    row.append(EMPTY)
                else:
                    code = cell.rank.code if cell.rank is not None else "?"
                    color = "green" if cell.owner is self.side else "red"
                    row.append(f"[{color}]{code}[/{color}]")
            table.add_row(str(y), *row)
        return table

    def statistics_table(self, counts: Dict[Point, Counter], samples: int) -> Table:
        """Most frequent rank per cell with its share of all samples."""
        table = _board_table(f"Most frequent rank per cell ({samples:,} placements)")
        for y in _rows_top_down():
            row = []
            for x in range(BOARD_SIZE):
                point = Point(x, y)
                if point in LAKES:
                    row.append(WATER)
                    continue
                cell_counts = counts.get(point)
                if not cell_counts:
                    row.append(EMPTY)
                    continue
                rank, hits = cell_counts.most_common(1)[0]
                share = hits / samples * 100 if samples else 0.0
                row.append(f"{rank.code} [dim]{share:.0f}%[/dim]")
            table.add_row(str(y), *row)
        return table

    def rank_totals_table(self, counts: Dict[Point, Counter]) -> Table:
        totals: Counter = Counter()
        for cell_counts in counts.values():
            totals.update(cell_counts)

        table = Table(show_header=True, box=None, padding=(0, 1))
        table.add_column("Rank", style="cyan")
        table.add_column("Placed", justify="right")
        for rank in sorted(Rank, key=lambda r: r.strength):
            table.add_row(rank.value, f"{totals.get(rank, 0):,}")
        return table

    def show(self, table: Table):
        console.print(table)


def setup_rich_logging(level: str = "INFO"):
    """Configure logging to work nicely with rich console."""
    from rich.logging import RichHandler

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )
