"""
Built-in strategy data.

Formations use the rank codes from core.rules (F=Flag, B=Bomb, 1=Spy,
2=Scout ... 9=General, X=Marshal), rows listed from the front line back
to the home edge.
"""

from typing import Dict, Tuple

from ..core.geometry import BOARD_SIZE, Point
from ..core.rules import ARMY_COMPOSITION, Rank
from .config import FixedStartGrid, StartPositionGrid, StrategyData

DEFAULT_FORMATIONS: Tuple[Tuple[str, ...], ...] = (
    ("26X2529272", "7B4813B864", "35B642B537", "234BFB3562"),
    ("6229272X25", "B48136873B", "5B34226B54", "374BFB6352"),
    ("2X26229725", "48316834B7", "B5625B4576", "FB3B243B32"),
)

# Relative preference per home row: (front, second, third, back)
ROW_PREFERENCES: Dict[Rank, Tuple[int, int, int, int]] = {
    Rank.FLAG: (0, 0, 10, 90),
    Rank.BOMB: (5, 25, 35, 35),
    Rank.SPY: (10, 40, 35, 15),
    Rank.SCOUT: (50, 25, 15, 10),
    Rank.MINER: (10, 20, 35, 35),
    Rank.SERGEANT: (30, 30, 25, 15),
    Rank.LIEUTENANT: (30, 30, 25, 15),
    Rank.CAPTAIN: (35, 30, 20, 15),
    Rank.MAJOR: (35, 35, 20, 10),
    Rank.COLONEL: (35, 40, 15, 10),
    Rank.GENERAL: (40, 40, 15, 5),
    Rank.MARSHAL: (40, 40, 15, 5),
}

# Opponent back rows, seen from the FIRST side: corners and edges hide flags
OPPONENT_FLAG_ROWS: Dict[int, Tuple[int, ...]] = {
    9: (100, 60, 40, 40, 40, 40, 40, 40, 60, 100),
    8: (30, 20, 10, 10, 10, 10, 10, 10, 20, 30),
}


def default_start_position_grids() -> Tuple[StartPositionGrid, ...]:
    """One grid per piece of the classic army, flag first."""
    grids = []
    for rank, count in ARMY_COMPOSITION:
        rows = [[weight] * BOARD_SIZE for weight in ROW_PREFERENCES[rank]]
        grid = StartPositionGrid.from_rows(rank, rows)
        grids.extend([grid] * count)
    return tuple(grids)


def default_opponent_flag_probabilities() -> Dict[Point, int]:
    return {
        Point(x, y): probability
        for y, row in OPPONENT_FLAG_ROWS.items()
        for x, probability in enumerate(row)
    }


def default_strategy_data() -> StrategyData:
    return StrategyData(
        fixed_start_grids=tuple(FixedStartGrid.from_rows(rows) for rows in DEFAULT_FORMATIONS),
        start_position_grids=default_start_position_grids(),
        opponent_flag_probabilities=default_opponent_flag_probabilities(),
    )
