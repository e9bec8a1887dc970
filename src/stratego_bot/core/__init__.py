"""Core board model: geometry, ranks and game state snapshots."""

from .geometry import (
    BOARD_SIZE,
    DIRECTIONS,
    HOME_ROWS,
    LAKE_COLUMNS,
    LAKES,
    Point,
    Side,
    all_points,
    home_coordinates,
    is_on_opponent_half,
    is_on_own_half,
)
from .rules import ARMY_COMPOSITION, CLASSIC_COMBAT, CombatTable, Outcome, Rank
from .game_state import BoardSetup, Cell, GameState, Move, Piece, create_opening_state, create_state

__all__ = [
    "BOARD_SIZE",
    "DIRECTIONS",
    "HOME_ROWS",
    "LAKE_COLUMNS",
    "LAKES",
    "Point",
    "Side",
    "all_points",
    "home_coordinates",
    "is_on_opponent_half",
    "is_on_own_half",
    "ARMY_COMPOSITION",
    "CLASSIC_COMBAT",
    "CombatTable",
    "Outcome",
    "Rank",
    "BoardSetup",
    "Cell",
    "GameState",
    "Move",
    "Piece",
    "create_opening_state",
    "create_state",
]
