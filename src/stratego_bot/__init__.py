"""Decision core of a heuristic Stratego bot."""

from .core import BoardSetup, Cell, GameState, Move, Piece, Point, Rank, Side, create_state
from .errors import (
    ConfigurationError,
    EmptyFlagCandidatesError,
    InvalidStateError,
    NoMovesAvailableError,
    PlacementExhaustedError,
    SequencingError,
    StrategoBotError,
    UnknownMatchupError,
)
from .strategy import Strategy, StrategyData, default_strategy_data, load_strategy_data

__version__ = "0.1.0"

__all__ = [
    "BoardSetup",
    "Cell",
    "GameState",
    "Move",
    "Piece",
    "Point",
    "Rank",
    "Side",
    "create_state",
    "ConfigurationError",
    "EmptyFlagCandidatesError",
    "InvalidStateError",
    "NoMovesAvailableError",
    "PlacementExhaustedError",
    "SequencingError",
    "StrategoBotError",
    "UnknownMatchupError",
    "Strategy",
    "StrategyData",
    "default_strategy_data",
    "load_strategy_data",
]
