"""Setup generation, move scoring and belief tracking."""

from .beliefs import BeliefState
from .config import (
    WEIGHT_FIELDS,
    FixedStartGrid,
    StartPositionGrid,
    StrategyData,
    load_strategy_data,
    strategy_data_from_dict,
)
from .defaults import default_strategy_data
from .engine import Strategy
from .moves import (
    MoveWithDetails,
    distance_to_nearest_flag_candidate,
    generate_moves,
    generate_moves_for,
    is_move_towards_opponent_half,
    is_move_within_opponent_half,
)
from .observer import observe_opponent_move
from .scoring import RANK_BOOSTS, SCORE_RULES, score_move
from .setup import (
    choose_setup,
    collect_placement_statistics,
    setup_from_fixed_position,
    setup_with_probabilities,
)

__all__ = [
    "BeliefState",
    "WEIGHT_FIELDS",
    "FixedStartGrid",
    "StartPositionGrid",
    "StrategyData",
    "load_strategy_data",
    "strategy_data_from_dict",
    "default_strategy_data",
    "Strategy",
    "MoveWithDetails",
    "distance_to_nearest_flag_candidate",
    "generate_moves",
    "generate_moves_for",
    "is_move_towards_opponent_half",
    "is_move_within_opponent_half",
    "observe_opponent_move",
    "RANK_BOOSTS",
    "SCORE_RULES",
    "score_move",
    "choose_setup",
    "collect_placement_statistics",
    "setup_from_fixed_position",
    "setup_with_probabilities",
]
