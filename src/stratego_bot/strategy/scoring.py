"""
Move scoring.

A candidate's score is built in four steps:
1. Sum the weights of every feature rule that holds (SCORE_RULES)
2. Add the flag-approach bonus when the move gets closer to a flag
   candidate; long scout jumps multiply it by the distance gained
3. Apply the rank boost (RANK_BOOSTS) as a percentage; for negative
   scores the boost sign is flipped so it always favours the rank
4. Apply a random fuzz percentage in [0, fuzzyness_factor)
"""

import logging
import random
from typing import TYPE_CHECKING, Callable, Dict, Tuple

from ..core.rules import Rank
from .config import StrategyData

if TYPE_CHECKING:
    from .moves import MoveWithDetails

logger = logging.getLogger(__name__)

FeatureRule = Tuple[str, Callable[["MoveWithDetails"], bool], str]

# (name, feature predicate, StrategyData weight field)
SCORE_RULES: Tuple[FeatureRule, ...] = (
    ("decisive_victory", lambda m: m.will_be_decisive_victory, "decisive_victory_points"),
    ("decisive_loss", lambda m: m.will_be_decisive_loss, "decisive_loss_points"),
    (
        "unknown_battle_own_half",
        lambda m: m.will_be_unknown_battle and m.is_battle_on_own_half,
        "unknown_battle_own_half_points",
    ),
    (
        "unknown_battle_opponent_half",
        lambda m: m.will_be_unknown_battle and m.is_battle_on_opponent_half,
        "unknown_battle_opponent_half_points",
    ),
    (
        "towards_opponent",
        lambda m: m.is_move_towards_opponent_half,
        "bonus_points_for_move_towards_opponent",
    ),
    (
        "within_opponent_area",
        lambda m: m.is_move_within_opponent_half,
        "bonus_points_for_move_within_opponent_area",
    ),
    (
        "first_move",
        lambda m: m.is_moving_for_first_time,
        "bonus_points_for_moving_piece_for_the_first_time",
    ),
    (
        "unrevealed_piece",
        lambda m: m.is_move_for_unrevealed_piece,
        "bonus_points_for_moving_unrevealed_piece",
    ),
)

RANK_BOOSTS: Dict[Rank, str] = {
    Rank.SPY: "boost_for_spy",
    Rank.SCOUT: "boost_for_scout",
    Rank.MINER: "boost_for_miner",
    Rank.GENERAL: "boost_for_general",
    Rank.MARSHAL: "boost_for_marshal",
}


def feature_points(move: "MoveWithDetails", data: StrategyData) -> float:
    """Sum of the weights of all feature rules that hold for the move."""
    return sum(getattr(data, weight) for _, applies, weight in SCORE_RULES if applies(move))


def flag_approach_points(move: "MoveWithDetails", data: StrategyData) -> float:
    change = move.net_change_in_distance_to_potential_flag
    if change >= 0:
        return 0.0
    bonus = data.bonus_points_for_moves_getting_closer_to_potential_flags
    if data.scout_jumps_to_potential_flags_multiplication and move.steps > 1:
        return bonus * abs(change)
    return bonus


def apply_rank_boost(score: float, rank: Rank, data: StrategyData) -> float:
    field_name = RANK_BOOSTS.get(rank)
    if field_name is None:
        return score
    boost = getattr(data, field_name)
    multiplier = (-boost if score < 0 else boost) + 100
    return score * multiplier / 100


def apply_fuzz(score: float, data: StrategyData, rng: random.Random) -> float:
    if data.fuzzyness_factor <= 0:
        return score
    return score * (rng.randrange(data.fuzzyness_factor) + 100) / 100


def score_move(move: "MoveWithDetails", data: StrategyData, rng: random.Random) -> float:
    """Score a candidate move; the result is also stored on ``move.score``."""
    score = feature_points(move, data) + flag_approach_points(move, data)
    score = apply_rank_boost(score, move.rank, data)
    score = apply_fuzz(score, data, rng)
    move.score = score
    return score
