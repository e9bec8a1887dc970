"""
Candidate move generation and feature extraction.

Every own piece except Flag and Bomb casts a ray in each of the four
directions. Normal pieces look one step ahead; Scouts keep going until
the ray is blocked. A ray stops:
- before a cell that is off the board, water, or holds an own piece
- after a cell holding an opponent piece (no jumping over pieces)

Each emitted candidate carries the features the scorer needs and is
scored on the spot.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterable, List

from ..core.game_state import Cell, GameState, Move
from ..core.geometry import DIRECTIONS, Point, Side
from ..core.rules import Rank
from ..errors import EmptyFlagCandidatesError
from .beliefs import BeliefState
from .config import StrategyData
from .scoring import score_move

logger = logging.getLogger(__name__)


@dataclass
class MoveWithDetails:
    """A candidate move annotated with tactical and positional features."""

    source: Point
    target: Point
    rank: Rank
    steps: int = 1
    will_be_decisive_victory: bool = False
    will_be_decisive_loss: bool = False
    will_be_unknown_battle: bool = False
    is_battle_on_own_half: bool = False
    is_battle_on_opponent_half: bool = False
    is_move_towards_opponent_half: bool = False
    is_move_within_opponent_half: bool = False
    is_moving_for_first_time: bool = False
    is_move_for_unrevealed_piece: bool = False
    net_change_in_distance_to_potential_flag: float = 0.0
    score: float = 0.0

    def to_move(self) -> Move:
        return Move(self.source, self.target, self.score)


def is_move_towards_opponent_half(side: Side, source: Point, target: Point) -> bool:
    """Forward move that starts outside the opponent's back rows."""
    if side is Side.FIRST:
        return source.y < 6 and target.y > source.y
    return source.y > 3 and target.y < source.y


def is_move_within_opponent_half(side: Side, source: Point, target: Point) -> bool:
    """Move that starts and ends inside the opponent's home rows."""
    if side is Side.FIRST:
        return source.y > 5 and target.y > 5
    return source.y < 4 and target.y < 4


def distance_to_nearest_flag_candidate(
    candidates: Iterable[Point], point: Point, data: StrategyData
) -> float:
    """
    Heuristic distance from ``point`` to the closest possible flag.

    Candidates in a lake column get ``flag_lane_penalty`` added, since
    reaching them tends to route around water. Candidates with a flag
    probability p are pulled closer by dividing the distance by
    (scale + p) / scale.

    Raises:
        EmptyFlagCandidatesError: No candidates left
    """
    best = None
    for candidate in candidates:
        dist = float(point.distance_to(candidate))
        if candidate.x in data.lake_columns:
            dist += data.flag_lane_penalty
        probability = data.opponent_flag_probabilities.get(candidate)
        if probability is not None:
            scale = data.flag_probability_scale
            dist /= (scale + probability) / scale
        if best is None or dist < best:
            best = dist

    if best is None:
        raise EmptyFlagCandidatesError(
            "No possible flag coordinates left", context={"point": point}
        )
    return best


def generate_moves_for(
    origin: Cell,
    state: GameState,
    side: Side,
    beliefs: BeliefState,
    data: StrategyData,
    rng: random.Random,
) -> List[MoveWithDetails]:
    """All scored candidates for the piece on ``origin``."""
    rank = origin.rank
    if rank is None or not rank.is_movable:
        return []

    flag_candidates = beliefs.possible_flag_coordinates
    source = origin.coordinate
    source_distance = distance_to_nearest_flag_candidate(flag_candidates, source, data)
    is_first_move = source in beliefs.unmoved_own_piece_coordinates
    is_unrevealed = source in beliefs.unrevealed_own_piece_coordinates

    result: List[MoveWithDetails] = []
    for delta in DIRECTIONS:
        target = source
        steps = 0
        while steps < 1 or rank.is_long_range:
            steps += 1
            target = target + delta
            cell = state.cell_at(target)
            if cell is None or cell.is_water or cell.owner is side:
                break

            move = MoveWithDetails(
                source=source,
                target=target,
                rank=rank,
                steps=steps,
                will_be_decisive_victory=cell.can_be_defeated_by(rank),
                will_be_decisive_loss=cell.will_cause_defeat_for(rank),
                will_be_unknown_battle=cell.is_unknown_piece,
                is_battle_on_own_half=cell.is_piece and cell.is_on_own_half(side),
                is_battle_on_opponent_half=cell.is_piece and cell.is_on_opponent_half(side),
                is_move_towards_opponent_half=is_move_towards_opponent_half(side, source, target),
                is_move_within_opponent_half=is_move_within_opponent_half(side, source, target),
                is_moving_for_first_time=is_first_move,
                is_move_for_unrevealed_piece=is_unrevealed,
                net_change_in_distance_to_potential_flag=(
                    distance_to_nearest_flag_candidate(flag_candidates, target, data)
                    - source_distance
                ),
            )
            score_move(move, data, rng)
            result.append(move)

            if cell.is_piece:
                break

    return result


def generate_moves(
    state: GameState,
    side: Side,
    beliefs: BeliefState,
    data: StrategyData,
    rng: random.Random,
) -> List[MoveWithDetails]:
    """Scored candidates for every piece of ``side``, in board order."""
    moves: List[MoveWithDetails] = []
    for cell in state.cells_owned_by(side):
        moves.extend(generate_moves_for(cell, state, side, beliefs, data, rng))
    logger.debug(f"Generated {len(moves)} candidate moves for {side.value}")
    return moves
