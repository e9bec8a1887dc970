"""Belief updates after the opponent has moved."""

import logging

from ..core.game_state import GameState
from ..core.geometry import Side
from .beliefs import BeliefState

logger = logging.getLogger(__name__)


def observe_opponent_move(state: GameState, side: Side, beliefs: BeliefState) -> None:
    """
    Prune beliefs using the board after an opponent move.

    A cell can only hide the opponent's flag if it holds a piece of
    unknown rank on the opponent's half. Both endpoints of the last move
    are ruled out too: the flag never moves. If the opponent attacked one
    of our pieces, that piece is now revealed.

    Args:
        state: Board after the opponent's move
        side: The side the engine plays
        beliefs: Belief sets to update in place
    """
    ineligible = [
        cell.coordinate
        for cell in state.cells
        if not cell.is_unknown_piece or not cell.is_on_opponent_half(side)
    ]
    removed = beliefs.rule_out_flag(ineligible)

    last_move = state.last_move
    if last_move is not None:
        removed += beliefs.rule_out_flag((last_move.source, last_move.target))
        beliefs.unrevealed_own_piece_coordinates.discard(last_move.target)

    logger.debug(
        f"Ruled out {removed} flag candidates, "
        f"{len(beliefs.possible_flag_coordinates)} remaining"
    )
