"""Belief sets tracked by one engine instance."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Set

from ..core.game_state import Piece
from ..core.geometry import Point, Side, home_coordinates

logger = logging.getLogger(__name__)


@dataclass
class BeliefState:
    """
    Best current estimate of hidden game facts.

    - possible_flag_coordinates: cells that might hold the opponent's flag;
      only ever shrinks after reset()
    - unmoved_own_piece_coordinates: own pieces that never moved
    - unrevealed_own_piece_coordinates: own pieces never revealed by combat

    The unmoved and unrevealed sets are independent: a piece can move and
    still be unrevealed.
    """

    possible_flag_coordinates: Set[Point] = field(default_factory=set)
    unmoved_own_piece_coordinates: Set[Point] = field(default_factory=set)
    unrevealed_own_piece_coordinates: Set[Point] = field(default_factory=set)

    def reset(self, opponent: Side, pieces: Iterable[Piece]) -> None:
        """Seed all three sets for a new game."""
        positions = {p.position for p in pieces}
        self.possible_flag_coordinates = set(home_coordinates(opponent))
        self.unmoved_own_piece_coordinates = set(positions)
        self.unrevealed_own_piece_coordinates = set(positions)
        logger.debug(
            f"Beliefs reset: {len(self.possible_flag_coordinates)} flag candidates, "
            f"{len(positions)} own pieces"
        )

    def record_own_move(self, source: Point, target: Point, attacks_opponent: bool) -> None:
        """
        Track one of our own moves.

        An unrevealed piece stays unrevealed on its new cell unless the
        move attacks an opponent piece, which reveals it.
        """
        self.unmoved_own_piece_coordinates.discard(source)
        if source in self.unrevealed_own_piece_coordinates:
            self.unrevealed_own_piece_coordinates.discard(source)
            if not attacks_opponent:
                self.unrevealed_own_piece_coordinates.add(target)

    def rule_out_flag(self, points: Iterable[Point]) -> int:
        """Drop cells from the flag candidates; returns how many were removed."""
        before = len(self.possible_flag_coordinates)
        self.possible_flag_coordinates.difference_update(points)
        return before - len(self.possible_flag_coordinates)
