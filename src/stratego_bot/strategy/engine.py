"""
The bot's decision core.

The host calls initialize() once and process() on every turn:

    strategy = Strategy(seed=42)
    setup = strategy.initialize(Side.FIRST)
    ...
    move = strategy.process(state)  # None when it is not our turn

One Strategy instance plays one game. It owns mutable belief state that
must be updated in turn order, so it is not safe to share across threads.
"""

import logging
import random
from typing import List, Optional

from ..core.game_state import BoardSetup, GameState, Move
from ..core.geometry import Point, Side
from ..errors import NoMovesAvailableError, SequencingError
from .beliefs import BeliefState
from .config import StrategyData
from .moves import MoveWithDetails, distance_to_nearest_flag_candidate, generate_moves
from .observer import observe_opponent_move
from .setup import choose_setup

logger = logging.getLogger(__name__)


class Strategy:
    """
    Single-ply greedy Stratego player.

    Scores every legal move of its own pieces with a weighted heuristic and
    plays the best one; between its own turns it narrows down where the
    opponent's flag can be.
    """

    def __init__(
        self,
        data: Optional[StrategyData] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize strategy.

        Args:
            data: Strategy data oriented for the FIRST side
                (default: built-in defaults)
            rng: Random source; takes precedence over ``seed``
            seed: Seed for a private random source
        """
        if data is None:
            from .defaults import default_strategy_data

            data = default_strategy_data()
        self.base_data = data
        self.data = data
        self.rng = rng if rng is not None else random.Random(seed)
        self.beliefs = BeliefState()
        self.my_side: Optional[Side] = None
        self.opponent_side: Optional[Side] = None
        self.has_initialized = False

    def initialize(self, home_side: Side) -> BoardSetup:
        """
        Start a new game on ``home_side`` and choose the initial placement.

        Returns:
            Placement to send to the host
        """
        self.my_side = home_side
        self.opponent_side = home_side.opponent()
        self.data = self.base_data.transposed() if home_side is Side.SECOND else self.base_data

        setup = choose_setup(self.data, self.rng)
        self.beliefs.reset(self.opponent_side, setup.pieces)
        self.has_initialized = True

        logger.info(f"Initialized as {home_side.value} with {len(setup)} pieces")
        return setup

    def _require_initialized(self) -> None:
        if not self.has_initialized:
            raise SequencingError("Processing move before initialization is not possible")

    def process(self, state: GameState) -> Optional[Move]:
        """Our move when it is our turn; otherwise update beliefs and return None."""
        self._require_initialized()

        if state.active_player is self.my_side:
            return self.decide_next_move(state)

        self.observe(state)
        return None

    def generate_moves(self, state: GameState) -> List[MoveWithDetails]:
        """All scored candidate moves for our pieces."""
        self._require_initialized()
        return generate_moves(state, self.my_side, self.beliefs, self.data, self.rng)

    def distance_to_nearest_flag_candidate(self, state: GameState, point: Point) -> float:
        self._require_initialized()
        candidates = [p for p in self.beliefs.possible_flag_coordinates if state.cell_at(p) is not None]
        return distance_to_nearest_flag_candidate(candidates, point, self.data)

    def decide_next_move(self, state: GameState) -> Move:
        """
        Pick the highest scoring move and record it in the belief sets.

        Ties go to the first candidate in enumeration order.

        Raises:
            NoMovesAvailableError: None of our pieces can move
        """
        self._require_initialized()
        candidates = self.generate_moves(state)
        if not candidates:
            raise NoMovesAvailableError(f"No moves available for {self.my_side.value}")

        best = candidates[0]
        for candidate in candidates[1:]:
            if candidate.score > best.score:
                best = candidate

        target_cell = state.cell_at(best.target)
        self.beliefs.record_own_move(
            best.source,
            best.target,
            attacks_opponent=target_cell.is_opponent_piece(self.my_side),
        )

        logger.debug(
            f"Chose {best.rank.value} {best.source} -> {best.target} "
            f"(score {best.score:.2f}, {len(candidates)} candidates)"
        )
        return best.to_move()

    def observe(self, state: GameState) -> None:
        """Update beliefs after the opponent's move."""
        self._require_initialized()
        observe_opponent_move(state, self.my_side, self.beliefs)
