"""
Initial piece placement.

Two ways to set up the board:
1. Fixed: one complete formation drawn uniformly from the library
2. Probabilistic: each start grid samples a coordinate for its piece,
   re-drawing while the coordinate is already taken
"""

import logging
import random
from collections import Counter, defaultdict
from typing import Dict, List

from tqdm import tqdm

from ..core.game_state import BoardSetup, Piece
from ..core.geometry import Point
from ..errors import ConfigurationError, PlacementExhaustedError
from .config import StrategyData

logger = logging.getLogger(__name__)


def setup_from_fixed_position(data: StrategyData, rng: random.Random) -> BoardSetup:
    """Pick one formation from the library at random."""
    if not data.fixed_start_grids:
        raise ConfigurationError("No fixed start formations configured")

    index = rng.randrange(len(data.fixed_start_grids))
    logger.debug(f"Using fixed formation {index + 1} of {len(data.fixed_start_grids)}")
    return BoardSetup(tuple(data.fixed_start_grids[index].starting_positions))


def setup_with_probabilities(data: StrategyData, rng: random.Random) -> BoardSetup:
    """
    Sample a placement from the per-piece start grids.

    Grids are processed in order, so earlier grids get first pick of
    their preferred cells.

    Args:
        data: Strategy data holding the start grids
        rng: Random source

    Returns:
        Collision-free BoardSetup with one piece per grid

    Raises:
        PlacementExhaustedError: A grid found no free cell within
            data.max_placement_attempts draws
    """
    if not data.start_position_grids:
        raise ConfigurationError("No start position grids configured")

    placed: Dict[Point, Piece] = {}
    for grid in data.start_position_grids:
        for _ in range(data.max_placement_attempts):
            piece = grid.pick_starting_position(rng)
            if piece.position not in placed:
                placed[piece.position] = piece
                break
        else:
            raise PlacementExhaustedError(grid.rank.value, data.max_placement_attempts)

    pieces: List[Piece] = list(placed.values())
    logger.debug(f"Sampled placement of {len(pieces)} pieces")
    return BoardSetup(tuple(pieces))


def choose_setup(data: StrategyData, rng: random.Random) -> BoardSetup:
    """Fixed formation with the configured chance, sampled placement otherwise."""
    if rng.randrange(100) < data.chance_at_fixed_starting_position:
        logger.info("Setting up from a fixed formation")
        return setup_from_fixed_position(data, rng)
    logger.info("Setting up from start position probabilities")
    return setup_with_probabilities(data, rng)


def collect_placement_statistics(
    data: StrategyData,
    rng: random.Random,
    samples: int,
    include_fixed: bool = False,
    show_progress: bool = True,
) -> Dict[Point, Counter]:
    """
    Run the setup generator repeatedly and count ranks per cell.

    Args:
        data: Strategy data to sample from
        rng: Random source
        samples: Number of placements to generate
        include_fixed: Go through choose_setup() instead of sampling only
        show_progress: Show a tqdm progress bar

    Returns:
        Mapping of coordinate -> Counter of ranks placed there
    """
    counts: Dict[Point, Counter] = defaultdict(Counter)
    generate = choose_setup if include_fixed else setup_with_probabilities

    for _ in tqdm(range(samples), desc="Placements", unit=" setup", disable=not show_progress):
        for piece in generate(data, rng).pieces:
            counts[piece.position][piece.rank] += 1

    logger.info(f"Collected statistics over {samples:,} placements")
    return dict(counts)
