"""
Static strategy data: scoring weights, start formations and probability grids.

All coordinates are stored for the FIRST side (home rows y 0-3). An engine
playing SECOND works on ``data.transposed()``, its own copy; the shared
instance is never mutated.

Strategy files are JSON documents:

    {
      "weights": {"decisive_victory_points": 60, "fuzzyness_factor": 5},
      "fixed_formations": [["2625292272", "...", "...", "..."]],
      "start_position_grids": [{"rank": "Flag", "rows": [[0, ...], ...]}],
      "opponent_flag_probabilities": {"0,9": 80, "9,9": 80}
    }

Formation and grid rows are listed from the front line (y=3) back to the
home edge (y=0). Any key left out falls back to the built-in defaults.
"""

import json
import logging
import math
import random
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..core.game_state import Piece
from ..core.geometry import BOARD_SIZE, HOME_ROWS, LAKE_COLUMNS, Point
from ..core.rules import Rank
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


def _row_points(rows: Sequence[Sequence[Any]]) -> List[Tuple[Point, Any]]:
    """Pair every entry of front-to-back home rows with its coordinate."""
    if not isinstance(rows, (list, tuple)) or not all(isinstance(row, (str, list, tuple)) for row in rows):
        raise ConfigurationError(f"Expected a list of {HOME_ROWS} rows, got {rows!r}")
    if len(rows) != HOME_ROWS:
        raise ConfigurationError(f"Expected {HOME_ROWS} rows, got {len(rows)}")
    result = []
    for i, row in enumerate(rows):
        if len(row) != BOARD_SIZE:
            raise ConfigurationError(
                f"Row {i} has {len(row)} entries, expected {BOARD_SIZE}",
                context={"row": row},
            )
        y = HOME_ROWS - 1 - i
        for x, value in enumerate(row):
            result.append((Point(x, y), value))
    return result


@dataclass(frozen=True)
class FixedStartGrid:
    """A complete hand-made formation."""

    starting_positions: Tuple[Piece, ...]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "FixedStartGrid":
        cells = _row_points(rows)
        try:
            pieces = tuple(Piece(Rank.from_code(code), point) for point, code in cells)
        except ValueError as e:
            raise ConfigurationError(str(e), context={"rows": list(rows)}) from e
        return cls(pieces)

    def transposed(self) -> "FixedStartGrid":
        return FixedStartGrid(tuple(p.transposed() for p in self.starting_positions))


@dataclass(frozen=True)
class StartPositionGrid:
    """
    Where one piece of a given rank likes to start.

    Each coordinate carries a non-negative weight; sampling picks a
    coordinate with probability proportional to its weight.
    """

    rank: Rank
    weights: Tuple[Tuple[Point, int], ...]

    def __post_init__(self) -> None:
        """Validate grid invariants."""
        if any(w < 0 for _, w in self.weights):
            raise ConfigurationError(f"Negative weight in {self.rank.value} grid")
        if sum(w for _, w in self.weights) <= 0:
            raise ConfigurationError(f"{self.rank.value} grid has no positive weight")

    @classmethod
    def from_rows(cls, rank: Rank, rows: Sequence[Sequence[int]]) -> "StartPositionGrid":
        weights = []
        for point, value in _row_points(rows):
            try:
                weight = int(value)
            except (TypeError, ValueError, OverflowError):
                raise ConfigurationError(
                    f"Non-numeric weight {value!r} at {point} in {rank.value} grid"
                ) from None
            if weight > 0:
                weights.append((point, weight))
        return cls(rank, tuple(weights))

    def pick_starting_position(self, rng: random.Random) -> Piece:
        points = [p for p, _ in self.weights]
        weights = [w for _, w in self.weights]
        return Piece(self.rank, rng.choices(points, weights=weights)[0])

    def transposed(self) -> "StartPositionGrid":
        return StartPositionGrid(self.rank, tuple((p.transpose(), w) for p, w in self.weights))


@dataclass(frozen=True)
class StrategyData:
    """
    Tunable knobs for setup and move scoring.

    Points are added to a move's score when the matching feature holds.
    Boosts and fuzz are percentages applied multiplicatively afterwards.
    """

    chance_at_fixed_starting_position: int = 50

    decisive_victory_points: float = 60.0
    decisive_loss_points: float = -100.0
    unknown_battle_own_half_points: float = -5.0
    unknown_battle_opponent_half_points: float = 10.0
    bonus_points_for_move_towards_opponent: float = 4.0
    bonus_points_for_move_within_opponent_area: float = 2.0
    bonus_points_for_moving_piece_for_the_first_time: float = 1.0
    bonus_points_for_moving_unrevealed_piece: float = -1.0
    bonus_points_for_moves_getting_closer_to_potential_flags: float = 6.0
    scout_jumps_to_potential_flags_multiplication: bool = True

    boost_for_spy: int = -30
    boost_for_scout: int = 10
    boost_for_miner: int = 15
    boost_for_general: int = -10
    boost_for_marshal: int = -20

    fuzzyness_factor: int = 10

    # Flag distance heuristic tuning
    flag_lane_penalty: float = 3.0
    lake_columns: Tuple[int, ...] = LAKE_COLUMNS
    flag_probability_scale: float = 100.0

    max_placement_attempts: int = 10_000

    fixed_start_grids: Tuple[FixedStartGrid, ...] = ()
    start_position_grids: Tuple[StartPositionGrid, ...] = ()
    opponent_flag_probabilities: Mapping[Point, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        """Validate scalar ranges and freeze the probability mapping."""
        object.__setattr__(
            self, "opponent_flag_probabilities", MappingProxyType(dict(self.opponent_flag_probabilities))
        )
        if not 0 <= self.chance_at_fixed_starting_position <= 100:
            raise ConfigurationError("chance_at_fixed_starting_position must be within 0..100")
        if self.fuzzyness_factor < 0:
            raise ConfigurationError("fuzzyness_factor cannot be negative")
        if self.max_placement_attempts < 1:
            raise ConfigurationError("max_placement_attempts must be at least 1")
        if self.flag_probability_scale <= 0:
            raise ConfigurationError("flag_probability_scale must be positive")

    def transposed(self) -> "StrategyData":
        """Copy of the data with every coordinate rotated to the other side."""
        return replace(
            self,
            fixed_start_grids=tuple(g.transposed() for g in self.fixed_start_grids),
            start_position_grids=tuple(g.transposed() for g in self.start_position_grids),
            opponent_flag_probabilities={
                p.transpose(): v for p, v in self.opponent_flag_probabilities.items()
            },
        )


_DATA_FIELDS = {"fixed_start_grids", "start_position_grids", "opponent_flag_probabilities"}
WEIGHT_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(StrategyData) if f.name not in _DATA_FIELDS)
_WEIGHT_TYPES = {f.name: f.type for f in fields(StrategyData) if f.name not in _DATA_FIELDS}
_DOCUMENT_KEYS = {"weights", "fixed_formations", "start_position_grids", "opponent_flag_probabilities"}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coerce_weight(name: str, value: Any) -> Any:
    """Check one weight against the type its field declares."""
    expected = _WEIGHT_TYPES[name]
    if expected is bool:
        if not isinstance(value, bool):
            raise ConfigurationError(f"{name} must be true or false, got {value!r}")
        return value
    if expected is int:
        if not _is_number(value) or (isinstance(value, float) and not value.is_integer()):
            raise ConfigurationError(f"{name} must be a whole number, got {value!r}")
        return int(value)
    if expected is float:
        if not _is_number(value):
            raise ConfigurationError(f"{name} must be a number, got {value!r}")
        return float(value)
    # lake_columns
    if not isinstance(value, (list, tuple)) or not all(isinstance(x, int) and not isinstance(x, bool) for x in value):
        raise ConfigurationError(f"{name} must be a list of column numbers, got {value!r}")
    return tuple(value)


def _parse_weights(raw: Mapping[str, Any]) -> Dict[str, Any]:
    unknown = sorted(set(raw) - set(WEIGHT_FIELDS))
    if unknown:
        raise ConfigurationError(f"Unknown weight keys: {', '.join(unknown)}")
    return {name: _coerce_weight(name, value) for name, value in raw.items()}


def _parse_grids(raw: Sequence[Mapping[str, Any]]) -> Tuple[StartPositionGrid, ...]:
    grids = []
    for entry in raw:
        try:
            rank = Rank(entry["rank"])
        except (KeyError, TypeError, ValueError):
            raise ConfigurationError(f"Invalid grid rank in {entry!r}") from None
        grids.append(StartPositionGrid.from_rows(rank, entry.get("rows", ())))
    return tuple(grids)


def _parse_flag_probabilities(raw: Mapping[str, Any]) -> Dict[Point, int]:
    probabilities = {}
    for key, value in raw.items():
        try:
            point = Point.parse(key)
        except ValueError as e:
            raise ConfigurationError(str(e)) from None
        if not point.is_on_board():
            raise ConfigurationError(f"Flag probability for off-board point {point}")
        if not _is_number(value) or not math.isfinite(value) or value < 0:
            raise ConfigurationError(f"Flag probability for {point} must be a non-negative number, got {value!r}")
        probabilities[point] = int(value)
    return probabilities


def _section(document: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = document.get(key, default)
    if not isinstance(value, kind):
        raise ConfigurationError(f"'{key}' must be a JSON {'object' if kind is dict else 'array'}")
    return value


def strategy_data_from_dict(document: Mapping[str, Any], base: Optional[StrategyData] = None) -> StrategyData:
    """
    Build strategy data from a parsed strategy document.

    Args:
        document: Parsed JSON document
        base: Data supplying every value the document leaves out
            (default: built-in defaults)

    Returns:
        New StrategyData
    """
    if base is None:
        from .defaults import default_strategy_data

        base = default_strategy_data()

    unknown = sorted(set(document) - _DOCUMENT_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown strategy keys: {', '.join(unknown)}")

    overrides: Dict[str, Any] = _parse_weights(_section(document, "weights", dict, {}))
    if "fixed_formations" in document:
        overrides["fixed_start_grids"] = tuple(
            FixedStartGrid.from_rows(rows) for rows in _section(document, "fixed_formations", list, [])
        )
    if "start_position_grids" in document:
        overrides["start_position_grids"] = _parse_grids(_section(document, "start_position_grids", list, []))
    if "opponent_flag_probabilities" in document:
        overrides["opponent_flag_probabilities"] = _parse_flag_probabilities(
            _section(document, "opponent_flag_probabilities", dict, {})
        )

    try:
        return replace(base, **overrides)
    except TypeError as e:
        raise ConfigurationError(f"Invalid strategy data: {e}") from e


def load_strategy_data(path: Union[str, Path]) -> StrategyData:
    """Load a JSON strategy file on top of the built-in defaults."""
    path = Path(path)
    logger.info(f"Loading strategy data from {path}")
    try:
        with path.open(encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read strategy file {path}: {e}") from e
    if not isinstance(document, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    return strategy_data_from_dict(document)
