"""
Game state snapshot as seen by one player.

The host hands the bot a GameState on every turn:
- One Cell per board coordinate (100 cells, water included)
- The side to move
- The last move played, or None on the very first ply

Opponent ranks are only present when they have been revealed; a cell
holding an opponent piece with rank None is an unknown piece.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ..errors import InvalidStateError
from .geometry import LAKES, Point, Side, all_points, home_coordinates, is_on_opponent_half, is_on_own_half
from .rules import CLASSIC_COMBAT, CombatTable, Outcome, Rank


@dataclass(frozen=True)
class Piece:
    """A ranked piece at a board position."""

    rank: Rank
    position: Point

    def transposed(self) -> "Piece":
        return Piece(self.rank, self.position.transpose())


@dataclass(frozen=True)
class Move:
    """A move from one cell to another. Score is informational."""

    source: Point
    target: Point
    score: float = field(default=0.0, compare=False)

    def transposed(self) -> "Move":
        return Move(self.source.transpose(), self.target.transpose(), self.score)

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


@dataclass(frozen=True)
class BoardSetup:
    """Initial placement handed to the host."""

    pieces: Tuple[Piece, ...]

    def transposed(self) -> "BoardSetup":
        return BoardSetup(tuple(p.transposed() for p in self.pieces))

    def by_position(self) -> Dict[Point, Rank]:
        return {p.position: p.rank for p in self.pieces}

    def __len__(self) -> int:
        return len(self.pieces)


@dataclass(frozen=True)
class Cell:
    """
    Snapshot of one board coordinate.

    Combat queries are answered by the attached CombatTable and only for
    pieces whose rank is known.
    """

    coordinate: Point
    is_water: bool = False
    owner: Optional[Side] = None
    rank: Optional[Rank] = None
    combat: CombatTable = field(default=CLASSIC_COMBAT, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate cell invariants."""
        if self.is_water and self.owner is not None:
            raise InvalidStateError(f"Water cell {self.coordinate} cannot hold a piece")
        if self.rank is not None and self.owner is None:
            raise InvalidStateError(f"Empty cell {self.coordinate} cannot have a rank")

    @property
    def is_piece(self) -> bool:
        return self.owner is not None

    @property
    def is_known_piece(self) -> bool:
        return self.is_piece and self.rank is not None

    @property
    def is_unknown_piece(self) -> bool:
        return self.is_piece and self.rank is None

    def is_opponent_piece(self, side: Side) -> bool:
        return self.is_piece and self.owner is not side

    def is_on_own_half(self, side: Side) -> bool:
        return is_on_own_half(side, self.coordinate)

    def is_on_opponent_half(self, side: Side) -> bool:
        return is_on_opponent_half(side, self.coordinate)

    def can_be_defeated_by(self, rank: Rank) -> bool:
        """True when attacking this (known) piece with ``rank`` is a sure win."""
        if not self.is_known_piece:
            return False
        return self.combat.resolve(rank, self.rank) is Outcome.WIN

    def will_cause_defeat_for(self, rank: Rank) -> bool:
        """True when attacking this (known) piece with ``rank`` is a sure loss."""
        if not self.is_known_piece:
            return False
        return self.combat.resolve(rank, self.rank) is Outcome.LOSS


@dataclass(frozen=True)
class GameState:
    """Full board snapshot plus turn information."""

    cells: Tuple[Cell, ...]
    active_player: Side
    last_move: Optional[Move] = None
    _index: Dict[Point, Cell] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[Point, Cell] = {}
        for cell in self.cells:
            if not cell.coordinate.is_on_board():
                raise InvalidStateError(f"Cell {cell.coordinate} is off the board")
            if cell.coordinate in index:
                raise InvalidStateError(f"Duplicate cell {cell.coordinate}")
            index[cell.coordinate] = cell
        object.__setattr__(self, "_index", index)

    def cell_at(self, point: Point) -> Optional[Cell]:
        """Cell at ``point``, or None when the point is off the board."""
        return self._index.get(point)

    def cells_owned_by(self, side: Side) -> List[Cell]:
        return [cell for cell in self.cells if cell.owner is side]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)


def create_state(
    pieces: Mapping[Point, Tuple[Side, Optional[Rank]]],
    active_player: Side,
    last_move: Optional[Move] = None,
    combat: Optional[CombatTable] = None,
) -> GameState:
    """
    Build a full 10x10 snapshot with the standard lakes.

    Args:
        pieces: Occupied cells mapped to (owner, rank); rank None means hidden
        active_player: Side to move
        last_move: Last move played, if any
        combat: Combat table for the cells (default: classic rules)

    Returns:
        GameState covering every board coordinate
    """
    table = combat or CLASSIC_COMBAT
    for point in pieces:
        if not point.is_on_board():
            raise InvalidStateError(f"Piece at {point} is off the board")
        if point in LAKES:
            raise InvalidStateError(f"Piece at {point} is placed in a lake")

    cells = []
    for point in all_points():
        owner, rank = pieces.get(point, (None, None))
        cells.append(
            Cell(coordinate=point, is_water=point in LAKES, owner=owner, rank=rank, combat=table)
        )
    return GameState(cells=tuple(cells), active_player=active_player, last_move=last_move)


def create_opening_state(setup: BoardSetup, side: Side) -> GameState:
    """
    Board at the start of a game as ``side`` sees it.

    Own pieces come from ``setup``; every opponent home cell holds a hidden
    piece. ``side`` is to move.
    """
    opponent = side.opponent()
    pieces: Dict[Point, Tuple[Side, Optional[Rank]]] = {
        point: (opponent, None) for point in home_coordinates(opponent)
    }
    for piece in setup.pieces:
        pieces[piece.position] = (side, piece.rank)
    return create_state(pieces, active_player=side)
