"""
Board geometry for a 10x10 Stratego board.

Coordinates are (x, y) with x the column and y the row:

    y=9  [ SECOND home rows ]   <- y 6..9
    ...
    y=5  . . W W . . W W . .    <- lakes on rows 4 and 5
    y=4  . . W W . . W W . .
    ...
    y=0  [ FIRST home rows ]    <- y 0..3

A side's board is the other side's board rotated by 180 degrees, which is
what Point.transpose() computes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Tuple

BOARD_SIZE = 10
HOME_ROWS = 4
LAKE_COLUMNS: Tuple[int, ...] = (2, 3, 6, 7)
LAKE_ROWS: Tuple[int, ...] = (4, 5)


@dataclass(frozen=True, order=True)
class Point:
    """Immutable grid coordinate."""

    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def transpose(self) -> "Point":
        """Rotate the point by 180 degrees around the board centre."""
        return Point(BOARD_SIZE - 1 - self.x, BOARD_SIZE - 1 - self.y)

    def distance_to(self, other: "Point") -> int:
        """Manhattan distance to another point."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def is_on_board(self) -> bool:
        return 0 <= self.x < BOARD_SIZE and 0 <= self.y < BOARD_SIZE

    @classmethod
    def parse(cls, text: str) -> "Point":
        """Parse an ``"x,y"`` string as found in strategy files."""
        try:
            x_str, y_str = text.split(",")
            return cls(int(x_str), int(y_str))
        except ValueError:
            raise ValueError(f"Invalid point {text!r}, expected 'x,y'") from None

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


# Left, right, down, up
DIRECTIONS: Tuple[Point, ...] = (Point(-1, 0), Point(1, 0), Point(0, -1), Point(0, 1))

LAKES: FrozenSet[Point] = frozenset(Point(x, y) for x in LAKE_COLUMNS for y in LAKE_ROWS)


class Side(Enum):
    """The two players. FIRST sets up on rows 0-3, SECOND on rows 6-9."""

    FIRST = "first"
    SECOND = "second"

    def opponent(self) -> "Side":
        return Side.SECOND if self is Side.FIRST else Side.FIRST


def all_points() -> List[Point]:
    """Every coordinate of the board, row by row."""
    return [Point(x, y) for y in range(BOARD_SIZE) for x in range(BOARD_SIZE)]


def home_coordinates(side: Side) -> List[Point]:
    """The cells a side may use for its initial placement."""
    points = [Point(x, y) for x in range(BOARD_SIZE) for y in range(HOME_ROWS)]
    if side is Side.SECOND:
        return [p.transpose() for p in points]
    return points


def is_on_own_half(side: Side, point: Point) -> bool:
    if side is Side.FIRST:
        return point.y < BOARD_SIZE // 2
    return point.y >= BOARD_SIZE // 2


def is_on_opponent_half(side: Side, point: Point) -> bool:
    return not is_on_own_half(side, point)
