"""
Ranks and combat rules.

Combat outcomes are looked up in a CombatTable keyed by
(attacker, defender). The bot never hard-codes who beats whom; cells
delegate to whatever table the host supplies. CombatTable.classic()
builds the standard rules:

- Any piece captures the Flag
- Only the Miner defuses a Bomb; everything else loses against it
- The Spy wins when it attacks the Marshal
- Otherwise the higher rank wins and equal ranks remove each other
"""

from enum import Enum
from typing import Dict, Iterable, Mapping, Tuple

from ..errors import UnknownMatchupError


class Rank(Enum):
    """Closed rank vocabulary. Values are the names used in strategy files."""

    FLAG = "Flag"
    BOMB = "Bomb"
    SPY = "Spy"
    SCOUT = "Scout"
    MINER = "Miner"
    SERGEANT = "Sergeant"
    LIEUTENANT = "Lieutenant"
    CAPTAIN = "Captain"
    MAJOR = "Major"
    COLONEL = "Colonel"
    GENERAL = "General"
    MARSHAL = "Marshal"

    @property
    def code(self) -> str:
        """Single-character code used for formations."""
        return _CODES[self]

    @property
    def strength(self) -> int:
        return _STRENGTHS[self]

    @property
    def is_movable(self) -> bool:
        return self not in (Rank.FLAG, Rank.BOMB)

    @property
    def is_long_range(self) -> bool:
        return self is Rank.SCOUT

    @classmethod
    def from_code(cls, code: str) -> "Rank":
        try:
            return _BY_CODE[code.upper()]
        except KeyError:
            raise ValueError(f"Unknown rank code {code!r}") from None


_CODES: Dict[Rank, str] = {
    Rank.FLAG: "F",
    Rank.BOMB: "B",
    Rank.SPY: "1",
    Rank.SCOUT: "2",
    Rank.MINER: "3",
    Rank.SERGEANT: "4",
    Rank.LIEUTENANT: "5",
    Rank.CAPTAIN: "6",
    Rank.MAJOR: "7",
    Rank.COLONEL: "8",
    Rank.GENERAL: "9",
    Rank.MARSHAL: "X",
}
_BY_CODE: Dict[str, Rank] = {code: rank for rank, code in _CODES.items()}

# Flag and Bomb strengths only matter for display ordering
_STRENGTHS: Dict[Rank, int] = {
    Rank.FLAG: 0,
    Rank.SPY: 1,
    Rank.SCOUT: 2,
    Rank.MINER: 3,
    Rank.SERGEANT: 4,
    Rank.LIEUTENANT: 5,
    Rank.CAPTAIN: 6,
    Rank.MAJOR: 7,
    Rank.COLONEL: 8,
    Rank.GENERAL: 9,
    Rank.MARSHAL: 10,
    Rank.BOMB: 11,
}

# Classic army composition, 40 pieces
ARMY_COMPOSITION: Tuple[Tuple[Rank, int], ...] = (
    (Rank.FLAG, 1),
    (Rank.BOMB, 6),
    (Rank.SPY, 1),
    (Rank.SCOUT, 8),
    (Rank.MINER, 5),
    (Rank.SERGEANT, 4),
    (Rank.LIEUTENANT, 4),
    (Rank.CAPTAIN, 4),
    (Rank.MAJOR, 3),
    (Rank.COLONEL, 2),
    (Rank.GENERAL, 1),
    (Rank.MARSHAL, 1),
)


class Outcome(Enum):
    """Battle result from the attacker's point of view."""

    WIN = "win"
    LOSS = "loss"
    TIE = "tie"


class CombatTable:
    """Lookup of battle outcomes keyed by (attacker, defender)."""

    def __init__(self, outcomes: Mapping[Tuple[Rank, Rank], Outcome]):
        self._outcomes: Dict[Tuple[Rank, Rank], Outcome] = dict(outcomes)

    def resolve(self, attacker: Rank, defender: Rank) -> Outcome:
        try:
            return self._outcomes[(attacker, defender)]
        except KeyError:
            raise UnknownMatchupError(
                f"No combat outcome for {attacker.value} attacking {defender.value}"
            ) from None

    def __len__(self) -> int:
        return len(self._outcomes)

    @classmethod
    def classic(cls) -> "CombatTable":
        return cls(
            {
                (attacker, defender): _classic_outcome(attacker, defender)
                for attacker in _movable_ranks()
                for defender in Rank
            }
        )


def _movable_ranks() -> Iterable[Rank]:
    return (rank for rank in Rank if rank.is_movable)


def _classic_outcome(attacker: Rank, defender: Rank) -> Outcome:
    if defender is Rank.FLAG:
        return Outcome.WIN
    if defender is Rank.BOMB:
        return Outcome.WIN if attacker is Rank.MINER else Outcome.LOSS
    if attacker is Rank.SPY and defender is Rank.MARSHAL:
        return Outcome.WIN
    if attacker.strength > defender.strength:
        return Outcome.WIN
    if attacker.strength < defender.strength:
        return Outcome.LOSS
    return Outcome.TIE


CLASSIC_COMBAT = CombatTable.classic()
