"""Board and random-source helpers for tests."""

import random

from stratego_bot.core import Point, Side, create_state


class StubRandom(random.Random):
    """Random source whose randrange() always returns a fixed offset."""

    offset = 0

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            start, stop = 0, start
        return min(start + self.offset, stop - 1)


def stub_random(offset: int = 0) -> StubRandom:
    rng = StubRandom(0)
    rng.offset = offset
    return rng


def board(pieces, active=Side.FIRST, last_move=None):
    """Build a state from {(x, y): (side, rank)}."""
    return create_state(
        {Point(x, y): value for (x, y), value in pieces.items()},
        active_player=active,
        last_move=last_move,
    )


def own(rank):
    return (Side.FIRST, rank)


def enemy(rank=None):
    return (Side.SECOND, rank)
