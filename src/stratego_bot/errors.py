"""
Error hierarchy for the Stratego bot.

Every exception raised on purpose by the bot derives from StrategoBotError,
so a host can catch the whole family in one place:

    try:
        move = strategy.process(state)
    except SequencingError:
        ...  # integration bug: initialize() was never called
"""

from typing import Any, Dict, Optional


class StrategoBotError(Exception):
    """
    Base exception for all bot errors.

    Attributes:
        message: Human-readable description
        context: Extra key/value details for diagnostics
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class SequencingError(StrategoBotError, RuntimeError):
    """A move was requested before the engine was initialized."""


class PlacementExhaustedError(StrategoBotError, RuntimeError):
    """The probabilistic sampler could not place a piece within its retry bound."""

    def __init__(self, rank: Any, attempts: int):
        super().__init__(
            f"Could not find a free start position for {rank} after {attempts} attempts",
            context={"rank": rank, "attempts": attempts},
        )
        self.rank = rank
        self.attempts = attempts


class EmptyFlagCandidatesError(StrategoBotError, RuntimeError):
    """The flag belief set is empty; beliefs were pruned too eagerly."""


class NoMovesAvailableError(StrategoBotError, RuntimeError):
    """None of the own pieces has a move on the given board."""


class ConfigurationError(StrategoBotError, ValueError):
    """Strategy data is missing or malformed."""


class InvalidStateError(StrategoBotError, ValueError):
    """A board snapshot violates basic board invariants."""


class UnknownMatchupError(StrategoBotError, KeyError):
    """The combat table holds no outcome for an (attacker, defender) pair."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return StrategoBotError.__str__(self)


__all__ = [
    "StrategoBotError",
    "SequencingError",
    "PlacementExhaustedError",
    "EmptyFlagCandidatesError",
    "NoMovesAvailableError",
    "ConfigurationError",
    "InvalidStateError",
    "UnknownMatchupError",
]
