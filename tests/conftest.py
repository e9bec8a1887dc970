"""Shared fixtures."""

from dataclasses import replace

import pytest

from stratego_bot.strategy import StrategyData, default_strategy_data


@pytest.fixture
def quiet_data() -> StrategyData:
    """Default data without fuzz, so scores are deterministic."""
    return replace(default_strategy_data(), fuzzyness_factor=0)


@pytest.fixture
def scoring_data() -> StrategyData:
    """Default weights, no fuzz, no flag probabilities."""
    return replace(default_strategy_data(), fuzzyness_factor=0, opponent_flag_probabilities={})


@pytest.fixture
def flat_data() -> StrategyData:
    """Every weight zero: all candidates score 0."""
    return replace(
        default_strategy_data(),
        decisive_victory_points=0,
        decisive_loss_points=0,
        unknown_battle_own_half_points=0,
        unknown_battle_opponent_half_points=0,
        bonus_points_for_move_towards_opponent=0,
        bonus_points_for_move_within_opponent_area=0,
        bonus_points_for_moving_piece_for_the_first_time=0,
        bonus_points_for_moving_unrevealed_piece=0,
        bonus_points_for_moves_getting_closer_to_potential_flags=0,
        fuzzyness_factor=0,
    )
