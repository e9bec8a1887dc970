"""Tests for move generation, features and the flag distance heuristic."""

import random
from dataclasses import replace

import pytest

from stratego_bot.core import Point, Rank, Side, home_coordinates
from stratego_bot.errors import EmptyFlagCandidatesError
from stratego_bot.strategy import (
    BeliefState,
    StrategyData,
    distance_to_nearest_flag_candidate,
    generate_moves,
    is_move_towards_opponent_half,
    is_move_within_opponent_half,
)

from helpers import board, enemy, own


def fresh_beliefs(pieces=()):
    beliefs = BeliefState()
    beliefs.reset(Side.SECOND, pieces)
    return beliefs


def moves_for(state, data, beliefs=None, side=Side.FIRST):
    return generate_moves(state, side, beliefs or fresh_beliefs(), data, random.Random(0))


def test_scout_lane_on_empty_board(scoring_data):
    """Test a scout at (0,0) sees the whole open column."""
    state = board({(0, 0): own(Rank.SCOUT)})

    moves = moves_for(state, scoring_data)
    upward = [m for m in moves if m.target.x == 0]

    assert len(upward) == 9
    assert [m.steps for m in upward] == list(range(1, 10))
    assert [m.target for m in upward] == [Point(0, y) for y in range(1, 10)]
    assert len(moves) == 18  # nine to the right as well


def test_normal_piece_moves_one_step(scoring_data):
    """Test non-scouts only look one cell ahead."""
    state = board({(5, 1): own(Rank.MARSHAL)})

    targets = {m.target for m in moves_for(state, scoring_data)}

    assert targets == {Point(4, 1), Point(6, 1), Point(5, 0), Point(5, 2)}
    assert all(m.steps == 1 for m in moves_for(state, scoring_data))


def test_water_blocks(scoring_data):
    """Test lakes are never targets."""
    state = board({(2, 3): own(Rank.SERGEANT), (3, 0): own(Rank.SCOUT)})

    moves = moves_for(state, scoring_data)
    targets = {m.target for m in moves}

    assert Point(2, 4) not in targets
    assert {m.target for m in moves if m.source == Point(2, 3)} == {
        Point(1, 3),
        Point(3, 3),
        Point(2, 2),
    }
    # The scout's column runs into the lake at (3,4)
    assert max(m.target.y for m in moves if m.source == Point(3, 0) and m.target.x == 3) == 3


def test_own_pieces_block(scoring_data):
    """Test own pieces end the ray without a move."""
    state = board({(0, 0): own(Rank.SCOUT), (0, 4): own(Rank.FLAG), (1, 0): own(Rank.BOMB)})

    moves = moves_for(state, scoring_data)

    assert {m.target for m in moves} == {Point(0, 1), Point(0, 2), Point(0, 3)}


def test_immobile_pieces_never_move(scoring_data):
    """Test Flag and Bomb generate nothing."""
    state = board({(0, 0): own(Rank.FLAG), (5, 0): own(Rank.BOMB)})

    assert moves_for(state, scoring_data) == []


def test_attack_ends_ray(scoring_data):
    """Test scouts cannot jump over an opponent piece."""
    state = board({(0, 0): own(Rank.SCOUT), (0, 5): enemy()})

    upward = [m for m in moves_for(state, scoring_data) if m.target.x == 0]

    assert [m.target.y for m in upward] == [1, 2, 3, 4, 5]
    assert upward[-1].will_be_unknown_battle
    assert not any(m.will_be_unknown_battle for m in upward[:-1])


def test_generated_targets_are_legal(quiet_data):
    """Test no target is water, off-board or own-occupied on a crowded board."""
    pieces = {(x, y): own(Rank.SCOUT) for x in range(0, 10, 2) for y in range(0, 4)}
    pieces.update({(x, y): enemy() for x in range(1, 10, 3) for y in range(6, 10)})
    state = board(pieces)

    for move in moves_for(state, quiet_data):
        cell = state.cell_at(move.target)
        assert cell is not None
        assert not cell.is_water
        assert cell.owner is not Side.FIRST


def test_decisive_battle_features(scoring_data):
    """Test battle flags against known and unknown pieces."""
    state = board(
        {
            (4, 6): own(Rank.MARSHAL),
            (4, 7): enemy(Rank.GENERAL),
            (3, 6): enemy(Rank.BOMB),
            (5, 6): enemy(),
        }
    )

    by_target = {m.target: m for m in moves_for(state, scoring_data)}

    assert by_target[Point(4, 7)].will_be_decisive_victory
    assert by_target[Point(3, 6)].will_be_decisive_loss
    assert by_target[Point(5, 6)].will_be_unknown_battle
    assert by_target[Point(5, 6)].is_battle_on_opponent_half
    assert not by_target[Point(5, 6)].is_battle_on_own_half
    assert not by_target[Point(4, 5)].is_battle_on_opponent_half


def test_belief_features(scoring_data):
    """Test first-move and unrevealed flags come from the belief sets."""
    state = board({(0, 0): own(Rank.MINER), (9, 0): own(Rank.MINER)})
    beliefs = fresh_beliefs()
    beliefs.unmoved_own_piece_coordinates = {Point(0, 0)}
    beliefs.unrevealed_own_piece_coordinates = {Point(9, 0)}

    moves = moves_for(state, scoring_data, beliefs)

    assert all(m.is_moving_for_first_time == (m.source == Point(0, 0)) for m in moves)
    assert all(m.is_move_for_unrevealed_piece == (m.source == Point(9, 0)) for m in moves)


def test_progress_features():
    """Test forward and within-opponent-half progress per side."""
    assert is_move_towards_opponent_half(Side.FIRST, Point(0, 3), Point(0, 4))
    assert is_move_towards_opponent_half(Side.FIRST, Point(0, 5), Point(0, 6))
    assert not is_move_towards_opponent_half(Side.FIRST, Point(0, 6), Point(0, 7))
    assert not is_move_towards_opponent_half(Side.FIRST, Point(0, 3), Point(1, 3))

    assert is_move_towards_opponent_half(Side.SECOND, Point(0, 6), Point(0, 5))
    assert not is_move_towards_opponent_half(Side.SECOND, Point(0, 3), Point(0, 2))

    assert is_move_within_opponent_half(Side.FIRST, Point(0, 6), Point(1, 6))
    assert not is_move_within_opponent_half(Side.FIRST, Point(0, 5), Point(0, 6))
    assert is_move_within_opponent_half(Side.SECOND, Point(0, 3), Point(1, 3))


def test_net_distance_change(scoring_data):
    """Test the signed change in flag distance per candidate."""
    state = board({(0, 5): own(Rank.SERGEANT)})
    beliefs = fresh_beliefs()
    beliefs.possible_flag_coordinates = {Point(0, 9)}

    by_target = {m.target: m for m in moves_for(state, scoring_data, beliefs)}

    assert by_target[Point(0, 6)].net_change_in_distance_to_potential_flag == -1
    assert by_target[Point(0, 4)].net_change_in_distance_to_potential_flag == 1
    assert by_target[Point(1, 5)].net_change_in_distance_to_potential_flag == 1


def test_distance_plain_manhattan(scoring_data):
    """Test distance without penalties or probabilities."""
    candidates = {Point(0, 9), Point(9, 9)}

    assert distance_to_nearest_flag_candidate(candidates, Point(0, 0), scoring_data) == 9
    assert distance_to_nearest_flag_candidate(candidates, Point(8, 6), scoring_data) == 4


def test_distance_lake_column_penalty(scoring_data):
    """Test candidates in lake columns look further away."""
    assert distance_to_nearest_flag_candidate({Point(2, 9)}, Point(2, 0), scoring_data) == 12
    assert distance_to_nearest_flag_candidate({Point(4, 9)}, Point(4, 0), scoring_data) == 9

    no_penalty = replace(scoring_data, flag_lane_penalty=0)
    assert distance_to_nearest_flag_candidate({Point(2, 9)}, Point(2, 0), no_penalty) == 9


def test_distance_probability_compression(scoring_data):
    """Test likely flag cells look closer."""
    data = replace(scoring_data, opponent_flag_probabilities={Point(0, 9): 100, Point(9, 9): 50})

    assert distance_to_nearest_flag_candidate({Point(0, 9)}, Point(0, 0), data) == pytest.approx(4.5)
    assert distance_to_nearest_flag_candidate({Point(9, 9)}, Point(9, 0), data) == pytest.approx(6.0)


def test_distance_requires_candidates(scoring_data):
    """Test an empty candidate set is an invariant violation."""
    with pytest.raises(EmptyFlagCandidatesError):
        distance_to_nearest_flag_candidate(set(), Point(0, 0), scoring_data)


def test_distance_never_decreases_when_candidates_shrink():
    """Test removing candidates cannot bring the nearest one closer."""
    data = replace(StrategyData(), opponent_flag_probabilities={Point(3, 9): 80})
    candidates = set(home_coordinates(Side.SECOND))
    point = Point(4, 2)

    previous = distance_to_nearest_flag_candidate(candidates, point, data)
    for removed in sorted(candidates)[:-1]:
        candidates.discard(removed)
        current = distance_to_nearest_flag_candidate(candidates, point, data)
        assert current >= previous
        previous = current
