"""Tests for the command-line interface."""

import json

from stratego_bot.cli.main import build_parser, main


def test_parser_defaults():
    """Test global options and subcommands."""
    args = build_parser().parse_args(["setup"])

    assert args.side == "first"
    assert args.seed is None
    assert args.config is None
    assert args.func.__name__ == "setup_command"


def test_setup_command():
    """Test the setup command renders a placement."""
    assert main(["--seed", "3", "setup"]) == 0
    assert main(["--seed", "3", "--side", "second", "setup"]) == 0


def test_sample_command():
    """Test the sample command over a handful of placements."""
    assert main(["--seed", "3", "sample", "--samples", "5"]) == 0
    assert main(["--seed", "3", "--side", "second", "sample", "--samples", "3", "--include-fixed"]) == 0


def test_missing_command():
    """Test running without a subcommand prints help."""
    assert main([]) == 1


def test_bad_config_reports_error(tmp_path):
    """Test configuration errors end with a non-zero exit code."""
    path = tmp_path / "strategy.json"
    path.write_text(json.dumps({"weights": {"no_such_weight": 1}}))

    assert main(["--config", str(path), "setup"]) == 1


def test_valid_config_is_used(tmp_path):
    """Test a strategy file overriding a weight loads cleanly."""
    path = tmp_path / "strategy.json"
    path.write_text(json.dumps({"weights": {"fuzzyness_factor": 0, "chance_at_fixed_starting_position": 100}}))

    assert main(["--seed", "1", "--config", str(path), "setup"]) == 0


def test_missing_config_reports_error(tmp_path):
    """Test a config path that does not exist ends with exit code 1."""
    assert main(["--config", str(tmp_path / "nope.json"), "setup"]) == 1


def test_malformed_config_values_report_error(tmp_path):
    """Test badly typed values in a strategy file end with exit code 1."""
    path = tmp_path / "strategy.json"
    path.write_text(json.dumps({"opponent_flag_probabilities": {"0,9": "high"}}))

    assert main(["--config", str(path), "setup"]) == 1


def test_setup_shows_opening_board_and_move(capsys):
    """Test setup renders the opening board and the move the engine picks."""
    assert main(["--seed", "5", "setup"]) == 0

    out = capsys.readouterr().out
    assert "first to move" in out
    assert "Opening move:" in out
