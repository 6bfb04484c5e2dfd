from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to settings keys.
2. Defaults when no flag is given.
"""

from hierselect.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_unselect_flags_mapping():
    args = parse_args(["--unselect-all", "--unselect-string", "(Blank)"])

    overrides = args_to_overrides(args)

    assert overrides["unselect_all_by_default"] is True
    assert overrides["unselect_string"] == "(Blank)"


def test_defaults_produce_no_effective_overrides():
    overrides = args_to_overrides(parse_args([]))

    assert "unselect_all_by_default" not in overrides
    assert overrides["unselect_string"] is None


def test_session_and_output_flags():
    args = parse_args(["-s", "clicks.json", "--json", "--debug", "--use-defaults"])

    assert args.session_path == "clicks.json"
    assert args.json_output is True
    assert args.debug is True
    assert args.use_defaults is True


def test_log_file_flag_forms():
    assert parse_args([]).log_file is None
    assert parse_args(["--log-file"]).log_file == ""
    assert parse_args(["--log-file", "run.log"]).log_file == "run.log"
