from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
namespace into selection settings overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the hierselect CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="hierselect",
        description="Replay hierarchy row clicks and print the resulting filter.",
    )

    # --- Input ---
    p.add_argument(
        "-s", "--session",
        dest="session_path",
        default=None,
        help="JSON file with hierarchy columns, clicks to replay and rows to resolve.",
    )

    # --- Selection Settings ---
    p.add_argument(
        "--unselect-all",
        dest="unselect_all",
        action="store_true",
        help="Treat an empty selection as 'nothing selected'.",
    )
    p.add_argument(
        "--unselect-string",
        dest="unselect_string",
        default=None,
        help="Placeholder value kept by the unselect-all fallback filter.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore persisted settings.",
    )
    p.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist the effective settings for later sessions.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective settings and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Also write a rotating diagnostic log (default location when PATH is omitted).",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit a machine readable JSON report.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a settings dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Settings overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.unselect_all:
        overrides["unselect_all_by_default"] = True
    overrides["unselect_string"] = args.unselect_string

    return overrides
