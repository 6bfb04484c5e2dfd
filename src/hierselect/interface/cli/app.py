from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, resolution of the
settings hierarchy (defaults, persisted state, command-line overrides),
session replay and result rendering.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from hierselect.core.validator import validate_settings
from hierselect.domain.config import (
    get_default_app_state,
    load_app_state,
    load_config,
    save_config,
)
from hierselect.domain.errors import HierSelectError
from hierselect.infra.fs import normalize_path
from hierselect.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from hierselect.interface.cli import args as cli_args
from hierselect.interface.cli.session import ReplayResult, load_session, replay_session

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 invalid input, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    app_state = get_default_app_state() if args.use_defaults else load_app_state()

    log_level = "DEBUG" if args.debug else str(app_state["app_settings"].get("log_level", "INFO"))
    log_file = None
    if args.log_file is not None:
        log_file = normalize_path(args.log_file, get_default_log_path())
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file), force=True)

    logger.debug("CLI execution initiated. Resolving settings hierarchy...")

    base_conf = load_config(app_state)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_settings(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Settings Constraint: {w}")

    if args.save_settings:
        save_config(clean_conf)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    session_path = normalize_path(args.session_path, "") if args.session_path else None
    if not session_path or not os.path.isfile(session_path):
        msg = f"Session file does not exist: {session_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    try:
        session = load_session(session_path)
    except (OSError, HierSelectError) as e:
        logger.error(f"Cannot load session: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    try:
        result = replay_session(session, clean_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 130
    except HierSelectError as e:
        logger.critical(f"Replay failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps(_result_to_dict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)
    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known, non-None override values into the base settings.
    """
    out = dict(base)
    for k in ("unselect_all_by_default", "unselect_string"):
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _result_to_dict(result: ReplayResult) -> Dict[str, Any]:
    return {
        "filter": result.payload.to_json() if result.payload is not None else None,
        "rows": [
            {"path": row, "state": state.value}
            for row, state in zip(result.rows, result.states)
        ],
    }


def _print_human_summary(result: ReplayResult) -> None:
    """Print the emitted filter and the row states to stdout."""
    if result.payload is None:
        print("No filter emitted.")
    else:
        print("Emitted filter:")
        print(json.dumps(result.payload.to_json(), ensure_ascii=False, indent=2))

    if result.rows:
        print("\nRow states:")
        for row, state in zip(result.rows, result.states):
            print(f"  {' > '.join(str(p) for p in row)}: {state.value}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
