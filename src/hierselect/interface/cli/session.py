from __future__ import annotations

"""
CLI Session Replay.

Loads a recorded interaction session (hierarchy columns, row clicks and
rows to display) and replays it through a SelectionController. Identities
in session files are plain JSON values compared with '=='.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from hierselect.core.selection import SelectionController
from hierselect.core.selection.fallback import FilterPayload
from hierselect.domain.errors import HierSelectError
from hierselect.domain.filter_models import SelectionState
from hierselect.domain.filter_payloads import HierarchyColumn

logger = logging.getLogger(__name__)


class SessionFormatError(HierSelectError, ValueError):
    """Raised when a session file does not follow the expected layout."""


@dataclass(frozen=True)
class Click:
    """One recorded user action: a row click, or the clear button."""
    path: List[Any] = field(default_factory=list)
    multi_select: bool = False
    clear: bool = False


@dataclass(frozen=True)
class Session:
    """
    A recorded interaction session.

    Attributes:
        columns: Hierarchy columns (query names and level indices).
        clicks: Actions to replay in order.
        rows: Row paths whose resolved state should be reported.
    """
    columns: List[HierarchyColumn] = field(default_factory=list)
    clicks: List[Click] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)


@dataclass(frozen=True)
class ReplayResult:
    """Final payload and row states produced by a replay."""
    payload: Optional[FilterPayload]
    states: List[SelectionState]
    rows: List[List[Any]]


# -----------------------------------------------------------------------------
# LOADING
# -----------------------------------------------------------------------------

def load_session(path: str) -> Session:
    """
    Read and parse a session file.

    Raises:
        SessionFormatError: If the JSON is invalid or malformed.
        OSError: If the file cannot be read.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise SessionFormatError(f"Invalid JSON in session file: {e}") from e
    return parse_session(data)


def parse_session(data: Any) -> Session:
    """
    Build a Session from decoded JSON.

    Args:
        data: Mapping with optional 'columns', 'clicks' and 'rows' lists.

    Returns:
        Session: Parsed session.

    Raises:
        SessionFormatError: On any structural mismatch.
    """
    if not isinstance(data, dict):
        raise SessionFormatError("Session must be a JSON object.")

    columns: List[HierarchyColumn] = []
    for i, raw in enumerate(_as_list(data, "columns")):
        if isinstance(raw, str):
            columns.append(HierarchyColumn(query_name=raw, index=i))
        elif isinstance(raw, dict) and isinstance(raw.get("queryName"), str):
            try:
                index = int(raw.get("index", i))
            except (TypeError, ValueError):
                raise SessionFormatError(f"Column #{i} has a non-integer 'index'.") from None
            columns.append(HierarchyColumn(
                query_name=raw["queryName"],
                index=index,
                display_name=str(raw.get("displayName", "")),
            ))
        else:
            raise SessionFormatError(f"Invalid column entry #{i}.")

    clicks: List[Click] = []
    for i, raw in enumerate(_as_list(data, "clicks")):
        if not isinstance(raw, dict):
            raise SessionFormatError(f"Invalid click entry #{i}.")
        if raw.get("clear"):
            clicks.append(Click(clear=True))
            continue
        path = raw.get("path")
        if not isinstance(path, list):
            raise SessionFormatError(f"Click #{i} has no 'path' list.")
        clicks.append(Click(path=path, multi_select=bool(raw.get("multi", False))))

    rows = _as_list(data, "rows")
    for i, row in enumerate(rows):
        if not isinstance(row, list):
            raise SessionFormatError(f"Row #{i} must be a list of identities.")

    return Session(columns=columns, clicks=clicks, rows=rows)


def _as_list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SessionFormatError(f"Session field '{key}' must be a list.")
    return value

# -----------------------------------------------------------------------------
# REPLAY
# -----------------------------------------------------------------------------

def replay_session(session: Session, settings: Dict[str, Any]) -> ReplayResult:
    """
    Replay every click of the session through a fresh controller.

    Args:
        session: Parsed session.
        settings: Validated selection settings.

    Returns:
        ReplayResult: Last emitted payload and the resolved state of each row.
    """
    controller = SelectionController(columns=session.columns, settings=settings)
    for click in session.clicks:
        if click.clear:
            controller.clear_selections()
        else:
            controller.handle_selection(click.path, click.multi_select)

    logger.debug(f"Replayed {len(session.clicks)} click(s).")
    states = controller.resolve_rows(session.rows)
    return ReplayResult(payload=controller.last_payload, states=states, rows=session.rows)
