from __future__ import annotations

"""
Unit tests for CLI Session parsing and replay.

Verifies:
1. Parsing of columns, clicks and rows, including malformed sessions.
2. Replay of clicks through the selection controller.
"""

import json

import pytest

from hierselect.core.validator import validate_settings
from hierselect.domain.filter_models import SelectionState
from hierselect.domain.filter_payloads import BasicFilter, HierarchyIdentityFilter
from hierselect.interface.cli.session import (
    SessionFormatError,
    load_session,
    parse_session,
    replay_session,
)


def test_parse_session_accepts_string_and_object_columns():
    session = parse_session({
        "columns": ["Geo.Country", {"queryName": "Geo.City", "index": 5, "displayName": "City"}],
        "clicks": [{"path": ["FR"]}, {"clear": True}, {"path": ["FR", "Paris"], "multi": True}],
        "rows": [["FR"]],
    })

    assert [c.query_name for c in session.columns] == ["Geo.Country", "Geo.City"]
    assert session.columns[1].index == 5
    assert session.clicks[1].clear is True
    assert session.clicks[2].multi_select is True
    assert session.rows == [["FR"]]


@pytest.mark.parametrize("data", [
    [],
    {"columns": "Geo.Country"},
    {"columns": [42]},
    {"columns": [{"queryName": "T.C", "index": "x"}]},
    {"columns": [{"queryName": "T.C", "index": None}]},
    {"clicks": ["FR"]},
    {"clicks": [{"multi": True}]},
    {"rows": ["FR"]},
])
def test_parse_session_rejects_malformed_input(data):
    with pytest.raises(SessionFormatError):
        parse_session(data)


def test_load_session_reports_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(SessionFormatError):
        load_session(str(path))


def test_replay_session_produces_last_payload_and_states(tmp_path):
    path = tmp_path / "session.json"
    path.write_text(json.dumps({
        "columns": ["Geo.Country", "Geo.City"],
        "clicks": [
            {"path": ["FR", "Paris"], "multi": True},
            {"path": ["FR", "Lyon"], "multi": True},
        ],
        "rows": [["FR"], ["FR", "Paris"], ["DE"]],
    }), encoding="utf-8")

    settings, _ = validate_settings({})
    result = replay_session(load_session(str(path)), settings)

    assert isinstance(result.payload, HierarchyIdentityFilter)
    assert result.states == [SelectionState.PARTIAL, SelectionState.SELECTED, SelectionState.DEFAULT]


def test_replay_clear_under_unselect_all_mode():
    session = parse_session({"columns": ["Geo.Country"], "clicks": [{"path": ["FR"]}, {"clear": True}]})
    settings, _ = validate_settings({"unselect_all_by_default": True})

    result = replay_session(session, settings)

    assert isinstance(result.payload, BasicFilter)


def test_replay_without_clicks_has_no_payload():
    settings, _ = validate_settings({})
    result = replay_session(parse_session({"rows": [["A"]]}), settings)

    assert result.payload is None
    assert result.states == [SelectionState.DEFAULT]
