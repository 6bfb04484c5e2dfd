from __future__ import annotations

"""
Unit tests for the Selection Controller.

Verifies:
1. Routing of clicks to the single/multi-select strategies.
2. Payload emission through the host sink, including sink failures.
3. Clear action and unselect-all fallback.
4. Restoration from host filters and mode-change resets.
5. Presentation queries (states and colors).
"""

from hierselect.core.selection.controller import SelectionController
from hierselect.domain.filter_models import SelectionState, forest_to_dicts
from hierselect.domain.filter_payloads import (
    BasicFilter,
    HierarchyColumn,
    HierarchyIdentityFilter,
)

COLUMNS = [HierarchyColumn("Sales.Region", 0), HierarchyColumn("Sales.City", 1)]


def make_controller(sent=None, **settings):
    sink = sent.append if sent is not None else None
    return SelectionController(apply_filter=sink, columns=COLUMNS, settings=settings)


def test_single_click_emits_hierarchy_filter():
    sent = []
    ctrl = make_controller(sent)

    payload = ctrl.handle_selection(["EU", "Paris"])

    assert sent == [payload]
    assert isinstance(payload, HierarchyIdentityFilter)
    assert payload.target == ["Sales.Region", "Sales.City"]
    assert forest_to_dicts(payload.hierarchy_data) == [
        {"identity": "EU", "operator": "Inherited", "children": [
            {"identity": "Paris", "operator": "Selected"},
        ]},
    ]


def test_multi_select_accumulates_and_single_select_replaces():
    ctrl = make_controller()

    ctrl.handle_selection(["EU", "Paris"], multi_select=True)
    ctrl.handle_selection(["EU", "Rome"], multi_select=True)
    assert ctrl.resolve(["EU"]) is SelectionState.PARTIAL
    assert ctrl.resolve(["EU", "Paris"]) is SelectionState.SELECTED
    assert ctrl.resolve(["EU", "Rome"]) is SelectionState.SELECTED

    ctrl.handle_selection(["US"])
    assert ctrl.resolve(["EU", "Paris"]) is SelectionState.DEFAULT
    assert ctrl.resolve(["US"]) is SelectionState.SELECTED


def test_emitted_payloads_are_not_changed_by_later_clicks():
    ctrl = make_controller()

    first = ctrl.handle_selection(["EU"], multi_select=True)
    snapshot = first.to_json()
    ctrl.handle_selection(["EU", "Paris"], multi_select=True)

    assert first.to_json() == snapshot


def test_sink_failure_does_not_roll_back_forest():
    def broken_sink(payload):
        raise RuntimeError("host unavailable")

    ctrl = SelectionController(apply_filter=broken_sink, columns=COLUMNS)

    payload = ctrl.handle_selection(["EU"])

    assert ctrl.last_payload is payload
    assert ctrl.resolve(["EU"]) is SelectionState.SELECTED


def test_empty_path_keeps_selection():
    ctrl = make_controller()
    ctrl.handle_selection(["EU"])

    ctrl.handle_selection([])

    assert ctrl.resolve(["EU"]) is SelectionState.SELECTED


def test_clear_selections_in_ordinary_mode():
    ctrl = make_controller()
    ctrl.handle_selection(["EU"])

    payload = ctrl.clear_selections()

    assert isinstance(payload, HierarchyIdentityFilter)
    assert payload.hierarchy_data == []
    assert ctrl.forest == []


def test_unselect_all_mode_emits_basic_filter_for_empty_selection():
    ctrl = make_controller(unselect_all_by_default=True, unselect_string="(None)")

    cleared = ctrl.clear_selections()
    assert isinstance(cleared, BasicFilter)
    assert cleared.values == ["(None)"]
    assert cleared.target.table == "Sales"
    assert cleared.target.column == "Region"

    selected = ctrl.handle_selection(["EU"])
    assert isinstance(selected, HierarchyIdentityFilter)

    toggled_off = ctrl.handle_selection(["EU"])
    assert isinstance(toggled_off, BasicFilter)
    assert ctrl.forest == []


def test_sync_restores_hierarchy_filter_from_host():
    ctrl = make_controller()
    host_filter = {
        "filterType": 10,
        "target": [{"queryName": "Sales.Region"}],
        "hierarchyData": [{"identity": "EU", "operator": "Selected"}],
    }

    emitted = ctrl.sync_from_host([host_filter])

    assert emitted is None
    assert ctrl.target == ["Sales.Region"]
    assert ctrl.resolve(["EU", "Paris"]) is SelectionState.SELECTED


def test_sync_with_basic_filter_means_no_hierarchy_selection():
    ctrl = make_controller(unselect_all_by_default=True)

    emitted = ctrl.sync_from_host([{"filterType": 1, "values": ["No Data"]}])

    assert emitted is None
    assert ctrl.forest == []


def test_sync_mode_change_clears_and_emits():
    sent = []
    ctrl = make_controller(sent)
    ctrl.handle_selection(["EU"])

    host_filter = {"filterType": 10, "hierarchyData": [{"identity": "EU", "operator": "Selected"}]}
    emitted = ctrl.sync_from_host([host_filter], settings={"unselect_all_by_default": True})

    assert isinstance(emitted, BasicFilter)
    assert sent[-1] is emitted
    assert ctrl.forest == []


def test_sync_in_unselect_mode_without_filter_applies_default():
    ctrl = make_controller(unselect_all_by_default=True)

    emitted = ctrl.sync_from_host(None)

    assert isinstance(emitted, BasicFilter)


def test_sync_updates_columns():
    ctrl = SelectionController()
    ctrl.sync_from_host(None, columns=COLUMNS)
    assert ctrl.columns == COLUMNS


def test_payload_keeps_host_target_without_column_metadata():
    ctrl = SelectionController()
    ctrl.sync_from_host([{
        "filterType": 10,
        "target": [{"queryName": "T.C"}],
        "hierarchyData": [{"identity": "A", "operator": "Selected"}],
    }])

    payload = ctrl.handle_selection(["B"], multi_select=True)

    assert payload.target == ["T.C"]


def test_color_mapping_uses_palette():
    ctrl = make_controller(selection_colors={"Selected": "#00ff00"})
    ctrl.handle_selection(["EU", "Paris"])

    assert ctrl.color_for(["EU", "Paris"]) == "#00ff00"
    assert ctrl.color_for(["EU"]) == "lightGreen"
    assert ctrl.color_for(["US"]) == "white"


def test_resolve_rows_in_display_order():
    ctrl = make_controller()
    ctrl.handle_selection(["EU", "Paris"])

    states = ctrl.resolve_rows([["EU"], ["EU", "Paris"], ["EU", "Rome"], ["US"]])

    assert states == [
        SelectionState.PARTIAL,
        SelectionState.SELECTED,
        SelectionState.DEFAULT,
        SelectionState.DEFAULT,
    ]


def test_very_deep_paths_toggle_and_serialize():
    ctrl = make_controller()
    path = list(range(3000))

    selected = ctrl.handle_selection(path, multi_select=True)
    assert ctrl.resolve(path) is SelectionState.SELECTED
    assert selected.to_json()["hierarchyData"][0]["identity"] == 0

    cleared = ctrl.handle_selection(path, multi_select=True)
    assert ctrl.forest == []
    assert cleared.hierarchy_data == []
    assert ctrl.resolve(path) is SelectionState.DEFAULT


def test_click_leaves_other_branches_shared_and_earlier_payload_intact():
    ctrl = make_controller()
    ctrl.handle_selection(["US", "Boston"], multi_select=True)
    first = ctrl.handle_selection(["EU", "Paris"], multi_select=True)
    snapshot = first.to_json()
    us_branch = ctrl.forest[0]

    ctrl.handle_selection(["EU", "Paris"], multi_select=True)

    assert first.to_json() == snapshot
    assert ctrl.forest == [us_branch]
    assert ctrl.forest[0] is us_branch
