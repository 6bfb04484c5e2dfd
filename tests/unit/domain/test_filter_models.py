from __future__ import annotations

"""
Unit tests for the filter tree Domain Models.

Verifies:
1. JSON shape of serialized trees (children omitted when empty).
2. Decoding of host 'hierarchyData' including malformed input.
3. Path copying, invariant diagnostics and very deep trees.
"""

import pytest

from hierselect.domain.errors import FilterDecodeError
from hierselect.domain.filter_models import (
    FilterNode,
    Operator,
    check_forest_invariants,
    clone_along_path,
    forest_from_dicts,
    forest_to_dicts,
    node_to_dict,
)


def test_operator_wire_values():
    assert [op.value for op in Operator] == ["Selected", "NotSelected", "Inherited"]


def test_filter_node_defaults():
    n = FilterNode(identity="A")
    assert n.operator is Operator.INHERITED
    assert n.children == []


def test_node_to_dict_applies_identity_encoder(node):
    tree = node("a", "I", node("b", "S"))

    assert node_to_dict(tree, str.upper) == {
        "identity": "A",
        "operator": "Inherited",
        "children": [{"identity": "B", "operator": "Selected"}],
    }


def test_forest_from_dicts_normalizes_missing_children():
    forest = forest_from_dicts([
        {"identity": 1, "operator": "NotSelected"},
        {"identity": 2, "operator": "Inherited", "children": [{"identity": 3, "operator": "Selected"}]},
    ])

    assert forest[0].children == []
    assert forest[0].operator is Operator.NOT_SELECTED
    assert forest[1].children[0].identity == 3


def test_forest_from_dicts_accepts_none():
    assert forest_from_dicts(None) == []


def test_forest_from_dicts_rejects_unknown_operator():
    with pytest.raises(FilterDecodeError):
        forest_from_dicts([{"identity": 1, "operator": "Maybe"}])


def test_forest_from_dicts_decode_error_is_value_error():
    with pytest.raises(ValueError):
        forest_from_dicts({"identity": 1})
    with pytest.raises(ValueError):
        forest_from_dicts(["not a node"])


def test_clone_along_path_copies_only_the_matched_chain(eq, node):
    identity = object()
    original = [node(identity, "I", node("b", "S"), node("Z", "S")), node("Q", "N")]

    copy = clone_along_path(original, [identity, "b"], eq)
    copy[0].children[0].operator = Operator.INHERITED
    copy[0].children.clear()
    copy.pop()

    assert copy[0].identity is identity
    assert copy[0] is not original[0]
    assert original[0].children[0].operator is Operator.SELECTED
    assert len(original[0].children) == 2
    assert len(original) == 2


def test_clone_along_path_shares_subtrees_off_the_path(eq, node):
    original = [node("A", "I", node("B", "S")), node("C", "S", node("D", "N"))]

    copy = clone_along_path(original, ["A", "missing", "deeper"], eq)

    assert copy is not original
    assert copy[0] is not original[0]
    assert copy[1] is original[1]
    assert copy[0].children[0] is original[0].children[0]


def test_check_forest_invariants_reports_violations(eq, node):
    forest = [node("A", "I"), node("B", "S", node("C", "S"), node("C", "N"))]

    problems = check_forest_invariants(forest, eq)

    assert any("Childless Inherited" in p for p in problems)
    assert any("Duplicate sibling" in p for p in problems)


def test_check_forest_invariants_accepts_valid_tree(eq, node):
    forest = [node("A", "I", node("B", "S")), node("C", "N")]
    assert check_forest_invariants(forest, eq) == []


def _deep_chain(depth):
    root = FilterNode(identity=0, operator=Operator.INHERITED)
    current = root
    for i in range(1, depth):
        child = FilterNode(identity=i, operator=Operator.INHERITED)
        current.children.append(child)
        current = child
    current.operator = Operator.SELECTED
    return root


def test_serialization_handles_very_deep_trees(eq):
    depth = 5000
    data = node_to_dict(_deep_chain(depth))

    restored = forest_from_dicts([data])

    current, levels = restored[0], 1
    while current.children:
        current, levels = current.children[0], levels + 1
    assert levels == depth
    assert current.operator is Operator.SELECTED
    assert check_forest_invariants(restored, eq) == []
