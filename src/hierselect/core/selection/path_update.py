from __future__ import annotations

"""
Path-Update Engine.

Toggles the deepest node of a hierarchy path inside a selection forest
and restores the minimal sparse representation afterwards. Shared by the
single-select and multi-select strategies.

Complexity: O(depth * siblings) time, O(depth) memory per click.
"""

import logging
from typing import List, Optional, Tuple

from hierselect.domain.filter_models import (
    CompareIdentitiesFunc,
    FilterNode,
    Forest,
    HierarchyPath,
    Operator,
)

logger = logging.getLogger(__name__)

# (node, index of the node inside its parent's children)
_Frame = Tuple[FilterNode, int]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def update_filter_tree(
        path: Optional[HierarchyPath],
        forest: Optional[Forest],
        equals: CompareIdentitiesFunc,
) -> Forest:
    """
    Apply a click on the last identity of `path` to the selection forest.

    The forest is mutated in place and returned. Redundant childless
    Inherited nodes left behind by the toggle are pruned before returning.

    Args:
        path: Identities from the hierarchy root down to the clicked node.
        forest: Current selection forest (None is treated as empty).
        equals: Host identity comparator.

    Returns:
        Forest: The updated forest. Unchanged when `path` is empty.
    """
    if not path:
        return forest if forest is not None else []

    # Virtual sentinel whose children are the forest roots
    root = FilterNode(identity=None, operator=Operator.INHERITED, children=forest if forest is not None else [])

    current_level = root.children
    nearest_selected = False
    parents: List[_Frame] = [(root, -1)]
    should_fix_tree = False
    last_level = len(path) - 1

    for level, identity in enumerate(path):
        index = _find_index(current_level, identity, equals)
        is_target = level == last_level

        if index == -1:
            if is_target:
                operator = Operator.NOT_SELECTED if nearest_selected else Operator.SELECTED
                current_level.append(FilterNode(identity=identity, operator=operator))
                break
            new_node = FilterNode(identity=identity, operator=Operator.INHERITED)
            current_level.append(new_node)
            current_level = new_node.children
            continue

        node = current_level[index]
        if not is_target:
            if node.operator is not Operator.INHERITED:
                nearest_selected = node.operator is Operator.SELECTED
                # Only the nearest explicit ancestor and its descendants can be pruned
                parents = []
            parents.append((node, index))
            current_level = node.children
            continue

        if node.children:
            # Partial node: the finer selections below it are always dropped
            node.children = []
            if node.operator is Operator.NOT_SELECTED or (
                    node.operator is Operator.INHERITED and nearest_selected):
                node.operator = Operator.INHERITED
                parents.append((node, index))
                should_fix_tree = True
            else:
                node.operator = Operator.SELECTED
        else:
            node.operator = Operator.INHERITED
            parents.append((node, index))
            should_fix_tree = True

    if should_fix_tree:
        _prune_inherited_leaves(parents)

    return root.children

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _find_index(nodes: Forest, identity: object, equals: CompareIdentitiesFunc) -> int:
    """Return the position of the sibling matching `identity`, or -1."""
    for i, node in enumerate(nodes):
        if equals(node.identity, identity):
            return i
    return -1


def _prune_inherited_leaves(parents: List[_Frame]) -> None:
    """
    Remove childless Inherited nodes walking up the visited stack.

    Stops at the first node that keeps children or carries an explicit
    operator. The first stack entry is never removed.
    """
    for i in range(len(parents) - 1, 0, -1):
        node, index = parents[i]
        if node.children or node.operator is not Operator.INHERITED:
            break
        parent_node = parents[i - 1][0]
        _remove_unordered(parent_node.children, index)
        logger.debug(f"Pruned redundant node {node.identity!r}")


def _remove_unordered(items: list, index: int) -> None:
    """Swap-remove `items[index]`; out-of-range indices are ignored."""
    if not items or index < 0 or index >= len(items):
        return
    items[index] = items[-1]
    items.pop()
