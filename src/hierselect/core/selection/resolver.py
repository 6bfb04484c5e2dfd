from __future__ import annotations

"""
Selection State Resolver.

Computes the display state of hierarchy rows from the selection forest
by walking ancestors: the nearest explicit ancestor-or-self decides
Selected/Unselected, finer selections below a row make it Partial.
"""

from typing import Iterable, List, Optional, Tuple

from hierselect.domain.filter_models import (
    CompareIdentitiesFunc,
    FilterNode,
    Forest,
    HierarchyPath,
    Operator,
    SelectionState,
)

# (matched node, nearest explicit state including this node)
_Step = Tuple[FilterNode, Optional[bool]]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_selection_state(
        path: Optional[HierarchyPath],
        forest: Optional[Forest],
        equals: CompareIdentitiesFunc,
) -> SelectionState:
    """
    Resolve the effective selection state of a single row.

    Args:
        path: Identities from the hierarchy root down to the row.
        forest: Current selection forest.
        equals: Host identity comparator.

    Returns:
        SelectionState: Partial, Selected, Unselected or Default.
    """
    if not path or not forest:
        return SelectionState.DEFAULT
    steps = _walk(path, 0, forest, None, equals)
    return _state_from_steps(steps, len(path))


def resolve_many(
        paths: Iterable[Optional[HierarchyPath]],
        forest: Optional[Forest],
        equals: CompareIdentitiesFunc,
) -> List[SelectionState]:
    """
    Resolve several rows, reusing the walk shared with the previous row.

    Rows listed in display order (parents before children) share long
    prefixes, so most levels are matched only once.

    Args:
        paths: Row paths in any order.
        forest: Current selection forest.
        equals: Host identity comparator.

    Returns:
        List[SelectionState]: One state per path, identical to resolving each alone.
    """
    results: List[SelectionState] = []
    prev_path: List[object] = []
    prev_steps: List[_Step] = []

    for path in paths:
        if not path or not forest:
            results.append(SelectionState.DEFAULT)
            prev_path, prev_steps = [], []
            continue

        shared = _shared_prefix(prev_path, path, len(prev_steps), equals)
        steps = prev_steps[:shared]
        if shared:
            node, explicit = steps[-1]
            steps.extend(_walk(path, shared, node.children, explicit, equals))
        else:
            steps = _walk(path, 0, forest, None, equals)

        results.append(_state_from_steps(steps, len(path)))
        prev_path, prev_steps = list(path), steps

    return results

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _walk(
        path: HierarchyPath,
        start: int,
        nodes: Forest,
        explicit: Optional[bool],
        equals: CompareIdentitiesFunc,
) -> List[_Step]:
    """Match `path[start:]` level by level until an identity is missing."""
    steps: List[_Step] = []
    current_level = nodes
    for identity in path[start:]:
        node = next((n for n in current_level if equals(n.identity, identity)), None)
        if node is None:
            break
        if node.operator is not Operator.INHERITED:
            explicit = node.operator is Operator.SELECTED
        steps.append((node, explicit))
        current_level = node.children
    return steps


def _state_from_steps(steps: List[_Step], path_len: int) -> SelectionState:
    if not steps:
        return SelectionState.DEFAULT
    node, explicit = steps[-1]
    if len(steps) == path_len and node.children:
        return SelectionState.PARTIAL
    if explicit is None:
        return SelectionState.DEFAULT
    return SelectionState.SELECTED if explicit else SelectionState.UNSELECTED


def _shared_prefix(prev: List[object], path: HierarchyPath, limit: int, equals: CompareIdentitiesFunc) -> int:
    """Count leading identities equal in both paths, capped at the matched depth."""
    count = 0
    for a, b in zip(prev[:limit], path):
        if not equals(a, b):
            break
        count += 1
    return count
