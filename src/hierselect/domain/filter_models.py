from __future__ import annotations

"""
Hierarchy Filter Tree Data Models.

Provides the recursive node type describing a sparse tri-state selection
over a hierarchy, the resolved display states, and the conversions between
the in-memory tree and its 'hierarchyData' JSON shape.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from hierselect.domain.errors import FilterDecodeError

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class Operator(str, Enum):
    """
    Tri-state flag carried by every filter node.

    Inherited means the state comes from the nearest explicit ancestor,
    or Default when there is none.
    """
    SELECTED = "Selected"
    NOT_SELECTED = "NotSelected"
    INHERITED = "Inherited"


class SelectionState(str, Enum):
    """Resolved display state of a hierarchy row."""
    SELECTED = "Selected"
    UNSELECTED = "Unselected"
    PARTIAL = "Partial"
    DEFAULT = "Default"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class FilterNode:
    """
    A single value selection in the filter tree.

    Attributes:
        identity: Opaque host identity of the hierarchy value.
        operator: Explicit or inherited selection flag.
        children: Finer-grained selections below this value.
    """
    identity: Any
    operator: Operator = Operator.INHERITED
    children: List["FilterNode"] = field(default_factory=list)


Forest = List[FilterNode]
HierarchyPath = Sequence[Any]
CompareIdentitiesFunc = Callable[[Any, Any], bool]
IdentityCodec = Callable[[Any], Any]


def identity_equals(a: Any, b: Any) -> bool:
    """Plain equality comparator for hosts whose identities are values."""
    return a == b


def _passthrough(value: Any) -> Any:
    return value

# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------
# Trees are walked with explicit stacks: hierarchy depth is not bounded.

def node_to_dict(node: FilterNode, identity_encoder: Optional[IdentityCodec] = None) -> Dict[str, Any]:
    """
    Convert a node and its subtree into the 'hierarchyData' entry shape.

    Args:
        node: Node to serialize.
        identity_encoder: Optional transformation applied to every identity.

    Returns:
        Dict[str, Any]: JSON-compatible mapping; 'children' is omitted when empty.
    """
    encode = identity_encoder or _passthrough
    root = _entry_for(node, encode)
    stack = [(node, root)]
    while stack:
        source, out = stack.pop()
        if not source.children:
            continue
        entries = []
        for child in source.children:
            entry = _entry_for(child, encode)
            entries.append(entry)
            stack.append((child, entry))
        out["children"] = entries
    return root


def _entry_for(node: FilterNode, encode: IdentityCodec) -> Dict[str, Any]:
    return {"identity": encode(node.identity), "operator": node.operator.value}


def forest_to_dicts(forest: Forest, identity_encoder: Optional[IdentityCodec] = None) -> List[Dict[str, Any]]:
    """Serialize every root of the forest."""
    return [node_to_dict(node, identity_encoder) for node in forest or []]


def forest_from_dicts(data: Any, identity_decoder: Optional[IdentityCodec] = None) -> Forest:
    """
    Rebuild a forest from its 'hierarchyData' shape.

    Args:
        data: List of node mappings (None is treated as empty).
        identity_decoder: Optional transformation applied to every identity.

    Returns:
        Forest: Freshly allocated nodes.

    Raises:
        FilterDecodeError: If a level is not a list, an entry is not a mapping
                           or carries an unknown operator.
    """
    if data is None:
        return []

    decode = identity_decoder or _passthrough
    forest: Forest = []
    stack = [(data, forest)]
    while stack:
        entries, level = stack.pop()
        if not isinstance(entries, list):
            raise FilterDecodeError(f"Expected a list of filter nodes, received {type(entries).__name__}.")
        for entry in entries:
            if not isinstance(entry, dict):
                raise FilterDecodeError(f"Expected a filter node mapping, received {type(entry).__name__}.")
            raw_operator = entry.get("operator", Operator.INHERITED.value)
            try:
                operator = Operator(raw_operator)
            except ValueError:
                raise FilterDecodeError(f"Unknown filter operator: {raw_operator!r}") from None
            node = FilterNode(identity=decode(entry.get("identity")), operator=operator)
            level.append(node)
            if entry.get("children"):
                stack.append((entry["children"], node.children))
    return forest

# -----------------------------------------------------------------------------
# DIAGNOSTICS
# -----------------------------------------------------------------------------

def check_forest_invariants(forest: Forest, equals: CompareIdentitiesFunc) -> List[str]:
    """
    Collect violations of the minimality and sibling uniqueness rules.

    Args:
        forest: Tree to inspect.
        equals: Identity comparator.

    Returns:
        List[str]: One message per violation; empty for a valid tree.
    """
    problems: List[str] = []
    # (siblings, identities of their ancestors)
    stack: List[Tuple[Forest, Tuple[Any, ...]]] = [(forest or [], ())]
    while stack:
        nodes, trail = stack.pop()
        for i, node in enumerate(nodes):
            if node.operator is Operator.INHERITED and not node.children:
                problems.append(f"Childless Inherited node at {list(trail + (node.identity,))!r}")
            for other in nodes[i + 1:]:
                if equals(node.identity, other.identity):
                    problems.append(f"Duplicate sibling identity at {list(trail + (node.identity,))!r}")
            if node.children:
                stack.append((node.children, trail + (node.identity,)))
    return problems

# -----------------------------------------------------------------------------
# COPYING
# -----------------------------------------------------------------------------

def clone_along_path(
        forest: Optional[Forest],
        path: Optional[HierarchyPath],
        equals: CompareIdentitiesFunc,
) -> Forest:
    """
    Copy the root list and every node matched by `path`, sharing the rest.

    A path update only mutates the sibling lists and nodes it walks through,
    so the returned forest can be edited without touching `forest`.
    Identities are opaque host handles and are never copied.

    Args:
        forest: Source forest (None is treated as empty).
        path: Identities from the hierarchy root down to the clicked node.
        equals: Identity comparator, same as the one used by the update.

    Returns:
        Forest: A new root list whose matched chain is freshly allocated.
    """
    clone: Forest = list(forest or [])
    level = clone
    for identity in path or []:
        for i, node in enumerate(level):
            if equals(node.identity, identity):
                copy = FilterNode(identity=node.identity, operator=node.operator, children=list(node.children))
                level[i] = copy
                level = copy.children
                break
        else:
            break
    return clone
