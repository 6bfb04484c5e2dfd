from __future__ import annotations

"""
Selection Interaction Strategies.

Defines how a row click edits the selection forest depending on the
interaction mode: multi-select accumulates toggles across branches,
single-select keeps at most one explicit selection and reverts to the
default state when the sole selection is clicked again.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from hierselect.core.selection.path_update import update_filter_tree
from hierselect.domain.filter_models import (
    CompareIdentitiesFunc,
    Forest,
    HierarchyPath,
    Operator,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FUNCTIONAL API
# -----------------------------------------------------------------------------

def multi_select_toggle(
        path: Optional[HierarchyPath],
        forest: Optional[Forest],
        equals: CompareIdentitiesFunc,
) -> Forest:
    """
    Toggle the clicked path inside the existing forest.

    Explicit selections on unrelated branches are left untouched.
    """
    return update_filter_tree(path, forest, equals)


def single_select_toggle(
        path: Optional[HierarchyPath],
        forest: Optional[Forest],
        equals: CompareIdentitiesFunc,
) -> Forest:
    """
    Replace the selection with the clicked path, or clear it.

    Args:
        path: Identities from the hierarchy root down to the clicked node.
        forest: Current selection forest.
        equals: Host identity comparator.

    Returns:
        Forest: An empty forest when the clicked path is the entire current
                selection, otherwise a new forest holding only that path.
    """
    if not path:
        return forest if forest is not None else []

    if should_clear_tree(path, forest, equals):
        logger.debug("Clicked path is the only selection. Reverting to default.")
        return []

    return update_filter_tree(path, [], equals)


def should_clear_tree(
        path: Optional[HierarchyPath],
        forest: Optional[Forest],
        equals: CompareIdentitiesFunc,
) -> bool:
    """
    Decide whether `path` denotes the whole explicit selection of `forest`.

    The walk stops at the first identity without a matching node, so the
    accumulated flags only describe the traversed prefix.

    Args:
        path: Identities from the hierarchy root down to the clicked node.
        forest: Current selection forest.
        equals: Host identity comparator.

    Returns:
        bool: True when clicking the path should revert everything to default.
    """
    if not path or not forest:
        return False

    matched_levels = 0
    last_operator = Operator.INHERITED
    more_than_one_node = False
    explicit_count = 0
    current_level = forest

    for identity in path:
        more_than_one_node = more_than_one_node or len(current_level) > 1
        node = next((n for n in current_level if equals(n.identity, identity)), None)
        if node is None:
            break
        if node.operator is not Operator.INHERITED:
            explicit_count += 1
        more_than_one_node = more_than_one_node or explicit_count > 1
        matched_levels += 1
        last_operator = node.operator
        current_level = node.children

    # Leftover selections below the clicked node
    more_than_one_node = more_than_one_node or bool(current_level)

    return (
        matched_levels == len(path)
        and not more_than_one_node
        and last_operator is not Operator.INHERITED
    )

# -----------------------------------------------------------------------------
# STRATEGY OBJECTS
# -----------------------------------------------------------------------------

class SelectionStrategy(ABC):
    """
    Abstract interaction mode applied to a row click.
    """

    @abstractmethod
    def apply(self, path: Optional[HierarchyPath], forest: Forest, equals: CompareIdentitiesFunc) -> Forest:
        """
        Compute the next forest for a click on `path`.

        Args:
            path: Identities from the hierarchy root down to the clicked node.
            forest: Current selection forest.
            equals: Host identity comparator.

        Returns:
            Forest: The forest that replaces the current one.
        """
        pass


class MultiSelectStrategy(SelectionStrategy):
    """Accumulates toggles across independent branches."""

    def apply(self, path: Optional[HierarchyPath], forest: Forest, equals: CompareIdentitiesFunc) -> Forest:
        return multi_select_toggle(path, forest, equals)


class SingleSelectStrategy(SelectionStrategy):
    """Keeps at most one explicit selection at a time."""

    def apply(self, path: Optional[HierarchyPath], forest: Forest, equals: CompareIdentitiesFunc) -> Forest:
        return single_select_toggle(path, forest, equals)


_MULTI = MultiSelectStrategy()
_SINGLE = SingleSelectStrategy()


def get_strategy(multi_select: bool) -> SelectionStrategy:
    """Return the strategy matching the click modifier state."""
    return _MULTI if multi_select else _SINGLE
