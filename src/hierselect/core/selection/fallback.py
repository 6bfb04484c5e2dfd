from __future__ import annotations

"""
Default-Fallback Policy.

Under the "unselect all by default" mode an empty hierarchy filter would
read as "everything selected". The policy substitutes a basic filter that
only keeps rows equal to a placeholder value on the first hierarchy column.
"""

import logging
from typing import Sequence, Union

from hierselect.domain.errors import FallbackUnavailableError
from hierselect.domain.filter_models import Forest
from hierselect.domain.filter_payloads import (
    BasicFilter,
    HierarchyColumn,
    HierarchyIdentityFilter,
    ordered_columns,
    split_query_name,
)

logger = logging.getLogger(__name__)

FilterPayload = Union[HierarchyIdentityFilter, BasicFilter]


def build_default_basic_filter(columns: Sequence[HierarchyColumn], placeholder: str) -> BasicFilter:
    """
    Build the placeholder equality filter on the first hierarchy column.

    Args:
        columns: Hierarchy columns in any order.
        placeholder: Value kept by the filter (e.g. "No Data").

    Returns:
        BasicFilter: Filter targeting the lowest-index column.

    Raises:
        FallbackUnavailableError: If no column is available.
    """
    if not columns:
        raise FallbackUnavailableError("Cannot build the default filter without hierarchy columns.")
    first = ordered_columns(columns)[0]
    return BasicFilter(target=split_query_name(first.query_name), values=[placeholder])


def apply_default_fallback(
        forest: Forest,
        unselect_all_by_default: bool,
        columns: Sequence[HierarchyColumn],
        placeholder: str,
) -> FilterPayload:
    """
    Choose the payload to emit for the current forest.

    Args:
        forest: Current selection forest.
        unselect_all_by_default: Whether an empty selection means nothing selected.
        columns: Hierarchy columns used for targets.
        placeholder: Value used by the fallback filter.

    Returns:
        FilterPayload: The basic fallback filter when the mode is active and the
                       forest is empty, otherwise the hierarchy filter.
    """
    if unselect_all_by_default and not forest:
        logger.debug(f"Empty selection under unselect-all mode. Emitting '{placeholder}' filter.")
        return build_default_basic_filter(columns, placeholder)

    target = [col.query_name for col in ordered_columns(columns)] if forest else []
    return HierarchyIdentityFilter(target=target, hierarchy_data=forest)
