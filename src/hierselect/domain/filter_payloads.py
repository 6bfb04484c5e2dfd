from __future__ import annotations

"""
Filter Payload Domain Models.

Defines the documents handed to the host query engine: the hierarchy
identity filter built from a selection forest, and the basic equality
filter used when an empty selection must mean "nothing selected".
Also interprets filter documents returned by the host on data updates.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from hierselect.domain import constants as const
from hierselect.domain.filter_models import Forest, IdentityCodec, forest_from_dicts, forest_to_dicts

# -----------------------------------------------------------------------------
# TARGETS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HierarchyColumn:
    """
    Metadata of one non-measure column participating in the hierarchy.

    Attributes:
        query_name: Fully qualified 'Table.Column' name.
        index: Position of the column in the hierarchy levels.
        display_name: Human readable label.
    """
    query_name: str
    index: int = 0
    display_name: str = ""


@dataclass(frozen=True)
class ColumnTarget:
    """Table/column pair addressed by a basic filter."""
    table: str
    column: str

    def to_json(self) -> Dict[str, str]:
        return {"table": self.table, "column": self.column}


def split_query_name(query_name: str) -> ColumnTarget:
    """
    Split a 'Table.Column' query name at its last dot.

    Args:
        query_name: Qualified column name. Table names may contain dots.

    Returns:
        ColumnTarget: The table and column parts; the table is empty when no dot exists.
    """
    index = query_name.rfind(".")
    if index < 0:
        return ColumnTarget(table="", column=query_name)
    return ColumnTarget(table=query_name[:index], column=query_name[index + 1:])


def ordered_columns(columns: Sequence[HierarchyColumn]) -> List[HierarchyColumn]:
    """Return hierarchy columns sorted by level index."""
    return sorted(columns, key=lambda col: col.index)

# -----------------------------------------------------------------------------
# FILTER DOCUMENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HierarchyIdentityFilter:
    """
    Filter document carrying a sparse hierarchy selection.

    Attributes:
        target: Query names of the hierarchy levels.
        hierarchy_data: The selection forest.
    """
    target: List[str] = field(default_factory=list)
    hierarchy_data: Forest = field(default_factory=list)

    @property
    def filter_type(self) -> int:
        return const.FILTER_TYPE_HIERARCHY_IDENTITY

    def to_json(self, identity_encoder: Optional[IdentityCodec] = None) -> Dict[str, Any]:
        """
        Serialize into the host's hierarchy filter schema.

        Args:
            identity_encoder: Optional transformation applied to node identities.

        Returns:
            Dict[str, Any]: JSON-compatible filter document.
        """
        return {
            "$schema": const.HIERARCHY_FILTER_SCHEMA,
            "filterType": const.FILTER_TYPE_HIERARCHY_IDENTITY,
            "target": [{"queryName": name} for name in self.target],
            "hierarchyData": forest_to_dicts(self.hierarchy_data, identity_encoder),
        }


@dataclass(frozen=True)
class BasicFilter:
    """
    Simple equality filter against a single column.

    Attributes:
        target: Addressed table/column.
        values: Values matched by the operator.
        operator: Comparison operator (only 'In' is emitted).
    """
    target: ColumnTarget
    values: List[Any] = field(default_factory=list)
    operator: str = const.BASIC_FILTER_OPERATOR

    @property
    def filter_type(self) -> int:
        return const.FILTER_TYPE_BASIC

    def to_json(self, identity_encoder: Optional[IdentityCodec] = None) -> Dict[str, Any]:
        return {
            "$schema": const.BASIC_FILTER_SCHEMA,
            "filterType": const.FILTER_TYPE_BASIC,
            "operator": self.operator,
            "target": self.target.to_json(),
            "values": list(self.values),
        }

# -----------------------------------------------------------------------------
# HOST FILTER INTERPRETATION
# -----------------------------------------------------------------------------

def parse_host_filter(
        json_filter: Optional[Dict[str, Any]],
        identity_decoder: Optional[IdentityCodec] = None,
) -> Tuple[Optional[int], Forest, List[str]]:
    """
    Interpret the filter document the host reports as currently applied.

    A basic filter means no hierarchy selection is held. A hierarchy
    filter contributes its forest and target query names.

    Args:
        json_filter: First filter document supplied by the host, if any.
        identity_decoder: Optional transformation applied to node identities.

    Returns:
        Tuple[Optional[int], Forest, List[str]]: (filterType, forest, target query names).

    Raises:
        FilterDecodeError: If the hierarchy data is malformed.
    """
    if not json_filter or not isinstance(json_filter, dict):
        return None, [], []

    filter_type = json_filter.get("filterType")
    if filter_type == const.FILTER_TYPE_BASIC:
        return filter_type, [], []

    forest = forest_from_dicts(json_filter.get("hierarchyData"), identity_decoder)
    target: List[str] = []
    for entry in json_filter.get("target") or []:
        if isinstance(entry, dict) and entry.get("queryName"):
            target.append(str(entry["queryName"]))
    return filter_type, forest, target
