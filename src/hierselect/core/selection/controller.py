from __future__ import annotations

"""
Selection Controller.

Long-lived owner of the selection forest. Turns row clicks into forest
updates, decides which filter payload to emit, hands it to the host and
answers per-row display queries. Every update works on a copy of the
nodes along the clicked path and replaces the forest reference, so
payloads already emitted never observe later edits. Untouched subtrees
are shared between successive forests, keeping a click at
O(depth * siblings).
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from hierselect.core.selection.fallback import FilterPayload, apply_default_fallback
from hierselect.core.selection.resolver import resolve_many, resolve_selection_state
from hierselect.core.selection.strategies import get_strategy
from hierselect.core.validator import validate_settings
from hierselect.domain.filter_models import (
    CompareIdentitiesFunc,
    Forest,
    HierarchyPath,
    IdentityCodec,
    SelectionState,
    clone_along_path,
    identity_equals,
)
from hierselect.domain.constants import FILTER_TYPE_BASIC
from hierselect.domain.filter_payloads import (
    HierarchyColumn,
    HierarchyIdentityFilter,
    parse_host_filter,
)

logger = logging.getLogger(__name__)

ApplyFilterFunc = Callable[[FilterPayload], Any]


class SelectionController:
    """
    Coordinates selection edits, payload emission and state resolution.

    Thread Safety: calls must be serialized by the host event loop.
    """

    def __init__(
            self,
            equals: CompareIdentitiesFunc = identity_equals,
            apply_filter: Optional[ApplyFilterFunc] = None,
            columns: Optional[Sequence[HierarchyColumn]] = None,
            settings: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the controller with an empty selection.

        Args:
            equals: Host identity comparator.
            apply_filter: Fire-and-forget sink receiving every emitted payload.
            columns: Hierarchy columns used for filter targets.
            settings: Raw selection settings (validated on entry).
        """
        self._equals = equals
        self._apply_filter = apply_filter
        self._columns: List[HierarchyColumn] = list(columns or [])
        self._forest: Forest = []
        self._target: List[str] = []
        self._settings, warnings = validate_settings(settings or {})
        for w in warnings:
            logger.warning(f"Settings Constraint: {w}")
        self._last_payload: Optional[FilterPayload] = None

    # -------------------------------------------------------------------------
    # State Accessors
    # -------------------------------------------------------------------------

    @property
    def forest(self) -> Forest:
        """Current selection forest. Treat as read-only."""
        return self._forest

    @property
    def target(self) -> List[str]:
        """Target query names restored from the host filter."""
        return list(self._target)

    @property
    def columns(self) -> List[HierarchyColumn]:
        return list(self._columns)

    @columns.setter
    def columns(self, columns: Sequence[HierarchyColumn]) -> None:
        self._columns = list(columns)

    @property
    def settings(self) -> Dict[str, Any]:
        return dict(self._settings)

    @property
    def unselect_all_by_default(self) -> bool:
        return bool(self._settings["unselect_all_by_default"])

    @property
    def last_payload(self) -> Optional[FilterPayload]:
        """Most recently emitted payload, if any."""
        return self._last_payload

    # -------------------------------------------------------------------------
    # User Actions
    # -------------------------------------------------------------------------

    def handle_selection(self, path: Optional[HierarchyPath], multi_select: bool = False) -> FilterPayload:
        """
        Apply a row click and emit the resulting filter.

        Args:
            path: Identities from the hierarchy root down to the clicked row.
            multi_select: True when a modifier key (ctrl/meta/shift) was held.

        Returns:
            FilterPayload: The payload handed to the host.
        """
        strategy = get_strategy(multi_select)
        self._forest = strategy.apply(path, clone_along_path(self._forest, path, self._equals), self._equals)
        logger.debug(f"Selection updated ({'multi' if multi_select else 'single'}): {len(self._forest)} root node(s)")
        return self._emit(self._build_payload())

    def clear_selections(self) -> FilterPayload:
        """
        Reset every row to its default state and emit the resulting filter.

        Returns:
            FilterPayload: The empty hierarchy filter, or the basic fallback
                           filter under unselect-all mode.
        """
        self._forest = []
        self._target = []
        logger.info("Selections cleared.")
        return self._emit(self._build_payload())

    # -------------------------------------------------------------------------
    # Host Synchronization
    # -------------------------------------------------------------------------

    def sync_from_host(
            self,
            json_filters: Optional[Sequence[Dict[str, Any]]],
            settings: Optional[Dict[str, Any]] = None,
            columns: Optional[Sequence[HierarchyColumn]] = None,
            identity_decoder: Optional[IdentityCodec] = None,
    ) -> Optional[FilterPayload]:
        """
        Restore the selection after a host data update.

        Clears the selection (and emits) when the unselect-all mode changed,
        or when the mode is active and the restored selection is empty.

        Args:
            json_filters: Filter documents currently applied by the host.
            settings: Updated raw settings, if any.
            columns: Updated hierarchy columns, if any.
            identity_decoder: Optional transformation applied to node identities.

        Returns:
            Optional[FilterPayload]: The payload emitted by a forced clear, else None.
        """
        if columns is not None:
            self._columns = list(columns)

        previous_mode = self.unselect_all_by_default
        if settings is not None:
            self._settings, warnings = validate_settings(settings)
            for w in warnings:
                logger.warning(f"Settings Constraint: {w}")

        first = json_filters[0] if json_filters else None
        filter_type, forest, target = parse_host_filter(first, identity_decoder)
        self._forest = forest
        self._target = target

        mode_changed = previous_mode != self.unselect_all_by_default
        # A basic filter is already the unselect-all placeholder
        needs_default = (
            self.unselect_all_by_default
            and filter_type != FILTER_TYPE_BASIC
            and not forest
        )

        if mode_changed or needs_default:
            logger.info("Unselect-all mode requires a reset of the selection.")
            return self.clear_selections()
        return None

    # -------------------------------------------------------------------------
    # Presentation Queries
    # -------------------------------------------------------------------------

    def resolve(self, path: Optional[HierarchyPath]) -> SelectionState:
        """Resolve the display state of a single row."""
        return resolve_selection_state(path, self._forest, self._equals)

    def resolve_rows(self, paths: Iterable[Optional[HierarchyPath]]) -> List[SelectionState]:
        """Resolve many rows in display order."""
        return resolve_many(paths, self._forest, self._equals)

    def color_for(self, path: Optional[HierarchyPath]) -> str:
        """Map the row state through the configured palette."""
        state = self.resolve(path)
        return self._settings["selection_colors"][state.value]

    # -------------------------------------------------------------------------
    # Internal Helpers
    # -------------------------------------------------------------------------

    def _build_payload(self) -> FilterPayload:
        payload = apply_default_fallback(
            self._forest,
            self.unselect_all_by_default,
            self._columns,
            self._settings["unselect_string"],
        )
        # Without column metadata keep the target the host last reported
        if isinstance(payload, HierarchyIdentityFilter) and self._forest and not payload.target:
            payload = replace(payload, target=list(self._target))
        return payload

    def _emit(self, payload: FilterPayload) -> FilterPayload:
        """Hand the payload to the host; transmission failures never roll back state."""
        self._last_payload = payload
        if self._apply_filter is not None:
            try:
                self._apply_filter(payload)
            except Exception as e:
                logger.error(f"Host rejected filter payload: {e}", exc_info=True)
        return payload
