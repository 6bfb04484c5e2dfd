from __future__ import annotations

from .controller import SelectionController
from .fallback import FilterPayload, apply_default_fallback, build_default_basic_filter
from .path_update import update_filter_tree
from .resolver import resolve_many, resolve_selection_state
from .strategies import (
    MultiSelectStrategy,
    SelectionStrategy,
    SingleSelectStrategy,
    get_strategy,
    multi_select_toggle,
    should_clear_tree,
    single_select_toggle,
)

__all__ = [
    "SelectionController",
    "FilterPayload",
    "apply_default_fallback",
    "build_default_basic_filter",
    "update_filter_tree",
    "resolve_selection_state",
    "resolve_many",
    "SelectionStrategy",
    "MultiSelectStrategy",
    "SingleSelectStrategy",
    "get_strategy",
    "multi_select_toggle",
    "single_select_toggle",
    "should_clear_tree",
]
