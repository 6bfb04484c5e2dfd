from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for building selection forests and settings.
"""

import os
import sys
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from hierselect.domain.filter_models import FilterNode, Operator  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def eq() -> Callable[[Any, Any], bool]:
    """Plain equality comparator used by hosts with value identities."""
    return lambda a, b: a == b


@pytest.fixture
def node() -> Callable[..., FilterNode]:
    """
    Return a compact FilterNode builder.

    Usage: node("A", "S", node("B", "I", ...)) where the operator letter is
    S (Selected), N (NotSelected) or I (Inherited).
    """
    ops = {"S": Operator.SELECTED, "N": Operator.NOT_SELECTED, "I": Operator.INHERITED}

    def _build(identity: Any, op: str, *children: FilterNode) -> FilterNode:
        return FilterNode(identity=identity, operator=ops[op], children=list(children))

    return _build


@pytest.fixture
def mock_settings_dict() -> Dict[str, Any]:
    """
    Return a valid, complete settings dictionary for testing.

    Reflects the structure defined in 'hierselect.domain.config'.
    """
    return {
        "unselect_all_by_default": False,
        "unselect_string": "No Data",
        "selection_colors": {
            "Selected": "green",
            "Unselected": "white",
            "Partial": "lightGreen",
            "Default": "white",
        },
    }
