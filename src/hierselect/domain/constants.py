from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to the filter schema identifiers, the
default placeholder used by the unselect-all fallback, the display
palette and configuration versioning.
"""

from typing import Dict

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# FILTER SCHEMAS
# -----------------------------------------------------------------------------
HIERARCHY_FILTER_SCHEMA = "https://powerbi.com/product/schema#hierarchyIdentity"
BASIC_FILTER_SCHEMA = "http://powerbi.com/product/schema#basic"

FILTER_TYPE_BASIC = 1
FILTER_TYPE_HIERARCHY_IDENTITY = 10

BASIC_FILTER_OPERATOR = "In"

# -----------------------------------------------------------------------------
# UNSELECT-ALL MODE
# -----------------------------------------------------------------------------
DEFAULT_UNSELECT_STRING = "No Data"

# -----------------------------------------------------------------------------
# PRESENTATION
# -----------------------------------------------------------------------------
DEFAULT_SELECTION_COLORS: Dict[str, str] = {
    "Selected": "green",
    "Unselected": "white",
    "Partial": "lightGreen",
    "Default": "white",
}
