from __future__ import annotations

"""
Settings Validation Service.

Ensures that the selection settings coming from persisted state, the CLI
or the host formatting pane conform to the expected schema. Handles type
coercion and default value injection.
"""

import logging
from typing import Any, Dict, List, Tuple

from hierselect.domain.config import get_default_config
from hierselect.domain.constants import DEFAULT_SELECTION_COLORS

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_settings(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided settings dictionary.

    Args:
        config: Raw settings data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized settings and a list of warnings.

    Raises:
        TypeError: In strict mode, on any invalid field.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    merged["unselect_all_by_default"] = _as_bool(
        merged.get("unselect_all_by_default"), defaults["unselect_all_by_default"],
        "unselect_all_by_default", warnings, strict
    )
    merged["unselect_string"] = _as_str(
        merged.get("unselect_string"), defaults["unselect_string"],
        "unselect_string", warnings, strict
    )
    merged["selection_colors"] = _as_palette(
        merged.get("selection_colors"), warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_palette(value: Any, warnings: List[str], strict: bool) -> Dict[str, str]:
    """Merge a partial state->color mapping over the default palette."""
    palette = dict(DEFAULT_SELECTION_COLORS)
    if value is None:
        return palette
    if not isinstance(value, dict):
        msg = f"Invalid field 'selection_colors': expected dict, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return palette

    for state, color in value.items():
        if state not in palette:
            warnings.append(f"Unknown selection state '{state}' in palette ignored.")
            continue
        if not isinstance(color, str) or not color.strip():
            msg = f"Invalid color for state '{state}'."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Using fallback.")
            continue
        palette[state] = color.strip()
    return palette
