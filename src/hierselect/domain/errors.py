from __future__ import annotations

"""
Domain Exception Hierarchy.

Errors raised at the boundaries of the selection core. The tree
algorithms themselves never raise on well-formed input.
"""


class HierSelectError(Exception):
    """Base class for all errors raised by the selection package."""


class FallbackUnavailableError(HierSelectError):
    """
    Raised when the unselect-all fallback filter is required but no
    hierarchy column is known to target.
    """


class FilterDecodeError(HierSelectError, ValueError):
    """Raised when a serialized filter tree cannot be decoded."""
