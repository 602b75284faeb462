"""
Custom exceptions for the ordered containers.
"""

from typing import Any


class TreeError(Exception):
    """Base class for errors raised by the ordered containers."""


class InvariantViolationError(TreeError):
    """
    Raised by validate() when a structural invariant does not hold.

    This is a fail-fast error indicating a corrupted tree.
    """

    def __init__(self, invariant: str, key: Any, detail: str):
        """
        Initialize violation error.

        Args:
            invariant: Short name of the broken invariant (e.g. "bst-order").
            key: Key of the node where the violation was detected.
            detail: Human readable description.
        """
        self.invariant = invariant
        self.key = key
        self.detail = detail
        super().__init__(f"{invariant} violated at key {key!r}: {detail}")
