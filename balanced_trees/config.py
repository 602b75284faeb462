"""
Container factory and configuration defaults.
"""

import logging
import os
from enum import Enum
from typing import Any

from balanced_trees.interfaces.sorted_container import SortedContainer
from balanced_trees.models.sortedcontainers import AVLTree, BTree, RedBlackTree

logger = logging.getLogger(__name__)

# Environment variable consulted when no kind is passed to create_container()
KIND_ENV_VAR = "BALANCED_TREES_KIND"

DEFAULT_KIND = "avl"


class TreeKind(str, Enum):
    """Available SortedContainer implementations."""

    AVL = "avl"
    RED_BLACK = "red_black"
    BTREE = "btree"


_CONTAINERS: dict[TreeKind, type[SortedContainer]] = {
    TreeKind.AVL: AVLTree,
    TreeKind.RED_BLACK: RedBlackTree,
    TreeKind.BTREE: BTree,
}

# Constructor keyword arguments each kind accepts
_ACCEPTED_OPTIONS: dict[TreeKind, frozenset[str]] = {
    TreeKind.AVL: frozenset({"items"}),
    TreeKind.RED_BLACK: frozenset({"items"}),
    TreeKind.BTREE: frozenset({"items", "min_degree"}),
}


def resolve_kind(kind: str | TreeKind | None = None) -> TreeKind:
    """
    Turn a user supplied kind into a TreeKind.

    Args:
        kind: Kind name such as "avl", "red-black" or "btree". If None, the
            BALANCED_TREES_KIND environment variable is used, then "avl".

    Returns:
        The matching TreeKind.

    Raises:
        ValueError: If the name matches no container.
    """
    if isinstance(kind, TreeKind):
        return kind
    if kind is None:
        kind = os.environ.get(KIND_ENV_VAR, DEFAULT_KIND)

    normalized = str(kind).strip().lower().replace("-", "_")
    try:
        return TreeKind(normalized)
    except ValueError:
        choices = ", ".join(k.value for k in TreeKind)
        raise ValueError(
            f"Unknown container kind {kind!r}, expected one of: {choices}"
        ) from None


def create_container(
    kind: str | TreeKind | None = None, **options: Any
) -> SortedContainer:
    """
    Build an empty (or pre-filled) sorted container.

    Args:
        kind: Which implementation to build; see resolve_kind().
        **options: Constructor arguments, e.g. min_degree for "btree" or
            items for any kind.

    Returns:
        A new SortedContainer.

    Raises:
        ValueError: If the kind is unknown or an option is not accepted.
    """
    resolved = resolve_kind(kind)

    unexpected = set(options) - _ACCEPTED_OPTIONS[resolved]
    if unexpected:
        raise ValueError(
            f"{resolved.value} container does not accept options: {sorted(unexpected)}"
        )

    logger.debug(
        f"Creating {resolved.value} container with options {sorted(options)}"
    )
    return _CONTAINERS[resolved](**options)
