"""
Self-balancing ordered containers.

This package provides ordered maps and sets with O(log N) operations:
- AVLTree - height balanced binary search tree
- RedBlackTree - left-leaning red-black binary search tree
- BTree - degree-t multiway search tree
- OrderedSet - set semantics over any of the above
- create_container(kind) - build a container by name
"""

from balanced_trees.config import TreeKind, create_container
from balanced_trees.models import InvariantViolationError, OrderedSet, TreeError
from balanced_trees.models.sortedcontainers import AVLTree, BTree, RedBlackTree

__all__ = [
    "AVLTree",
    "BTree",
    "InvariantViolationError",
    "OrderedSet",
    "RedBlackTree",
    "TreeError",
    "TreeKind",
    "create_container",
]
