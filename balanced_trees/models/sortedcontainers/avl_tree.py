"""
AVL Tree implementation for sorted key-value storage.

Optimized for read-heavy workloads: the tree is never more than about
1.44 log2(N) levels deep.
"""

from collections.abc import Iterable
from typing import Any

from balanced_trees.interfaces.range_iterable import Comparable
from balanced_trees.models.policies.avl import AVLPolicy
from balanced_trees.models.sortedcontainers.balanced_tree import BalancedBinaryTree


class AVLTree(BalancedBinaryTree):
    """
    AVL Tree implementation of SortedContainer.

    Properties maintained:
    1. Keys in a left subtree are smaller, keys in a right subtree larger
    2. Subtree heights of every node differ by at most one
    """

    def __init__(self, items: Iterable[tuple[Comparable, Any]] | None = None) -> None:
        super().__init__(AVLPolicy(), items)
