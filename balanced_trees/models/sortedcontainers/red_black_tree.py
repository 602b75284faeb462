"""
Red-Black Tree implementation for sorted key-value storage.

Optimized for write-heavy workloads with O(log N) operations.
"""

from collections.abc import Iterable
from typing import Any

from balanced_trees.interfaces.range_iterable import Comparable
from balanced_trees.models.node import Color
from balanced_trees.models.policies.red_black import RedBlackPolicy
from balanced_trees.models.sortedcontainers.balanced_tree import BalancedBinaryTree


class RedBlackTree(BalancedBinaryTree):
    """
    Red-Black Tree implementation of SortedContainer.

    Red links lean left, so every node corresponds to a 2-node or 3-node of
    a 2-3 tree and the height stays below 2 log2(N + 1).
    """

    def __init__(self, items: Iterable[tuple[Comparable, Any]] | None = None) -> None:
        super().__init__(RedBlackPolicy(), items)

    def black_height(self) -> int:
        """Return the number of black nodes on any root-to-leaf path."""
        height = 0
        current = self._root
        while current is not None:
            if current.color == Color.BLACK:
                height += 1
            current = current.left
        return height
