"""
BalancePolicy abstract base class for binary tree rebalancing rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from balanced_trees.interfaces.range_iterable import Comparable

if TYPE_CHECKING:
    from balanced_trees.models.node import Node


class BalancePolicy(ABC):
    """
    Rule set that restores a structural invariant after one subtree changed.

    The tree performs plain BST positioning and calls back into the policy at
    every node on the recursion path. Each hook receives a subtree root and
    returns the (possibly different) root the caller must reattach.

    Implementations:
    - AVLPolicy: height based
    - RedBlackPolicy: color based, left-leaning
    """

    name: str = "abstract"

    @abstractmethod
    def create_node(self, key: Comparable, value: Any) -> Node:
        """Return a fresh leaf carrying this policy's metadata."""
        pass

    @abstractmethod
    def after_insert(self, node: Node) -> Node:
        """
        Restore the invariant at node after an insertion below it.

        Args:
            node: Subtree root whose left or right subtree just changed.

        Returns:
            The new subtree root.
        """
        pass

    @abstractmethod
    def after_delete(self, node: Node) -> Node:
        """
        Restore the invariant at node after a deletion below it.

        Args:
            node: Subtree root whose left or right subtree just changed.

        Returns:
            The new subtree root.
        """
        pass

    def prepare_left(self, node: Node) -> Node:
        """Adjust node before a deletion descends into its left subtree."""
        return node

    def prepare_right(self, node: Node) -> Node:
        """Adjust node before a deletion descends into its right subtree."""
        return node

    def splice(self, node: Node) -> Node | None:
        """
        Remove node, which has at most one child, from the tree.

        Returns:
            The subtree that takes node's place.
        """
        return node.left if node.right is None else node.right

    def prepare_delete_root(self, root: Node) -> Node:
        """Adjust the whole tree before a deletion starts."""
        return root

    def finish(self, root: Node | None) -> Node | None:
        """Adjust the whole tree after a mutation completed."""
        return root

    @abstractmethod
    def validate(self, root: Node | None) -> None:
        """
        Check the policy invariant over the whole tree.

        Raises:
            InvariantViolationError: On the first violation.
        """
        pass
