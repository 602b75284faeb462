"""
AVL balance policy: height based rebalancing.
"""

from balanced_trees.interfaces.balance_policy import BalancePolicy
from balanced_trees.interfaces.range_iterable import Comparable
from balanced_trees.models.exceptions import InvariantViolationError
from balanced_trees.models.node import AVLNode


class AVLPolicy(BalancePolicy):
    """
    Keeps |height(left) - height(right)| <= 1 at every node.

    Heights are stored on the nodes and recomputed bottom-up, child before
    parent, after every structural change. The rotation case is chosen from
    the sign of the node's balance factor and the sign of the heavy child's
    balance factor, which works for both the insert and the delete path.
    """

    name = "avl"

    def create_node(self, key: Comparable, value: object) -> AVLNode:
        return AVLNode(key=key, value=value)

    def after_insert(self, node: AVLNode) -> AVLNode:
        return self._rebalance(node)

    def after_delete(self, node: AVLNode) -> AVLNode:
        return self._rebalance(node)

    @staticmethod
    def height(node: AVLNode | None) -> int:
        return node.height if node is not None else 0

    def update_height(self, node: AVLNode) -> None:
        node.height = 1 + max(self.height(node.left), self.height(node.right))

    def balance_factor(self, node: AVLNode) -> int:
        return self.height(node.left) - self.height(node.right)

    def rotate_right(self, y: AVLNode) -> AVLNode:
        """Right rotation around y; its left child x becomes the subtree root."""
        x = y.left
        y.left = x.right
        x.right = y

        self.update_height(y)
        self.update_height(x)
        return x

    def rotate_left(self, x: AVLNode) -> AVLNode:
        """Left rotation around x; its right child y becomes the subtree root."""
        y = x.right
        x.right = y.left
        y.left = x

        self.update_height(x)
        self.update_height(y)
        return y

    def _rebalance(self, node: AVLNode) -> AVLNode:
        self.update_height(node)
        balance = self.balance_factor(node)

        if balance > 1:
            # Left Right: straighten the left child first
            if self.balance_factor(node.left) < 0:
                node.left = self.rotate_left(node.left)
            # Left Left
            return self.rotate_right(node)

        if balance < -1:
            # Right Left
            if self.balance_factor(node.right) > 0:
                node.right = self.rotate_right(node.right)
            # Right Right
            return self.rotate_left(node)

        return node

    def validate(self, root: AVLNode | None) -> None:
        self._check(root)

    def _check(self, node: AVLNode | None) -> int:
        """Return the real height of node, raising on the first bad subtree."""
        if node is None:
            return 0

        left_height = self._check(node.left)
        right_height = self._check(node.right)

        if abs(left_height - right_height) > 1:
            raise InvariantViolationError(
                "avl-balance",
                node.key,
                f"left height {left_height}, right height {right_height}",
            )

        actual = 1 + max(left_height, right_height)
        if node.height != actual:
            raise InvariantViolationError(
                "avl-height",
                node.key,
                f"stored height {node.height}, actual {actual}",
            )
        return actual
