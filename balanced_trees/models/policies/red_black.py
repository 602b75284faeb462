"""
Red-Black balance policy: color based rebalancing of a left-leaning tree.
"""

from balanced_trees.interfaces.balance_policy import BalancePolicy
from balanced_trees.interfaces.range_iterable import Comparable
from balanced_trees.models.exceptions import InvariantViolationError
from balanced_trees.models.node import Color, RedBlackNode


class RedBlackPolicy(BalancePolicy):
    """
    Left-leaning Red-Black balance rules.

    Properties maintained:
    1. Every node is either red or black
    2. Root is always black
    3. Red nodes cannot have red children
    4. Every path from a node to a leaf has same number of black nodes
    5. Red links lean left

    Insertion fixes violations bottom-up. Deletion moves a red link down
    ahead of the descent so the removed node is never a lone black one, then
    fixes up on the way back with the insertion rule.
    """

    name = "red_black"

    def create_node(self, key: Comparable, value: object) -> RedBlackNode:
        return RedBlackNode(key=key, value=value, color=Color.RED)

    def after_insert(self, node: RedBlackNode) -> RedBlackNode:
        return self._balance(node)

    def after_delete(self, node: RedBlackNode) -> RedBlackNode:
        return self._balance(node)

    def prepare_left(self, node: RedBlackNode) -> RedBlackNode:
        if (
            node.left is not None
            and not self.is_red(node.left)
            and not self.is_red(node.left.left)
        ):
            node = self._move_red_left(node)
        return node

    def prepare_right(self, node: RedBlackNode) -> RedBlackNode:
        if self.is_red(node.left):
            node = self.rotate_right(node)
        if (
            node.right is not None
            and not self.is_red(node.right)
            and not self.is_red(node.right.left)
        ):
            node = self._move_red_right(node)
        return node

    def splice(self, node: RedBlackNode) -> RedBlackNode | None:
        # A lone child is red; it keeps the black height by taking node's color
        child = node.left if node.right is None else node.right
        if child is not None:
            child.color = node.color
        return child

    def prepare_delete_root(self, root: RedBlackNode) -> RedBlackNode:
        if not self.is_red(root.left) and not self.is_red(root.right):
            root.color = Color.RED
        return root

    def finish(self, root: RedBlackNode | None) -> RedBlackNode | None:
        if root is not None:
            root.color = Color.BLACK
        return root

    @staticmethod
    def is_red(node: RedBlackNode | None) -> bool:
        return node is not None and node.color == Color.RED

    def rotate_left(self, node: RedBlackNode) -> RedBlackNode:
        """Left rotation; the new root inherits node's color."""
        new_root = node.right
        node.right = new_root.left
        new_root.left = node
        new_root.color = node.color
        node.color = Color.RED
        return new_root

    def rotate_right(self, node: RedBlackNode) -> RedBlackNode:
        """Right rotation; the new root inherits node's color."""
        new_root = node.left
        node.left = new_root.right
        new_root.right = node
        new_root.color = node.color
        node.color = Color.RED
        return new_root

    def flip_colors(self, node: RedBlackNode) -> None:
        """Toggle node and both of its children."""
        node.color = self._opposite(node.color)
        node.left.color = self._opposite(node.left.color)
        node.right.color = self._opposite(node.right.color)

    @staticmethod
    def _opposite(color: Color) -> Color:
        return Color.BLACK if color == Color.RED else Color.RED

    def _balance(self, node: RedBlackNode) -> RedBlackNode:
        if self.is_red(node.right) and not self.is_red(node.left):
            node = self.rotate_left(node)
        if self.is_red(node.left) and self.is_red(node.left.left):
            node = self.rotate_right(node)
        if self.is_red(node.left) and self.is_red(node.right):
            self.flip_colors(node)
        return node

    def _move_red_left(self, node: RedBlackNode) -> RedBlackNode:
        """Make node.left or one of its children red."""
        self.flip_colors(node)
        if self.is_red(node.right.left):
            node.right = self.rotate_right(node.right)
            node = self.rotate_left(node)
            self.flip_colors(node)
        return node

    def _move_red_right(self, node: RedBlackNode) -> RedBlackNode:
        """Make node.right or one of its children red."""
        self.flip_colors(node)
        if self.is_red(node.left.left):
            node = self.rotate_right(node)
            self.flip_colors(node)
        return node

    def validate(self, root: RedBlackNode | None) -> None:
        if self.is_red(root):
            raise InvariantViolationError("rb-root", root.key, "root is red")
        self._check(root)

    def _check(self, node: RedBlackNode | None) -> int:
        """Return the black height of node, raising on the first bad subtree."""
        if node is None:
            return 0

        if self.is_red(node.right):
            raise InvariantViolationError(
                "rb-left-leaning", node.key, "right child is red"
            )
        if self.is_red(node) and self.is_red(node.left):
            raise InvariantViolationError(
                "rb-red-red", node.key, "red node has a red child"
            )

        left_black = self._check(node.left)
        right_black = self._check(node.right)
        if left_black != right_black:
            raise InvariantViolationError(
                "rb-black-height",
                node.key,
                f"left black height {left_black}, right {right_black}",
            )

        return left_black + (1 if node.color == Color.BLACK else 0)
