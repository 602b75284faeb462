"""
Self-balancing binary search tree driven by a pluggable balance policy.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from balanced_trees.interfaces.balance_policy import BalancePolicy
from balanced_trees.interfaces.range_iterable import Comparable
from balanced_trees.interfaces.sorted_container import SortedContainer
from balanced_trees.models.exceptions import InvariantViolationError
from balanced_trees.models.node import Node

logger = logging.getLogger(__name__)


class BalancedBinaryTree(SortedContainer):
    """
    Binary search tree that delegates rebalancing to a BalancePolicy.

    Mutations recurse from the root, do the plain BST step at the bottom and
    hand every node on the way back up to the policy, reattaching whatever
    subtree root the policy returns. Nodes never point at their parent.
    """

    def __init__(
        self,
        policy: BalancePolicy,
        items: Iterable[tuple[Comparable, Any]] | None = None,
    ) -> None:
        """
        Initialize an empty tree.

        Args:
            policy: Rebalancing rules applied after every structural change.
            items: Optional (key, value) pairs inserted with put().
        """
        self._policy = policy
        self._root: Node | None = None
        self._size: int = 0

        if items is not None:
            for key, value in items:
                self.put(key, value)

    def insert(self, key: Comparable, value: Any = None) -> bool:
        """Insert key unless present. O(log N)"""
        size_before = self._size
        self._root = self._policy.finish(self._insert(self._root, key, value))
        added = self._size > size_before
        if added:
            logger.debug(f"{self._policy.name}: inserted {key!r}")
        return added

    def put(self, key: Comparable, value: Any) -> None:
        """Insert or update a key-value pair. O(log N)"""
        node = self._find_node(key)
        if node is not None:
            # Key exists, update value
            node.value = value
            return

        self.insert(key, value)

    def get(self, key: Comparable) -> Any | None:
        """Retrieve value by key. O(log N)"""
        node = self._find_node(key)
        return node.value if node else None

    def delete(self, key: Comparable) -> bool:
        """Remove a key-value pair. O(log N)"""
        if self._find_node(key) is None:
            return False

        root = self._policy.prepare_delete_root(self._root)
        self._root = self._policy.finish(self._delete(root, key))
        self._size -= 1
        logger.debug(f"{self._policy.name}: deleted {key!r}")
        return True

    def has(self, key: Comparable) -> bool:
        return self._find_node(key) is not None

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        return self._height(self._root)

    def min_key(self) -> Comparable | None:
        if self._root is None:
            return None
        return self._min_node(self._root).key

    def max_key(self) -> Comparable | None:
        current = self._root
        if current is None:
            return None
        while current.right is not None:
            current = current.right
        return current.key

    def traverse(self) -> list[Comparable]:
        """Return all keys in ascending order (in-order walk)."""
        result: list[Comparable] = []
        self._inorder(self._root, result)
        return result

    def validate(self) -> None:
        """Check BST order, the entry count and the policy invariant."""
        try:
            count = 0
            previous: Node | None = None
            for node in _NodeIterator(self._root, None, None):
                if previous is not None and not previous.key < node.key:
                    raise InvariantViolationError(
                        "bst-order",
                        node.key,
                        f"follows {previous.key!r} in an in-order walk",
                    )
                previous = node
                count += 1

            if count != self._size:
                raise InvariantViolationError(
                    "size",
                    None,
                    f"counted {count} nodes, recorded size {self._size}",
                )

            self._policy.validate(self._root)
        except InvariantViolationError as e:
            logger.error(f"{type(self).__name__} failed validation: {e}")
            raise

    def __iter__(self) -> Iterator[tuple[Comparable, Any]]:
        return self.iterator()

    def iterator(
        self, start: Comparable | None = None, end: Comparable | None = None
    ) -> Iterator[tuple[Comparable, Any]]:
        return _RangeIterator(self._root, start, end)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self)
        return f"{type(self).__name__}({{{items}}})"

    def _find_node(self, key: Comparable) -> Node | None:
        """Find node by key."""
        current = self._root
        while current is not None:
            if key < current.key:
                current = current.left
            elif current.key < key:
                current = current.right
            else:
                return current
        return None

    def _insert(self, node: Node | None, key: Comparable, value: Any) -> Node:
        if node is None:
            self._size += 1
            return self._policy.create_node(key, value)

        if key < node.key:
            node.left = self._insert(node.left, key, value)
        elif node.key < key:
            node.right = self._insert(node.right, key, value)
        else:
            # Duplicate keys are not stored
            return node

        return self._policy.after_insert(node)

    def _delete(self, node: Node | None, key: Comparable) -> Node | None:
        if node is None:
            return None

        if key < node.key:
            node = self._policy.prepare_left(node)
            node.left = self._delete(node.left, key)
        else:
            node = self._policy.prepare_right(node)
            if node.key < key:
                node.right = self._delete(node.right, key)
            elif node.left is None or node.right is None:
                return self._policy.splice(node)
            else:
                # Two children: copy the in-order successor up, then remove it
                successor = self._min_node(node.right)
                node.key = successor.key
                node.value = successor.value
                node.right = self._delete(node.right, successor.key)

        return self._policy.after_delete(node)

    @staticmethod
    def _min_node(node: Node) -> Node:
        while node.left is not None:
            node = node.left
        return node

    def _height(self, node: Node | None) -> int:
        if node is None:
            return 0
        return 1 + max(self._height(node.left), self._height(node.right))

    def _inorder(self, node: Node | None, result: list[Comparable]) -> None:
        if node is not None:
            self._inorder(node.left, result)
            result.append(node.key)
            self._inorder(node.right, result)


class _NodeIterator(Iterator[Node]):
    """In-order iterator over the nodes of a key range."""

    def __init__(
        self, root: Node | None, start: Comparable | None, end: Comparable | None
    ) -> None:
        self._stack: list[Node] = []
        self._end = end

        # Initialize stack with nodes >= start
        self._push_left_path(root, start)

    def __iter__(self) -> Iterator[Node]:
        return self

    def __next__(self) -> Node:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()

        # Check end bound
        if self._end is not None and not node.key < self._end:
            self._stack.clear()
            raise StopIteration

        # Push right subtree's left path
        self._push_left_path(node.right, None)

        return node

    def _push_left_path(self, node: Node | None, start: Comparable | None) -> None:
        """Push leftmost path to stack, respecting start bound."""
        while node:
            if start is not None and node.key < start:
                # Skip nodes less than start
                node = node.right
            else:
                self._stack.append(node)
                node = node.left


class _RangeIterator(Iterator[tuple[Comparable, Any]]):
    """Iterator for range queries on a binary tree."""

    def __init__(
        self, root: Node | None, start: Comparable | None, end: Comparable | None
    ) -> None:
        self._nodes = _NodeIterator(root, start, end)

    def __iter__(self) -> Iterator[tuple[Comparable, Any]]:
        return self

    def __next__(self) -> tuple[Comparable, Any]:
        node = next(self._nodes)
        return (node.key, node.value)
