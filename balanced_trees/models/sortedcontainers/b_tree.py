"""
B-Tree implementation for sorted key-value storage.

Keeps many keys per node, so the tree stays very shallow: every node except
the root holds between t-1 and 2t-1 keys, where t is the minimum degree.
"""

import bisect
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from balanced_trees.interfaces.range_iterable import Comparable
from balanced_trees.interfaces.sorted_container import SortedContainer
from balanced_trees.models.exceptions import InvariantViolationError

logger = logging.getLogger(__name__)


@dataclass
class BTreeNode:
    """Node in the B-Tree. values[i] belongs to keys[i]."""

    leaf: bool = True
    keys: list[Any] = field(default_factory=list)
    values: list[Any] = field(default_factory=list)
    children: list["BTreeNode"] = field(default_factory=list)


class BTree(SortedContainer):
    """
    B-Tree implementation of SortedContainer.

    Properties maintained:
    1. Keys inside a node are sorted; children[i] holds keys between
       keys[i-1] and keys[i]
    2. Every non-root node holds t-1 to 2t-1 keys
    3. An internal node with k keys has k+1 children
    4. All leaves are at the same depth

    Insertion splits full nodes on the way down and deletion tops up thin
    nodes on the way down, so both run in a single root-to-leaf pass.
    """

    # Default minimum degree (t)
    DEFAULT_MIN_DEGREE = 6

    def __init__(
        self,
        min_degree: int = DEFAULT_MIN_DEGREE,
        items: Iterable[tuple[Comparable, Any]] | None = None,
    ) -> None:
        """
        Initialize an empty B-Tree.

        Args:
            min_degree: Minimum degree t. Nodes split at 2t-1 keys.
            items: Optional (key, value) pairs inserted with put().
        """
        if not isinstance(min_degree, int) or isinstance(min_degree, bool):
            raise ValueError(f"min_degree must be an integer, got {min_degree!r}")
        if min_degree < 2:
            raise ValueError(f"min_degree must be >= 2, got {min_degree}")

        self._t = min_degree
        self._max_keys = 2 * min_degree - 1
        self._root = BTreeNode(leaf=True)
        self._size: int = 0

        if items is not None:
            for key, value in items:
                self.put(key, value)

    @property
    def min_degree(self) -> int:
        return self._t

    def insert(self, key: Comparable, value: Any = None) -> bool:
        """Insert key unless present. O(t log_t N)"""
        if self._find_entry(key) is not None:
            return False

        root = self._root
        if len(root.keys) == self._max_keys:
            new_root = BTreeNode(leaf=False, children=[root])
            self._split_child(new_root, 0)
            self._root = new_root
            logger.debug(f"btree: root split, height now {self.height()}")

        self._insert_non_full(self._root, key, value)
        self._size += 1
        logger.debug(f"btree: inserted {key!r}")
        return True

    def put(self, key: Comparable, value: Any) -> None:
        """Insert or update a key-value pair."""
        entry = self._find_entry(key)
        if entry is not None:
            node, index = entry
            node.values[index] = value
            return

        self.insert(key, value)

    def get(self, key: Comparable) -> Any | None:
        entry = self._find_entry(key)
        if entry is None:
            return None
        node, index = entry
        return node.values[index]

    def delete(self, key: Comparable) -> bool:
        """Remove a key-value pair. O(t log_t N)"""
        if self._find_entry(key) is None:
            return False

        self._delete(self._root, key)

        if not self._root.keys and not self._root.leaf:
            self._root = self._root.children[0]
            logger.debug(f"btree: root emptied, height now {self.height()}")

        self._size -= 1
        logger.debug(f"btree: deleted {key!r}")
        return True

    def has(self, key: Comparable) -> bool:
        return self._find_entry(key) is not None

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        if not self._root.keys:
            return 0
        levels = 1
        node = self._root
        while not node.leaf:
            node = node.children[0]
            levels += 1
        return levels

    def min_key(self) -> Comparable | None:
        if not self._root.keys:
            return None
        node = self._root
        while not node.leaf:
            node = node.children[0]
        return node.keys[0]

    def max_key(self) -> Comparable | None:
        if not self._root.keys:
            return None
        node = self._root
        while not node.leaf:
            node = node.children[-1]
        return node.keys[-1]

    def traverse(self) -> list[Comparable]:
        result: list[Comparable] = []
        self._traverse_node(self._root, result)
        return result

    def validate(self) -> None:
        """Check key order, node fill and leaf depth."""
        try:
            leaf_depths: set[int] = set()
            count = self._check(self._root, None, None, 0, leaf_depths)

            if len(leaf_depths) > 1:
                raise InvariantViolationError(
                    "btree-leaf-depth",
                    None,
                    f"leaves found at depths {sorted(leaf_depths)}",
                )
            if count != self._size:
                raise InvariantViolationError(
                    "size",
                    None,
                    f"counted {count} keys, recorded size {self._size}",
                )
        except InvariantViolationError as e:
            logger.error(f"BTree failed validation: {e}")
            raise

    def __iter__(self) -> Iterator[tuple[Comparable, Any]]:
        return self.iterator()

    def iterator(
        self, start: Comparable | None = None, end: Comparable | None = None
    ) -> Iterator[tuple[Comparable, Any]]:
        return _BTreeRangeIterator(self._root, start, end)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self)
        return f"BTree({{{items}}})"

    def _find_entry(self, key: Comparable) -> tuple[BTreeNode, int] | None:
        """Return (node, index) holding key, or None."""
        node = self._root
        while True:
            i = bisect.bisect_left(node.keys, key)
            if i < len(node.keys) and not key < node.keys[i]:
                return node, i
            if node.leaf:
                return None
            node = node.children[i]

    def _insert_non_full(self, node: BTreeNode, key: Comparable, value: Any) -> None:
        while not node.leaf:
            i = bisect.bisect_left(node.keys, key)
            if len(node.children[i].keys) == self._max_keys:
                self._split_child(node, i)
                if node.keys[i] < key:
                    i += 1
            node = node.children[i]

        i = bisect.bisect_left(node.keys, key)
        node.keys.insert(i, key)
        node.values.insert(i, value)

    def _split_child(self, parent: BTreeNode, index: int) -> None:
        """Split the full child at index around its median key."""
        t = self._t
        child = parent.children[index]

        # Move the upper half of the keys to the new sibling
        sibling = BTreeNode(
            leaf=child.leaf,
            keys=child.keys[t:],
            values=child.values[t:],
            children=child.children[t:] if not child.leaf else [],
        )
        median_key = child.keys[t - 1]
        median_value = child.values[t - 1]

        child.keys = child.keys[: t - 1]
        child.values = child.values[: t - 1]
        if not child.leaf:
            child.children = child.children[:t]

        parent.keys.insert(index, median_key)
        parent.values.insert(index, median_value)
        parent.children.insert(index + 1, sibling)

    def _delete(self, node: BTreeNode, key: Comparable) -> None:
        t = self._t
        i = bisect.bisect_left(node.keys, key)
        found = i < len(node.keys) and not key < node.keys[i]

        if node.leaf:
            if found:
                del node.keys[i]
                del node.values[i]
            return

        if found:
            left, right = node.children[i], node.children[i + 1]
            if len(left.keys) >= t:
                # Replace with the predecessor, then remove it below
                pred_key, pred_value = self._max_entry(left)
                node.keys[i], node.values[i] = pred_key, pred_value
                self._delete(left, pred_key)
            elif len(right.keys) >= t:
                succ_key, succ_value = self._min_entry(right)
                node.keys[i], node.values[i] = succ_key, succ_value
                self._delete(right, succ_key)
            else:
                self._merge(node, i)
                self._delete(left, key)
            return

        if len(node.children[i].keys) < t:
            i = self._fill(node, i)
        self._delete(node.children[i], key)

    def _fill(self, node: BTreeNode, index: int) -> int:
        """
        Give the child at index at least t keys.

        Returns:
            Index of the child that now covers the original child's range.
        """
        t = self._t
        if index > 0 and len(node.children[index - 1].keys) >= t:
            self._borrow_from_prev(node, index)
            return index
        if index < len(node.children) - 1 and len(node.children[index + 1].keys) >= t:
            self._borrow_from_next(node, index)
            return index
        if index < len(node.children) - 1:
            self._merge(node, index)
            return index
        self._merge(node, index - 1)
        return index - 1

    def _borrow_from_prev(self, node: BTreeNode, index: int) -> None:
        child = node.children[index]
        sibling = node.children[index - 1]

        child.keys.insert(0, node.keys[index - 1])
        child.values.insert(0, node.values[index - 1])
        node.keys[index - 1] = sibling.keys.pop()
        node.values[index - 1] = sibling.values.pop()
        if not child.leaf:
            child.children.insert(0, sibling.children.pop())

    def _borrow_from_next(self, node: BTreeNode, index: int) -> None:
        child = node.children[index]
        sibling = node.children[index + 1]

        child.keys.append(node.keys[index])
        child.values.append(node.values[index])
        node.keys[index] = sibling.keys.pop(0)
        node.values[index] = sibling.values.pop(0)
        if not child.leaf:
            child.children.append(sibling.children.pop(0))

    def _merge(self, node: BTreeNode, index: int) -> None:
        """Fold keys[index] and the right child into the left child."""
        left = node.children[index]
        right = node.children.pop(index + 1)

        left.keys.append(node.keys.pop(index))
        left.values.append(node.values.pop(index))
        left.keys.extend(right.keys)
        left.values.extend(right.values)
        left.children.extend(right.children)
        logger.debug(f"btree: merged node of {len(left.keys)} keys")

    @staticmethod
    def _max_entry(node: BTreeNode) -> tuple[Any, Any]:
        while not node.leaf:
            node = node.children[-1]
        return node.keys[-1], node.values[-1]

    @staticmethod
    def _min_entry(node: BTreeNode) -> tuple[Any, Any]:
        while not node.leaf:
            node = node.children[0]
        return node.keys[0], node.values[0]

    def _traverse_node(self, node: BTreeNode, result: list[Comparable]) -> None:
        for i, key in enumerate(node.keys):
            if not node.leaf:
                self._traverse_node(node.children[i], result)
            result.append(key)
        if not node.leaf:
            self._traverse_node(node.children[-1], result)

    def _check(
        self,
        node: BTreeNode,
        lower: Comparable | None,
        upper: Comparable | None,
        depth: int,
        leaf_depths: set[int],
    ) -> int:
        """Return the number of keys below node, raising on the first violation."""
        first = node.keys[0] if node.keys else None

        if node is not self._root and len(node.keys) < self._t - 1:
            raise InvariantViolationError(
                "btree-underflow", first, f"{len(node.keys)} keys, min {self._t - 1}"
            )
        if len(node.keys) > self._max_keys:
            raise InvariantViolationError(
                "btree-overflow", first, f"{len(node.keys)} keys, max {self._max_keys}"
            )
        if len(node.values) != len(node.keys):
            raise InvariantViolationError(
                "btree-values", first, "keys and values differ in length"
            )

        for i, key in enumerate(node.keys):
            if i > 0 and not node.keys[i - 1] < key:
                raise InvariantViolationError("bst-order", key, "keys not ascending")
            if lower is not None and not lower < key:
                raise InvariantViolationError("bst-order", key, f"not above {lower!r}")
            if upper is not None and not key < upper:
                raise InvariantViolationError("bst-order", key, f"not below {upper!r}")

        if node.leaf:
            if node.children:
                raise InvariantViolationError("btree-leaf", first, "leaf has children")
            leaf_depths.add(depth)
            return len(node.keys)

        if len(node.children) != len(node.keys) + 1:
            raise InvariantViolationError(
                "btree-children",
                first,
                f"{len(node.keys)} keys but {len(node.children)} children",
            )

        count = len(node.keys)
        bounds = [lower, *node.keys, upper]
        for i, child in enumerate(node.children):
            count += self._check(child, bounds[i], bounds[i + 1], depth + 1, leaf_depths)
        return count


class _BTreeRangeIterator(Iterator[tuple[Comparable, Any]]):
    """Iterator for range queries on B-Tree."""

    def __init__(
        self, root: BTreeNode, start: Comparable | None, end: Comparable | None
    ) -> None:
        # Each frame is [node, index of the next key to emit]
        self._stack: list[list[Any]] = []
        self._end = end

        self._push_left_path(root, start)

    def __iter__(self) -> Iterator[tuple[Comparable, Any]]:
        return self

    def __next__(self) -> tuple[Comparable, Any]:
        while self._stack:
            node, index = self._stack[-1]
            if index >= len(node.keys):
                self._stack.pop()
                continue

            key = node.keys[index]

            # Check end bound
            if self._end is not None and not key < self._end:
                self._stack.clear()
                raise StopIteration

            self._stack[-1][1] = index + 1
            if not node.leaf:
                self._push_left_path(node.children[index + 1], None)
            return (key, node.values[index])

        raise StopIteration

    def _push_left_path(self, node: BTreeNode, start: Comparable | None) -> None:
        """Push leftmost path to stack, respecting start bound."""
        while True:
            index = 0 if start is None else bisect.bisect_left(node.keys, start)
            self._stack.append([node, index])
            if node.leaf:
                return
            node = node.children[index]
