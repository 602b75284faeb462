"""
OrderedSet - Sorted set of keys backed by a sorted container.
"""

from collections.abc import Iterator

from balanced_trees.interfaces.range_iterable import Comparable
from balanced_trees.interfaces.sorted_container import SortedContainer
from balanced_trees.models.sortedcontainers.avl_tree import AVLTree


class OrderedSet:
    """
    Set of keys kept in ascending order, backed by a SortedContainer.

    Supports:
    - O(log N) add, discard and membership
    - Ascending iteration and half-open range queries
    """

    def __init__(self, sorted_container: SortedContainer | None = None) -> None:
        """
        Initialize OrderedSet.

        Args:
            sorted_container: The backing sorted data structure. Defaults to
                an empty AVLTree.
        """
        if sorted_container is None:
            sorted_container = AVLTree()
        self._container = sorted_container

    @property
    def container(self) -> SortedContainer:
        return self._container

    def add(self, key: Comparable) -> bool:
        """
        Add a key.

        Returns:
            True if the key was new, False if it was already a member.
        """
        return self._container.insert(key)

    def discard(self, key: Comparable) -> bool:
        """
        Remove a key if present.

        Returns:
            True if the key was removed, False if it was not a member.
        """
        return self._container.delete(key)

    def range(self, start: Comparable, end: Comparable) -> list[Comparable]:
        """
        Get all keys in range [start, end).

        Args:
            start: Start key (inclusive).
            end: End key (exclusive).

        Returns:
            List of keys in sorted order.
        """
        return [key for key, _ in self._container.iterator(start, end)]

    def first(self) -> Comparable | None:
        return self._container.min_key()

    def last(self) -> Comparable | None:
        return self._container.max_key()

    def __contains__(self, key: object) -> bool:
        return self._container.has(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self._container.size()

    def __iter__(self) -> Iterator[Comparable]:
        for key, _ in self._container:
            yield key

    def __repr__(self) -> str:
        return f"OrderedSet({self._container.traverse()!r})"
