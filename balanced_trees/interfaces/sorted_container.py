"""
SortedContainer abstract base class for sorted key-value data structures.
"""

from abc import abstractmethod
from typing import Any

from balanced_trees.interfaces.range_iterable import Comparable, RangeIterable


class SortedContainer(RangeIterable):
    """
    Abstract base class for sorted key-value containers.

    Provides O(log N) operations for insert, put, get, search and delete.
    Inherits range iteration capabilities from RangeIterable.

    Implementations:
    - AVLTree: strictly height balanced, shallowest of the three
    - RedBlackTree: left-leaning red-black tree, fewer rotations on writes
    - BTree: degree-k tree, many keys per node
    """

    @abstractmethod
    def insert(self, key: Comparable, value: Any = None) -> bool:
        """
        Insert a key that is not stored yet.

        Args:
            key: The key to insert.
            value: The value to associate with the key.

        Returns:
            True if the key was added, False if it was already present
            (the stored value is left untouched).

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def put(self, key: Comparable, value: Any) -> None:
        """
        Insert or update a key-value pair.

        Args:
            key: The key to insert/update.
            value: The value to associate with the key.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def get(self, key: Comparable) -> Any | None:
        """
        Retrieve the value for a given key.

        Args:
            key: The key to look up.

        Returns:
            The value if found, None otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def delete(self, key: Comparable) -> bool:
        """
        Remove a key-value pair.

        Args:
            key: The key to remove.

        Returns:
            True if the key was found and removed, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, key: Comparable) -> bool:
        """
        Check if a key exists.

        Args:
            key: The key to check.

        Returns:
            True if the key exists, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of key-value pairs.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def height(self) -> int:
        """
        Return the number of node levels (0 for an empty container).
        """
        pass

    @abstractmethod
    def min_key(self) -> Comparable | None:
        """Return the smallest key, or None when empty."""
        pass

    @abstractmethod
    def max_key(self) -> Comparable | None:
        """Return the largest key, or None when empty."""
        pass

    @abstractmethod
    def validate(self) -> None:
        """
        Check every structural invariant of the container.

        Raises:
            InvariantViolationError: On the first broken invariant.
        """
        pass

    def search(self, key: Comparable) -> bool:
        return self.has(key)

    def traverse(self) -> list[Comparable]:
        """Return all keys in ascending order."""
        return [key for key, _ in self]

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]
