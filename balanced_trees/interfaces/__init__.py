"""
Abstract base classes and protocols for the ordered containers.
"""

from balanced_trees.interfaces.balance_policy import BalancePolicy
from balanced_trees.interfaces.range_iterable import Comparable, RangeIterable
from balanced_trees.interfaces.sorted_container import SortedContainer

__all__ = ["BalancePolicy", "Comparable", "RangeIterable", "SortedContainer"]
