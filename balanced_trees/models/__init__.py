"""
Data models for the ordered containers.
"""

from balanced_trees.models.exceptions import InvariantViolationError, TreeError
from balanced_trees.models.node import AVLNode, Color, Node, RedBlackNode
from balanced_trees.models.ordered_set import OrderedSet

__all__ = [
    "AVLNode",
    "Color",
    "InvariantViolationError",
    "Node",
    "OrderedSet",
    "RedBlackNode",
    "TreeError",
]
