"""
Nodes of the binary balanced trees.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class Color(IntEnum):
    """Node color for Red-Black Tree."""

    RED = 0
    BLACK = 1


@dataclass
class Node:
    """
    Binary tree node owning at most two subtrees.

    There is no parent pointer; callers reach parents through recursion.
    """

    key: Any
    value: Any = None
    left: "Node | None" = None
    right: "Node | None" = None


@dataclass
class AVLNode(Node):
    """Node in the AVL Tree. A leaf has height 1."""

    height: int = 1


@dataclass
class RedBlackNode(Node):
    """Node in the Red-Black Tree."""

    color: Color = Color.RED
