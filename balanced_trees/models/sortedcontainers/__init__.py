"""
Sorted container implementations.
"""

from balanced_trees.models.sortedcontainers.avl_tree import AVLTree
from balanced_trees.models.sortedcontainers.b_tree import BTree
from balanced_trees.models.sortedcontainers.balanced_tree import BalancedBinaryTree
from balanced_trees.models.sortedcontainers.red_black_tree import RedBlackTree

__all__ = ["AVLTree", "BTree", "BalancedBinaryTree", "RedBlackTree"]
