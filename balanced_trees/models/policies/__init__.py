"""
Rebalancing rules for the binary balanced trees.
"""

from balanced_trees.models.policies.avl import AVLPolicy
from balanced_trees.models.policies.red_black import RedBlackPolicy

__all__ = ["AVLPolicy", "RedBlackPolicy"]
