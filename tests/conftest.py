"""
Shared pytest fixtures for the ordered container tests.
"""

import pytest

from balanced_trees.config import create_container
from balanced_trees.models.sortedcontainers import AVLTree, BTree, RedBlackTree


@pytest.fixture
def avl_tree():
    """Provide a fresh AVLTree instance."""
    return AVLTree()


@pytest.fixture
def red_black_tree():
    """Provide a fresh RedBlackTree instance."""
    return RedBlackTree()


@pytest.fixture
def btree():
    """Provide a B-Tree with the smallest degree, so it splits and merges often."""
    return BTree(min_degree=2)


@pytest.fixture(params=["avl", "red_black", "btree"])
def container(request):
    """Provide an empty container of every kind in turn."""
    if request.param == "btree":
        return create_container(request.param, min_degree=2)
    return create_container(request.param)


@pytest.fixture
def sample_entries():
    """Provide sample key-value entries for testing."""
    return [
        ("key1", "value1"),
        ("key2", "value2"),
        ("key3", "value3"),
    ]
