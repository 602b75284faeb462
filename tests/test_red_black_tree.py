"""
Tests for RedBlackTree and the left-leaning Red-Black balance policy.
"""

import math
import random

import pytest

from balanced_trees.models.exceptions import InvariantViolationError
from balanced_trees.models.node import Color, RedBlackNode
from balanced_trees.models.policies import RedBlackPolicy
from balanced_trees.models.sortedcontainers import RedBlackTree

RED_BLACK_INSERT_KEYS = [7, 3, 18, 10, 22, 8, 11, 26, 2, 6, 13]


class TestRedBlackTree:
    """Tests for RedBlackTree sorted container."""

    def test_search_scenario(self, red_black_tree):
        for key in RED_BLACK_INSERT_KEYS:
            red_black_tree.insert(key)

        assert red_black_tree.search(18)
        assert not red_black_tree.search(12)
        assert red_black_tree.traverse() == sorted(RED_BLACK_INSERT_KEYS)
        red_black_tree.validate()

    @pytest.mark.parametrize("order", [[1, 2, 3], [3, 2, 1], [2, 1, 3], [1, 3, 2]])
    def test_three_keys_form_two_black_levels(self, red_black_tree, order):
        """Any order of three keys ends as a black root over two black children."""
        for key in order:
            red_black_tree.insert(key)

        root = red_black_tree._root
        assert root.key == 2
        assert root.color == Color.BLACK
        assert root.left.color == Color.BLACK
        assert root.right.color == Color.BLACK
        assert red_black_tree.black_height() == 2

    def test_root_is_black_after_every_insert(self, red_black_tree):
        for key in range(50):
            red_black_tree.insert(key)
            assert red_black_tree._root.color == Color.BLACK

    def test_insert_only_invariants(self, red_black_tree):
        """No red node has a red child and black heights agree."""
        keys = list(range(1000))
        random.Random(17).shuffle(keys)
        for i, key in enumerate(keys):
            red_black_tree.insert(key)
            if i % 50 == 0:
                red_black_tree.validate()

        red_black_tree.validate()
        assert red_black_tree.height() <= 2 * math.log2(len(keys) + 1)

    def test_delete_keeps_invariants(self, red_black_tree):
        rng = random.Random(23)
        keys = rng.sample(range(5000), 300)
        for key in keys:
            red_black_tree.insert(key)

        deleted = rng.sample(keys, 200)
        for key in deleted:
            assert red_black_tree.delete(key)
            red_black_tree.validate()

        assert red_black_tree.size() == 100
        assert red_black_tree.traverse() == sorted(set(keys) - set(deleted))

    def test_delete_min_and_max(self, red_black_tree):
        for key in range(1, 32):
            red_black_tree.insert(key)

        while red_black_tree.size():
            assert red_black_tree.delete(red_black_tree.min_key())
            red_black_tree.validate()
            if red_black_tree.size():
                assert red_black_tree.delete(red_black_tree.max_key())
                red_black_tree.validate()

        assert red_black_tree.traverse() == []

    def test_delete_root_key(self, red_black_tree):
        for key in RED_BLACK_INSERT_KEYS:
            red_black_tree.put(key, str(key))
        root_key = red_black_tree._root.key

        assert red_black_tree.delete(root_key)

        assert not red_black_tree.has(root_key)
        assert red_black_tree.get(26) == "26"
        red_black_tree.validate()

    def test_delete_black_node_with_only_red_right_child(self, red_black_tree):
        """The red child moved into the removed node's place turns black."""
        for key in (4, 5, 2, 0):
            red_black_tree.insert(key)

        assert red_black_tree.delete(4)

        red_black_tree.validate()
        assert red_black_tree.traverse() == [0, 2, 5]
        assert red_black_tree.black_height() == 2

    @pytest.mark.parametrize("seed", range(10))
    def test_mixed_workload_keeps_invariants(self, red_black_tree, seed):
        rng = random.Random(seed)
        model: set[int] = set()

        for _ in range(300):
            key = rng.randrange(60)
            if rng.random() < 0.5:
                red_black_tree.insert(key)
                model.add(key)
            else:
                assert red_black_tree.delete(key) == (key in model)
                model.discard(key)
            red_black_tree.validate()

        assert red_black_tree.traverse() == sorted(model)

    def test_black_height_empty(self, red_black_tree):
        assert red_black_tree.black_height() == 0


class TestRedBlackPolicy:
    """Tests for the color primitives."""

    def test_new_node_is_red(self):
        node = RedBlackPolicy().create_node(1, None)

        assert isinstance(node, RedBlackNode)
        assert node.color == Color.RED

    def test_rotate_left_hands_over_color(self):
        policy = RedBlackPolicy()
        right = RedBlackNode(key=2, color=Color.RED)
        node = RedBlackNode(key=1, color=Color.BLACK, right=right)

        root = policy.rotate_left(node)

        assert root is right
        assert root.color == Color.BLACK
        assert root.left is node
        assert node.color == Color.RED
        assert node.right is None

    def test_rotate_right_hands_over_color(self):
        policy = RedBlackPolicy()
        left = RedBlackNode(key=1, color=Color.RED)
        node = RedBlackNode(key=2, color=Color.BLACK, left=left)

        root = policy.rotate_right(node)

        assert root is left
        assert root.color == Color.BLACK
        assert root.right is node
        assert node.color == Color.RED

    def test_flip_colors(self):
        policy = RedBlackPolicy()
        node = RedBlackNode(
            key=2,
            color=Color.BLACK,
            left=RedBlackNode(key=1, color=Color.RED),
            right=RedBlackNode(key=3, color=Color.RED),
        )

        policy.flip_colors(node)

        assert node.color == Color.RED
        assert node.left.color == Color.BLACK
        assert node.right.color == Color.BLACK

    def test_splice_recolors_lone_child(self):
        policy = RedBlackPolicy()
        child = RedBlackNode(key=5, color=Color.RED)
        node = RedBlackNode(key=4, color=Color.BLACK, right=child)

        assert policy.splice(node) is child
        assert child.color == Color.BLACK

    def test_splice_leaf(self):
        node = RedBlackNode(key=4, color=Color.RED)

        assert RedBlackPolicy().splice(node) is None

    def test_is_red_none(self):
        assert not RedBlackPolicy.is_red(None)


class TestRedBlackValidation:
    """validate() catches corrupted trees."""

    def _install(self, tree, root, size):
        tree._root = root
        tree._size = size

    def test_red_root(self, red_black_tree):
        self._install(red_black_tree, RedBlackNode(key=1, color=Color.RED), 1)

        with pytest.raises(InvariantViolationError) as exc_info:
            red_black_tree.validate()
        assert exc_info.value.invariant == "rb-root"

    def test_right_leaning_red(self, red_black_tree):
        root = RedBlackNode(key=1, color=Color.BLACK, right=RedBlackNode(key=2))
        self._install(red_black_tree, root, 2)

        with pytest.raises(InvariantViolationError) as exc_info:
            red_black_tree.validate()
        assert exc_info.value.invariant == "rb-left-leaning"

    def test_red_red(self, red_black_tree):
        left = RedBlackNode(key=2, left=RedBlackNode(key=1))
        root = RedBlackNode(key=3, color=Color.BLACK, left=left)
        self._install(red_black_tree, root, 3)

        with pytest.raises(InvariantViolationError) as exc_info:
            red_black_tree.validate()
        assert exc_info.value.invariant == "rb-red-red"
        assert exc_info.value.key == 2

    def test_black_height_mismatch(self, red_black_tree):
        left = RedBlackNode(key=1, color=Color.BLACK)
        root = RedBlackNode(key=2, color=Color.BLACK, left=left)
        self._install(red_black_tree, root, 2)

        with pytest.raises(InvariantViolationError) as exc_info:
            red_black_tree.validate()
        assert exc_info.value.invariant == "rb-black-height"
