import math
import random
from functools import reduce

import pytest

from .data_structures import (
    GcdSegmentTree,
    LcmSegmentTree,
    MinSegmentTree,
    SegmentTree,
)
from .operators import INF, lcm

VALUES = [3, 4, 2, 0, 1, 9, 4, 8, 3, 3]


def _naive(values, identity, operation, start, end):
    return reduce(operation, values[start:end], identity)


def _assert_consistent(tree: SegmentTree):
    for i in range(1, tree.size):
        assert tree.data[i] == tree.operation(tree.data[2 * i], tree.data[2 * i + 1])


class TestMinSegmentTree:
    def setup_method(self):
        self.tree = MinSegmentTree(VALUES)

    def test_build(self):
        assert self.tree.size == 16
        assert len(self.tree) == len(VALUES)
        assert self.tree.get_values() == VALUES
        # Padding holds the identity
        assert self.tree.data[self.tree.size + len(VALUES) :] == [INF] * 6
        _assert_consistent(self.tree)

    def test_query(self):
        assert self.tree.min(0, 1) == 3
        assert self.tree.min(0, 3) == 2
        assert self.tree.min(2, 4) == 0
        assert self.tree.min(0, 9) == 0
        assert self.tree.min(4, 7) == 1
        assert self.tree.min(5, 8) == 4
        assert self.tree.min(5, 9) == 3

    def test_set_val(self):
        self.tree.set_val(8, 5)
        assert self.tree.min(5, 9) == 4
        self.tree[6] = 5
        assert self.tree.min(5, 9) == 5
        assert self.tree[6] == 5
        _assert_consistent(self.tree)

    def test_default_range(self):
        assert self.tree.min() == 0
        assert self.tree.min(4) == 1
        assert self.tree.min(0, -13) == 2  # end counts back from the tree size


@pytest.mark.parametrize(
    "start,end,expected",
    [(0, 3, 1), (2, 4, 2), (0, 9, 1), (4, 7, 1), (5, 8, 1), (5, 9, 1)],
)
def test_gcd(start, end, expected):
    tree = GcdSegmentTree(VALUES)
    assert tree.gcd(start, end) == expected


@pytest.mark.parametrize(
    "start,end,expected",
    [(0, 3, 12), (2, 4, 2), (0, 9, 72), (4, 7, 36), (5, 8, 72), (5, 9, 72)],
)
def test_lcm(start, end, expected):
    tree = LcmSegmentTree([3, 4, 2, 1, 1, 9, 4, 8, 3, 3])
    assert tree.lcm(start, end) == expected


def test_round_trip():
    rng = random.Random(7)
    for length in [1, 2, 3, 7, 8, 9, 33]:
        values = [rng.randint(-50, 50) for _ in range(length)]
        tree = SegmentTree(values, 0, lambda a, b: a + b)
        assert tree.query(0, length) == sum(values)
        assert tree.query() == sum(values)


def test_fold_matches_naive():
    rng = random.Random(11)
    values = [rng.randint(1, 100) for _ in range(21)]
    tree = GcdSegmentTree(values)
    for start in range(len(values)):
        for end in range(start + 1, len(values) + 1):
            assert tree.gcd(start, end) == _naive(values, 0, math.gcd, start, end)


def test_non_commutative_order():
    values = list("segmenttree")
    tree = SegmentTree(values, "", lambda a, b: a + b)
    for start in range(len(values)):
        for end in range(start + 1, len(values) + 1):
            assert tree.query(start, end) == "".join(values[start:end])


def test_set_val_leaves_other_ranges():
    rng = random.Random(13)
    values = [rng.randint(1, 30) for _ in range(12)]
    tree = SegmentTree(values, 1, lcm)
    before = {(s, e): tree.query(s, e) for s in range(12) for e in range(s + 1, 13)}

    tree.set_val(7, 29)
    assert tree.query(7, 8) == 29
    for (start, end), result in before.items():
        if not start <= 7 < end:
            assert tree.query(start, end) == result
    _assert_consistent(tree)


def test_idempotent_read():
    tree = MinSegmentTree(VALUES)
    assert tree.min(3, 8) == tree.min(3, 8)


def test_single_element():
    tree = MinSegmentTree([7])
    assert tree.size == 1
    assert tree.min(0, 1) == 7
    tree.set_val(0, 2)
    assert tree.min() == 2


def test_empty():
    tree = MinSegmentTree([])
    assert len(tree) == 0
    assert tree.get_values() == []
    assert tree.min() == INF


@pytest.mark.parametrize("start,end", [(-1, 3), (0, 17), (4, 4), (5, 3), (16, 17)])
def test_query_out_of_bounds(start, end):
    tree = MinSegmentTree(VALUES)
    with pytest.raises(AssertionError):
        tree.query(start, end)


@pytest.mark.parametrize("index", [-1, 16, 100])
def test_set_val_out_of_bounds(index):
    tree = MinSegmentTree(VALUES)
    with pytest.raises(AssertionError):
        tree.set_val(index, 1)


def test_print_data(capsys):
    tree = SegmentTree([1, 2], 0, lambda a, b: a + b)
    tree.print_data()
    assert capsys.readouterr().out == "0 3 1 2\n"
