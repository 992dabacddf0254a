"""Tests for class tallies, impurity and information gain."""

import math
from itertools import product

import pytest

from flower_tree.dtree import class_tally, impurity, information_gain
from conftest import make_record


def test_class_tally():
    records = [
        make_record(1, 1, 1, 1, 0),
        make_record(1, 1, 1, 1, 2),
        make_record(1, 1, 1, 1, 2),
    ]
    assert class_tally(records) == (1, 0, 2)
    assert class_tally([]) == (0, 0, 0)


def test_impurity():
    assert impurity((5, 0, 0)) == 0.0
    assert impurity((0, 0, 0)) == 0.0
    assert impurity((1, 1, 0)) == pytest.approx(1.0)
    assert impurity((4, 4, 4)) == pytest.approx(math.log2(3))


def test_perfect_split_gains_parent_impurity():
    assert information_gain((2, 2, 0), (2, 0, 0), (0, 2, 0)) == pytest.approx(1.0)


def test_empty_side_has_no_gain():
    assert information_gain((2, 1, 0), (2, 1, 0), (0, 0, 0)) == 0.0
    assert information_gain((2, 1, 0), (0, 0, 0), (2, 1, 0)) == 0.0


def test_uninformative_split_has_no_gain():
    assert information_gain((2, 2, 0), (1, 1, 0), (1, 1, 0)) == pytest.approx(0.0)


def test_gain_is_bounded_by_parent_impurity():
    tallies = list(product(range(3), repeat=3))
    for left, right in product(tallies, tallies):
        parent = (left[0] + right[0], left[1] + right[1], left[2] + right[2])
        gain = information_gain(parent, left, right)
        assert 0.0 <= gain <= impurity(parent) + 1e-12
