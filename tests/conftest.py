"""Shared fixtures for the flower_tree tests."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
import pytest

from flower_tree.dtree import Record, FlowerClass


def make_record(
    sl: float, sw: float, pl: float, pw: float, label: int | FlowerClass
) -> Record:
    return Record(
        sepal_length=sl,
        sepal_width=sw,
        petal_length=pl,
        petal_width=pw,
        label=FlowerClass(label),
    )


class StubRandomSource:
    """Returns preset draws and remembers how many options each call had."""

    def __init__(self, draws: Sequence[int] = ()):
        self.draws = list(draws)
        self.calls: List[int] = []

    def choice(self, n: int) -> int:
        self.calls.append(n)
        if not self.draws:
            raise AssertionError(f"Unexpected random draw among {n} options")
        return self.draws.pop(0)


@pytest.fixture
def example_records() -> List[Record]:
    return [
        make_record(1, 1, 1, 1, FlowerClass.SETOSA),
        make_record(1, 1, 1, 1, FlowerClass.SETOSA),
        make_record(5, 5, 5, 5, FlowerClass.VERSICOLOR),
    ]


@pytest.fixture
def iris_like_records() -> List[Record]:
    """Three overlapping clusters of 40 flowers each, with distinct values."""
    rng = np.random.default_rng(7)
    centers = {
        FlowerClass.SETOSA: (5.0, 3.4, 1.5, 0.2),
        FlowerClass.VERSICOLOR: (5.9, 2.8, 4.3, 1.3),
        FlowerClass.VIRGINICA: (6.6, 3.0, 5.5, 2.0),
    }
    records: List[Record] = []
    for label, center in centers.items():
        values = rng.normal(loc=center, scale=0.35, size=(40, 4))
        records.extend(make_record(*map(float, row), label) for row in values)
    order = rng.permutation(len(records))
    return [records[i] for i in order]
