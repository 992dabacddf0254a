"""Class tallies and entropy based information gain."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

from ._types import Record, ClassTally, FlowerClass


NUM_CLASSES = len(FlowerClass)


def class_tally(records: Sequence[Record]) -> ClassTally:
    """Count the records of each class."""
    counts = np.bincount(
        np.fromiter((int(r.label) for r in records), dtype=np.intp, count=len(records)),
        minlength=NUM_CLASSES,
    )
    return int(counts[0]), int(counts[1]), int(counts[2])


def impurity(tally: ClassTally | npt.ArrayLike) -> float:
    """Entropy in bits of a class distribution given as counts.

    Uses the convention ``0 * log2(0) = 0``. An empty tally has no impurity.
    """
    counts = np.asarray(tally, dtype=np.float64)
    total = counts.sum()
    if total == 0:
        return 0.0
    probs = counts[counts > 0] / total
    return float(-np.sum(probs * np.log2(probs)))


def information_gain(parent: ClassTally, left: ClassTally, right: ClassTally) -> float:
    """Reduction in entropy achieved by splitting ``parent`` into two groups.

    Returns 0 when either group is empty. The result is clamped to be
    non-negative so rounding never reports a loss.
    """
    n1 = sum(left)
    n2 = sum(right)
    if n1 == 0 or n2 == 0:
        return 0.0
    n = n1 + n2
    gain = impurity(parent) - (n1 / n) * impurity(left) - (n2 / n) * impurity(right)
    return max(gain, 0.0)
