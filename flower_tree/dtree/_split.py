"""Best threshold search along a single feature."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np

from ._impurity import information_gain, NUM_CLASSES
from ._types import Record, Feature, ClassTally


@dataclass(frozen=True, slots=True)
class SplitCandidate:
    """The best binary split found for one feature."""

    gain: float = field(metadata={"description": "Information gain of the split."})
    feature: Feature = field(metadata={"description": "The feature split on."})
    threshold: float = field(
        metadata={
            "description": "Midpoint between the feature values on either side "
            "of the split. Records below it go left."
        }
    )
    left: Tuple[Record, ...] = field(
        metadata={"description": "Records with the smaller feature values."}
    )
    right: Tuple[Record, ...] = field(
        metadata={"description": "Records with the larger feature values."}
    )


def _tally(counts: np.ndarray) -> ClassTally:
    return int(counts[0]), int(counts[1]), int(counts[2])


def midpoint(a: float, b: float) -> float:
    """A threshold between ``a < b`` that keeps ``a`` below it and ``b`` at or above it.

    Halving before adding avoids overflow near the float maximum. When ``a``
    and ``b`` are adjacent floats the midpoint rounds to ``a``, so ``b`` is
    used instead.
    """
    mid = a / 2 + b / 2
    if mid <= a:
        return b
    return mid


def best_split(records: Sequence[Record], feature: Feature) -> SplitCandidate:
    """Find the split along ``feature`` with the greatest information gain.

    Records are stably sorted by the feature. Only positions where the value
    changes between neighbours are candidates, since a split between equal
    values cannot separate them. The first candidate reaching the maximum
    gain wins. When no candidate has positive gain the split falls after the
    first sorted record.

    This function does not modify anything; the caller decides whether to
    commit the returned partition.
    """
    n = len(records)
    if n < 2:
        return SplitCandidate(
            gain=0.0, feature=feature, threshold=0.0, left=tuple(records), right=()
        )

    values = np.array([r.feature(feature) for r in records], dtype=np.float64)
    order = np.argsort(values, kind="stable")
    sorted_values = values[order]
    sorted_records = tuple(records[i] for i in order)

    labels = np.array([int(r.label) for r in sorted_records], dtype=np.intp)
    # Row i holds the class tally of the first i + 1 sorted records
    left_counts = np.cumsum(np.eye(NUM_CLASSES, dtype=np.intp)[labels], axis=0)
    parent = left_counts[-1]
    parent_tally = _tally(parent)

    best_index, best_gain = 1, 0.0
    for index in np.flatnonzero(sorted_values[1:] != sorted_values[:-1]) + 1:
        left = left_counts[index - 1]
        gain = information_gain(parent_tally, _tally(left), _tally(parent - left))
        if gain > best_gain:
            best_index, best_gain = int(index), gain

    threshold = midpoint(
        float(sorted_values[best_index - 1]), float(sorted_values[best_index])
    )
    return SplitCandidate(
        gain=best_gain,
        feature=feature,
        threshold=threshold,
        left=sorted_records[:best_index],
        right=sorted_records[best_index:],
    )
