"""Train on all records outside a validation slice and score both sets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import pandas as pd

from flower_tree.core import InvalidRangeError
from ._random import RandomSource
from ._records import records_to_frame
from ._tree import FlowerTree, TreeConfig
from ._types import Record


logger = logging.getLogger(__name__)


def split_validation(
    records: Sequence[Record], start: int, end: int
) -> Tuple[List[Record], List[Record]]:
    """Cut ``records[start:end]`` out as the validation set.

    Returns:
        ``(train, validation)``, both in input order.

    Raises:
        InvalidRangeError: Unless ``0 <= start <= end <= len(records)``.
    """
    if not 0 <= start <= end <= len(records):
        raise InvalidRangeError(
            f"Validation range [{start}, {end}) is outside the "
            f"{len(records)} available records"
        )
    validation = list(records[start:end])
    train = list(records[:start]) + list(records[end:])
    return train, validation


@dataclass(slots=True)
class ExperimentResult:
    """A fitted tree and how it scores on the training and validation sets."""

    tree: FlowerTree
    validation_start: int
    validation_end: int
    train: List[Record] = field(default_factory=list)
    validation: List[Record] = field(default_factory=list)
    train_correct: List[bool] = field(
        default_factory=list,
        metadata={"description": "Per training record, whether it was classified correctly."},
    )
    validation_correct: List[bool] = field(
        default_factory=list,
        metadata={"description": "Per validation record, whether it was classified correctly."},
    )

    @property
    def train_accuracy(self) -> Tuple[int, int]:
        """``(correct, total)`` over the training set."""
        return sum(self.train_correct), len(self.train_correct)

    @property
    def validation_accuracy(self) -> Tuple[int, int]:
        """``(correct, total)`` over the validation set."""
        return sum(self.validation_correct), len(self.validation_correct)

    def predictions_frame(self) -> pd.DataFrame:
        """Every record with its set, prediction and correctness."""
        frames: List[pd.DataFrame] = []
        for name, records, correct in (
            ("train", self.train, self.train_correct),
            ("validation", self.validation, self.validation_correct),
        ):
            df = records_to_frame(records)
            df["set"] = name
            df["prediction"] = [int(p) for p in self.tree.predict(records)]
            df["correct"] = correct
            frames.append(df)
        return pd.concat(frames, ignore_index=True)


def evaluate(tree: FlowerTree, records: Sequence[Record]) -> List[bool]:
    """Whether the tree classifies each record correctly."""
    return [tree.classify(r) == r.label for r in records]


def run_experiment(
    records: Sequence[Record],
    validation_start: int,
    validation_end: int,
    config: TreeConfig | None = None,
    random_source: RandomSource | None = None,
) -> ExperimentResult:
    """Hold out a validation slice, fit a tree on the rest and score both.

    Args:
        records: All records, in input order.
        validation_start: First index of the validation slice.
        validation_end: One past the last index of the validation slice.
        config: Tree configuration.
        random_source: Source for leaf tie-breaks.

    Raises:
        InvalidRangeError: If the slice is out of bounds. Checked before
            anything is built.
        DegenerateDatasetError: If no training records remain.
    """
    train, validation = split_validation(records, validation_start, validation_end)
    logger.info(
        f"Training on {len(train)} records, validating on {len(validation)} "
        f"(records {validation_start} to {validation_end - 1})"
    )

    tree = FlowerTree(config=config, random_source=random_source).fit(train)
    result = ExperimentResult(
        tree=tree,
        validation_start=validation_start,
        validation_end=validation_end,
        train=train,
        validation=validation,
        train_correct=evaluate(tree, train),
        validation_correct=evaluate(tree, validation),
    )

    correct, total = result.train_accuracy
    v_correct, v_total = result.validation_accuracy
    logger.info(f"Train accuracy {correct}/{total}, validation {v_correct}/{v_total}")
    return result
