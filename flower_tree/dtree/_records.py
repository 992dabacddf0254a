"""Reading flower records from delimited text."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Iterable, List, TextIO

import pandas as pd
from pydantic import ValidationError

from flower_tree.core import MalformedRecordError
from ._types import Record, FlowerClass, FEATURES


logger = logging.getLogger(__name__)

NUM_TOKENS = 5


def parse_record(line: str) -> Record:
    """Parse one ``f0,f1,f2,f3,c`` line into a :class:`Record`.

    Args:
        line: Four decimal numbers followed by an integer class code in
            {0, 1, 2}, separated by commas.

    Returns:
        The parsed record.

    Raises:
        MalformedRecordError: If the line does not hold exactly five
            well-formed tokens, a value is not finite, or the class code
            is unknown.
    """
    tokens = [token.strip() for token in line.strip().split(",")]
    if len(tokens) != NUM_TOKENS:
        raise MalformedRecordError(
            f"Expected {NUM_TOKENS} comma-separated tokens, got {len(tokens)}: "
            f"{line.strip()!r}"
        )

    try:
        values = [float(token) for token in tokens[:-1]]
    except ValueError as e:
        raise MalformedRecordError(f"Invalid feature value in {line.strip()!r}") from e

    try:
        label = FlowerClass(int(tokens[-1]))
    except ValueError as e:
        raise MalformedRecordError(f"Invalid class code in {line.strip()!r}") from e

    try:
        return Record(
            sepal_length=values[0],
            sepal_width=values[1],
            petal_length=values[2],
            petal_width=values[3],
            label=label,
        )
    except ValidationError as e:
        raise MalformedRecordError(
            f"Feature values must be finite in {line.strip()!r}"
        ) from e


def read_records(lines: TextIO | Iterable[str], skip_malformed: bool = False) -> List[Record]:
    """Parse every non-blank line of a text stream.

    Args:
        lines: An open text stream or any iterable of lines.
        skip_malformed: Log and skip malformed lines instead of raising.

    Returns:
        The records in input order.

    Raises:
        MalformedRecordError: On the first malformed line, unless
            ``skip_malformed`` is set.
    """
    records: List[Record] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            records.append(parse_record(line))
        except MalformedRecordError as e:
            if not skip_malformed:
                raise MalformedRecordError(f"Line {lineno}: {e}") from e
            logger.warning(f"Skipping malformed line {lineno}: {e}")

    logger.debug(f"Read {len(records)} records")
    return records


def load_records(path: str | PathLike[str], skip_malformed: bool = False) -> List[Record]:
    """Read records from a file. See :func:`read_records`."""
    with Path(path).open("r", encoding="utf-8") as f:
        return read_records(f, skip_malformed=skip_malformed)


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    """Tabular view of records, one column per feature plus ``label``."""
    columns = [feature.attribute for feature in FEATURES] + ["label"]
    rows = [(*record.values(), int(record.label)) for record in records]
    return pd.DataFrame(rows, columns=columns)
