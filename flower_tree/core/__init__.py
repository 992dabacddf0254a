"""Shared configuration, exceptions and types."""

from ._config import Settings, settings
from ._exceptions import (
    FlowerTreeError,
    MalformedRecordError,
    InvalidRangeError,
    DegenerateDatasetError,
    NotFittedError,
    CorruptionError,
)
from ._types import JSONScalar, JSONValue

__all__ = [
    "Settings",
    "settings",
    "FlowerTreeError",
    "MalformedRecordError",
    "InvalidRangeError",
    "DegenerateDatasetError",
    "NotFittedError",
    "CorruptionError",
    "JSONScalar",
    "JSONValue",
]
