class FlowerTreeError(Exception):
    """Base class for all errors raised by flower_tree."""


class MalformedRecordError(FlowerTreeError, ValueError):
    """Input line does not parse into a record."""


class InvalidRangeError(FlowerTreeError, ValueError):
    """Validation slice lies outside the record collection."""


class DegenerateDatasetError(FlowerTreeError, ValueError):
    """No records to build a tree from."""


class NotFittedError(FlowerTreeError):
    """The tree has not been fitted yet."""


class CorruptionError(FlowerTreeError):
    """Internal state corruption detected. A persisted tree is inconsistent."""
