"""Flower Tree.

An information-gain decision tree classifier for the Iris flowers dataset:
four continuous features, three classes, depth-bounded binary splits.
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version


def _detect_version() -> str:
    """Return the installed distribution version, or a sentinel when not installed."""
    try:
        return _pkg_version("flower-tree")
    except PackageNotFoundError:
        return "0.0.0+unknown"


__version__: str = _detect_version()

__all__ = ["__version__"]
