from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Picks one of ``n`` options. The only randomness used by the tree."""

    def choice(self, n: int) -> int:
        """Return an integer drawn uniformly from ``[0, n)``."""
        ...


class NumpyRandomSource:
    """A :class:`RandomSource` backed by a numpy ``Generator``.

    Args:
        seed: Seed for reproducible draws. If None, seeds from OS entropy.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def choice(self, n: int) -> int:
        if n < 1:
            raise ValueError("n must be >= 1")
        return int(self._rng.integers(n))

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed})"
