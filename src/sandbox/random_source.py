"""Injectable uniform random sources for the allocator and simulator."""

from typing import Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Anything exposing ``random() -> float`` uniform in [0, 1)."""

    def random(self) -> float:
        ...


class NumpyRandomSource:
    """RandomSource backed by a numpy Generator (PCG64)."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._rng.random())


def create_random_source(seed: Optional[int] = None) -> RandomSource:
    """Create the production random source; pass a seed for reproducible runs."""
    return NumpyRandomSource(seed)
