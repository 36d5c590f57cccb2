"""Parent selection: extremity picks over a sorted population and the gene pool.

The gene pool realises fitness-proportionate sampling by repetition: a
population index is stored round(fitness * 10) times, so a uniform draw
from the pool favours fitter individuals without explicit probabilities.
"""

from __future__ import annotations

import logging

import numpy as np

from src.config import Extremity

logger = logging.getLogger(__name__)

POOL_WEIGHT = 10


def extremity_indices(size: int, count: int, end: Extremity) -> list[int]:
    """Indices of ``count`` individuals taken from one end of a sorted population.

    Args:
        size: Population size
        count: How many indices to take (capped at size)
        end: Extremity.LOW walks up from index 0, Extremity.HIGH walks down from size - 1

    Returns:
        Indices ordered from the chosen extreme inwards
    """
    count = min(count, size)
    if end == Extremity.LOW:
        return list(range(count))
    return [size - 1 - offset for offset in range(count)]


def pool_repetitions(fitness: float) -> int:
    """How many gene pool entries an individual with this fitness earns."""
    return max(0, round(fitness * POOL_WEIGHT))


class GenePool:
    """Weighted multiset of population indices used to sample parents."""

    def __init__(self):
        self._entries: list[int] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[int, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def add(self, index: int, fitness: float) -> int:
        """Add ``index`` once per repetition earned by ``fitness``.

        Returns:
            Number of entries added
        """
        repetitions = pool_repetitions(fitness)
        self._entries.extend([index] * repetitions)
        return repetitions

    def distinct(self) -> set[int]:
        return set(self._entries)

    def sample_pair(
        self,
        rng: np.random.Generator,
        fallback: tuple[int, int],
        max_attempts: int = 100,
    ) -> tuple[int, int]:
        """Draw two different parent indices from the pool.

        Falls back to ``fallback`` when the pool holds fewer than two
        distinct indices or no different pair turns up within max_attempts.

        Args:
            rng: Shared random generator
            fallback: Sequential indices to use when sampling cannot succeed
            max_attempts: Upper bound on redraws

        Returns:
            (parent_a, parent_b) population indices
        """
        distinct = len(self.distinct())
        if distinct < 2:
            logger.debug(f"Gene pool has {distinct} distinct entries, using {fallback}")
            return fallback

        n = len(self._entries)
        for _ in range(max_attempts):
            a = self._entries[int(rng.integers(0, n))]
            b = self._entries[int(rng.integers(0, n))]
            if a != b:
                return a, b

        logger.debug(f"No distinct parents after {max_attempts} draws, using {fallback}")
        return fallback
