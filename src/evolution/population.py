"""Population storage: a fixed number of genome slots and a fitness sort.

The population never grows or shrinks. Slots are empty only while the
controller is assembling the next generation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from src.errors import EngineStateError

if TYPE_CHECKING:
    from src.evolution.network import NeuralNetwork


def sort_by_fitness(genomes: list, left: int = 0, right: int | None = None) -> list:
    """Sort genomes[left..right] in place by ascending fitness.

    Hoare partition quicksort. Partitions are pushed on a work stack instead
    of recursing, and each pass moves both cursors past the swapped pair, so
    duplicate and all-equal ranges always shrink. Not stable.

    Args:
        genomes: List of objects with a ``fitness`` attribute
        left: First index of the range (inclusive)
        right: Last index of the range (inclusive), defaults to the end

    Returns:
        The same list, sorted
    """
    if right is None:
        right = len(genomes) - 1

    pending = [(left, right)]
    while pending:
        lo, hi = pending.pop()
        if lo >= hi:
            continue

        pivot = genomes[(lo + hi) // 2].fitness
        i, j = lo, hi
        while i <= j:
            while genomes[i].fitness < pivot:
                i += 1
            while genomes[j].fitness > pivot:
                j -= 1
            if i <= j:
                genomes[i], genomes[j] = genomes[j], genomes[i]
                i += 1
                j -= 1

        if lo < j:
            pending.append((lo, j))
        if i < hi:
            pending.append((i, hi))

    return genomes


class Population:
    """Fixed-length ordered collection of genomes for one generation.

    Insertion order is evaluation order until sort_by_fitness() reorders the
    slots at the end of the generation.
    """

    def __init__(self, size: int):
        if size <= 0:
            raise ValueError(f"Population size must be positive, got {size}")
        self._slots: list[NeuralNetwork | None] = [None] * size

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> NeuralNetwork:
        genome = self._slots[index]
        if genome is None:
            raise EngineStateError(f"Population slot {index} is empty")
        return genome

    def __setitem__(self, index: int, genome: NeuralNetwork) -> None:
        self._slots[index] = genome

    def __iter__(self) -> Iterator[NeuralNetwork]:
        for index in range(len(self._slots)):
            yield self[index]

    def is_complete(self) -> bool:
        """Whether every slot holds a genome."""
        return all(slot is not None for slot in self._slots)

    def empty_slots(self) -> list[int]:
        return [i for i, slot in enumerate(self._slots) if slot is None]

    def sort_by_fitness(self) -> None:
        """Reorder slots by ascending fitness (fittest last)."""
        if not self.is_complete():
            raise EngineStateError(
                f"Cannot sort population with empty slots {self.empty_slots()}"
            )
        sort_by_fitness(self._slots)

    def fitnesses(self) -> list[float]:
        return [genome.fitness for genome in self]
