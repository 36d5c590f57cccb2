"""Genetic operators on network genomes.

- Matrix mutation: a handful of random cells nudged by U(-1, 1), clamped
- Crossover: two children built by swapping whole weight matrices and
  bias vectors between two parents, one coin flip per slot
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from src.evolution.network import NeuralNetwork

if TYPE_CHECKING:
    from src.evolution.population import Population

MUTATION_DENSITY = 7  # at most one mutation point per this many cells


def mutation_point_count(rows: int, cols: int, rng: np.random.Generator) -> int:
    """Draw how many cells a matrix mutation touches.

    Uniform over [1, rows * cols // 7). Matrices too small for that range
    get exactly one point.
    """
    upper = (rows * cols) // MUTATION_DENSITY
    if upper <= 1:
        return 1
    return int(rng.integers(1, upper))


def mutate_matrix(matrix: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Return a mutated copy of a weight matrix.

    The same cell may be hit more than once in a single call.

    Args:
        matrix: Weight matrix to mutate (left untouched)
        rng: Shared random generator

    Returns:
        New matrix with values still in [-1, 1]
    """
    mutated = matrix.copy()
    rows, cols = mutated.shape
    for _ in range(mutation_point_count(rows, cols, rng)):
        col = int(rng.integers(0, cols))
        row = int(rng.integers(0, rows))
        mutated[row, col] = np.clip(mutated[row, col] + rng.uniform(-1.0, 1.0), -1.0, 1.0)
    return mutated


class GeneticSystem:
    """Handles crossover and mutation for network genomes.

    Uses slot-level operators:
    - Crossover exchanges whole matrices/vectors, never individual weights
    - Mutation replaces a whole matrix by a point-mutated copy
    """

    def __init__(self, rng: np.random.Generator, mutation_rate: float = 0.055):
        """Initialize genetic system.

        Args:
            rng: Shared random generator
            mutation_rate: Probability that a given weight matrix is mutated (0.0-1.0)
        """
        self.rng = rng
        self.mutation_rate = mutation_rate

    def crossover(
        self,
        parent_a: NeuralNetwork,
        parent_b: NeuralNetwork,
    ) -> tuple[NeuralNetwork, NeuralNetwork]:
        """Create two children from two parents.

        Every weight slot, then every bias slot, flips a fair coin: heads
        gives child 1 parent A's slot and child 2 parent B's, tails the
        reverse. Children receive copies, so parents are never aliased.

        Args:
            parent_a: First parent (read only)
            parent_b: Second parent (read only)

        Returns:
            (child_1, child_2), both with fitness 0
        """
        child_1 = NeuralNetwork(self.rng)
        child_2 = NeuralNetwork(self.rng)

        for weight_a, weight_b in zip(parent_a.weights, parent_b.weights):
            if self.rng.random() < 0.5:
                child_1.weights.append(weight_a.copy())
                child_2.weights.append(weight_b.copy())
            else:
                child_1.weights.append(weight_b.copy())
                child_2.weights.append(weight_a.copy())

        for bias_a, bias_b in zip(parent_a.biases, parent_b.biases):
            if self.rng.random() < 0.5:
                child_1.biases.append(bias_a.copy())
                child_2.biases.append(bias_b.copy())
            else:
                child_1.biases.append(bias_b.copy())
                child_2.biases.append(bias_a.copy())

        return child_1, child_2

    def mutate(self, genome: NeuralNetwork) -> int:
        """Mutate each weight matrix of a genome with probability mutation_rate.

        Returns:
            Number of matrices replaced
        """
        replaced = 0
        for index, weight in enumerate(genome.weights):
            if self.rng.random() < self.mutation_rate:
                genome.weights[index] = mutate_matrix(weight, self.rng)
                replaced += 1
        return replaced

    def mutate_selected(self, population: Population, count: int) -> int:
        """Mutate the first ``count`` slots of a population.

        Returns:
            Total number of matrices replaced
        """
        return sum(self.mutate(population[index]) for index in range(count))
