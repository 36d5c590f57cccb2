"""Tests for crossover and matrix mutation."""

from __future__ import annotations

import numpy as np

from src.evolution.genetics import GeneticSystem, mutate_matrix, mutation_point_count
from src.evolution.network import NeuralNetwork
from src.evolution.population import Population


def same_array(candidate: np.ndarray, options: list[np.ndarray]) -> bool:
    return any(np.array_equal(candidate, option) for option in options)


class TestMutateMatrix:
    """Test point mutation of a single weight matrix."""

    def test_point_count_range(self):
        rng = np.random.default_rng(3)

        counts = {mutation_point_count(10, 10, rng) for _ in range(500)}

        assert min(counts) >= 1
        assert max(counts) < 14

    def test_small_matrix_gets_one_point(self):
        """rows * cols below 14 leaves no valid range, so exactly one point."""
        rng = np.random.default_rng(3)

        assert mutation_point_count(2, 3, rng) == 1
        assert mutation_point_count(1, 1, rng) == 1
        assert mutation_point_count(2, 7, rng) == 1

    def test_source_untouched(self):
        rng = np.random.default_rng(4)
        matrix = rng.uniform(-1.0, 1.0, size=(10, 10))
        before = matrix.copy()

        mutated = mutate_matrix(matrix, rng)

        assert mutated is not matrix
        assert np.array_equal(matrix, before)

    def test_changes_at_most_point_budget_cells(self):
        rng = np.random.default_rng(8)
        matrix = np.zeros((10, 10))

        mutated = mutate_matrix(matrix, rng)

        assert 0 < np.count_nonzero(mutated != matrix) < 14

    def test_single_cell_on_tiny_matrix(self):
        rng = np.random.default_rng(2)
        matrix = np.full((2, 3), 0.25)

        mutated = mutate_matrix(matrix, rng)

        assert np.count_nonzero(mutated != matrix) <= 1

    def test_values_clamped(self):
        rng = np.random.default_rng(6)
        matrix = np.ones((20, 20))

        for _ in range(20):
            matrix = mutate_matrix(matrix, rng)

        assert np.all(matrix >= -1.0) and np.all(matrix <= 1.0)


class TestCrossover:
    """Test slot-level crossover."""

    def test_children_take_whole_slots_from_parents(self, rng):
        genetics = GeneticSystem(rng)
        parent_a = NeuralNetwork.random(2, 5, rng)
        parent_b = NeuralNetwork.random(2, 5, rng)

        child_1, child_2 = genetics.crossover(parent_a, parent_b)

        for k in range(len(parent_a.weights)):
            pair = [parent_a.weights[k], parent_b.weights[k]]
            assert same_array(child_1.weights[k], pair)
            assert same_array(child_2.weights[k], pair)
            # one child gets each parent's slot
            assert not np.array_equal(child_1.weights[k], child_2.weights[k])
        for k in range(len(parent_a.biases)):
            pair = [parent_a.biases[k], parent_b.biases[k]]
            assert same_array(child_1.biases[k], pair)
            assert same_array(child_2.biases[k], pair)

    def test_children_are_fresh(self, rng):
        genetics = GeneticSystem(rng)
        parent_a = NeuralNetwork.random(1, 4, rng)
        parent_b = NeuralNetwork.random(1, 4, rng)
        parent_a.fitness = 30.0

        child_1, child_2 = genetics.crossover(parent_a, parent_b)

        assert child_1.fitness == 0.0
        assert child_2.fitness == 0.0
        assert child_1.matches(1, 4)
        assert child_2.matches(1, 4)

    def test_children_do_not_alias_parents(self, rng):
        genetics = GeneticSystem(rng)
        parent_a = NeuralNetwork.random(1, 4, rng)
        parent_b = NeuralNetwork.random(1, 4, rng)
        snapshot = [w.copy() for w in parent_a.weights + parent_b.weights]

        child_1, child_2 = genetics.crossover(parent_a, parent_b)
        for child in (child_1, child_2):
            for weight in child.weights:
                weight[:] = 9.0

        for old, new in zip(snapshot, parent_a.weights + parent_b.weights):
            assert np.array_equal(old, new)

    def test_deterministic_under_seed(self):
        """Same parents and seed reproduce the same children."""
        parents_rng = np.random.default_rng(21)
        parent_a = NeuralNetwork.random(2, 6, parents_rng)
        parent_b = NeuralNetwork.random(2, 6, parents_rng)

        first = GeneticSystem(np.random.default_rng(99)).crossover(parent_a, parent_b)
        second = GeneticSystem(np.random.default_rng(99)).crossover(parent_a, parent_b)

        for child_x, child_y in zip(first, second):
            for wx, wy in zip(child_x.weights, child_y.weights):
                assert np.array_equal(wx, wy)
            for bx, by in zip(child_x.biases, child_y.biases):
                assert np.array_equal(bx, by)


class TestMutationPass:
    """Test the per-matrix mutation probability."""

    def test_rate_zero_changes_nothing(self, rng):
        genetics = GeneticSystem(rng, mutation_rate=0.0)
        genome = NeuralNetwork.random(3, 8, rng)
        before = list(genome.weights)

        replaced = genetics.mutate(genome)

        assert replaced == 0
        for old, new in zip(before, genome.weights):
            assert old is new

    def test_rate_one_replaces_every_matrix(self, rng):
        genetics = GeneticSystem(rng, mutation_rate=1.0)
        genome = NeuralNetwork.random(3, 8, rng)
        before = list(genome.weights)

        replaced = genetics.mutate(genome)

        assert replaced == len(before)
        for old, new in zip(before, genome.weights):
            assert old is not new
            assert new.shape == old.shape

    def test_biases_never_mutated(self, rng):
        genetics = GeneticSystem(rng, mutation_rate=1.0)
        genome = NeuralNetwork.random(1, 8, rng)
        before = [b.copy() for b in genome.biases]

        genetics.mutate(genome)

        for old, new in zip(before, genome.biases):
            assert np.array_equal(old, new)

    def test_mutate_selected_only_touches_prefix(self, rng):
        genetics = GeneticSystem(rng, mutation_rate=1.0)
        population = Population(4)
        for i in range(4):
            population[i] = NeuralNetwork.random(1, 4, rng)
        untouched = [list(population[i].weights) for i in (2, 3)]

        replaced = genetics.mutate_selected(population, 2)

        assert replaced == 4  # two matrices per genome
        for weights, i in zip(untouched, (2, 3)):
            for old, new in zip(weights, population[i].weights):
                assert old is new
