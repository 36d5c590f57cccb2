"""Neuroevolution of track-driving controllers.

This package implements the generational genetic algorithm:
- NeuralNetwork: Fixed-topology genome with a tanh forward pass
- Population: Fixed-size genome slots with a fitness quicksort
- GenePool: Fitness-weighted parent sampling by repetition
- GeneticSystem: Slot-level crossover and matrix mutation
- GeneticManager: Evaluation cursor, fitness reports and repopulation
"""

from __future__ import annotations

from src.evolution.genetics import GeneticSystem, mutate_matrix
from src.evolution.manager import GenerationSummary, GeneticManager
from src.evolution.network import NeuralNetwork
from src.evolution.population import Population, sort_by_fitness
from src.evolution.selection import GenePool, extremity_indices

__all__ = [
    "NeuralNetwork",
    "Population",
    "sort_by_fitness",
    "GenePool",
    "extremity_indices",
    "GeneticSystem",
    "mutate_matrix",
    "GeneticManager",
    "GenerationSummary",
]
