"""Shared test fixtures for the neuroevolution test suite."""

from __future__ import annotations

import numpy as np
import pytest

from src.config import EvolutionConfig
from src.evolution.manager import GeneticManager
from src.evolution.network import NeuralNetwork


@pytest.fixture
def rng() -> np.random.Generator:
    """A seeded generator shared by everything in one test."""
    return np.random.default_rng(1234)


@pytest.fixture
def config() -> EvolutionConfig:
    """Small population with every operator active."""
    return EvolutionConfig(
        seed=7,
        population_size=10,
        mutation_rate=0.1,
        best_agent_selection=2,
        worst_agent_selection=1,
        number_to_crossover=3,
        layers=1,
        neurons=4,
    )


@pytest.fixture
def manager(config: EvolutionConfig) -> GeneticManager:
    """A controller with its first population already created."""
    manager = GeneticManager(config)
    manager.create_population()
    return manager


@pytest.fixture
def network(rng: np.random.Generator) -> NeuralNetwork:
    """A random genome with one hidden layer of 10 neurons."""
    return NeuralNetwork.random(1, 10, rng)
