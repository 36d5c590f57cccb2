"""Test helpers shared across the neuroevolution tests."""

from __future__ import annotations

from types import SimpleNamespace

from src.evolution.manager import GeneticManager


def scored(*fitnesses: float) -> list[SimpleNamespace]:
    """Stand-ins exposing only a fitness attribute, for sort tests."""
    return [SimpleNamespace(fitness=f, tag=i) for i, f in enumerate(fitnesses)]


def finish_generation(manager: GeneticManager, fitnesses: list[float]) -> None:
    """Report one fitness per genome, in evaluation order."""
    for fitness in fitnesses:
        manager.report(fitness)
