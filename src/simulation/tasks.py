"""Headless evaluation tasks for running evolution without a track.

A task scores a genome directly from its forward pass, standing in for the
host simulation so a whole run can execute in a terminal or a test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from src.evolution.manager import GenerationSummary, GeneticManager
    from src.evolution.network import NeuralNetwork

MAX_SCORE = 10.0


def wall_following_controls(a: float, b: float, c: float) -> tuple[float, float]:
    """Reference policy on normalised sensors (right, forward, left).

    Accelerates when the road ahead is clear and steers toward the side
    with more room.
    """
    throttle = float(np.clip(2.0 * b - 1.0, -1.0, 1.0))
    steering = float(np.clip(a - c, -1.0, 1.0))
    return throttle, steering


class WallFollowingTask:
    """Scores a genome by how closely it imitates wall_following_controls.

    The probe set is drawn once, so every genome in a run faces the same
    sensor readings.
    """

    def __init__(self, rng: np.random.Generator, probes: int = 64):
        if probes <= 0:
            raise ValueError(f"probes must be positive, got {probes}")
        self.probes = rng.uniform(0.0, 1.0, size=(probes, 3))
        self.targets = np.array([wall_following_controls(*row) for row in self.probes])

    def evaluate(self, network: NeuralNetwork) -> float:
        """Score in [0, 10]; 10 means the reference policy is reproduced exactly."""
        outputs = np.array([network.run_network(*row) for row in self.probes])
        # each output error is at most 2, so a probe errs by at most 4
        error = np.abs(outputs - self.targets).sum(axis=1).mean()
        return float(MAX_SCORE * (1.0 - error / 4.0))


def run_generations(
    manager: GeneticManager,
    task: WallFollowingTask,
    generations: int,
) -> list[GenerationSummary]:
    """Evaluate and evolve ``generations`` full generations.

    Creates the first population if the manager has none yet.

    Returns:
        Summaries of the generations finished by this call
    """
    if not manager.has_population:
        manager.create_population()

    finished = len(manager.history)
    target = manager.current_generation + generations
    while manager.current_generation < target:
        genome = manager.bind()
        manager.report(task.evaluate(genome))
    return manager.history[finished:]
