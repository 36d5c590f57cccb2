"""Driver agent: the agent-side half of an evaluation episode.

The host simulation owns geometry. Each tick it hands the driver raw ray
distances, applies the controls the driver returns, then reports the new
position. The driver turns that into a fitness score and decides when the
episode ends, at which point it reports to the controller it was given and
rebinds to the next genome.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Sequence

from src.config import EvolutionConfig

if TYPE_CHECKING:
    from src.evolution.manager import GeneticManager
    from src.evolution.network import NeuralNetwork

logger = logging.getLogger(__name__)


class DriverAgent:
    """Evaluates the bound genome and reports its fitness on death.

    The controller is injected at construction; the driver never looks it
    up at runtime.
    """

    def __init__(
        self,
        manager: GeneticManager,
        config: EvolutionConfig | None = None,
        start_position: Sequence[float] = (0.0, 0.0, 0.0),
    ):
        self.manager = manager
        self.config = config or manager.config
        self.start_position = tuple(float(v) for v in start_position)

        self.network: NeuralNetwork = manager.bind()
        self.sensors: tuple[float, float, float] = (0.0, 0.0, 0.0)
        self.throttle = 0.0
        self.steering = 0.0
        self.episodes = 0
        self.last_fitness: float | None = None
        self.reset()

    def reset(self) -> None:
        """Zero the episode state and return to the start position."""
        self.time_since_start = 0.0
        self.total_distance = 0.0
        self.avg_speed = 0.0
        self.fitness = 0.0
        self.position = self.start_position
        self.last_position = self.start_position

    def reset_with_network(self, network: NeuralNetwork) -> None:
        self.network = network
        self.reset()

    def sense(
        self, a: float | None, b: float | None, c: float | None
    ) -> tuple[float, float, float]:
        """Normalise raw ray distances (right, forward, left) by sensor_range.

        A ``None`` reading means the ray hit nothing and keeps the previous value.
        """
        previous = self.sensors
        readings = []
        for raw, old in zip((a, b, c), previous):
            readings.append(old if raw is None else raw / self.config.sensor_range)
        self.sensors = (readings[0], readings[1], readings[2])
        return self.sensors

    def decide(self) -> tuple[float, float]:
        """Run the bound network on the current sensors.

        Returns:
            (throttle, steering), both in [-1, 1]
        """
        self.throttle, self.steering = self.network.run_network(*self.sensors)
        return self.throttle, self.steering

    def advance(self, position: Sequence[float], dt: float) -> bool:
        """Account for one tick of movement and check the death rules.

        Args:
            position: Where the host moved the agent this tick
            dt: Tick duration in seconds

        Returns:
            True if the episode ended on this tick
        """
        position = tuple(float(v) for v in position)
        self.total_distance += math.dist(position, self.last_position)
        self.last_position = position
        self.position = position
        self.time_since_start += dt
        self.avg_speed = (
            self.total_distance / self.time_since_start if self.time_since_start > 0 else 0.0
        )

        self.fitness = (
            self.total_distance * self.config.distance_multiplier
            + self.avg_speed * self.config.avg_speed_multiplier
            + (sum(self.sensors) / 3) * self.config.sensor_multiplier
        )

        stalled = self.time_since_start > self.config.stall_timeout
        if stalled and self.fitness < self.config.stall_fitness:
            self.die()
            return True
        if self.fitness >= self.config.max_fitness:
            self.die()
            return True
        return False

    def collide(self) -> None:
        """Called by the host when the agent hits the track boundary."""
        self.die()

    def die(self) -> None:
        """Report fitness to the controller and rebind to the next genome."""
        self.last_fitness = self.fitness
        self.episodes += 1
        logger.debug(
            f"Episode {self.episodes} ended: fitness={self.fitness:.2f} "
            f"distance={self.total_distance:.2f} time={self.time_since_start:.2f}s"
        )
        self.reset_with_network(self.manager.report(self.fitness))
