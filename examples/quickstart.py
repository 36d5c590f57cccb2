"""Neuroevo Quickstart — Driving a Straight Corridor

This script shows how a host simulation plugs into the evolution controller.
The host here is deliberately tiny: a straight corridor 10 units wide, where
the agent dies when it touches a wall. Every tick the host measures three
ray distances, asks the driver for controls, moves the agent, and reports
the new position back.

Run with:
    python examples/quickstart.py

Watch as generations:
- Start with random networks that mostly crash into a wall
- Keep the longest-surviving drivers as elites
- Breed and mutate them until they learn to hold the centre line
"""

import math

from src.config import EvolutionConfig
from src.evolution.manager import GeneticManager
from src.simulation.driver import DriverAgent

HALF_WIDTH = 5.0
DT = 0.02
MAX_TICKS = 3000


def ray_distances(x: float, heading: float) -> tuple[float, float, float]:
    """Distances from lateral offset x to the corridor walls along three rays."""
    distances = []
    for offset in (math.pi / 4, 0.0, -math.pi / 4):  # right, forward, left
        angle = heading + offset
        sideways = math.sin(angle)
        if abs(sideways) < 1e-6:
            distances.append(30.0)
        elif sideways > 0:
            distances.append(min(30.0, (HALF_WIDTH - x) / sideways))
        else:
            distances.append(min(30.0, (-HALF_WIDTH - x) / sideways))
    return distances[0], distances[1], distances[2]


def run_episode(driver: DriverAgent) -> None:
    x, y, heading = 0.0, 0.0, 0.0
    for _ in range(MAX_TICKS):
        driver.sense(*ray_distances(x, heading))
        throttle, steering = driver.decide()

        heading += steering * 90 * 0.02 * math.pi / 180
        speed = throttle * 11.4 * 0.02
        x += math.sin(heading) * speed
        y += math.cos(heading) * speed

        if abs(x) >= HALF_WIDTH:
            driver.collide()
            return
        if driver.advance((x, 0.0, y), DT):
            return
    driver.die()


def main():
    config = EvolutionConfig(
        population_size=20,
        best_agent_selection=3,
        worst_agent_selection=2,
        number_to_crossover=6,
        mutation_rate=0.1,
        stall_timeout=5.0,
        stall_fitness=5.0,
        seed=42,
    )

    manager = GeneticManager(config)
    manager.create_population()
    driver = DriverAgent(manager, start_position=(0.0, 0.0, 0.0))

    print("Neuroevo Quickstart Started")
    print(f"  Population: {config.population_size} genomes")
    print(f"  Network: 3 -> {config.neurons} x {config.layers} -> 2")
    print()

    for _ in range(10):
        generation = manager.current_generation
        while manager.current_generation == generation:
            run_episode(driver)

        summary = manager.history[-1]
        print(
            f"  Generation {summary.generation:2d}: "
            f"best={summary.best_fitness:8.2f}  mean={summary.mean_fitness:8.2f}"
        )

    print()
    print("Done.")


if __name__ == "__main__":
    main()
