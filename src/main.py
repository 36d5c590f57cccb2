"""Entry point for a headless neuroevolution run."""

from __future__ import annotations

import logging
import sys
import time

from pydantic import ValidationError

from src.config import EvolutionConfig
from src.errors import ConfigurationError
from src.evolution.manager import GeneticManager
from src.simulation.tasks import WallFollowingTask, run_generations

USAGE = """neuroevo v0.1.0

Usage: python -m src.main [OPTIONS]

Options:
  --generations=N       Generations to evolve (default: 20)
  --population=N        Genomes per generation (default: 85)
  --seed=N              Random seed (default: 42)
  --layers=N            Hidden layers (default: 1)
  --neurons=N           Neurons per hidden layer (default: 10)
  --mutation=R          Per-matrix mutation probability (default: 0.055)
  --elites=N            Elites copied into each generation (default: 8)
  --worst=N             Worst genomes kept in the gene pool (default: 3)
  --crossover=N         Crossover pairs per generation (default: 38)
  --probes=N            Sensor probes in the benchmark task (default: 64)
  --verbose             Log each generation from the controller

Environment variables (override any setting):
  NEUROEVO_POPULATION_SIZE, NEUROEVO_MUTATION_RATE, NEUROEVO_SEED, etc."""


def parse_args(argv: list[str]) -> tuple[dict, dict]:
    """Split CLI arguments into config overrides and run options.

    Returns:
        (config_overrides, run_options)
    """
    overrides: dict = {}
    options: dict = {"generations": 20, "probes": 64, "verbose": False}

    for arg in argv:
        if arg.startswith("--generations="):
            options["generations"] = int(arg.split("=")[1])
        elif arg.startswith("--probes="):
            options["probes"] = int(arg.split("=")[1])
        elif arg == "--verbose":
            options["verbose"] = True
        elif arg.startswith("--population="):
            overrides["population_size"] = int(arg.split("=")[1])
        elif arg.startswith("--seed="):
            overrides["seed"] = int(arg.split("=")[1])
        elif arg.startswith("--layers="):
            overrides["layers"] = int(arg.split("=")[1])
        elif arg.startswith("--neurons="):
            overrides["neurons"] = int(arg.split("=")[1])
        elif arg.startswith("--mutation="):
            overrides["mutation_rate"] = float(arg.split("=")[1])
        elif arg.startswith("--elites="):
            overrides["best_agent_selection"] = int(arg.split("=")[1])
        elif arg.startswith("--worst="):
            overrides["worst_agent_selection"] = int(arg.split("=")[1])
        elif arg.startswith("--crossover="):
            overrides["number_to_crossover"] = int(arg.split("=")[1])
        elif arg == "--help" or arg == "-h":
            print(USAGE)
            sys.exit(0)
        else:
            print(f"  Unknown option: {arg} (see --help)")
            sys.exit(2)

    return overrides, options


def main(argv: list[str] | None = None) -> int:
    """Run the evolution loop against the headless benchmark task."""
    overrides, options = parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.INFO if options["verbose"] else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = EvolutionConfig(**overrides)
        manager = GeneticManager(config)
    except (ConfigurationError, ValidationError) as e:
        print(f"  Invalid configuration: {e}")
        return 1

    task = WallFollowingTask(manager.rng, probes=options["probes"])

    print(
        f"  Evolving {config.population_size} genomes for {options['generations']} generations "
        f"(seed={config.seed}, layers={config.layers}, neurons={config.neurons})"
    )
    start = time.time()
    manager.create_population()
    for _ in range(options["generations"]):
        for summary in run_generations(manager, task, 1):
            print(
                f"  gen {summary.generation:4d}  best={summary.best_fitness:6.3f}  "
                f"mean={summary.mean_fitness:6.3f}  worst={summary.worst_fitness:6.3f}  "
                f"pool={summary.gene_pool_size}"
            )

    elapsed = time.time() - start
    history = manager.history
    if history:
        best = max(history, key=lambda s: s.best_fitness)
        print(f"\n  Best fitness {best.best_fitness:.3f} in generation {best.generation}")
    print(f"  Finished in {elapsed:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
