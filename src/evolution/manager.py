"""Evolution controller: evaluation cursor, fitness reports and repopulation.

Orchestrates one generation at a time:
- Binds the agent to the genome under evaluation
- Records the fitness the agent reports when its episode ends
- Rebuilds the population from elites, crossover children and fresh
  random genomes once the last genome has been evaluated
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass

import numpy as np

from src.config import EvolutionConfig
from src.errors import ConfigurationError, EngineStateError
from src.evolution.genetics import GeneticSystem
from src.evolution.network import NeuralNetwork
from src.evolution.population import Population
from src.evolution.selection import GenePool, extremity_indices

logger = logging.getLogger(__name__)


@dataclass
class GenerationSummary:
    """Statistics for one finished generation."""

    generation: int
    best_fitness: float
    mean_fitness: float
    worst_fitness: float
    gene_pool_size: int
    naturally_selected: int


def validate_config(config: EvolutionConfig) -> None:
    """Reject settings that cannot fill a population.

    Raises:
        ConfigurationError: If elites plus crossover children overflow the
            population, or a selection count exceeds the population size
    """
    size = config.population_size
    if config.best_agent_selection > size:
        raise ConfigurationError(
            f"best_agent_selection={config.best_agent_selection} exceeds population_size={size}"
        )
    if config.worst_agent_selection > size:
        raise ConfigurationError(
            f"worst_agent_selection={config.worst_agent_selection} exceeds population_size={size}"
        )
    selected = config.best_agent_selection + 2 * config.number_to_crossover
    if selected > size:
        raise ConfigurationError(
            f"{config.best_agent_selection} elites + 2 * {config.number_to_crossover} "
            f"crossover children = {selected} slots, population_size is {size}"
        )


class GeneticManager:
    """Owns the population and drives which genome the agent evaluates.

    States are Evaluating(current_genome) and a transient repopulation that
    runs to completion inside report(). There is no terminal state.
    """

    def __init__(
        self,
        config: EvolutionConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        """Initialize the controller.

        Args:
            config: Evolution settings, validated here
            rng: Shared random generator, seeded from config.seed when omitted

        Raises:
            ConfigurationError: If the settings cannot produce a population
        """
        self.config = config or EvolutionConfig()
        validate_config(self.config)

        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.genetics = GeneticSystem(self.rng, self.config.mutation_rate)
        self.gene_pool = GenePool()

        self.current_generation = 0
        self.current_genome = 0
        self.naturally_selected = 0

        self._population: Population | None = None
        self._history: list[GenerationSummary] = []

    @property
    def population(self) -> Population:
        if self._population is None:
            raise EngineStateError("Population not created; call create_population() first")
        return self._population

    @property
    def has_population(self) -> bool:
        return self._population is not None

    @property
    def history(self) -> list[GenerationSummary]:
        return self._history.copy()

    def new_genome(self) -> NeuralNetwork:
        return NeuralNetwork.random(self.config.layers, self.config.neurons, self.rng)

    def create_population(self) -> NeuralNetwork:
        """Create the first population with random genomes and bind slot 0."""
        population = Population(self.config.population_size)
        self._fill_random(population, 0)
        self._population = population
        self.current_generation = 0
        self.current_genome = 0
        logger.info(
            f"Created population of {len(population)} genomes "
            f"(layers={self.config.layers}, neurons={self.config.neurons})"
        )
        return self.bind()

    def bind(self) -> NeuralNetwork:
        """The genome the agent should currently evaluate."""
        return self.population[self.current_genome]

    def report(self, fitness: float) -> NeuralNetwork:
        """Record the fitness of the bound genome and move on.

        Advances the cursor within the generation, or repopulates when the
        last genome has been evaluated.

        Args:
            fitness: Score the agent achieved before its episode ended.
                NaN and infinite scores are recorded as 0.

        Returns:
            The genome now bound
        """
        population = self.population
        fitness = float(fitness)
        if not math.isfinite(fitness):
            logger.warning(
                f"Genome {self.current_genome} of generation {self.current_generation} "
                f"reported non-finite fitness {fitness}; recording 0.0"
            )
            fitness = 0.0
        population[self.current_genome].fitness = fitness

        if self.current_genome < len(population) - 1:
            self.current_genome += 1
        else:
            self.repopulate()

        return self.bind()

    def repopulate(self) -> Population:
        """Build the next generation from the evaluated one.

        Runs synchronously: sort, elites, gene pool, crossover, mutation,
        random fill. The cursor is reset to 0 and the generation advanced.

        Returns:
            The new population
        """
        outgoing = self.population
        self.gene_pool.clear()
        self.naturally_selected = 0

        outgoing.sort_by_fitness()
        fitnesses = outgoing.fitnesses()

        incoming = Population(self.config.population_size)
        self._pick_best(outgoing, incoming)
        self._crossover(outgoing, incoming)
        mutated = self.genetics.mutate_selected(incoming, self.naturally_selected)
        self._fill_random(incoming, self.naturally_selected)

        if not incoming.is_complete():
            raise EngineStateError(f"Repopulation left empty slots {incoming.empty_slots()}")

        summary = GenerationSummary(
            generation=self.current_generation,
            best_fitness=max(fitnesses),
            mean_fitness=sum(fitnesses) / len(fitnesses),
            worst_fitness=min(fitnesses),
            gene_pool_size=len(self.gene_pool),
            naturally_selected=self.naturally_selected,
        )
        self._history.append(summary)
        logger.info(
            f"Generation {summary.generation}: best={summary.best_fitness:.2f} "
            f"mean={summary.mean_fitness:.2f} pool={summary.gene_pool_size} "
            f"selected={summary.naturally_selected} mutated_matrices={mutated}"
        )

        self._population = incoming
        self.current_genome = 0
        self.current_generation += 1
        return incoming

    def get_stats(self) -> dict:
        """Get current controller statistics.

        Returns:
            Dict with generation, cursor and the last finished generation
        """
        return {
            "generation": self.current_generation,
            "genome": self.current_genome,
            "population_size": self.config.population_size,
            "last_generation": asdict(self._history[-1]) if self._history else None,
        }

    def _pick_best(self, outgoing: Population, incoming: Population) -> None:
        """Copy elites into the new population and seed the gene pool."""
        size = len(outgoing)
        layers, neurons = self.config.layers, self.config.neurons

        best = extremity_indices(
            size, self.config.best_agent_selection, self.config.best_selection_end
        )
        worst = extremity_indices(
            size, self.config.worst_agent_selection, self.config.worst_selection_end
        )

        for index in best:
            elite = outgoing[index].initialise_copy(layers, neurons)
            elite.fitness = 0.0
            incoming[self.naturally_selected] = elite
            self.naturally_selected += 1
            self.gene_pool.add(index, outgoing[index].fitness)

        for index in worst:
            self.gene_pool.add(index, outgoing[index].fitness)

        logger.debug(f"Gene pool seeded with {len(self.gene_pool)} entries")

    def _crossover(self, outgoing: Population, incoming: Population) -> None:
        """Append number_to_crossover pairs of children to the new population."""
        size = len(outgoing)
        for iteration in range(self.config.number_to_crossover):
            fallback = ((2 * iteration) % size, (2 * iteration + 1) % size)
            a, b = self.gene_pool.sample_pair(
                self.rng, fallback, self.config.crossover_max_attempts
            )
            child_1, child_2 = self.genetics.crossover(outgoing[a], outgoing[b])

            incoming[self.naturally_selected] = child_1
            self.naturally_selected += 1
            incoming[self.naturally_selected] = child_2
            self.naturally_selected += 1

    def _fill_random(self, population: Population, start: int) -> None:
        for index in range(start, len(population)):
            population[index] = self.new_genome()
