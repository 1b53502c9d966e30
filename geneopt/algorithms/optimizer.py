import logging
import math
import time
from typing import Dict, List, Optional, Tuple

import numpy as np

from geneopt.algorithms.operators import crossover, mutation, random_individual
from geneopt.algorithms.selection import binary_tournament, environmental_selection
from geneopt.core.fitness import FitnessFunction, sum_of_squares
from geneopt.core.metrics import calculate_metrics
from geneopt.core.params import ConfigurationError, OptimizerParams

logger = logging.getLogger(__name__)


class GeneticOptimizer:
    """
    Evolves a population of real-valued vectors toward lower fitness.

    Each generation runs binary tournament selection, multi-point
    crossover, uniform mutation and truncation selection, then refills
    the population with random individuals up to its target size.
    """

    def __init__(
        self,
        params: OptimizerParams = None,
        fitness_fn: FitnessFunction = sum_of_squares,
        seed: Optional[int] = None,
        rng: np.random.Generator = None,
        deduplicate_survivors: bool = False
    ):
        """
        Create a new optimizer with a random initial population.

        Args:
            params: Optimizer parameters (defaults if omitted)
            fitness_fn: Function mapping a gene vector to a fitness, lower is better
            seed: Seed for a new random generator
            rng: Random generator to use instead of seeding a new one
            deduplicate_survivors: Collapse survivors that share a fitness value
        """
        if params is None:
            params = OptimizerParams()
        if rng is not None and seed is not None:
            raise ConfigurationError("Pass either seed or rng, not both")

        self.params = params
        self.fitness_fn = fitness_fn
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.deduplicate_survivors = deduplicate_survivors
        self.generation = 0

        self._population = [self._new_individual() for _ in range(params.pop_size)]
        self._survivors = []

    @property
    def population(self) -> List[np.ndarray]:
        """Copies of the individuals in the current population."""
        return [individual.copy() for individual in self._population]

    def best_individual(self) -> Tuple[float, np.ndarray]:
        """
        Return the fittest individual of the current population.

        Returns:
            Tuple of (fitness, individual)
        """
        scored = [(self.fitness_fn(ind), ind) for ind in self._population]
        fitness, individual = min(scored, key=lambda pair: pair[0])
        return fitness, individual.copy()

    def _new_individual(self) -> np.ndarray:
        p = self.params
        return random_individual(p.vector_size, p.gene_min, p.gene_max, self.rng)

    def _maintain_population_size(self) -> None:
        """Pad with random individuals or truncate to the target size."""
        current_size = len(self._population)
        if current_size < self.params.pop_size:
            additional = self.params.pop_size - current_size
            self._population.extend(self._new_individual() for _ in range(additional))
        elif current_size > self.params.pop_size:
            del self._population[self.params.pop_size:]

    def step(self) -> float:
        """
        Perform one generation of evolution.

        Returns:
            The best fitness among the survivors of this generation, or
            infinity when environmental selection keeps nobody
        """
        p = self.params
        self._maintain_population_size()

        parents = binary_tournament(self._population, p.num_parents, self.fitness_fn, self.rng)
        offspring = crossover(parents, p.num_crosspoints, self.rng)
        mutated = mutation(p.mutation_rate, p.gene_min, p.gene_max, offspring, self.rng)
        survivors = environmental_selection(p.selection_ratio, mutated, self.fitness_fn,
                                            self.deduplicate_survivors)

        self._survivors = survivors
        self._population = [individual for _, individual in survivors]
        self._maintain_population_size()
        self.generation += 1

        best_fitness = min((fitness for fitness, _ in survivors), default=math.inf)
        logger.debug("Generation %d: %d survivors, best fitness %.6g",
                     self.generation, len(survivors), best_fitness)
        return best_fitness

    def optimize(self, max_generations: int, target_fitness: Optional[float] = None) -> List[float]:
        """
        Run the genetic algorithm.

        Args:
            max_generations: Maximum number of generations to run
            target_fitness: Stop after the first generation whose best fitness
                is less than or equal to this value

        Returns:
            Best fitness of each generation that was run
        """
        if max_generations <= 0:
            raise ConfigurationError("Number of generations must be positive")

        history = []
        for gen in range(max_generations):
            best_fitness = self.step()
            history.append(best_fitness)

            if target_fitness is not None and best_fitness <= target_fitness:
                logger.info("Target fitness reached at generation %d", gen)
                break

        return history


def run_optimizer(
    params: OptimizerParams = None,
    max_generations: int = 100,
    target_fitness: Optional[float] = None,
    fitness_fn: FitnessFunction = sum_of_squares,
    seed: Optional[int] = None
) -> Tuple[Dict, np.ndarray]:
    """
    Run the genetic optimizer and summarize the run.

    Args:
        params: Optimizer parameters (optional)
        max_generations: Maximum number of generations to run
        target_fitness: Optional target fitness for early stopping
        fitness_fn: Fitness function to minimize
        seed: Random seed for reproducibility

    Returns:
        Tuple of (metrics, best_individual)
    """
    start_time = time.time()

    if params is None:
        params = OptimizerParams()

    optimizer = GeneticOptimizer(params, fitness_fn=fitness_fn, seed=seed)
    history = optimizer.optimize(max_generations, target_fitness)
    best_fitness, best_individual = optimizer.best_individual()

    cpu_time = time.time() - start_time

    metrics = calculate_metrics(history, target_fitness)
    metrics["population_best_fitness"] = best_fitness
    metrics["cpu_time"] = cpu_time
    metrics["params"] = params.to_dict()
    metrics["best_fitness_history"] = history

    return metrics, best_individual
