import logging
import math
from typing import List, Sequence, Tuple

import numpy as np

from geneopt.core.fitness import FitnessFunction, sum_of_squares
from geneopt.core.params import ConfigurationError

logger = logging.getLogger(__name__)

# A selected individual together with the fitness it was selected on
Parent = Tuple[float, np.ndarray]


def binary_tournament(
    population: Sequence[Sequence[float]],
    num_parents: int,
    evaluate: FitnessFunction = sum_of_squares,
    rng: np.random.Generator = None
) -> List[Parent]:
    """
    Select parents by repeated binary tournaments.

    Each draw picks two distinct individuals at random and keeps the one
    with the lower fitness; on a tie the first one drawn wins. Draws are
    independent, so an individual can be selected more than once.

    Args:
        population: Individuals to choose from (at least two)
        num_parents: Parents to select, forced even and capped to the population size
        evaluate: Fitness function
        rng: Random generator (a fresh one is created if omitted)

    Returns:
        List of (fitness, individual) tuples
    """
    if num_parents <= 0:
        raise ConfigurationError("Number of parents must be positive")
    if len(population) == 0:
        raise ConfigurationError("Population cannot be empty")
    if len(population) < 2:
        raise ConfigurationError("Tournament selection needs at least two individuals")

    if rng is None:
        rng = np.random.default_rng()

    num_parents -= num_parents % 2
    if num_parents == 0:
        num_parents = 2

    pop_size = len(population)
    if num_parents > pop_size:
        num_parents = pop_size - (pop_size % 2)
        logger.warning("Adjusted number of parents to %d to match population size", num_parents)

    parents = []
    for _ in range(num_parents):
        idx1, idx2 = rng.choice(pop_size, size=2, replace=False)

        fitness1 = evaluate(population[idx1])
        fitness2 = evaluate(population[idx2])

        if fitness1 <= fitness2:
            parents.append((fitness1, np.array(population[idx1], dtype=float)))
        else:
            parents.append((fitness2, np.array(population[idx2], dtype=float)))

    return parents


def _round_half_up(value: float) -> int:
    # Python's round() goes to the nearest even number on .5
    return int(math.floor(value + 0.5))


def environmental_selection(
    ratio: float,
    candidates: Sequence[Sequence[float]],
    evaluate: FitnessFunction = sum_of_squares,
    deduplicate: bool = False
) -> List[Parent]:
    """
    Keep the best fraction of a candidate pool (truncation selection).

    Args:
        ratio: Fraction of candidates to keep, between 0 and 1
        candidates: Individuals to rank
        evaluate: Fitness function
        deduplicate: Keep only one survivor per distinct fitness value

    Returns:
        List of (fitness, individual) tuples sorted by ascending fitness.
        With deduplicate=True the list can be shorter than requested.
    """
    if not 0.0 <= ratio <= 1.0:
        raise ConfigurationError("Selection ratio must be between 0 and 1")

    ranked = [(evaluate(individual), np.array(individual, dtype=float)) for individual in candidates]
    # Stable sort: equal fitness keeps candidate order
    ranked.sort(key=lambda pair: pair[0])

    num_selected = _round_half_up(len(candidates) * ratio)
    selected = ranked[:num_selected]

    if deduplicate:
        seen = set()
        unique = []
        for fitness, individual in selected:
            if fitness not in seen:
                seen.add(fitness)
                unique.append((fitness, individual))
        if len(unique) < len(selected):
            logger.debug("Dropped %d survivors with duplicate fitness", len(selected) - len(unique))
        selected = unique

    return selected
