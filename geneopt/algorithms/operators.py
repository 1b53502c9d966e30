from typing import List, Sequence

import numpy as np

from geneopt.algorithms.selection import Parent
from geneopt.core.params import ConfigurationError


def random_individual(vector_size: int, gene_min: float, gene_max: float,
                      rng: np.random.Generator = None) -> np.ndarray:
    """Create an individual with genes drawn uniformly from [gene_min, gene_max]."""
    if rng is None:
        rng = np.random.default_rng()
    return rng.uniform(gene_min, gene_max, size=vector_size)


def crossover(parents: Sequence[Parent], num_crosspoints: int,
              rng: np.random.Generator = None) -> List[np.ndarray]:
    """
    Perform multi-point crossover on consecutive pairs of parents.

    For each pair, num_crosspoints distinct cut positions are drawn from
    1..vector_size-1 and sorted. The segment starting at every other cut
    point (the first, third, ...) and running to the next cut point, or to
    the end of the vector, is exchanged between the two children.

    Args:
        parents: (fitness, individual) tuples; the count must be even
        num_crosspoints: Number of cut points, less than the vector length
        rng: Random generator (a fresh one is created if omitted)

    Returns:
        Two offspring per pair, in pair order
    """
    if len(parents) % 2 != 0:
        raise ConfigurationError("Number of parents must be even")
    if len(parents) == 0:
        raise ConfigurationError("Crossover needs at least one pair of parents")

    vector_length = len(parents[0][1])
    if num_crosspoints < 0:
        raise ConfigurationError("Number of crosspoints cannot be negative")
    if num_crosspoints >= vector_length:
        raise ConfigurationError("Number of crosspoints must be less than vector length")

    if rng is None:
        rng = np.random.default_rng()

    offspring = []
    for i in range(0, len(parents), 2):
        child1 = np.array(parents[i][1], dtype=float)
        child2 = np.array(parents[i + 1][1], dtype=float)
        if len(child1) != vector_length or len(child2) != vector_length:
            raise ConfigurationError("All parents must have the same vector length")

        if num_crosspoints == 0:
            crosspoints = []
        else:
            crosspoints = np.sort(rng.choice(np.arange(1, vector_length), size=num_crosspoints,
                                             replace=False))

        for j in range(0, len(crosspoints), 2):
            start = crosspoints[j]
            end = crosspoints[j + 1] if j + 1 < len(crosspoints) else vector_length
            segment = child1[start:end].copy()
            child1[start:end] = child2[start:end]
            child2[start:end] = segment

        offspring.append(child1)
        offspring.append(child2)

    return offspring


def mutation(mutation_rate: float, gene_min: float, gene_max: float,
             offspring: Sequence[Sequence[float]],
             rng: np.random.Generator = None) -> List[np.ndarray]:
    """
    Replace each gene, with probability mutation_rate, by a fresh uniform value.

    The input individuals are left untouched; new arrays are returned in
    the same order.
    """
    if not 0.0 <= mutation_rate <= 1.0:
        raise ConfigurationError("Mutation rate must be between 0 and 1")

    if rng is None:
        rng = np.random.default_rng()

    mutated = []
    for individual in offspring:
        child = np.array(individual, dtype=float)
        mask = rng.random(child.shape[0]) < mutation_rate
        child[mask] = rng.uniform(gene_min, gene_max, size=int(mask.sum()))
        mutated.append(child)

    return mutated
