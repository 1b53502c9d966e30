from typing import Callable, Sequence

import numpy as np

# Maps a gene vector to a scalar; lower is better.
FitnessFunction = Callable[[np.ndarray], float]


def sum_of_squares(individual: Sequence[float]) -> float:
    """Default fitness: the sum of squared gene values (0 for an empty vector)."""
    genes = np.asarray(individual, dtype=float)
    return float(np.dot(genes, genes))


def maximizing(fitness_fn: FitnessFunction) -> FitnessFunction:
    """
    Wrap a fitness function whose larger values are better.

    The optimizer always minimizes, so the wrapped function returns the
    negated score. Negate the reported fitness again to recover it.
    """
    def negated(individual):
        return -float(fitness_fn(individual))

    negated.__name__ = f"maximizing_{getattr(fitness_fn, '__name__', 'fitness')}"
    return negated
