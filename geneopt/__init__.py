from geneopt.core.params import OptimizerParams, ConfigurationError
from geneopt.core.fitness import sum_of_squares, maximizing
from geneopt.algorithms.selection import binary_tournament, environmental_selection
from geneopt.algorithms.operators import crossover, mutation
from geneopt.algorithms.optimizer import GeneticOptimizer, run_optimizer

__version__ = "0.1.0"
