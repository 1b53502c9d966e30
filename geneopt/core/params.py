import logging
import math

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when optimizer parameters or operator inputs are unusable."""


class OptimizerParams:
    """Parameters for the genetic optimizer.

    Values that can be salvaged are adjusted in place (with a logged
    warning); values that cannot raise ConfigurationError.
    """

    def __init__(
        self,
        pop_size: int = 100,
        vector_size: int = 10,
        num_parents: int = 20,
        mutation_rate: float = 0.5,
        selection_ratio: float = 0.5,
        gene_min: float = -10.0,
        gene_max: float = 10.0,
        num_crosspoints: int = 2
    ):
        """
        Create a new set of parameters for the genetic optimizer.

        Args:
            pop_size: Size of the population (at least 4, forced even)
            vector_size: Number of genes in each individual
            num_parents: Parents selected per generation (forced even, <= pop_size)
            mutation_rate: Per-gene probability of mutation
            selection_ratio: Fraction of offspring kept by environmental selection
            gene_min: Lower bound for gene values
            gene_max: Upper bound for gene values
            num_crosspoints: Cut points used by crossover (< vector_size)
        """
        if pop_size <= 0:
            raise ConfigurationError("Population size must be positive")
        if vector_size <= 0:
            raise ConfigurationError("Vector size must be positive")
        if num_parents <= 0:
            raise ConfigurationError("Number of parents must be positive")
        if num_crosspoints < 0:
            raise ConfigurationError("Number of crosspoints cannot be negative")
        for name, value in (("Mutation rate", mutation_rate),
                            ("Selection ratio", selection_ratio),
                            ("Gene minimum", gene_min),
                            ("Gene maximum", gene_max)):
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number")

        if pop_size < 4:
            logger.warning("Adjusted population size from %d to 4", pop_size)
            pop_size = 4
        elif pop_size % 2 != 0:
            logger.warning("Adjusted population size from %d to %d to ensure even number",
                           pop_size, pop_size + 1)
            pop_size += 1

        if num_parents > pop_size:
            logger.warning("Adjusted number of parents to %d to match population size", pop_size)
            num_parents = pop_size
        elif num_parents % 2 != 0:
            adjusted = num_parents - 1 if num_parents > 1 else 2
            logger.warning("Adjusted number of parents to %d to ensure even number", adjusted)
            num_parents = adjusted

        clamped = min(max(mutation_rate, 0.0), 1.0)
        if clamped != mutation_rate:
            logger.warning("Clamped mutation rate %s to %s", mutation_rate, clamped)
            mutation_rate = clamped

        clamped = min(max(selection_ratio, 0.1), 1.0)
        if clamped != selection_ratio:
            logger.warning("Clamped selection ratio %s to %s", selection_ratio, clamped)
            selection_ratio = clamped

        if gene_min > gene_max:
            logger.warning("Swapped inverted gene range [%s, %s]", gene_min, gene_max)
            gene_min, gene_max = gene_max, gene_min

        if num_crosspoints >= vector_size:
            logger.warning("Adjusted number of crosspoints to %d to fit vector size %d",
                           vector_size - 1, vector_size)
            num_crosspoints = vector_size - 1

        self._pop_size = int(pop_size)
        self._vector_size = int(vector_size)
        self._num_parents = int(num_parents)
        self._mutation_rate = float(mutation_rate)
        self._selection_ratio = float(selection_ratio)
        self._gene_min = float(gene_min)
        self._gene_max = float(gene_max)
        self._num_crosspoints = int(num_crosspoints)

    @property
    def pop_size(self) -> int:
        return self._pop_size

    @property
    def vector_size(self) -> int:
        return self._vector_size

    @property
    def num_parents(self) -> int:
        return self._num_parents

    @property
    def mutation_rate(self) -> float:
        return self._mutation_rate

    @property
    def selection_ratio(self) -> float:
        return self._selection_ratio

    @property
    def gene_min(self) -> float:
        return self._gene_min

    @property
    def gene_max(self) -> float:
        return self._gene_max

    @property
    def num_crosspoints(self) -> int:
        return self._num_crosspoints

    def __repr__(self):
        fields = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"OptimizerParams({fields})"

    def to_dict(self):
        """Convert the parameters to a dictionary for serialization."""
        return {
            "pop_size": self.pop_size,
            "vector_size": self.vector_size,
            "num_parents": self.num_parents,
            "mutation_rate": self.mutation_rate,
            "selection_ratio": self.selection_ratio,
            "gene_min": self.gene_min,
            "gene_max": self.gene_max,
            "num_crosspoints": self.num_crosspoints
        }

    @classmethod
    def from_dict(cls, data):
        """Create a parameters object from a dictionary."""
        return cls(
            pop_size=data.get("pop_size", 100),
            vector_size=data.get("vector_size", 10),
            num_parents=data.get("num_parents", 20),
            mutation_rate=data.get("mutation_rate", 0.5),
            selection_ratio=data.get("selection_ratio", 0.5),
            gene_min=data.get("gene_min", -10.0),
            gene_max=data.get("gene_max", 10.0),
            num_crosspoints=data.get("num_crosspoints", 2)
        )
