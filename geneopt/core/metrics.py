import math
from typing import Dict, List, Optional


def calculate_metrics(history: List[float], target_fitness: Optional[float] = None) -> Dict:
    """
    Calculate summary metrics for a fitness history.

    Args:
        history: Best fitness of each generation, in generation order
        target_fitness: Target used for early stopping, if any

    Returns:
        Dictionary of metrics
    """
    if not history:
        raise ValueError("Fitness history is empty")

    initial = history[0]
    final = history[-1]

    # Percentage reduction from the first to the last generation
    if initial != 0 and math.isfinite(initial) and math.isfinite(final):
        improvement = 100.0 * (initial - final) / abs(initial)
    else:
        improvement = 0.0

    metrics = {
        "generations": len(history),
        "initial_fitness": initial,
        "final_fitness": final,
        "best_fitness": min(history),
        "improvement_pct": improvement
    }

    if target_fitness is not None:
        metrics["target_fitness"] = target_fitness
        metrics["target_reached"] = any(f <= target_fitness for f in history)

    return metrics
