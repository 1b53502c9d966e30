import json
import logging
import os
from typing import Dict

import click
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from geneopt.core.params import ConfigurationError, OptimizerParams
from geneopt.algorithms.optimizer import run_optimizer


@click.group()
@click.option('-v', '--verbose', count=True, help='Increase log verbosity (-v info, -vv debug)')
def cli(verbose):
    """Genetic optimizer for real-valued vectors"""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.option('--pop-size', type=int, default=100, help='Population size')
@click.option('--vector-size', type=int, default=10, help='Number of genes per individual')
@click.option('--num-parents', type=int, default=20, help='Parents selected per generation')
@click.option('--mutation', type=float, default=0.5, help='Per-gene mutation rate')
@click.option('--selection', type=float, default=0.5, help='Environmental selection ratio')
@click.option('--gene-min', type=float, default=-10.0, help='Minimum gene value')
@click.option('--gene-max', type=float, default=10.0, help='Maximum gene value')
@click.option('--crosspoints', type=int, default=2, help='Crossover cut points')
@click.option('--generations', type=int, default=100, help='Maximum number of generations')
@click.option('--target', type=float, default=None, help='Stop once best fitness reaches this value')
@click.option('--seed', type=int, default=None, help='Random seed for reproducibility')
@click.option('--output', type=str, default=None, help='Output file for results (JSON)')
def run(pop_size, vector_size, num_parents, mutation, selection, gene_min, gene_max,
        crosspoints, generations, target, seed, output):
    """Minimize the sum of squares with the genetic optimizer"""
    try:
        params = OptimizerParams(
            pop_size=pop_size,
            vector_size=vector_size,
            num_parents=num_parents,
            mutation_rate=mutation,
            selection_ratio=selection,
            gene_min=gene_min,
            gene_max=gene_max,
            num_crosspoints=crosspoints
        )
        metrics, best = run_optimizer(params, generations, target, seed=seed)
    except ConfigurationError as e:
        raise click.BadParameter(str(e))

    results = {
        "algorithm": "GA",
        "seed": seed,
        "metrics": metrics,
        "best_individual": best.tolist()
    }

    if output:
        with open(output, 'w') as f:
            json.dump(results, f, indent=2)
        click.echo(f"Results saved to {output}")
    else:
        click.echo(f"Generations run: {metrics['generations']}")
        click.echo(f"Initial best fitness: {metrics['initial_fitness']:.6f}")
        click.echo(f"Final best fitness: {metrics['final_fitness']:.6f}")
        click.echo(f"Fitness improved by {metrics['improvement_pct']:.2f}%")
        if target is not None:
            click.echo(f"Target reached: {'yes' if metrics['target_reached'] else 'no'}")
        click.echo(f"CPU time: {metrics['cpu_time']:.4f} seconds")


@cli.command()
@click.option('--input', type=str, required=True, help='Input JSON file produced by run')
@click.option('--format', type=click.Choice(['json', 'csv', 'png']), default='png', help='Export format')
@click.option('--output', type=str, default=None, help='Output file name')
def export(input, format, output):
    """Export a fitness history to various formats"""
    with open(input, 'r') as f:
        data = json.load(f)

    history = data["metrics"]["best_fitness_history"]

    if not output:
        base_name = os.path.splitext(os.path.basename(input))[0]
        output = f"{base_name}_history.{format}"

    if format == 'json':
        with open(output, 'w') as f:
            json.dump({"best_fitness_history": history}, f, indent=2)
        click.echo(f"JSON exported to {output}")

    elif format == 'csv':
        with open(output, 'w') as f:
            f.write("generation,best_fitness\n")
            for generation, fitness in enumerate(history):
                f.write(f"{generation},{fitness}\n")
        click.echo(f"CSV exported to {output}")

    elif format == 'png':
        _export_convergence(data, output)
        click.echo(f"Convergence plot exported to {output}")


def _export_convergence(data: Dict, output: str) -> None:
    """
    Export a fitness history as a convergence plot.

    Args:
        data: Dictionary with the run metrics
        output: Output file name
    """
    metrics = data["metrics"]
    history = metrics["best_fitness_history"]

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(range(len(history)), history, marker='o', markersize=3, linewidth=1)

    if metrics.get("target_fitness") is not None:
        ax.axhline(metrics["target_fitness"], color='red', linestyle='--', label='Target')
        ax.legend()

    # Sum-of-squares fitness spans orders of magnitude
    if history and min(history) > 0:
        ax.set_yscale('log')

    ax.set_xlabel('Generation')
    ax.set_ylabel('Best fitness')
    ax.set_title(f"Best fitness per generation - Final: {metrics['final_fitness']:.6g}")
    ax.grid(True, linestyle='--', alpha=0.7)

    plt.tight_layout()
    plt.savefig(output, dpi=150)
    plt.close(fig)


def main():
    cli()


if __name__ == '__main__':
    main()
