## cli.py

"""
Command-line entry point: build random indexing word vectors from a text
file and cluster them.
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from clustering import DISTANCE_METRICS, KMeansClusterer
from config import CLUSTER_PARAMS, CONFIG
from errors import RandomIndexingError
from pipeline import Pipeline

console = Console()


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def render_summary(result) -> Table:
    table = Table(title="Random Indexing", show_header=False)
    table.add_column("metric", style="cyan")
    table.add_column("value", justify="right")

    table.add_row("Tokens processed", str(result.count))
    table.add_row("Vocabulary", str(len(result.vector_space)))
    table.add_row("Cached projections", str(result.cache_size))
    if result.clusters is not None:
        table.add_row("Clusters", str(result.clusters.k))
        table.add_row("Cluster iterations", str(result.clusters.iterations))
    if result.truncated:
        table.add_row("Input", "[yellow]truncated by read error[/yellow]")
    table.add_row("Elapsed", f"{result.elapsed:.3f}s")
    return table


@click.group()
def cli():
    """Random indexing word vectors."""
    pass


@cli.command(name="build")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--window", type=int, default=CONFIG['WINDOW_SIZE'], show_default=True,
              help="Context window capacity (odd)")
@click.option("--dim", type=int, default=CONFIG['VECTOR_DIM'], show_default=True,
              help="Projection vector dimension")
@click.option("--denominator", type=int, default=CONFIG['TRIT_DENOMINATOR'], show_default=True,
              help="Nonzero coordinates have probability 2/denominator")
@click.option("--clusters", "n_clusters", type=int, default=CLUSTER_PARAMS['N_CLUSTERS'], show_default=True,
              help="Number of clusters (k)")
@click.option("--iterations", type=int, default=CLUSTER_PARAMS['MAX_ITERATIONS'], show_default=True,
              help="Clustering iteration budget")
@click.option("--distance", type=click.Choice(sorted(DISTANCE_METRICS)),
              default=CLUSTER_PARAMS['DISTANCE'], show_default=True)
@click.option("--seed", type=int, default=CLUSTER_PARAMS['RANDOM_SEED'], show_default=True,
              help="Seed for centroid initialization")
@click.option("--no-cluster", is_flag=True, help="Skip clustering")
@click.option("--halt-on-read-error", is_flag=True,
              help="Keep the partial result when reading fails instead of aborting")
@click.option("--verbose", "-v", is_flag=True, help="Log progress")
def build(path, window, dim, denominator, n_clusters, iterations, distance, seed,
          no_cluster, halt_on_read_error, verbose):
    """Build word vectors from the text file at PATH."""
    configure_logging(verbose)

    try:
        pipeline = Pipeline(
            window_size=window,
            dim=dim,
            denominator=denominator,
            clusterer=KMeansClusterer(distance=distance, max_iterations=iterations, seed=seed),
            n_clusters=n_clusters,
            on_read_error='halt' if halt_on_read_error else 'raise',
        )
        result = pipeline.run_file(path, cluster=not no_cluster)
    except RandomIndexingError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    console.print(render_summary(result))
    console.print(f"count={result.count}")


def main():
    cli()


if __name__ == '__main__':
    main()
