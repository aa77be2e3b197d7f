import click
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TimeElapsedColumn
from rich.table import Table

from beta_belief.config.experiment_config import ExperimentConfig
from beta_belief.core.errors import BeliefError
from beta_belief.core.updater import ConjugateBetaBernoulliUpdater
from beta_belief.experiments.batch_experiment import BatchExperiment
from beta_belief.inputs.observations import generate_flips, load_observations
from beta_belief.logging_config import setup_logging
from beta_belief.utils.belief_visualizer import BeliefVisualizer
from beta_belief.utils.results_manager import ResultsManager

console = Console()
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """Bayesian coin-flip belief updating"""
    pass


@cli.command()
@click.option('--alpha', '-a', type=float, default=1.0, show_default=True, help='Prior alpha')
@click.option('--beta', '-b', type=float, default=1.0, show_default=True, help='Prior beta')
@click.option(
    '--observations',
    type=click.Path(exists=True, path_type=Path),
    help='YAML file with observed outcomes'
)
@click.option('--flips', '-n', type=int, help='Number of flips to simulate')
@click.option('--true-prob', '-p', type=float, default=0.5, show_default=True,
              help='Probability of heads for simulated flips')
@click.option('--seed', type=int, help='Random seed for simulated flips')
@click.option('--level', type=float, default=0.95, show_default=True,
              help='Credible interval mass')
def update(
    alpha: float,
    beta: float,
    observations: Optional[Path],
    flips: Optional[int],
    true_prob: float,
    seed: Optional[int],
    level: float,
) -> None:
    """Update a Beta prior with observed or simulated flips"""
    if observations is not None and flips is not None:
        raise click.UsageError("Use either --observations or --flips, not both")

    updater = ConjugateBetaBernoulliUpdater()
    try:
        prior = updater.initialize(alpha, beta)
        if observations is not None:
            outcomes = load_observations(observations)
        elif flips is not None:
            outcomes = generate_flips(true_prob, flips, seed=seed)
        else:
            outcomes = []
        posterior = updater.update(prior, outcomes)
        lower, upper = updater.credible_interval(posterior, level)
    except BeliefError as e:
        raise click.ClickException(str(e))

    heads = sum(outcomes)
    table = Table(title="Posterior Belief")
    table.add_column("Quantity")
    table.add_column("Value", justify="right")
    table.add_row("Heads", str(heads))
    table.add_row("Tails", str(len(outcomes) - heads))
    table.add_row("Alpha", f"{posterior.alpha:g}")
    table.add_row("Beta", f"{posterior.beta:g}")
    table.add_row("Mean", f"{updater.mean(posterior):.4f}")
    table.add_row("Variance", f"{updater.variance(posterior):.6f}")
    table.add_row(f"{level:.0%} interval", f"{lower:.4f} to {upper:.4f}")
    console.print(table)


@cli.command()
@click.option('--alpha', '-a', type=float, required=True, help='Beta alpha')
@click.option('--beta', '-b', type=float, required=True, help='Beta beta')
@click.option('--points', type=int, default=11, show_default=True, help='Grid points on [0, 1]')
def density(alpha: float, beta: float, points: int) -> None:
    """Print the Beta density over a grid"""
    updater = ConjugateBetaBernoulliUpdater()
    try:
        belief = updater.initialize(alpha, beta)
        grid, values = updater.density_curve(belief, points)
    except BeliefError as e:
        raise click.ClickException(str(e))

    table = Table(title=f"Beta({belief.alpha:g}, {belief.beta:g}) density")
    table.add_column("p", justify="right")
    table.add_column("density", justify="right")
    for p, value in zip(grid, values):
        table.add_row(f"{p:.3f}", f"{value:.4f}")
    console.print(table)


@cli.command()
@click.option(
    '--output',
    '-o',
    type=click.Path(path_type=Path),
    required=True,
    help='Path to create new configuration file'
)
def generate_config(output: Path) -> None:
    """Generate a default configuration file"""
    ExperimentConfig().to_yaml(output)
    console.print(f"[bold green]Configuration file generated at: {output}[/]")


@cli.command()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help='Path to configuration file'
)
@click.option(
    '--output',
    '-o',
    type=click.Path(path_type=Path),
    default='belief_results',
    help='Output directory for results'
)
@click.option('--no-plots', is_flag=True, help='Skip writing plots')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def run(config: Path, output: Path, no_plots: bool, verbose: bool) -> None:
    """Run a coin-flip experiment"""
    setup_logging(
        log_dir=str(output / "logs"),
        verbose=verbose,
        console_handler=RichHandler(console=console, rich_tracebacks=True),
    )
    try:
        console.print("[bold blue]Loading configuration...[/]")
        experiment_config = ExperimentConfig.from_yaml(config)
        _run_experiment(experiment_config, output, no_plots)
    except (BeliefError, ValidationError, OSError) as e:
        console.print(f"[bold red]Error: {str(e)}[/]")
        raise click.ClickException(str(e))

    console.print("[bold green]Experiment completed successfully![/]")
    console.print(f"[bold green]Results saved to: {output}[/]")


def _run_experiment(config: ExperimentConfig, output: Path, no_plots: bool) -> None:
    updater = ConjugateBetaBernoulliUpdater()
    prior = updater.initialize(config.prior.alpha, config.prior.beta)
    flips = generate_flips(config.true_prob, config.total_flips, seed=config.random_seed)

    results_manager = ResultsManager(output)
    beliefs = updater.replay(prior, flips)
    for step, belief in enumerate(beliefs):
        results_manager.log_belief(step, belief)

    experiment = BatchExperiment(
        true_prob=config.true_prob,
        total_flips=config.total_flips,
        prior_alpha=config.prior.alpha,
        prior_beta=config.prior.beta,
        credible_level=config.credible_level,
    )
    console.print("[bold blue]Running batch experiments...[/]")
    results = {}
    with Progress(
        SpinnerColumn(),
        *Progress.get_default_columns(),
        TimeElapsedColumn(),
        console=console
    ) as progress:
        task = progress.add_task("[green]Comparing batch sizes...", total=len(config.batch_sizes))
        for batch_size in config.batch_sizes:
            results[batch_size] = experiment.run(batch_size, flips)
            progress.update(task, advance=1)

    results_manager.save_results(results)

    if not no_plots:
        visualizer = BeliefVisualizer(updater, grid_points=config.grid_points)
        snapshots = {
            count: beliefs[count]
            for count in config.snapshot_counts
            if count < len(beliefs)
        }
        visualizer.plot_posterior_evolution(
            snapshots, output / "posterior_evolution.png", true_prob=config.true_prob
        )
        visualizer.plot_learning_curves(
            results, output / "learning_curves.png", true_prob=config.true_prob
        )

    final = beliefs[-1]
    lower, upper = updater.credible_interval(final, config.credible_level)
    logger.info(
        "Final belief Beta(%g, %g): mean %.4f, %.0f%% interval %.3f to %.3f",
        final.alpha,
        final.beta,
        final.mean,
        config.credible_level * 100,
        lower,
        upper,
    )


if __name__ == '__main__':
    cli()
