"""
Command Line Interface for DEM Sink Filling

Usage:
    sinkfill <input-grid.npy> <epsilon> <output-grid.npy>
"""

import json
import logging
import sys
import time
from typing import Optional, Tuple

import click

from . import __version__
from .core.engine import DEFAULT_PROGRESS_INTERVAL, PriorityFloodEngine
from .core.validation import (
    ArgumentCountError,
    EpsilonError,
    ValidationError,
    parse_epsilon,
    validate_argument_count,
    validate_output_path,
)
from .io.grid_file import GridReadError, GridWriteError, load_grid, save_grid

USAGE_ARGS = "<input-grid.npy> <epsilon> <output-grid.npy>"


def _echo_progress(iterations: int, confirmed: int, tentative: int) -> None:
    click.echo(
        f"Iterations: {iterations}, confirmed queue: {confirmed}, "
        f"tentative queue: {tentative}"
    )


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
@click.option('--progress-interval', default=DEFAULT_PROGRESS_INTERVAL,
              type=click.IntRange(min=1), show_default=True,
              help='Print progress every N iterations')
@click.option('--summary-json', type=click.Path(),
              help='Write run statistics to a JSON file')
@click.option('--report', type=click.Path(),
              help='Save a PNG/PDF figure of original, filled and fill depth')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: click.Context,
    args: Tuple[str, ...],
    progress_interval: int,
    summary_json: Optional[str],
    report: Optional[str],
    verbose: bool,
):
    """Fill depressions in a DEM with the Planchon-Darboux algorithm.

    Reads INPUT (a 2D .npy elevation grid), raises every interior sink
    so each cell drains to the grid edge with a slope of at least
    EPSILON, and writes the result to OUTPUT.

    Example:

        sinkfill dem.npy 0.001 dem_filled.npy
    """
    try:
        validate_argument_count(args)
    except ArgumentCountError:
        click.echo(f"Usage: {ctx.command_path} {USAGE_ARGS}", err=True)
        sys.exit(1)

    input_file, epsilon_text, output_file = args

    try:
        epsilon = parse_epsilon(epsilon_text)
    except EpsilonError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    start = time.perf_counter()

    try:
        elevations = load_grid(input_file)
        engine = PriorityFloodEngine(
            elevations,
            epsilon,
            progress_interval=progress_interval,
            progress_callback=_echo_progress,
        )
    except (GridReadError, ValidationError) as e:
        click.echo(f"Failed to start sink-filling routine: {e}", err=True)
        sys.exit(1)

    click.echo(f"Loaded {input_file}: {engine.topology.rows} x {engine.topology.cols}")

    result = engine.run()

    click.echo("\n" + "-" * 44)
    click.echo("Sink-filling done.")
    click.echo(f"Number of Iterations: {result.stats.iterations}")
    click.echo(f"epsilon: {epsilon}")
    click.echo("\n" + result.summary())

    # Persistence failures are reported; the fill itself already succeeded
    try:
        save_grid(result.filled, output_file)
        click.echo(f"{output_file} was written.")
    except GridWriteError as e:
        click.echo(f"An error occurred while writing {output_file}:\n{e}", err=True)

    if summary_json:
        try:
            output_path = validate_output_path(summary_json, "summary JSON file")
            with open(output_path, 'w') as f:
                json.dump(result.to_dict(), f, indent=2)
            click.echo(f"Summary saved to: {summary_json}")
        except (ValidationError, OSError) as e:
            click.echo(f"Error saving summary: {e}", err=True)

    if report:
        try:
            from .utils.visualization import plot_fill, save_report

            fig = plot_fill(elevations, result)
            save_report(fig, report)
            click.echo(f"Report saved to: {report}")
        except ImportError:
            click.echo("Warning: matplotlib required for reports", err=True)
        except (OSError, ValueError) as e:
            click.echo(f"Error saving report: {e}", err=True)

    elapsed = time.perf_counter() - start
    click.echo(f"Elapsed time: {elapsed:.2f}s")


if __name__ == '__main__':
    main()
