"""Typer CLI for latency-stats.

Commands:
  percentiles  Percentile table of ttc/ttfb/delta read from standard input
  histogram    Histogram of one series across named measurement files
  swarm        Generate measurements by timing HTTP requests against a server

Each command is also installed as a standalone script
(``latency-percentiles``, ``latency-histogram`` and ``latency-swarm``).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from latency_stats.config import ReportSettings
from latency_stats.errors import EmptyInputError, MalformedLineError, UsageError
from latency_stats.histogram import histogram_report
from latency_stats.models import NamedSource, SeriesKind, SwarmPlan
from latency_stats.parser import Units, read_data
from latency_stats.percentiles import percentile_report
from latency_stats.report import render_histogram, render_percentiles
from latency_stats.swarm import format_measurements, run_swarm

app = typer.Typer(
    name="latency-stats",
    help="Percentiles and histograms of TTC/TTFB latency measurements",
    no_args_is_help=True,
)
err_console = Console(stderr=True)

logger = logging.getLogger("latency_stats.cli")

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    return typer.Exit(1)


def _report_invalid(e: ValidationError, what: str) -> typer.Exit:
    for err in e.errors():
        field = ".".join(str(part) for part in err["loc"])
        err_console.print(f"  [red]✗[/red] {escape(field)}: {escape(err['msg'])}")
    return _fail(f"invalid {what}")


def _settings(**overrides: object) -> ReportSettings:
    try:
        return ReportSettings().with_overrides(**overrides)
    except ValidationError as e:
        raise _report_invalid(e, "settings") from None


def _emit(lines: list[str]) -> None:
    for line in lines:
        typer.echo(line)


def parse_histogram_args(args: list[str]) -> tuple[SeriesKind, list[NamedSource]]:
    """Split ``<kind> [<name> <file>]+`` into a series kind and named sources."""
    if len(args) <= 1 or (len(args) - 1) % 2:
        raise UsageError("expected <ttfb|ttc|delta> followed by <name> <file> pairs")
    try:
        kind = SeriesKind(args[0])
    except ValueError:
        raise UsageError(f"unknown series kind '{args[0]}'") from None
    pairs = args[1:]
    sources = [
        NamedSource(name=name, path=path) for name, path in zip(pairs[::2], pairs[1::2])
    ]
    return kind, sources


@app.command()
def percentiles(
    rank: Annotated[
        list[float] | None,
        typer.Option("--rank", "-p", help="Percentile rank to report (repeatable)"),
    ] = None,
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text or json")
    ] = "text",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Print ttc/ttfb/delta percentiles for measurements read from stdin."""
    _configure_logging(verbose)
    settings = _settings(ranks=tuple(rank) if rank else None)

    try:
        data = read_data(sys.stdin, units=Units.NANOSECONDS, source="<stdin>")
        report = percentile_report(data, settings)
    except (MalformedLineError, EmptyInputError) as e:
        raise _fail(str(e)) from None

    if format == "json":
        typer.echo(report.model_dump_json(indent=2))
    else:
        _emit(render_percentiles(report))


@app.command()
def histogram(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(help="<ttfb|ttc|delta> followed by one or more <name> <file> pairs"),
    ] = None,
    nbins: Annotated[int | None, typer.Option("-b", "--bins", help="Number of bins")] = None,
    bin_size: Annotated[
        float | None, typer.Option("-s", "--bin-size", help="Bin size (in ms)")
    ] = None,
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text or json")
    ] = "text",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Outputs histogram data suitable for use with gnuplot.

    Arguments: <ttfb|ttc|delta> [<name> <file>]+
    """
    _configure_logging(verbose)

    try:
        kind, sources = parse_histogram_args(args or [])
    except UsageError as e:
        logger.debug("Rejected arguments %r: %s", args, e)
        typer.echo(ctx.get_help())
        raise typer.Exit(1) from None

    settings = _settings(nbins=nbins, bin_size=bin_size)

    try:
        result = histogram_report(sources, kind, settings)
    except UsageError as e:
        typer.echo(ctx.get_help())
        raise _fail(str(e)) from None
    except MalformedLineError as e:
        raise _fail(str(e)) from None
    except OSError as e:
        raise _fail(f"cannot read {e.filename}: {e.strerror}") from None

    if format == "json":
        typer.echo(result.model_dump_json(indent=2))
    else:
        _emit(render_histogram(result))


@app.command()
def swarm(
    nactive: Annotated[int, typer.Argument(help="Number of timed requests")],
    host: Annotated[str, typer.Argument(help="Server host")],
    port: Annotated[int, typer.Argument(help="Server port")],
    url: Annotated[str, typer.Argument(help="Request path, e.g. /")],
    nidle: Annotated[
        int, typer.Option("-i", "--idle", help="Number of idle connections to create")
    ] = 0,
    nthreads: Annotated[
        int | None,
        typer.Option(
            "-t",
            "--threads",
            help="Worker threads, each with its own event loop (default or 0: one per core)",
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Time connect and first byte of HTTP requests, printing one 'ttc ttfb' line each."""
    _configure_logging(verbose)

    try:
        plan = SwarmPlan(
            host=host,
            port=port,
            url=url,
            nactive=nactive,
            nidle=nidle,
            nthreads=nthreads or os.cpu_count() or 1,
        )
    except ValidationError as e:
        raise _report_invalid(e, "swarm arguments") from None

    try:
        measurements = run_swarm(plan)
    except OSError as e:
        raise _fail(f"connection to {host}:{port} failed: {e}") from None

    _emit(format_measurements(measurements))


def percentiles_main() -> None:
    """Entry point for the ``latency-percentiles`` script."""
    typer.run(percentiles)


def histogram_main() -> None:
    """Entry point for the ``latency-histogram`` script."""
    typer.run(histogram)


def swarm_main() -> None:
    """Entry point for the ``latency-swarm`` script."""
    typer.run(swarm)


if __name__ == "__main__":
    app()
