"""``crocload run``: run the scenario for one virtual user and print a summary."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from crocload._internal.config import load_config
from crocload._internal.errors import CrocLoadError
from crocload._internal.logging import setup_logging
from crocload.engine.virtual_user import run_virtual_user
from crocload.metrics.scenario_metrics import ScenarioMetrics

if TYPE_CHECKING:
    from crocload._internal.config import CrocLoadConfig
    from crocload.scenario.crocodiles import IterationResult

console = Console(stderr=True)


def _apply_overrides(config: CrocLoadConfig, **overrides: object) -> CrocLoadConfig:
    """Return *config* with every non-None override applied."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    return dataclasses.replace(config, **changes)


def _print_summary(metrics: ScenarioMetrics, results: list[IterationResult]) -> None:
    """Print per-step trends followed by the totals."""
    trends = Table(
        title="Step Durations",
        show_header=True,
        header_style="bold cyan",
        expand=True,
    )
    trends.add_column("Trend")
    trends.add_column("Samples", justify="right")
    trends.add_column("avg", justify="right")
    trends.add_column("min", justify="right")
    trends.add_column("p90", justify="right")
    trends.add_column("p95", justify="right")
    trends.add_column("max", justify="right")
    for trend in metrics.trends:
        trends.add_row(
            trend.name,
            str(trend.count),
            trend.format(trend.avg),
            trend.format(trend.min),
            trend.format(trend.percentile(90)),
            trend.format(trend.percentile(95)),
            trend.format(trend.max),
        )
    console.print(trends)

    totals = Table(title="Run Complete", show_header=True, header_style="bold green", expand=True)
    totals.add_column("Metric", style="bold")
    totals.add_column("Value", justify="right")
    totals.add_row("Iterations", str(len(results)))
    totals.add_row("Aborted Iterations", str(sum(result.aborted for result in results)))
    totals.add_row("successful_requests", str(metrics.successful_requests.value))
    totals.add_row(
        "failed_requests",
        f"{metrics.failed_requests.rate * 100:.2f}% "
        f"({metrics.failed_requests.passes}/{metrics.failed_requests.total})",
    )
    console.print(totals)


def run_cmd(
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-b",
        help="API base URL (default: $CROCLOAD_BASE_URL or https://test-api.k6.io).",
    ),
    username: str | None = typer.Option(
        None,
        "--username",
        "-U",
        help="Login username (default: $CROCLOAD_USERNAME).",
    ),
    password: str | None = typer.Option(
        None,
        "--password",
        "-P",
        help="Login password (default: $CROCLOAD_PASSWORD).",
    ),
    iterations: int = typer.Option(
        1,
        "--iterations",
        "-n",
        help="Number of iterations to run.",
        min=1,
    ),
    vu: int = typer.Option(
        1,
        "--vu",
        help="Virtual user id embedded in crocodile names.",
        min=1,
    ),
    pause: float | None = typer.Option(
        None,
        "--pause",
        help="Seconds to pause at the end of each iteration (default: 1.0).",
        min=0.0,
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Per-request timeout in seconds (default: 30.0).",
        min=0.001,
    ),
    fail_on_error_rate: float | None = typer.Option(
        None,
        "--fail-on-error-rate",
        help="Exit non-zero if the failure rate exceeds this threshold (e.g., 0.05).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit logs as one JSON object per line.",
    ),
) -> None:
    """Run the crocodile scenario for one virtual user."""
    setup_logging(logging.DEBUG if verbose else logging.INFO, json_format=json_logs)

    try:
        config = _apply_overrides(
            load_config(),
            base_url=base_url,
            username=username,
            password=password,
            pause_seconds=pause,
            request_timeout=timeout,
        )
        config.require_credentials()
    except CrocLoadError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(
        Panel(
            f"[bold]Target:[/bold]     {config.base_url}\n"
            f"[bold]User:[/bold]       {config.username}\n"
            f"[bold]VU:[/bold]         {vu}\n"
            f"[bold]Iterations:[/bold] {iterations}",
            title="crocload",
            border_style="cyan",
        )
    )

    metrics = ScenarioMetrics()
    results = asyncio.run(
        run_virtual_user(config, metrics, vu_id=vu, iterations=iterations),
    )

    _print_summary(metrics, results)

    failure_rate = metrics.failed_requests.rate
    if fail_on_error_rate is not None and failure_rate > fail_on_error_rate:
        console.print(
            f"[red]FAIL:[/red] Failure rate {failure_rate * 100:.2f}% "
            f"exceeds threshold {fail_on_error_rate * 100:.2f}%"
        )
        raise typer.Exit(code=1)

    console.print("[green]Run completed.[/green]")
