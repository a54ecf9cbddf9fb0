"""``crocload profile``: print the load profile and its per-tick targets."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from crocload.patterns.stages import DEFAULT_STAGES, default_load_profile

console = Console(stderr=True)


def profile_cmd(
    tick: float = typer.Option(
        10.0,
        "--tick",
        "-t",
        help="Seconds between sampled points.",
        min=0.1,
    ),
) -> None:
    """Print the default stages and the target VU count at each tick."""
    pattern = default_load_profile()

    stages = Table(title="Stages", show_header=True, header_style="bold cyan", expand=True)
    stages.add_column("#", justify="right")
    stages.add_column("Duration", justify="right")
    stages.add_column("Target VUs", justify="right")
    for i, stage in enumerate(DEFAULT_STAGES, start=1):
        stages.add_row(str(i), f"{stage.duration:.0f}s", str(stage.target))

    ticks = Table(title="Target VUs", show_header=True, header_style="bold cyan", expand=True)
    ticks.add_column("Elapsed", justify="right")
    ticks.add_column("VUs", justify="right")
    for elapsed, users in pattern.iter_concurrency(pattern.total_duration, tick_interval=tick):
        ticks.add_row(f"{elapsed:.1f}s", str(users))

    console.print(Panel(pattern.describe(), title="crocload", border_style="cyan"))
    console.print(stages)
    console.print(ticks)
