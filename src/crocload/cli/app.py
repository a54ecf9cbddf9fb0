"""Main Typer application, entry point for the ``crocload`` CLI."""

from __future__ import annotations

import typer

from crocload import __version__
from crocload.cli.profile import profile_cmd
from crocload.cli.run import run_cmd

app = typer.Typer(
    name="crocload",
    help="Load test the crocodile CRUD API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("run", help="Run scenario iterations for one virtual user.")(run_cmd)
app.command("profile", help="Show the stage-based load profile.")(profile_cmd)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"crocload {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """crocload: login, create, update, patch and delete crocodiles under load."""
