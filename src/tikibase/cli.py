from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List
import logging

import typer

from tikibase import commands
from tikibase.commands import Outcome
from tikibase.output import OutputFormat, render

app = typer.Typer(add_completion=False, help="Checks and fixes a tree of interlinked Markdown documents.")


@dataclass(frozen=True)
class CliOptions:
    root: Path
    output_format: OutputFormat


def _options(ctx: typer.Context) -> CliOptions:
    options = ctx.obj
    if not isinstance(options, CliOptions):
        raise typer.BadParameter("missing global options")
    return options


def _emit(ctx: typer.Context, outcome: Outcome) -> None:
    options = _options(ctx)
    if options.output_format == OutputFormat.JSON or outcome.messages:
        typer.echo(render(outcome.messages, options.output_format))
    raise typer.Exit(code=outcome.exit_code)


def _run(ctx: typer.Context, command: Callable[[Path], Outcome]) -> None:
    root = _options(ctx).root
    if not root.is_dir():
        typer.secho(f"directory not found: {root}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    _emit(ctx, command(root))


@app.callback()
def main_options(
    ctx: typer.Context,
    root: Path = typer.Option(Path("."), "--dir", "-d", help="Root directory of the Tikibase."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT, "--format", "-f", help="Output format."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr."),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = CliOptions(root=root, output_format=output_format)


@app.command("check")
def check(ctx: typer.Context) -> None:
    """Report all issues. The exit code is the number of issues."""
    _run(ctx, commands.check)


@app.command("fix")
def fix(ctx: typer.Context) -> None:
    """Fix all auto-fixable issues."""
    _run(ctx, commands.fix)


@app.command("pitstop")
def pitstop(ctx: typer.Context) -> None:
    """Fix all auto-fixable issues and report the rest."""
    _run(ctx, commands.pitstop)


@app.command("stats")
def stats(ctx: typer.Context) -> None:
    """Show statistics about the Tikibase."""
    _run(ctx, commands.stats)


@app.command("init")
def init(ctx: typer.Context) -> None:
    """Create a tikibase.json file."""
    _run(ctx, commands.init)


@app.command("json-schema")
def json_schema(ctx: typer.Context) -> None:
    """Export the JSON Schema of tikibase.json."""
    _run(ctx, commands.json_schema)


@app.command("search")
def search(
    ctx: typer.Context,
    terms: List[str] = typer.Argument(None, help="Words that must all occur in a document."),
) -> None:
    """List documents containing all given terms."""
    _run(ctx, lambda root: commands.search(root, terms or []))


def main() -> None:
    app()
