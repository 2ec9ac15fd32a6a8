from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from human_durations.config import ResolvedSettings, resolve_settings
from human_durations.dotenv_loader import find_default_env_file, load_env_file
from human_durations.duration import Duration
from human_durations.errors import DurationError
from human_durations.logs import configure_logging
from human_durations.parser import is_parseable
from human_durations.tokenizer import tokenize


app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _render_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _settings(
    ctx: typer.Context,
    *,
    lenient: Optional[bool] = None,
    ascii_only: Optional[bool] = None,
    unit: Optional[str] = None,
) -> ResolvedSettings:
    verbose = bool((ctx.obj or {}).get("verbose", False))
    try:
        settings = resolve_settings(
            cli_lenient=lenient, cli_ascii=ascii_only, cli_output_unit=unit, cli_verbose=verbose
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    configure_logging(settings.log_level, console=err_console)
    loaded = (ctx.obj or {}).get("env_loaded")
    if loaded is not None:
        logger.debug("loaded %d setting(s) from %s", len(loaded.loaded), loaded.path)
    return settings


def _parse_or_fail(text: str, *, lenient: bool) -> Duration:
    try:
        return Duration.parse(text, lenient=lenient)
    except DurationError as e:
        raise typer.BadParameter(str(e)) from e


@app.callback()
def main(
    ctx: typer.Context,
    env_file: Optional[Path] = typer.Option(
        None,
        "--env-file",
        help="Load settings from this .env file (default: ./.env or ./durations.env if present).",
        dir_okay=False,
        exists=True,
        resolve_path=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log token streams and dropped fragments."),
) -> None:
    """
    Parse and format human-readable durations like 1h30m or -2m3.4s.
    """
    path = env_file or find_default_env_file(Path.cwd())
    loaded = load_env_file(path, environ=os.environ, override=False) if path is not None else None
    ctx.obj = {"verbose": verbose, "env_loaded": loaded}


@app.command("parse")
def parse_cmd(
    ctx: typer.Context,
    texts: List[str] = typer.Argument(..., help="Duration strings, e.g. 1h30m 500ms."),
    lenient: Optional[bool] = typer.Option(
        None,
        "--lenient/--strict",
        help="Skip unrecognized characters and unknown units. If omitted, uses $HUMAN_DURATIONS_LENIENT or strict.",
    ),
    unit: Optional[str] = typer.Option(
        None,
        "--unit",
        "-u",
        help="Unit to print the result in. If omitted, uses $HUMAN_DURATIONS_OUTPUT_UNIT or ms.",
    ),
) -> None:
    """
    Print the magnitude of each duration in the output unit.
    """
    settings = _settings(ctx, lenient=lenient, unit=unit)
    values = [(text, _parse_or_fail(text, lenient=settings.lenient)) for text in texts]

    if len(values) == 1:
        _text, value = values[0]
        console.print(_render_number(value.in_unit(settings.output_unit)), highlight=False)
        return

    table = Table(title="durations")
    table.add_column("input")
    table.add_column(settings.output_unit, justify="right")
    table.add_column("canonical")
    for text, value in values:
        table.add_row(
            escape(text),
            _render_number(value.in_unit(settings.output_unit)),
            value.format(ascii_only=settings.ascii_only),
        )
    console.print(table)


@app.command("format")
def format_cmd(
    ctx: typer.Context,
    amount: float = typer.Argument(..., help="Magnitude to format (use -- before negative numbers)."),
    unit: str = typer.Option("ms", "--unit", "-u", help="Unit of AMOUNT: ns, us, ms, s, m, h, d, w."),
    ascii_only: Optional[bool] = typer.Option(
        None, "--ascii/--unicode", help="Write microseconds as 'us'. If omitted, uses $HUMAN_DURATIONS_ASCII."
    ),
) -> None:
    """
    Print the canonical string for AMOUNT, e.g. 5400000 -> 1h30m.
    """
    settings = _settings(ctx, ascii_only=ascii_only)
    try:
        value = Duration.of(amount, unit)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    console.print(value.format(ascii_only=settings.ascii_only), highlight=False)


@app.command()
def normalize(
    ctx: typer.Context,
    texts: List[str] = typer.Argument(..., help="Duration strings to rewrite in canonical form."),
    lenient: Optional[bool] = typer.Option(None, "--lenient/--strict", help="Skip unrecognized fragments."),
    ascii_only: Optional[bool] = typer.Option(None, "--ascii/--unicode", help="Write microseconds as 'us'."),
) -> None:
    """
    Rewrite each duration in canonical form, e.g. "90m" -> 1h30m.
    """
    settings = _settings(ctx, lenient=lenient, ascii_only=ascii_only)
    for text in texts:
        value = _parse_or_fail(text, lenient=settings.lenient)
        console.print(value.format(ascii_only=settings.ascii_only), highlight=False)


@app.command()
def check(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Duration string to check."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only use exit code; print nothing."),
) -> None:
    """
    Check whether a duration string contains only digits, dots and letters.

    This does not validate unit symbols; use `parse` for that.

    Exit codes:
    - 0: parseable
    - 1: contains unrecognized characters
    """
    _settings(ctx)
    if is_parseable(text):
        if not quiet:
            console.print(f"[green]OK[/green] {escape(repr(text))}")
        raise typer.Exit(code=0)
    if not quiet:
        console.print(f"[red]INVALID[/red] {escape(repr(text))} contains unrecognized characters")
    raise typer.Exit(code=1)


@app.command()
def tokens(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Duration string to scan."),
) -> None:
    """
    Show the tokens a duration string scans into.
    """
    _settings(ctx)
    stream = tokenize(text)
    table = Table(title=f"tokens for {escape(repr(text))}")
    table.add_column("index", justify="right")
    table.add_column("type")
    table.add_column("value")
    for idx, token in enumerate(stream.tokens):
        table.add_row(str(idx), token.type.value, token.value)
    console.print(table)
    if stream.has_garbage:
        console.print("[yellow]Warning:[/yellow] unrecognized characters present (dropped in --lenient mode).")


if __name__ == "__main__":
    app()
