"""Console script for pybaseline."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
import signal
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown

from . import __version__ as _version
from .completion import find_insertion_trigger, insertion_for
from .constants import DEFAULT_EXTENSIONS, DEFAULT_IGNORE_FILE, EXPLORE_URL_TEMPLATE
from .diagnostics import validate
from .exceptions import BaselineError, FileReadError
from .hover import hover
from .http import use_shared_client
from .model import Position, TextDocument, TodoEntry
from .registry import FeatureRegistry, load_registry
from .render_basic import render_basic
from .report import build_report, render_report
from .scanner import CancellationToken, scan_workspace
from .status import classify
from .ui.select import select_match
from .util.text import debug_enabled, normalize_whitespace

_FILE_ARG = click.Path(exists=True, dir_okay=False, path_type=Path)


def _configure_logging() -> None:
    if not debug_enabled():
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _get_registry(ctx: click.Context) -> FeatureRegistry:
    state = ctx.ensure_object(dict)
    registry = state.get("registry")
    if registry is None:
        with use_shared_client():
            registry = load_registry(state.get("data_path"))
        state["registry"] = registry
    return registry


async def _scan_until_interrupted(
    roots: tuple[Path, ...], extensions: tuple[str, ...], ignore_file: str, token: CancellationToken
) -> list[TodoEntry]:
    # Ctrl-C cancels the token; the scan then stops between file reads.
    loop = asyncio.get_running_loop()
    interruptible = sys.platform != "win32"
    if interruptible:
        loop.add_signal_handler(signal.SIGINT, token.cancel)
    try:
        return await scan_workspace(roots, extensions, ignore_file=ignore_file, token=token)
    finally:
        if interruptible:
            loop.remove_signal_handler(signal.SIGINT)


def _read_document(path: Path) -> TextDocument:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise FileReadError(str(path), cause=exc.__class__.__name__) from exc
    return TextDocument(uri=path.resolve().as_uri(), text=text)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--data",
    "data_path",
    envvar="PYBASELINE_DATA",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read web-features data from a local data.json instead of downloading it.",
)
@click.version_option(_version, "-v", "--version")
@click.pass_context
def main(ctx: click.Context, data_path: Path | None) -> None:
    """
    Check Baseline feature references in source files

    \b
    Example usages:
      pybaseline search grid
      pybaseline check src/app.js
      pybaseline hover src/app.js 12 18
      pybaseline todos . --ext js --ext css
    """
    _configure_logging()
    ctx.ensure_object(dict)["data_path"] = data_path


@main.command()
@click.argument("query", metavar="<feature>", nargs=-1, required=True, type=click.STRING)
@click.pass_context
def search(ctx: click.Context, query: tuple[str, ...]) -> None:
    """Search Baseline features by id, name or description."""
    console = Console()
    joined = normalize_whitespace(" ".join(query))
    try:
        registry = _get_registry(ctx)
        matches = registry.search(joined)
        if not matches:
            raise click.ClickException(f"No matches found for '{joined}'.")

        if matches[0].id == joined.lower() or len(matches) == 1:
            selected: str | None = matches[0].id
        else:
            if not (sys.stdin.isatty() and sys.stdout.isatty()):
                console.print(
                    "Multiple matches found in non-interactive mode. Showing the first match.",
                    style="yellow",
                )
            selected = select_match(matches)
        if selected is None:
            raise click.ClickException("Selection canceled.")

        feature = registry.get(selected)
        if feature is None:
            raise click.ClickException(f"No matches found for '{joined}'.")
    except BaselineError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(render_basic(feature, registry))
    console.print(f"{feature.id} is Baseline {classify(feature.status).label}")
    console.print(EXPLORE_URL_TEMPLATE.format(feature_id=feature.id), style="dim")


@main.command()
@click.argument("paths", metavar="<file>", nargs=-1, required=True, type=_FILE_ARG)
@click.pass_context
def check(ctx: click.Context, paths: tuple[Path, ...]) -> None:
    """Report unrecognized Baseline feature ids."""
    found = 0
    try:
        registry = _get_registry(ctx)
        for path in paths:
            for diagnostic in validate(_read_document(path), registry):
                found += 1
                summary = diagnostic.message.splitlines()[0]
                click.echo(
                    f"{path}:{diagnostic.range.line + 1}:{diagnostic.range.start_column + 1}: "
                    f"{diagnostic.severity}: {summary}"
                )
    except BaselineError as exc:
        raise click.ClickException(str(exc)) from exc
    if found:
        ctx.exit(1)


@main.command("hover")
@click.argument("path", metavar="<file>", type=_FILE_ARG)
@click.argument("line", type=click.IntRange(min=1))
@click.argument("column", type=click.IntRange(min=1))
@click.option("--raw", is_flag=True, help="Print the Markdown source instead of rendering it.")
@click.pass_context
def hover_command(ctx: click.Context, path: Path, line: int, column: int, raw: bool) -> None:
    """Show feature details for the reference at LINE and COLUMN (1-based)."""
    try:
        registry = _get_registry(ctx)
        result = hover(_read_document(path), Position(line - 1, column - 1), registry)
    except BaselineError as exc:
        raise click.ClickException(str(exc)) from exc
    if result is None:
        raise click.ClickException("No Baseline feature at this position.")

    if raw:
        click.echo(result.markdown)
    else:
        Console().print(Markdown(result.markdown))


@main.command()
@click.argument("path", metavar="<file>", type=_FILE_ARG)
@click.argument("line", type=click.IntRange(min=1))
@click.argument("column", type=click.IntRange(min=1))
@click.pass_context
def complete(ctx: click.Context, path: Path, line: int, column: int) -> None:
    """Pick a feature id to insert at the caret (LINE and COLUMN, 1-based)."""
    try:
        document = _read_document(path)
        position = Position(line - 1, column - 1)
        trigger = find_insertion_trigger(document.line_at(position.line), position)
        if trigger is None:
            raise click.ClickException("No insertion point at this position.")
        selected = select_match(_get_registry(ctx).candidates())
    except BaselineError as exc:
        raise click.ClickException(str(exc)) from exc
    if selected is None:
        raise click.ClickException("Selection canceled.")

    insertion = insertion_for(trigger, selected)
    click.echo(
        json.dumps(
            {"line": insertion.line + 1, "column": insertion.column + 1, "text": insertion.text}
        )
    )


@main.command()
@click.argument(
    "roots", metavar="[root]...", nargs=-1, type=click.Path(file_okay=False, path_type=Path)
)
@click.option(
    "--ext",
    "-e",
    "extensions",
    multiple=True,
    default=DEFAULT_EXTENSIONS,
    show_default=True,
    envvar="PYBASELINE_EXTENSIONS",
    help="File extension to scan; repeat for more.",
)
@click.option(
    "--ignore-file",
    default=DEFAULT_IGNORE_FILE,
    show_default=True,
    help="Ignore file read from the top of each root.",
)
@click.pass_context
def todos(
    ctx: click.Context, roots: tuple[Path, ...], extensions: tuple[str, ...], ignore_file: str
) -> None:
    """List TODO(baseline/<id>) markers under each root."""
    token = CancellationToken()
    try:
        entries = asyncio.run(
            _scan_until_interrupted(roots or (Path.cwd(),), extensions, ignore_file, token)
        )
        if token.cancelled:
            ctx.exit(130)
        registry = _get_registry(ctx)
    except KeyboardInterrupt:
        ctx.exit(130)
    except BaselineError as exc:
        raise click.ClickException(str(exc)) from exc

    Console().print(render_report(build_report(entries, registry), registry))
