"""Typer-based command line interface for inspecting button bindings.

``scan`` binds each ``--pattern`` to a no-op action, renders the input file
with the reference engine and lists every resulting button.  Buttons of
different patterns that touch are listed separately.  ``config`` prints the
effective configuration.

Exit codes
----------
0 success
3 I/O error (missing or unreadable input)
4 configuration error
5 pattern error (malformed regular expression or group index)
"""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .binding import KEYMAP
from .config import ConfigModel, load_config
from .engine import Document, PatternEngine
from .events import InputEvent
from .extent import iter_extents
from .global_set import BindingSpec, GlobalBindingSet
from .mode import ButtonLockMode
from .utils.logging import configure_logging
from .utils.textspan import build_line_starts, char_to_line_col

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

app = typer.Typer(
    name="buttonlock",
    help="Inspect clickable pattern buttons. Use 'buttonlock scan' to list buttons in a file.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load(config_path: Path | None) -> ConfigModel:
    try:
        return load_config(config_path)
    except (ValidationError, OSError, yaml.YAMLError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
        raise  # pragma: no cover - _safe_exit always raises


def _noop(event: InputEvent) -> None:
    _ = event


def _format_position(index: int, line_starts: tuple[int, ...]) -> str:
    line, col = char_to_line_col(index, line_starts)
    return f"{line + 1}:{col}"


def _button_runs(document: Document, start: int, end: int) -> Iterator[tuple[int, int, Any]]:
    """Split ``[start, end)`` into runs sharing one keymap object."""

    run_start = start
    keymap = document.get_annotation(start, KEYMAP)
    for pos in range(start + 1, end):
        current = document.get_annotation(pos, KEYMAP)
        if current is not keymap:
            yield run_start, pos, keymap
            run_start, keymap = pos, current
    yield run_start, end, keymap


@app.callback()
def main() -> None:
    """Entry point for the buttonlock command group."""
    pass


@app.command()
def scan(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Text file to scan"
    ),
    patterns: list[str] = typer.Option(  # noqa: B008
        ..., "--pattern", "-p", help="Regular expression to turn into buttons (repeatable)"
    ),
    grouping: Optional[int] = typer.Option(  # noqa: B008
        None, "--grouping", "-g", help="Capture group receiving the button"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    encoding: str = typer.Option("utf-8-sig", help="Input file encoding"),  # noqa: B008
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit debug logging to stderr"
    ),
) -> list[tuple[int, int, str]]:
    """List the buttons the given patterns produce in ``in_path``."""

    cfg = _load(config_path)
    configure_logging("DEBUG" if verbose else cfg.logging.level)

    try:
        text = in_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        _safe_exit(3, str(exc))

    global_set = GlobalBindingSet()
    for pattern in patterns:
        options = {} if grouping is None else {"grouping": grouping}
        global_set.register(BindingSpec.of(pattern, _noop, **options))

    document = Document(text, name=str(in_path))
    engine = PatternEngine(document)
    mode = ButtonLockMode(engine, config=cfg, global_set=global_set)
    registry = mode.enable()
    try:
        engine.activate()
    except (re.error, IndexError) as exc:
        _safe_exit(5, f"{type(exc).__name__}: {exc}")

    owners = {id(binding.keymap): binding.pattern for binding in registry}
    line_starts = build_line_starts(text)
    found: list[tuple[int, int, str]] = []
    for extent_start, extent_end in iter_extents(document):
        for start, end, keymap in _button_runs(document, extent_start, extent_end):
            pattern = owners.get(id(keymap), "?")
            found.append((start, end, pattern))
            span = (
                f"{_format_position(start, line_starts)}-"
                f"{_format_position(end - 1, line_starts)}"
            )
            typer.echo(f"{span}\t{pattern}\t{text[start:end]}")
    if verbose:
        typer.echo(f"{len(found)} buttons from {len(registry)} bindings", err=True)
    mode.disable()
    return found


@app.command("config")
def show_config(
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
) -> None:
    """Print the effective configuration as YAML."""

    cfg = _load(config_path)
    typer.echo(yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False).rstrip())


if __name__ == "__main__":  # pragma: no cover
    app()
