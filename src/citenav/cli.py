from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import typer

from .citations import media_citation, page_citation
from .config import NavConfig
from .locators import parse_region
from .models import Container, Direction, Note, NoteView
from .session import Session

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _setup_logging(log_file: str | None, log_level: str, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper(), logging.INFO)

    fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    handlers: list[logging.Handler] = []

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(fmt, datefmt))
    handlers.append(console)

    if log_file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(logging.Formatter(fmt, datefmt))
        handlers.append(file_handler)

    logger = logging.getLogger("citenav")
    logger.setLevel(level)
    logger.handlers.clear()
    for h in handlers:
        logger.addHandler(h)


def _session(config: str, verbose: bool = False) -> Session:
    try:
        cfg = NavConfig.from_toml(config)
    except FileNotFoundError as e:
        raise typer.BadParameter(f"Config file not found: {config}") from e
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    if verbose or cfg.log_file:
        _setup_logging(cfg.log_file, cfg.log_level, verbose)
    return Session.from_config(cfg)


def _note_dict(note: Note) -> dict[str, Any]:
    precise = note.precise_locator
    return {
        "kind": note.kind.value,
        "locator": note.locator,
        "precise_locator": list(precise) if isinstance(precise, tuple) else precise,
        "file": note.file,
        "line": note.line,
        "summary": note.summary,
    }


def _container_dict(container: Container) -> dict[str, Any]:
    return {
        "key": container.key,
        "scope": container.scope.value,
        "kind": container.kind.value if container.kind else None,
        "resources": container.resources,
        "notes": [_note_dict(n) for n in container.notes],
    }


def _echo_view(view: NoteView) -> None:
    n = view.note
    typer.echo(f"[{view.position}/{view.total}] {n.file}:{n.line}  {n.summary}")


@app.command()
def init(notes: str = typer.Option(..., help="Directory holding note files"),
         bibliography: str = typer.Option("", help="Directory of literature notes with citekey front matter"),
         out: str = typer.Option("citenav.toml", help="Write example config to this path")):
    """Write a starter citenav.toml."""
    outp = Path(out)
    bib_section = f'\n[bibliography]\nroot = "{bibliography}"\n' if bibliography else ""
    outp.write_text(f"""[notes]
root = "{notes}"
ignore = [".git/**", "**/.DS_Store"]
suffixes = [".org", ".md", ".txt"]
{bib_section}
[ordering]
# "lexicographic" compares timestamps as strings, "chronological" as times
media = "lexicographic"

[logging]
level = "INFO"
""", encoding="utf-8")
    typer.echo(f"Wrote {outp}")


@app.command()
def notes(citekey: str,
          config: str = typer.Option("citenav.toml"),
          verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging")):
    """List the notes citing CITEKEY in navigation order."""
    session = _session(config, verbose)
    container = session.load_citekey(citekey)
    typer.echo(json.dumps(_container_dict(container), indent=2))


@app.command()
def grep(pattern: str,
         config: str = typer.Option("citenav.toml"),
         verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging")):
    """List every note line matching a regex."""
    session = _session(config, verbose)
    try:
        container = session.load_pattern(pattern)
    except re.error as e:
        raise typer.BadParameter(f"Invalid pattern: {e}") from e
    typer.echo(json.dumps(_container_dict(container), indent=2))


@app.command()
def show(citekey: str,
         step: Direction = typer.Option(Direction.FIRST, help="Navigation step to take"),
         start: int = typer.Option(0, "--from", help="1-based position to step from"),
         config: str = typer.Option("citenav.toml"),
         verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging")):
    """Step through the notes citing CITEKEY and print the one landed on."""
    session = _session(config, verbose)
    container = session.select(citekey)
    if container.note_count and start > 0:
        container.active_note_index = start - 1
    view = session.advance(step)
    if view is None:
        typer.echo(f"No notes for {citekey}")
        raise typer.Exit(1)
    _echo_view(view)


@app.command()
def resolve(resource: str,
            config: str = typer.Option("citenav.toml"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging")):
    """Print the citekey a file or URL belongs to."""
    session = _session(config, verbose)
    citekey = session.index.resolve_citekey(resource)
    if citekey is None:
        typer.echo(f"No citekey found for {resource}")
        raise typer.Exit(1)
    typer.echo(citekey)


@app.command()
def cite(citekey: str,
         page: int = typer.Option(None, help="Page number"),
         region: str = typer.Option("", help="Coordinates, e.g. '0.1 0.25'"),
         label: str = typer.Option("", help="Link label for the coordinates"),
         timestamp: str = typer.Option("", help="Media timestamp, e.g. 1:02:03"),
         resource: str = typer.Option("", help="Media file or URL the timestamp refers to")):
    """Format a citation string for pasting into a note."""
    if timestamp:
        if not resource:
            raise typer.BadParameter("--timestamp needs --resource")
        typer.echo(media_citation(citekey, resource, timestamp))
        return
    if page is None:
        raise typer.BadParameter("Give --page or --timestamp")
    parsed = parse_region(region) if region else None
    if region and parsed is None:
        raise typer.BadParameter(f"Invalid region: {region}")
    typer.echo(page_citation(citekey, page, region=parsed, label=label or None))


if __name__ == "__main__":
    app()
