from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import os
import tomllib

from .ordering import MEDIA_ORDERS

DEFAULT_IGNORE = [".git/**", "**/.DS_Store", "**/*~"]
DEFAULT_SUFFIXES = [".org", ".md", ".txt"]
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _expand(p: str) -> str:
    return os.path.expandvars(os.path.expanduser(p))


@dataclass(frozen=True)
class NavConfig:
    """Where notes and literature notes live, and how notes are ordered."""

    notes_root: Path
    bibliography_root: Path | None = None

    ignore: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORE))
    suffixes: list[str] = field(default_factory=lambda: list(DEFAULT_SUFFIXES))

    # "lexicographic" keeps raw string order of timestamps ("10:00:00" < "9:00:00")
    media_order: str = "lexicographic"

    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self):
        """Convert string paths to Path objects and expand ~ and environment variables."""
        if isinstance(self.notes_root, str):
            object.__setattr__(self, 'notes_root', Path(_expand(self.notes_root)))
        if isinstance(self.bibliography_root, str):
            object.__setattr__(self, 'bibliography_root', Path(_expand(self.bibliography_root)))

    @staticmethod
    def from_toml(path: str | Path) -> "NavConfig":
        data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
        notes = data.get("notes", {})
        bib = data.get("bibliography", {})
        ordering = data.get("ordering", {})
        logging_config = data.get("logging", {})

        if "root" not in notes:
            raise ValueError("Missing [notes] root in config.")
        notes_root = Path(_expand(notes["root"])).resolve()

        bibliography_root = None
        if bib.get("root"):
            bibliography_root = Path(_expand(bib["root"])).resolve()

        media_order = ordering.get("media", "lexicographic")
        if media_order not in MEDIA_ORDERS:
            raise ValueError(f"Invalid media order: {media_order}. Must be one of {MEDIA_ORDERS}.")

        suffixes = [s if s.startswith(".") else f".{s}" for s in notes.get("suffixes", DEFAULT_SUFFIXES)]
        if not suffixes:
            raise ValueError("Invalid suffixes: at least one note file suffix is required.")

        log_level = str(logging_config.get("level", "INFO")).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {log_level}. Must be one of {LOG_LEVELS}.")
        log_file = logging_config.get("file")
        if log_file:
            log_file = _expand(log_file)

        return NavConfig(
            notes_root=notes_root,
            bibliography_root=bibliography_root,
            ignore=list(notes.get("ignore", DEFAULT_IGNORE)),
            suffixes=suffixes,
            media_order=media_order,
            log_level=log_level,
            log_file=log_file,
        )
