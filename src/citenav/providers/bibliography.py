from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import frontmatter

from ..paths import scan_files

logger = logging.getLogger(__name__)


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v]
    return [str(value)]


@dataclass
class FrontmatterBibliography:
    """Bibliography read from literature notes with YAML front matter.

    A literature note looks like:

        ---
        citekey: smith2020
        files: [~/papers/smith2020.pdf]
        urls: [https://example.org/talk.mp4]
        ---

    Relative file entries resolve against the note's directory. `files()`
    reads the notes; a `urls()` call right after it reuses that read, so a
    refresh parses each note once.
    """
    root: Path
    ignore: list[str] = field(default_factory=list)
    suffixes: list[str] = field(default_factory=lambda: [".md"])
    _pending: list[tuple[str, dict[str, Any], Path]] | None = field(default=None, init=False, repr=False)

    def _entries(self) -> list[tuple[str, dict[str, Any], Path]]:
        out: list[tuple[str, dict[str, Any], Path]] = []
        if not self.root.is_dir():
            logger.info(f"Bibliography root does not exist: {self.root}")
            return out
        for p in scan_files(self.root, self.ignore, self.suffixes):
            try:
                post = frontmatter.loads(p.read_text(encoding="utf-8", errors="replace"))
            except Exception as e:
                logger.warning(f"Unreadable front matter in {p}: {e}")
                continue
            fm = dict(post.metadata or {})
            citekey = fm.get("citekey")
            if not citekey:
                continue
            out.append((str(citekey), fm, p))
        return out

    def files(self) -> dict[str, list[str]]:
        mapping: dict[str, list[str]] = {}
        entries_read = self._entries()
        self._pending = entries_read
        for citekey, fm, p in entries_read:
            for f in _as_list(fm.get("files")):
                fp = Path(f).expanduser()
                if not fp.is_absolute():
                    fp = p.parent / fp
                fp = fp.resolve()
                entries = mapping.setdefault(citekey, [])
                if str(fp) not in entries:
                    entries.append(str(fp))
        return mapping

    def urls(self) -> dict[str, list[str]]:
        mapping: dict[str, list[str]] = {}
        entries_read = self._pending if self._pending is not None else self._entries()
        self._pending = None
        for citekey, fm, _ in entries_read:
            for u in _as_list(fm.get("urls")):
                entries = mapping.setdefault(citekey, [])
                if u not in entries:
                    entries.append(u)
        return mapping
