from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..models import RawMatch, SourceHandle
from ..paths import scan_files

logger = logging.getLogger(__name__)


def read_text(path: Path, max_bytes: int = 10_000_000) -> str:
    b = path.read_bytes()
    if len(b) > max_bytes:
        raise ValueError(f"File too large for text read: {path} ({len(b)} bytes)")
    return b.decode("utf-8", errors="replace")


@dataclass
class FilesystemSearch:
    """Line-oriented regex search over note files on disk.

    Each occurrence becomes one RawMatch whose summary runs from the match
    to the end of its line, so locators after the citation are picked up.
    """
    ignore: list[str] = field(default_factory=list)
    suffixes: list[str] = field(default_factory=lambda: [".org", ".md", ".txt"])

    def _search_file(self, rx: re.Pattern[str], path: Path) -> list[RawMatch]:
        try:
            text = read_text(path)
        except (OSError, ValueError) as e:
            logger.warning(f"Skipping {path}: {e}")
            return []
        file = str(path.resolve())
        out: list[RawMatch] = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            for m in rx.finditer(line):
                out.append(RawMatch(
                    file=file,
                    line=lineno,
                    summary=line[m.start():],
                    handle=SourceHandle(file=file, line=lineno, column=m.start()),
                ))
        return out

    def search(self, pattern: str, scope: str) -> list[RawMatch]:
        rx = re.compile(pattern)
        root = Path(scope).expanduser()
        if root.is_file():
            return self._search_file(rx, root)
        if not root.is_dir():
            logger.info(f"Search scope does not exist: {root}")
            return []
        matches: list[RawMatch] = []
        for p in scan_files(root, self.ignore, self.suffixes):
            matches.extend(self._search_file(rx, p))
        logger.debug(f"{len(matches)} matches for {pattern!r} under {root}")
        return matches

    def search_within(self, pattern: str, files: Iterable[str]) -> list[RawMatch]:
        rx = re.compile(pattern)
        matches: list[RawMatch] = []
        for f in files:
            p = Path(f)
            if p.is_file():
                matches.extend(self._search_file(rx, p))
        return matches
