from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable


def relpath(root: Path, path: Path) -> str:
    return str(path.resolve().relative_to(root.resolve())).replace("\\", "/")


def matches_ignore_pattern(rel_path: str, patterns: list[str]) -> bool:
    """Check if a relative path matches any of the ignore patterns.

    Supports glob patterns like:
    - "**/.DS_Store" - match .DS_Store in any directory
    - ".git/**" - match everything under .git
    - "archive/*.org" - plain fnmatch against the relative path
    """
    rel_path = rel_path.replace("\\", "/")

    for pattern in patterns:
        pattern = pattern.replace("\\", "/")

        if pattern.startswith("**/"):
            suffix = pattern[3:]
            if fnmatch(rel_path, pattern) or fnmatch(rel_path, f"*/{suffix}"):
                return True
            parts = rel_path.split("/")
            for i, part in enumerate(parts):
                if fnmatch(part, suffix):
                    return True
                if fnmatch("/".join(parts[i:]), suffix):
                    return True

        elif pattern.endswith("/**"):
            prefix = pattern[:-3]
            if rel_path.startswith(prefix + "/") or rel_path == prefix:
                return True

        elif fnmatch(rel_path, pattern):
            return True

    return False


def scan_files(root: Path, ignore: list[str], suffixes: Iterable[str] | None = None) -> list[Path]:
    """Files under root, sorted, minus ignored ones and wrong suffixes."""
    wanted = {s.lower() for s in suffixes} if suffixes else None
    paths: list[Path] = []
    for p in sorted(root.rglob("*")):
        if not p.is_file():
            continue
        if wanted is not None and p.suffix.lower() not in wanted:
            continue
        if matches_ignore_pattern(relpath(root, p), ignore):
            continue
        paths.append(p)
    return paths
