from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .models import Container
from .providers.base import BibliographyProvider

logger = logging.getLogger(__name__)


def _candidates(resource: str) -> list[str]:
    """Forms a resource may be listed under, in lookup order:
    bare filename, absolute path (symlinks resolved, then as given),
    raw identifier."""
    if "://" in resource:
        return [resource]
    out: list[str] = []
    name = Path(resource).name
    if name:
        out.append(name)
    expanded = os.path.expanduser(resource)
    for absolute in (os.path.realpath(expanded), os.path.abspath(expanded)):
        if absolute not in out:
            out.append(absolute)
    out.append(resource)
    return out


@dataclass
class CitekeyIndex:
    """Lookup tables tying resources, note files and citekeys together.

    - `files` / `urls`: citekey -> resources, copied from the bibliography on
      refresh and always replaced as a whole
    - `note_files`: note file -> citekeys cited in it
    - `loaded`: resource -> citekey, written when a container is loaded
    - `containers`: citekey -> Container cache
    """
    bibliography: BibliographyProvider | None = None
    files: dict[str, list[str]] = field(default_factory=dict)
    urls: dict[str, list[str]] = field(default_factory=dict)
    note_files: dict[str, list[str]] = field(default_factory=dict)
    loaded: dict[str, str] = field(default_factory=dict)
    containers: dict[str, Container] = field(default_factory=dict)

    def refresh(self) -> None:
        if self.bibliography is None:
            return
        files = {k: list(v) for k, v in self.bibliography.files().items()}
        urls = {k: list(v) for k, v in self.bibliography.urls().items()}
        self.files = files
        self.urls = urls
        logger.debug(f"Bibliography refreshed: {len(files)} citekeys with files, {len(urls)} with urls")

    def _scan(self, resource: str) -> str | None:
        for candidate in _candidates(resource):
            for table in (self.files, self.urls):
                for citekey, entries in table.items():
                    if candidate in entries:
                        return citekey
        return None

    def resolve_citekey(self, resource: str) -> str | None:
        """Citekey a resource belongs to, or None.

        Loaded resources answer directly; otherwise the bibliography is
        refreshed and scanned.
        """
        citekey = self.loaded.get(resource)
        if citekey is not None:
            return citekey
        self.refresh()
        citekey = self._scan(resource)
        if citekey is None:
            logger.info(f"No citekey found for {resource}")
        return citekey

    def resources_for(self, citekey: str) -> list[str]:
        """Files then urls the bibliography lists for a citekey."""
        if citekey not in self.files and citekey not in self.urls:
            self.refresh()
        return list(self.files.get(citekey, [])) + list(self.urls.get(citekey, []))

    def register_note_file(self, file: str, citekey: str) -> None:
        keys = self.note_files.setdefault(file, [])
        if citekey not in keys:
            keys.append(citekey)

    def citekeys_for_note_file(self, file: str) -> list[str]:
        return list(self.note_files.get(file, []))

    def mark_loaded(self, resource: str, citekey: str) -> None:
        self.loaded[resource] = citekey

    def is_loaded(self, resource: str) -> bool:
        return resource in self.loaded

    def cache_container(self, container: Container) -> None:
        self.containers[container.key] = container

    def cached_container(self, citekey: str) -> Container | None:
        return self.containers.get(citekey)
