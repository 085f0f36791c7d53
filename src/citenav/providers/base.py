from __future__ import annotations

from typing import Iterable, Protocol

from ..models import RawMatch, SourceHandle


class SearchProvider(Protocol):
    """Full-text search over note files.

    Returns an empty list when nothing matches.
    """

    def search(self, pattern: str, scope: str) -> list[RawMatch]:
        ...

    def search_within(self, pattern: str, files: Iterable[str]) -> list[RawMatch]:
        ...


class BibliographyProvider(Protocol):
    """Citekey to resource mappings, read fresh on every call."""

    def files(self) -> dict[str, list[str]]:
        ...

    def urls(self) -> dict[str, list[str]]:
        ...


class DocumentViewer(Protocol):
    def show_page(self, file: str, page: int, region: tuple[float, ...] | None) -> None:
        ...

    def show_location(self, handle: SourceHandle) -> None:
        ...


class MediaPlayer(Protocol):
    def seek(self, resource: str, timestamp: str) -> None:
        ...

    def current_path(self) -> str | None:
        ...
