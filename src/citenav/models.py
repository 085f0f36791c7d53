from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NoteKind(Enum):
    DOCUMENT = "document"
    MEDIA = "media"
    PLAIN = "plain"


class ContainerScope(Enum):
    CITEKEY = "citekey"
    PATTERN = "pattern"


class Direction(Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class SourceHandle:
    """Where a match lives in its note file, enough to reopen it.

    A value, not a link to the search result that produced it.
    """
    file: str
    line: int
    column: int = 0


@dataclass(frozen=True)
class RawMatch:
    """One hit as returned by a search provider."""
    file: str
    line: int
    summary: str
    handle: SourceHandle | None = None


@dataclass(frozen=True)
class PageLocation:
    page: int
    label: str
    region: tuple[float, ...] | None = None


@dataclass(frozen=True)
class MediaLocation:
    bucket: str
    timestamp: str
    resource: str | None = None


Location = PageLocation | MediaLocation | None


@dataclass(frozen=True)
class Note:
    file: str
    line: int
    location: Location
    source_handle: SourceHandle = field(compare=False)
    summary: str = field(default="", compare=False)

    @property
    def kind(self) -> NoteKind:
        if isinstance(self.location, PageLocation):
            return NoteKind.DOCUMENT
        if isinstance(self.location, MediaLocation):
            return NoteKind.MEDIA
        return NoteKind.PLAIN

    @property
    def locator(self) -> int | str | None:
        """Page for document notes, `H:MM` bucket for media notes."""
        if isinstance(self.location, PageLocation):
            return self.location.page
        if isinstance(self.location, MediaLocation):
            return self.location.bucket
        return None

    @property
    def precise_locator(self) -> tuple[float, ...] | str | None:
        """Coordinate region for document notes, timestamp for media notes."""
        if isinstance(self.location, PageLocation):
            return self.location.region
        if isinstance(self.location, MediaLocation):
            return self.location.timestamp
        return None


@dataclass
class Container:
    """Notes sharing one citekey, or the hits of one ad-hoc pattern search.

    `active_note_index` is None exactly when there are no notes.
    """
    key: str
    scope: ContainerScope = ContainerScope.CITEKEY
    kind: NoteKind | None = None
    notes: list[Note] = field(default_factory=list)
    resources: list[str] = field(default_factory=list)
    active_resource: str | None = None
    active_note_index: int | None = None

    @property
    def note_count(self) -> int:
        return len(self.notes)

    @property
    def note_files(self) -> list[str]:
        seen: dict[str, None] = {}
        for n in self.notes:
            seen.setdefault(n.file, None)
        return list(seen)

    def active_note(self) -> Note | None:
        if self.active_note_index is None or not self.notes:
            return None
        return self.notes[self.active_note_index]

    def clamp_active_index(self) -> None:
        """Pull the active index back into range after the notes changed."""
        if not self.notes:
            self.active_note_index = None
        elif self.active_note_index is None:
            self.active_note_index = 0
        else:
            self.active_note_index = max(0, min(self.active_note_index, len(self.notes) - 1))


@dataclass(frozen=True)
class NoteView:
    """A note as presented after a navigation step."""
    note: Note
    position: int  # 1-based
    total: int


@dataclass(frozen=True)
class ShowPage:
    resource: str
    page: int
    region: tuple[float, ...] | None = None


@dataclass(frozen=True)
class SeekMedia:
    resource: str
    timestamp: str


@dataclass(frozen=True)
class OpenLocation:
    handle: SourceHandle


JumpAction = ShowPage | SeekMedia | OpenLocation
