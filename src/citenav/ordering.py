from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .locators import timestamp_seconds
from .models import MediaLocation, Note, NoteKind, PageLocation

MEDIA_ORDERS = ("lexicographic", "chronological")


def document_key(note: Note) -> tuple[Any, ...]:
    """Page ascending; on the same page a note with a region comes first,
    and two regions compare on their first coordinate."""
    loc = note.location
    if not isinstance(loc, PageLocation):
        return (1, math.inf, 1, 0.0)
    if loc.region:
        return (0, loc.page, 0, loc.region[0])
    return (0, loc.page, 1, 0.0)


def media_key_lexicographic(note: Note) -> tuple[Any, ...]:
    loc = note.location
    if not isinstance(loc, MediaLocation):
        return (1, "")
    return (0, loc.timestamp)


def media_key_chronological(note: Note) -> tuple[Any, ...]:
    loc = note.location
    if not isinstance(loc, MediaLocation):
        return (1, math.inf)
    seconds = timestamp_seconds(loc.timestamp)
    return (0, math.inf if seconds is None else seconds)


@dataclass
class OrderingEngine:
    """Stable ordering of a container's notes, chosen by the container kind.

    Media timestamps compare as plain strings unless `media_order` is
    "chronological", in which case they compare as seconds.
    """
    media_order: str = "lexicographic"

    def __post_init__(self) -> None:
        if self.media_order not in MEDIA_ORDERS:
            raise ValueError(f"Invalid media order: {self.media_order}. Must be one of {MEDIA_ORDERS}.")

    def sort(self, notes: list[Note], kind: NoteKind | None) -> list[Note]:
        if kind is NoteKind.DOCUMENT:
            return sorted(notes, key=document_key)
        if kind is NoteKind.MEDIA:
            if self.media_order == "chronological":
                return sorted(notes, key=media_key_chronological)
            return sorted(notes, key=media_key_lexicographic)
        # plain containers keep provider order
        return list(notes)
