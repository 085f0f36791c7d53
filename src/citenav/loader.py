from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable

from .index import CitekeyIndex
from .locators import extract_location
from .models import Container, Note, RawMatch, SourceHandle
from .ordering import OrderingEngine

logger = logging.getLogger(__name__)


def build_note(match: RawMatch) -> Note | None:
    """Note for a raw match, or None when the match names no source file."""
    if not match.file:
        return None
    file = os.path.abspath(match.file)
    handle = match.handle or SourceHandle(file=file, line=match.line)
    return Note(
        file=file,
        line=match.line,
        location=extract_location(match.summary),
        source_handle=handle,
        summary=match.summary,
    )


@dataclass
class ContainerLoader:
    index: CitekeyIndex
    ordering: OrderingEngine

    def load(self, container: Container, raw_matches: Iterable[RawMatch], resources: Iterable[str] = ()) -> Container:
        """Replace the container's notes, kind and resources from raw matches.

        Matches without a file are dropped. Every note file is registered
        under the container key, and each resource is marked as loaded.
        """
        notes: list[Note] = []
        dropped = 0
        for m in raw_matches:
            note = build_note(m)
            if note is None:
                dropped += 1
                continue
            notes.append(note)
        if dropped:
            logger.debug(f"Dropped {dropped} matches without a source file for {container.key}")

        container.kind = notes[0].kind if notes else None
        for n in notes:
            self.index.register_note_file(n.file, container.key)
        container.notes = self.ordering.sort(notes, container.kind)

        resources = list(dict.fromkeys(resources))
        container.resources = resources
        for r in resources:
            self.index.mark_loaded(r, container.key)

        container.clamp_active_index()
        logger.debug(f"Loaded {container.note_count} notes for {container.key}")
        return container
