from __future__ import annotations

import logging
from dataclasses import dataclass

from .index import CitekeyIndex
from .models import (
    Container,
    Direction,
    JumpAction,
    MediaLocation,
    NoteView,
    OpenLocation,
    PageLocation,
    SeekMedia,
    ShowPage,
)
from .providers.base import DocumentViewer, MediaPlayer

logger = logging.getLogger(__name__)


def step_index(index: int, count: int, direction: Direction) -> int:
    """Index after one step; next/previous clamp at the ends instead of wrapping."""
    if direction is Direction.NEXT:
        return min(index + 1, count - 1)
    if direction is Direction.PREVIOUS:
        return max(index - 1, 0)
    if direction is Direction.FIRST:
        return 0
    return count - 1


def _is_url(resource: str) -> bool:
    return "://" in resource


@dataclass
class Navigator:
    """Active container and active note.

    The note index lives on the container, so switching containers and
    coming back resumes where the user left off. Every operation returns
    None when there is no active container or it has no notes.
    """
    index: CitekeyIndex
    active: Container | None = None

    def select_container(self, container: Container) -> None:
        self.active = container
        container.clamp_active_index()

    def current(self) -> NoteView | None:
        c = self.active
        if c is None or c.note_count == 0:
            return None
        c.clamp_active_index()
        return NoteView(note=c.notes[c.active_note_index], position=c.active_note_index + 1, total=c.note_count)

    def advance(self, direction: Direction) -> NoteView | None:
        c = self.active
        if c is None or c.note_count == 0:
            return None
        c.clamp_active_index()
        c.active_note_index = step_index(c.active_note_index, c.note_count, direction)
        return self.current()

    def _document_resource(self, c: Container) -> str | None:
        if c.active_resource and not _is_url(c.active_resource):
            return c.active_resource
        for r in c.resources:
            if not _is_url(r):
                return r
        return None

    def _media_resource(self, c: Container, loc: MediaLocation) -> str | None:
        if loc.resource:
            return loc.resource
        if c.active_resource:
            return c.active_resource
        resources = c.resources or self.index.resources_for(c.key)
        return resources[0] if resources else None

    def jump_target(self) -> JumpAction | None:
        """Viewer or player action for the active note."""
        view = self.current()
        if view is None:
            return None
        c = self.active
        note = view.note
        loc = note.location
        if isinstance(loc, PageLocation):
            resource = self._document_resource(c)
            if resource is None:
                logger.info(f"No document resource for {c.key}")
                return None
            return ShowPage(resource=resource, page=loc.page, region=loc.region)
        if isinstance(loc, MediaLocation):
            resource = self._media_resource(c, loc)
            if resource is None:
                logger.info(f"No media resource for {c.key}")
                return None
            return SeekMedia(resource=resource, timestamp=loc.timestamp)
        return OpenLocation(handle=note.source_handle)

    def jump_to(self, viewer: DocumentViewer | None = None, player: MediaPlayer | None = None) -> JumpAction | None:
        """Send the active note to the viewer or player.

        Returns the action performed, or None if nothing could be done.
        """
        action = self.jump_target()
        if isinstance(action, ShowPage):
            if viewer is None:
                return None
            viewer.show_page(action.resource, action.page, action.region)
            self.active.active_resource = action.resource
        elif isinstance(action, SeekMedia):
            if player is None:
                return None
            player.seek(action.resource, action.timestamp)
            self.active.active_resource = action.resource
        elif isinstance(action, OpenLocation):
            if viewer is None:
                return None
            viewer.show_location(action.handle)
        return action
