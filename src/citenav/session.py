from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .citations import citekey_pattern, media_citation, page_citation
from .config import NavConfig
from .index import CitekeyIndex
from .loader import ContainerLoader
from .models import Container, ContainerScope, Direction, JumpAction, NoteView
from .navigation import Navigator
from .ordering import OrderingEngine
from .providers.base import BibliographyProvider, DocumentViewer, MediaPlayer, SearchProvider
from .providers.bibliography import FrontmatterBibliography
from .providers.filesystem import FilesystemSearch

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Everything one user session navigates with.

    Holds the citekey index, the active container and the providers. Build
    one per process (or per test); nothing here is global.
    """
    search: SearchProvider
    scope: str
    bibliography: BibliographyProvider | None = None
    media_order: str = "lexicographic"
    index: CitekeyIndex = field(init=False)
    navigator: Navigator = field(init=False)
    loader: ContainerLoader = field(init=False)

    def __post_init__(self) -> None:
        self.index = CitekeyIndex(bibliography=self.bibliography)
        self.navigator = Navigator(index=self.index)
        self.loader = ContainerLoader(index=self.index, ordering=OrderingEngine(media_order=self.media_order))

    @classmethod
    def from_config(cls, cfg: NavConfig) -> "Session":
        bibliography = None
        if cfg.bibliography_root is not None:
            bibliography = FrontmatterBibliography(root=cfg.bibliography_root, ignore=cfg.ignore)
        return cls(
            search=FilesystemSearch(ignore=cfg.ignore, suffixes=cfg.suffixes),
            scope=str(cfg.notes_root),
            bibliography=bibliography,
            media_order=cfg.media_order,
        )

    @property
    def active(self) -> Container | None:
        return self.navigator.active

    def load_citekey(self, citekey: str, reload: bool = False) -> Container:
        """Container of all notes citing `citekey`, cached after the first load."""
        container = self.index.cached_container(citekey)
        if container is not None and not reload:
            return container
        if container is None:
            container = Container(key=citekey, scope=ContainerScope.CITEKEY)
        matches = self.search.search(citekey_pattern(citekey), self.scope)
        self.loader.load(container, matches, self.index.resources_for(citekey))
        self.index.cache_container(container)
        if container.note_count == 0:
            logger.info(f"No notes found for {citekey}")
        return container

    def load_pattern(self, pattern: str) -> Container:
        """Ad-hoc container of every match of a regex under the notes root."""
        container = Container(key=pattern, scope=ContainerScope.PATTERN)
        self.loader.load(container, self.search.search(pattern, self.scope))
        self.navigator.select_container(container)
        return container

    def search_within(self, pattern: str) -> Container | None:
        """Narrow the active container to the matches of a regex in its note files."""
        active = self.navigator.active
        if active is None:
            return None
        container = Container(key=pattern, scope=ContainerScope.PATTERN)
        self.loader.load(container, self.search.search_within(pattern, active.note_files))
        self.navigator.select_container(container)
        return container

    def select(self, citekey: str) -> Container:
        container = self.load_citekey(citekey)
        self.navigator.select_container(container)
        return container

    def open_resource(self, resource: str) -> Container | None:
        """Load and activate the notes for whatever citekey owns `resource`."""
        citekey = self.index.resolve_citekey(resource)
        if citekey is None:
            return None
        container = self.select(citekey)
        container.active_resource = resource
        return container

    def follow_player(self, player: MediaPlayer) -> Container | None:
        resource = player.current_path()
        if not resource:
            return None
        return self.open_resource(resource)

    def current(self) -> NoteView | None:
        return self.navigator.current()

    def advance(self, direction: Direction) -> NoteView | None:
        return self.navigator.advance(direction)

    def jump(self, viewer: DocumentViewer | None = None, player: MediaPlayer | None = None) -> JumpAction | None:
        return self.navigator.jump_to(viewer=viewer, player=player)

    def citekeys_for_note_file(self, file: str) -> list[str]:
        return self.index.citekeys_for_note_file(file)

    def page_citation(self, resource: str, page: int, region: tuple[float, ...] | None = None,
                      label: str | None = None) -> str | None:
        citekey = self.index.resolve_citekey(resource)
        if citekey is None:
            return None
        return page_citation(citekey, page, region=region, label=label)

    def media_citation(self, resource: str, timestamp: str) -> str | None:
        citekey = self.index.resolve_citekey(resource)
        if citekey is None:
            return None
        return media_citation(citekey, resource, timestamp)
