from .base import BibliographyProvider, DocumentViewer, MediaPlayer, SearchProvider
from .bibliography import FrontmatterBibliography
from .filesystem import FilesystemSearch

__all__ = [
    "BibliographyProvider",
    "DocumentViewer",
    "MediaPlayer",
    "SearchProvider",
    "FrontmatterBibliography",
    "FilesystemSearch",
]
