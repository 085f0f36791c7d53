"""citenav — navigate between cited resources and the notes that cite them.

Notes cite a resource with `[cite:@key p. 12]` or, for media,
`[[cite:@key resource][1:02:03]]`. citenav gathers every note citing a key
into a container, orders it by page or timestamp, and steps through it.

Public API:
- NavConfig
- Session
- Direction
"""

from .config import NavConfig
from .models import Container, Direction, Note, NoteKind, NoteView
from .session import Session

__all__ = ["NavConfig", "Session", "Container", "Direction", "Note", "NoteKind", "NoteView"]
