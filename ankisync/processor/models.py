from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class NoteDocument:
    """A note loaded from disk."""

    path: Path
    text: str
