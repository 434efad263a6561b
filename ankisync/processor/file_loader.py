from pathlib import Path

from ankisync.processor.exceptions import DocumentNotFoundError, FileReadError
from ankisync.processor.models import NoteDocument


class FileLoader:
    """Resolves a note path and reads its text."""

    ENCODING = "utf-8"

    def __init__(self, notes_root: Path | None = None) -> None:
        self._notes_root = notes_root

    def load(self, path: Path | str) -> NoteDocument:
        """Read a note as UTF-8 text with ``\\n`` line endings.

        Raises:
            DocumentNotFoundError: if the file does not exist.
            FileReadError: if the file cannot be read or is not valid UTF-8.
        """
        resolved = self._resolve_path(Path(path))
        if not resolved.is_file():
            raise DocumentNotFoundError(f"File not found: {resolved}")
        try:
            text = resolved.read_text(encoding=self.ENCODING)
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadError(f"Cannot read {resolved}: {exc}") from exc
        return NoteDocument(path=resolved, text=text.replace("\r\n", "\n"))

    def _resolve_path(self, path: Path) -> Path:
        if path.is_absolute() or self._notes_root is None:
            return path
        return self._notes_root / path
