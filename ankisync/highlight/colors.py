import threading
from collections.abc import Sequence
from typing import ClassVar


class FieldColorRegistry:
    """Append-only field name -> display colour store.

    Colours are handed out in first-seen order and never change afterwards,
    so the same field keeps its colour for the lifetime of the registry.
    """

    DEFAULT_HUES: ClassVar[tuple[int, ...]] = (0, 60, 120, 180, 240, 300)

    def __init__(self, hues: Sequence[int] | None = None) -> None:
        self._hues = tuple(hues) if hues else self.DEFAULT_HUES
        self._colors: dict[str, str] = {}
        self._lock = threading.Lock()

    def color_for(self, field: str) -> str:
        """Return the colour for *field*, assigning the next one if new."""
        with self._lock:
            color = self._colors.get(field)
            if color is None:
                hue = self._hues[len(self._colors) % len(self._hues)]
                color = f"hsla({hue}, 70%, 80%, 0.3)"
                self._colors[field] = color
            return color

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._colors)
