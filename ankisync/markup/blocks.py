"""Line classifier turning lightweight markdown into block tokens.

The classifier walks the text line by line with an explicit list state
(no list, inside an ordered list, inside an unordered list) and emits
plain ``TextLine`` tokens and ``ListBlock`` tokens. Inline emphasis is left
untouched here.
"""

import re
from dataclasses import dataclass, field
from enum import Enum


class ListKind(str, Enum):
    ORDERED = "ol"
    UNORDERED = "ul"


_MARKERS: dict[ListKind, re.Pattern[str]] = {
    ListKind.ORDERED: re.compile(r"^\d+\.\s+"),
    ListKind.UNORDERED: re.compile(r"^[-*]\s+"),
}

# Single-word label lines such as "Note: ..." or "Nghĩa: ..." never continue
# a list item.
_LABEL_LINE_RE = re.compile(r"^[^\W\d_]+:")


@dataclass(frozen=True)
class TextLine:
    text: str


@dataclass
class ListBlock:
    kind: ListKind
    items: list[str] = field(default_factory=list)


Block = TextLine | ListBlock


def list_kind(line: str) -> ListKind | None:
    """Return the list kind a line opens or continues, if any."""
    stripped = line.strip()
    for kind, marker in _MARKERS.items():
        if marker.match(stripped):
            return kind
    return None


def _is_continuation(line: str) -> bool:
    return (
        bool(line.strip())
        and list_kind(line) is None
        and _LABEL_LINE_RE.match(line) is None
    )


def classify_lines(text: str) -> list[Block]:
    """Group the lines of *text* into text lines and list blocks.

    The open list (if any) is the classifier state. Blank lines close it and
    produce no token. Soft-wrapped lines following a list item are folded
    into that item with one space.
    """
    blocks: list[Block] = []
    open_list: ListBlock | None = None
    lines = text.split("\n")
    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1
        kind = list_kind(line)

        if not line.strip():
            open_list = None
            continue

        if kind is None:
            open_list = None
            blocks.append(TextLine(line))
            continue

        if open_list is None or open_list.kind is not kind:
            open_list = ListBlock(kind)
            blocks.append(open_list)
        item = _MARKERS[kind].sub("", line.strip(), count=1)
        while i < len(lines) and _is_continuation(lines[i]):
            item += " " + lines[i].strip()
            i += 1
        open_list.items.append(item)

    return blocks
