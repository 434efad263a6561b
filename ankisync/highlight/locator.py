from collections.abc import Mapping
from dataclasses import dataclass

from ankisync.highlight.colors import FieldColorRegistry
from ankisync.parsing.header import find_header_block


@dataclass(frozen=True)
class FieldHighlight:
    """Span of a ``Label:`` marker in a note and the colour of its field."""

    start: int
    end: int
    label: str
    field: str
    color: str


def locate_field_labels(
    document: str,
    field_mapping: Mapping[str, str],
    registry: FieldColorRegistry,
) -> list[FieldHighlight]:
    """Find every ``Label:`` marker in the note body.

    Offsets are relative to *document*; the header block is skipped so the
    mapping declaration itself is not highlighted.
    """
    block = find_header_block(document)
    body_start = block.end_offset if block is not None else 0

    highlights: list[FieldHighlight] = []
    for label, field in field_mapping.items():
        color = registry.color_for(field)
        marker = f"{label}:"
        pos = document.find(marker, body_start)
        while pos != -1:
            highlights.append(
                FieldHighlight(
                    start=pos,
                    end=pos + len(marker),
                    label=label,
                    field=field,
                    color=color,
                )
            )
            pos = document.find(marker, pos + len(marker))

    highlights.sort(key=lambda h: h.start)
    return highlights
