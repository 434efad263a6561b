"""Note header (frontmatter) detection and decoding.

A header is the block between a ``---`` line at the very start of a note and
the next ``---`` line. Its interior is YAML and must carry the target
collection, the category (note type) and the label-to-field mapping. Anything
short of that is treated as "no configuration": the note may simply carry
unrelated metadata.
"""

import re
from typing import Any

import yaml

from ankisync.logging.logger import Log
from ankisync.parsing.models import DecodedHeader, HeaderBlock

HEADER_DELIMITER = "---"

_HEADER_RE = re.compile(
    rf"\A{HEADER_DELIMITER}\r?\n(?P<body>.*?)\r?\n{HEADER_DELIMITER}(?:\r?\n|\Z)",
    re.DOTALL,
)

# Canonical key first, then the legacy anki* spelling.
_COLLECTION_KEYS = ("collection", "ankiDeck")
_CATEGORY_KEYS = ("category", "ankiNoteType")
_MAPPING_KEYS = ("fieldMapping", "ankiFieldMappings")


def find_header_block(document: str) -> HeaderBlock | None:
    """Locate the delimited header block at the start of *document*."""
    match = _HEADER_RE.match(document)
    if match is None:
        return None
    return HeaderBlock(
        raw_text=match.group("body"),
        start_offset=match.start(),
        end_offset=match.end(),
    )


def strip_header(document: str) -> str:
    """Return *document* without its leading header block, if any."""
    block = find_header_block(document)
    if block is None:
        return document
    return document[block.end_offset:]


def parse_header(document: str) -> DecodedHeader | None:
    """Decode the note header into a DecodedHeader.

    Returns None when the note has no header, the header is not valid YAML,
    or any of the required keys is missing or of the wrong shape.
    """
    block = find_header_block(document)
    if block is None:
        return None

    try:
        data = yaml.safe_load(block.raw_text)
    except yaml.YAMLError as exc:
        Log.debug(f"Ignoring undecodable header: {exc}")
        return None

    if not isinstance(data, dict):
        return None
    return _build_header(data)


def _build_header(data: dict[Any, Any]) -> DecodedHeader | None:
    collection = _first_present(data, _COLLECTION_KEYS)
    category = _first_present(data, _CATEGORY_KEYS)
    mapping = _first_present(data, _MAPPING_KEYS)

    if not _is_name(collection) or not _is_name(category):
        Log.debug("Header has no usable collection/category, ignoring")
        return None
    field_mapping = _build_field_mapping(mapping)
    if field_mapping is None:
        Log.debug("Header has no usable field mapping, ignoring")
        return None

    return DecodedHeader(
        collection_name=collection,
        category_name=category,
        field_mapping=field_mapping,
    )


def _first_present(data: dict[Any, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _build_field_mapping(raw: Any) -> dict[str, str] | None:
    if not isinstance(raw, dict) or not raw:
        return None
    field_mapping: dict[str, str] = {}
    for label, target in raw.items():
        if not isinstance(label, str) or not isinstance(target, str):
            return None
        field_mapping[label] = target
    return field_mapping
