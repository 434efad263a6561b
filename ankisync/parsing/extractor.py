"""Field extraction engine.

Processing flow:
1. Validate the label-to-field mapping against the note type's fields.
2. Drop the header block so metadata labels never leak into cards.
3. Tokenize the body on label boundaries.
4. Group tokens into candidate records; the first declared label starts
   a new record.
5. Map labels to target fields, clean and normalize each value; empty
   values are left out of the record.
6. Keep only records whose required fields are filled.
"""

import re
from collections.abc import Mapping, Sequence

from ankisync.logging.logger import Log
from ankisync.markup.normalizer import normalize_markup
from ankisync.parsing.exceptions import EmptyMappingError, InvalidMappingError
from ankisync.parsing.grouping import group_tokens
from ankisync.parsing.header import strip_header
from ankisync.parsing.models import FieldToken, Record
from ankisync.parsing.tokenizer import strip_emphasis, tokenize

REQUIRED_FIELD_COUNT = 2

_TRAILING_DASH_RE = re.compile(r"-\s*$")


def validate_mapping(
    field_mapping: Mapping[str, str],
    permissible_fields: Sequence[str],
) -> None:
    """Check that every mapped target exists on the note type.

    Raises:
        InvalidMappingError: if any target is not in *permissible_fields*.
        EmptyMappingError: if *field_mapping* has no entries.
    """
    allowed = set(permissible_fields)
    invalid = [target for target in field_mapping.values() if target not in allowed]
    if invalid:
        raise InvalidMappingError(invalid)
    if not field_mapping:
        raise EmptyMappingError()


def required_fields(field_mapping: Mapping[str, str]) -> list[str]:
    """Targets of the first two mapping entries, conventionally Front/Back."""
    return list(field_mapping.values())[:REQUIRED_FIELD_COUNT]


def clean_value(value: str) -> str:
    """Trim a raw token value and drop leftover emphasis and trailing dashes."""
    cleaned = strip_emphasis(value.strip())
    cleaned = _TRAILING_DASH_RE.sub("", cleaned)
    return cleaned.strip()


def extract_records(
    document: str,
    field_mapping: Mapping[str, str],
    permissible_fields: Sequence[str],
) -> list[Record]:
    """Extract flashcard records from a note.

    Args:
        document: Full note text, header included.
        field_mapping: Label as written in the note -> note type field name.
            Declaration order matters: the first label delimits records and
            the first two targets are required.
        permissible_fields: Field names of the target note type.

    Returns:
        Records in document order. Candidates missing a required field are
        dropped silently.
    """
    validate_mapping(field_mapping, permissible_fields)

    labels = list(field_mapping)
    body = strip_header(document)
    tokens = tokenize(body, labels)
    groups = group_tokens(tokens, boundary_label=labels[0])
    required = required_fields(field_mapping)

    records: list[Record] = []
    for group in groups:
        record = _build_record(group, field_mapping)
        missing = [name for name in required if not record.get(name)]
        if missing:
            Log.debug(f"Discarding candidate record missing {missing}: {record}")
            continue
        records.append(record)

    Log.debug(f"Extracted {len(records)} records from {len(groups)} candidates")
    return records


def _build_record(group: Sequence[FieldToken], field_mapping: Mapping[str, str]) -> Record:
    raw: dict[str, str] = {}
    for token in group:
        target = field_mapping.get(token.label)
        if target is None:
            Log.debug(f"Dropping unrecognized label {token.label!r}")
            continue
        # Repeated labels overwrite earlier values within the same record.
        raw[target] = clean_value(token.value)

    record: Record = {}
    for name, value in raw.items():
        normalized = normalize_markup(value)
        if normalized:
            record[name] = normalized
    return record
