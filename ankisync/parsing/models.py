from dataclasses import dataclass, field

Record = dict[str, str]
"""One flashcard: target field name -> normalized HTML value."""


@dataclass(frozen=True)
class HeaderBlock:
    """Raw metadata block found between the leading ``---`` delimiters."""

    raw_text: str
    start_offset: int
    end_offset: int  # exclusive, includes the closing delimiter line


@dataclass(frozen=True)
class DecodedHeader:
    """Typed note configuration decoded from a header block."""

    collection_name: str
    category_name: str
    field_mapping: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FieldToken:
    """A label occurrence in the note body and the text run it owns."""

    label: str  # emphasis markers already stripped
    value: str  # raw run up to the next label, untrimmed
    start: int
    end: int
