class ParsingError(Exception):
    """Base exception for field-extraction failures."""


class InvalidMappingError(ParsingError):
    """Raised when a field mapping targets fields the note type does not have."""

    def __init__(self, invalid_fields: list[str]) -> None:
        self.invalid_fields = invalid_fields
        super().__init__(
            f"Invalid field mappings: {', '.join(invalid_fields)} not found in note type"
        )


class EmptyMappingError(ParsingError):
    """Raised when no field mappings are provided."""

    def __init__(self) -> None:
        super().__init__("No field mappings provided")
