class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a note file does not exist."""


class FileReadError(ProcessorError):
    """Raised when a note file cannot be read or decoded."""


class UnknownCategoryError(ProcessorError):
    """Raised when the store has no fields for the requested note type."""
