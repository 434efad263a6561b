class SyncError(Exception):
    """Raised when synchronizing records with the flashcard store fails."""


class SyncNetworkError(SyncError):
    """Raised when the store cannot be reached (connection, timeout, HTTP status)."""


class SyncResponseError(SyncError):
    """Raised when the store answers with an error or an unexpected payload."""
