from abc import ABC, abstractmethod
from typing import Any


class BaseAnkiClient(ABC):
    """Contract for AnkiConnect-compatible transports."""

    @abstractmethod
    def invoke(self, action: str, params: dict[str, Any] | None = None) -> Any:
        """Run one AnkiConnect action and return its ``result`` payload.

        Raises:
            SyncNetworkError: if the store cannot be reached.
            SyncResponseError: if the store reports an error.
        """

    def close(self) -> None:
        """Release transport resources. No-op by default."""
