from typing import Any

import httpx

from ankisync.logging.logger import Log
from ankisync.sync.client_base import BaseAnkiClient
from ankisync.sync.exceptions import SyncNetworkError, SyncResponseError


class AnkiConnectClient(BaseAnkiClient):
    """AnkiConnect JSON-over-HTTP adapter."""

    CONNECT_ERROR_MESSAGE = "Cannot connect to Anki. Is Anki running with AnkiConnect installed?"

    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: int,
        version: int = 6,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._version = version
        self._client = httpx.Client(timeout=timeout_seconds, transport=transport)

    def invoke(self, action: str, params: dict[str, Any] | None = None) -> Any:
        payload = {"action": action, "version": self._version, "params": params or {}}
        try:
            response = self._client.post(self._url, json=payload)
            response.raise_for_status()
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            Log.error(f"AnkiConnect {action} failed: {exc}")
            raise SyncNetworkError(self.CONNECT_ERROR_MESSAGE) from exc
        except httpx.HTTPStatusError as exc:
            Log.error(f"AnkiConnect {action} failed: {exc}")
            raise SyncNetworkError(
                f"AnkiConnect HTTP error: status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            Log.error(f"AnkiConnect {action} failed: {exc}")
            raise SyncNetworkError(f"AnkiConnect transport error: {exc}") from exc

        return self._unwrap(action, response)

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _unwrap(action: str, response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError as exc:
            raise SyncResponseError(f"AnkiConnect {action} returned invalid JSON") from exc

        if not isinstance(body, dict) or "result" not in body or "error" not in body:
            raise SyncResponseError(f"AnkiConnect {action} returned an unexpected payload")
        if body["error"] is not None:
            Log.error(f"AnkiConnect {action} failed: {body['error']}")
            raise SyncResponseError(f"AnkiConnect {action} failed: {body['error']}")
        return body["result"]
