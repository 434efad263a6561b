from ankisync.config.settings import Settings
from ankisync.sync.anki_connect_client import AnkiConnectClient
from ankisync.sync.client_base import BaseAnkiClient
from ankisync.sync.memory_client import InMemoryAnkiClient
from ankisync.sync.service import SyncService


class SyncServiceFactory:
    """Creates the sync service for the configured backend."""

    BACKENDS = ("ankiconnect", "memory")

    @classmethod
    def create(cls, settings: Settings) -> SyncService:
        """Create a configured sync service from application settings."""
        return SyncService(
            cls._create_client(settings),
            primary_field=settings.primary_field,
            duplicate_scope=settings.duplicate_scope,
            version=settings.anki_connect_version,
        )

    @classmethod
    def _create_client(cls, settings: Settings) -> BaseAnkiClient:
        backend = settings.sync_backend.lower()
        if backend == "ankiconnect":
            return AnkiConnectClient(
                url=settings.anki_connect_url,
                timeout_seconds=settings.anki_connect_timeout_seconds,
                version=settings.anki_connect_version,
            )
        if backend == "memory":
            return InMemoryAnkiClient()
        raise ValueError(
            f"Unknown sync backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
