from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    log_enabled: bool = True

    anki_connect_url: str = "http://localhost:8765"
    anki_connect_version: int = 6
    anki_connect_timeout_seconds: int = 30

    sync_backend: str = "ankiconnect"

    default_collection: str = "Default"
    default_category: str = "Basic"
    default_field_mapping: dict[str, str] = {"Front": "Front", "Back": "Back"}

    primary_field: str | None = None
    duplicate_scope: str = "deck"
