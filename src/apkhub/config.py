"""Hub configuration via environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class HubConfig(BaseSettings):
    """All configuration loaded from env vars or .env file."""

    # Metadata registry
    metadata_path: str = "metadata.json"

    # Blob storage
    uploads_dir: str = "uploads"
    static_dir: str = "static"
    icons_dir: str = "static/icons"
    temp_dir: str = "incoming"

    # Shared secret required by every delete endpoint
    delete_secret: str = "change-me"

    # Server
    host: str = "0.0.0.0"
    port: int = 1234
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def metadata_file(self) -> Path:
        return Path(self.metadata_path)
