"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables (DRAW_IT_*) and .env files.

    Priority: environment variables > .env > defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="DRAW_IT_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Drawing store (the web app that persists the canvas)
    store_url: str = "http://localhost:3001"
    store_timeout: float = 10.0  # seconds for the metadata fetch
    store_host: str = "127.0.0.1"
    store_port: int = 3001

    # Drawings directory; None means probe the usual layouts
    drawings_dir: Path | None = None
    current_filename: str = "current-active.png"
    transfer_filename: str = "last_mcp_transfer.png"

    # Image pipeline
    png_max_size: int = 640  # longer side for file delivery
    base64_max_size: int = 128  # longer side for inline delivery
    trim_threshold: float = 10.0  # percent of channel range

    # Logging
    log_dir: Path = Path("logs")
    log_level: str = "DEBUG"
    log_json: bool = True


settings = Settings()
