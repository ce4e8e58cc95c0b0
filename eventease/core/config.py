"""Application configuration via environment variables."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "EventEase"
    debug: bool = False
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Logging
    log_dir: Path = Path.home() / ".logs" / "eventease"

    # Sessions
    session_cookie_name: str = "eventease_session"
    session_idle_timeout_minutes: int = 30

    # Attendance
    default_capacity: int = 100


settings = Settings()
