"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

MAX_UPLOAD_BYTES = 4 * 1024 * 1024


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    garments_db_path: str = "garments.json"
    max_upload_bytes: int = MAX_UPLOAD_BYTES

    logo_price: float = 10.0
    text_price: float = 7.0

    moderation_api_key: str = ""
    moderation_base_url: str = "https://api.openai.com/v1"
    moderation_model: str = "gpt-4o-mini"
    moderation_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.logo_price < 0 or self.text_price < 0:
            raise ValueError("Surcharges must not be negative.")
        if self.max_upload_bytes <= 0:
            raise ValueError("MAX_UPLOAD_BYTES must be positive.")


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        garments_db_path=os.getenv("GARMENTS_DB_PATH", "garments.json"),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(MAX_UPLOAD_BYTES))),
        logo_price=float(os.getenv("LOGO_PRICE", "10")),
        text_price=float(os.getenv("TEXT_PRICE", "7")),
        moderation_api_key=os.getenv("MODERATION_API_KEY", ""),
        moderation_base_url=os.getenv("MODERATION_BASE_URL", "https://api.openai.com/v1"),
        moderation_model=os.getenv("MODERATION_MODEL", "gpt-4o-mini"),
        moderation_timeout=float(os.getenv("MODERATION_TIMEOUT", "30")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
