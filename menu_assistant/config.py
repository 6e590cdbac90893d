from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError
from .llm.config import GeminiConfig

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True)
class Settings:
    database_url: str
    port: int = 5000
    cache_ttl_seconds: int = 3600
    menu_table: str = "menu"
    menu_title_column: str = "name"
    log_level: str = "INFO"
    gemini: GeminiConfig = field(default_factory=GeminiConfig)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def load_settings() -> Settings:
    """
    Build settings from the environment.

    Raises ``ConfigurationError`` when ``DATABASE_URL`` is not set: the
    service must not start without a menu store.
    """
    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url:
        raise ConfigurationError("DATABASE_URL is not set")

    gemini = GeminiConfig(
        api_key=os.getenv("GEMINI_API_KEY", ""),
        model=os.getenv("GEMINI_MODEL", GeminiConfig.model),
        base_url=os.getenv("GEMINI_BASE_URL", GeminiConfig.base_url),
    )
    return Settings(
        database_url=database_url,
        port=_int_env("PORT", 5000),
        cache_ttl_seconds=_int_env("CACHE_TTL_SECONDS", 3600),
        menu_table=os.getenv("MENU_TABLE", "menu"),
        menu_title_column=os.getenv("MENU_TITLE_COLUMN", "name"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        gemini=gemini,
    )
