from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"
    # Empty means the SDK's default Gemini API endpoint
    base_url: str = ""


DEFAULT_GEMINI_CONFIG = GeminiConfig()
