from __future__ import annotations

import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from ..errors import CompletionFailed
from .config import DEFAULT_GEMINI_CONFIG, GeminiConfig

logger = logging.getLogger(__name__)


class GeminiClient:
    """Single-shot text completion through the Gemini ``generate_content`` API."""

    def __init__(self, config: GeminiConfig = DEFAULT_GEMINI_CONFIG) -> None:
        self.config = config
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        """Create or reuse the SDK client."""
        if not self.config.api_key:
            raise CompletionFailed("GEMINI_API_KEY is not configured")
        if self._client is None:
            http_options = (
                genai_types.HttpOptions(base_url=self.config.base_url)
                if self.config.base_url
                else None
            )
            self._client = genai.Client(api_key=self.config.api_key, http_options=http_options)
        return self._client

    def complete(self, prompt_text: str) -> str:
        """
        Send ``prompt_text`` and return the completion text.

        No retries. API errors, transport errors and responses without text
        raise ``CompletionFailed``.
        """
        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=self.config.model,
                contents=prompt_text,
            )
        except genai_errors.APIError as exc:
            logger.warning("Gemini returned HTTP %s: %s", exc.code, exc.message)
            raise CompletionFailed(
                f"Gemini returned HTTP {exc.code}: {exc.message or exc}",
                status_code=exc.code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Gemini request failed", exc_info=True)
            raise CompletionFailed(f"Gemini request failed: {exc}") from exc

        text = response.text
        if text is None:
            logger.warning("Gemini response had no text: %r", response)
            raise CompletionFailed("Gemini response did not contain completion text")
        return text
