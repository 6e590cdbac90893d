from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest
from google.genai import errors as genai_errors

from menu_assistant.errors import CompletionFailed
from menu_assistant.llm.config import GeminiConfig
from menu_assistant.llm.gemini_client import GeminiClient

CONFIG = GeminiConfig(api_key="test-key", model="gemini-2.0-flash")


def _mock_genai_response(text: str | None) -> MagicMock:
    response = MagicMock()
    response.text = text
    return response


@patch("menu_assistant.llm.gemini_client.genai.Client")
def test_complete_returns_text(mock_client_cls):
    generate = mock_client_cls.return_value.models.generate_content
    generate.return_value = _mock_genai_response("1. **Veggie Pizza** - $11.50")

    result = GeminiClient(CONFIG).complete("Suggest a pizza")

    assert result == "1. **Veggie Pizza** - $11.50"
    generate.assert_called_once_with(model="gemini-2.0-flash", contents="Suggest a pizza")
    assert mock_client_cls.call_args.kwargs["api_key"] == "test-key"
    assert mock_client_cls.call_args.kwargs["http_options"] is None


@patch("menu_assistant.llm.gemini_client.genai.Client")
def test_sdk_client_is_reused(mock_client_cls):
    mock_client_cls.return_value.models.generate_content.return_value = _mock_genai_response("ok")
    client = GeminiClient(CONFIG)

    client.complete("one")
    client.complete("two")

    assert mock_client_cls.call_count == 1


@patch("menu_assistant.llm.gemini_client.genai.Client")
def test_custom_base_url(mock_client_cls):
    mock_client_cls.return_value.models.generate_content.return_value = _mock_genai_response("ok")
    config = GeminiConfig(api_key="test-key", base_url="https://proxy.example.test")

    GeminiClient(config).complete("hello")

    http_options = mock_client_cls.call_args.kwargs["http_options"]
    assert http_options.base_url == "https://proxy.example.test"


@patch("menu_assistant.llm.gemini_client.genai.Client")
def test_api_error_raises_with_status(mock_client_cls):
    generate = mock_client_cls.return_value.models.generate_content
    generate.side_effect = genai_errors.ClientError(
        403,
        {"error": {"code": 403, "message": "API key not valid", "status": "PERMISSION_DENIED"}},
    )

    with pytest.raises(CompletionFailed) as excinfo:
        GeminiClient(CONFIG).complete("hello")

    assert excinfo.value.status_code == 403
    assert "API key not valid" in str(excinfo.value)
    assert generate.call_count == 1


@patch("menu_assistant.llm.gemini_client.genai.Client")
def test_transport_error_raises_without_retry(mock_client_cls):
    generate = mock_client_cls.return_value.models.generate_content
    generate.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(CompletionFailed) as excinfo:
        GeminiClient(CONFIG).complete("hello")

    assert excinfo.value.status_code is None
    assert "connection refused" in str(excinfo.value)
    assert generate.call_count == 1


@patch("menu_assistant.llm.gemini_client.genai.Client")
def test_response_without_text_raises(mock_client_cls):
    mock_client_cls.return_value.models.generate_content.return_value = _mock_genai_response(None)

    with pytest.raises(CompletionFailed):
        GeminiClient(CONFIG).complete("hello")


@patch("menu_assistant.llm.gemini_client.genai.Client")
def test_missing_api_key(mock_client_cls):
    with pytest.raises(CompletionFailed):
        GeminiClient(GeminiConfig(api_key="")).complete("hello")

    mock_client_cls.assert_not_called()
