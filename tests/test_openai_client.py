"""Tests for the OpenAI-compatible clients."""

import logging
from dataclasses import replace
from unittest.mock import MagicMock, patch

import pytest

from opportunity_monitor.gemini_client import GeminiLLMClient
from opportunity_monitor.openai_client import GenericHTTPLLMClient, OpenAILLMClient, create_llm_client


class TestCreateLlmClient:
    def test_gemini_uses_genai_sdk(self, agent_config):
        config = replace(agent_config, provider="gemini")
        with patch("opportunity_monitor.gemini_client.genai.Client"):
            assert isinstance(create_llm_client(config), GeminiLLMClient)

    def test_openai_warns_about_missing_page_access(self, agent_config, caplog):
        with caplog.at_level(logging.WARNING, logger="opportunity_monitor.openai_client"):
            assert isinstance(create_llm_client(agent_config), OpenAILLMClient)
        assert "no page-access tools" in caplog.text

    def test_generic_http(self, agent_config):
        config = replace(agent_config, provider="generic_http")
        assert isinstance(create_llm_client(config), GenericHTTPLLMClient)


class TestOpenAILLMClient:
    def test_complete_passes_timeout(self, agent_config):
        client = OpenAILLMClient(agent_config)
        response = MagicMock()
        response.choices = [MagicMock()]
        response.choices[0].message.content = "  [] \n"
        with patch.object(client.client.chat.completions, "create", return_value=response) as create:
            assert client.complete("prompt", max_tokens=10, temperature=0.0, timeout=7) == "[]"
        assert create.call_args.kwargs["timeout"] == 7
        assert create.call_args.kwargs["model"] == "test-model"


class TestGenericHTTPLLMClient:
    def test_complete(self, agent_config):
        client = GenericHTTPLLMClient(replace(agent_config, base_url="https://llm.example/v1/"))
        response = MagicMock()
        response.json.return_value = {"choices": [{"message": {"content": " [{\"title\": \"A\"}] "}}]}
        with patch.object(client.requests, "post", return_value=response) as post:
            assert client.complete("prompt", max_tokens=10, temperature=0.0, timeout=3) == '[{"title": "A"}]'
        args, kwargs = post.call_args
        assert args[0] == "https://llm.example/v1/chat/completions"
        assert kwargs["timeout"] == 3
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"

    def test_http_error_propagates(self, agent_config):
        client = GenericHTTPLLMClient(agent_config)
        response = MagicMock()
        response.raise_for_status.side_effect = RuntimeError("500 Server Error")
        with patch.object(client.requests, "post", return_value=response):
            with pytest.raises(RuntimeError):
                client.complete("prompt", max_tokens=10, temperature=0.0, timeout=3)

    def test_no_choices_is_empty_text(self, agent_config):
        client = GenericHTTPLLMClient(agent_config)
        response = MagicMock()
        response.json.return_value = {"choices": []}
        with patch.object(client.requests, "post", return_value=response):
            assert client.complete("prompt", max_tokens=10, temperature=0.0, timeout=3) == ""
