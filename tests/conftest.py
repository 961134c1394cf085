"""Shared fixtures for the monitor tests."""

from typing import Dict, List, Optional

import pytest

from opportunity_monitor.config import AgentConfig, AppConfig, NotificationConfig, SMTPConfig
from opportunity_monitor.db import NoveltyStore
from opportunity_monitor.llm_client import LLMClient
from opportunity_monitor.models import SourceDefinition


class FakeLLMClient(LLMClient):
    """Returns canned text per source URL found in the prompt."""

    def __init__(self, responses: Optional[Dict[str, object]] = None, default: str = "[]"):
        self.responses = responses or {}
        self.default = default
        self.prompts: List[str] = []
        self.timeouts: List[float] = []

    def complete(self, prompt: str, max_tokens: int, temperature: float, timeout: float) -> str:
        self.prompts.append(prompt)
        self.timeouts.append(timeout)
        for url, response in self.responses.items():
            if url in prompt:
                if isinstance(response, Exception):
                    raise response
                return response
        return self.default


@pytest.fixture
def agent_config():
    return AgentConfig(
        provider="openai",
        api_key="test-key",
        model="test-model",
        base_url=None,
        max_tokens=1000,
        temperature=0.0,
        timeout_seconds=5.0,
        max_attempts=1,
    )


@pytest.fixture
def app_config(agent_config, tmp_path):
    return AppConfig(
        db_path=str(tmp_path / "monitor.db"),
        agent=agent_config,
        smtp=SMTPConfig(
            host="smtp.example.com",
            port=587,
            username="monitor@example.com",
            password="secret",
            use_ssl=False,
        ),
        twilio=None,
        notification=NotificationConfig(method="email", to_email="team@example.com"),
    )


@pytest.fixture
def store(tmp_path):
    store = NoveltyStore.open(str(tmp_path / "seen.db"))
    yield store
    store.close()


@pytest.fixture
def ipea():
    return SourceDefinition(
        name="IPEA",
        url="https://ipea.example/bolsas",
        instructions="List every public call.",
        color="#2980b9",
    )


@pytest.fixture
def fnp():
    return SourceDefinition(
        name="FNP",
        url="https://fnp.example/documentos",
        instructions="List every document.",
        color="#e67e22",
    )
