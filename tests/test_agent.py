"""Tests for the agent call wrapper."""

from dataclasses import replace
from unittest.mock import Mock, patch

import pytest

from opportunity_monitor.agent import ask_agent, fetch_candidates
from opportunity_monitor.errors import AgentCallError
from opportunity_monitor.models import CandidateRecord
from opportunity_monitor.sources import IPEA, build_prompt, output_instruction


class TestAskAgent:
    def test_returns_text(self, agent_config, ipea):
        client = Mock()
        client.complete.return_value = "[]"
        assert ask_agent(ipea, client, agent_config) == "[]"
        _, kwargs = client.complete.call_args
        assert kwargs["timeout"] == agent_config.timeout_seconds
        assert kwargs["max_tokens"] == agent_config.max_tokens

    def test_retries_then_succeeds(self, agent_config, ipea):
        config = replace(agent_config, max_attempts=2)
        client = Mock()
        client.complete.side_effect = [TimeoutError("timed out"), '[{"title": "A"}]']
        with patch("opportunity_monitor.agent.time.sleep") as sleep:
            assert ask_agent(ipea, client, config) == '[{"title": "A"}]'
        assert client.complete.call_count == 2
        sleep.assert_called_once()

    def test_exhausted_attempts_raise(self, agent_config, ipea):
        config = replace(agent_config, max_attempts=2)
        client = Mock()
        client.complete.side_effect = RuntimeError("503 Service Unavailable")
        with patch("opportunity_monitor.agent.time.sleep"):
            with pytest.raises(AgentCallError, match="IPEA"):
                ask_agent(ipea, client, config)
        assert client.complete.call_count == 2


class TestFetchCandidates:
    def test_extracts_records(self, agent_config, ipea):
        client = Mock()
        client.complete.return_value = 'Found:\n[{"title": "Edital 5", "deadline": "01/03/2026"}]'
        assert fetch_candidates(ipea, client, agent_config) == [
            CandidateRecord(title="Edital 5", deadline="01/03/2026"),
        ]

    def test_empty_text_is_no_candidates(self, agent_config, ipea):
        client = Mock()
        client.complete.return_value = ""
        assert fetch_candidates(ipea, client, agent_config) == []


class TestPrompts:
    def test_prompt_names_page_and_shape(self):
        prompt = build_prompt(IPEA)
        assert IPEA.url in prompt
        assert '"title"' in prompt
        assert '"deadline"' in prompt
        assert '"reference"' in prompt

    def test_listing_shape_has_no_reference(self, ipea):
        instruction = output_instruction(ipea.shape)
        assert '"reference"' not in instruction
        assert "JSON array" in instruction
