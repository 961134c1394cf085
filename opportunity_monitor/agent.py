"""Fetching candidate records for a source from the text-generation agent."""

import logging
import time
from typing import List

from .config import AgentConfig
from .errors import AgentCallError
from .extractor import extract_records
from .llm_client import LLMClient
from .models import CandidateRecord, SourceDefinition
from .sources import build_prompt

logger = logging.getLogger(__name__)

RETRY_DELAY = 2  # seconds


def ask_agent(source: SourceDefinition, client: LLMClient, config: AgentConfig) -> str:
    """
    Send the source prompt to the agent and return its raw text.

    Makes up to ``config.max_attempts`` calls, pausing RETRY_DELAY seconds
    between them.

    Raises:
        AgentCallError: If every attempt failed.
    """
    prompt = build_prompt(source)
    attempts = max(1, config.max_attempts)
    last_error = None

    for attempt in range(1, attempts + 1):
        try:
            return client.complete(
                prompt,
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                timeout=config.timeout_seconds,
            )
        except Exception as e:
            last_error = e
            logger.warning(f"[{source.name}] Agent call failed (attempt {attempt}/{attempts}): {e}")
            if attempt < attempts:
                time.sleep(RETRY_DELAY)

    raise AgentCallError(source.name, f"Agent call failed after {attempts} attempt(s): {last_error}")


def fetch_candidates(source: SourceDefinition, client: LLMClient, config: AgentConfig) -> List[CandidateRecord]:
    """
    Ask the agent about one source and extract the candidate records.

    Returns:
        Candidate records in the order the agent listed them; empty when
        the agent text carries no usable array.

    Raises:
        AgentCallError: If the agent could not be reached.
    """
    text = ask_agent(source, client, config)
    if not text:
        logger.info(f"[{source.name}] Agent returned no text")
        return []

    candidates = extract_records(text, source.shape)
    logger.info(f"[{source.name}] Extracted {len(candidates)} candidate(s)")
    return candidates
