"""Gemini client with page access through Google's own SDK."""

import logging

from .config import AgentConfig
from .llm_client import LLMClient

logger = logging.getLogger(__name__)

try:
    from google import genai
    from google.genai import types
    GENAI_AVAILABLE = True
except ImportError:
    GENAI_AVAILABLE = False
    logger.warning("Google GenAI library not installed. Install with: pip install google-genai")


class GeminiLLMClient(LLMClient):
    """
    Gemini client that lets the model open the monitored pages.

    Every request enables the Google Search and URL context tools, so the
    "Open: <url>" line of a source prompt is actually fetched by the model
    instead of being answered from memory.
    """

    def __init__(self, config: AgentConfig):
        """
        Initialize the Gemini client.

        Args:
            config: Agent configuration.
        """
        if not GENAI_AVAILABLE:
            raise ImportError(
                "Google GenAI library not installed. Install with: pip install google-genai"
            )

        self.config = config
        http_options = types.HttpOptions(base_url=config.base_url) if config.base_url else None
        self.client = genai.Client(api_key=config.api_key, http_options=http_options)

    def _tools(self):
        return [
            types.Tool(google_search=types.GoogleSearch()),
            types.Tool(url_context=types.UrlContext()),
        ]

    def complete(self, prompt: str, max_tokens: int, temperature: float, timeout: float) -> str:
        """
        Complete a prompt with search and URL context enabled.

        Args:
            prompt: The prompt to send to the LLM.
            max_tokens: Maximum number of tokens in the response.
            temperature: Sampling temperature.
            timeout: Seconds to wait for the response.

        Returns:
            The LLM's response text (trimmed).
        """
        try:
            response = self.client.models.generate_content(
                model=self.config.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    tools=self._tools(),
                    temperature=temperature,
                    max_output_tokens=max_tokens,
                    # HttpOptions.timeout is in milliseconds
                    http_options=types.HttpOptions(timeout=int(timeout * 1000)),
                ),
            )
            return (response.text or "").strip()
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise
