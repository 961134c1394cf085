"""OpenAI-compatible LLM client implementations."""

import logging

from .config import AgentConfig
from .gemini_client import GeminiLLMClient
from .llm_client import LLMClient

logger = logging.getLogger(__name__)

try:
    from openai import OpenAI
    OPENAI_AVAILABLE = True
except ImportError:
    OPENAI_AVAILABLE = False
    logger.warning("OpenAI library not installed. Install with: pip install openai")


class OpenAILLMClient(LLMClient):
    """
    OpenAI SDK client for LLM completion.

    Plain chat completion: the model gets no page-access tools.
    """

    def __init__(self, config: AgentConfig):
        """
        Initialize the OpenAI client.

        Args:
            config: Agent configuration.
        """
        if not OPENAI_AVAILABLE:
            raise ImportError(
                "OpenAI library not installed. Install with: pip install openai"
            )

        self.config = config
        # Retries are handled per source by the caller
        self.client = OpenAI(
            api_key=config.api_key,
            base_url=config.base_url if config.base_url else None,
            max_retries=0,
        )

    def complete(self, prompt: str, max_tokens: int, temperature: float, timeout: float) -> str:
        """
        Complete a prompt using the chat completions API.

        Args:
            prompt: The prompt to send to the LLM.
            max_tokens: Maximum number of tokens in the response.
            temperature: Sampling temperature.
            timeout: Seconds to wait for the response.

        Returns:
            The LLM's response text (trimmed).
        """
        try:
            response = self.client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "user", "content": prompt}
                ],
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=timeout,
            )
            if not response.choices:
                return ""
            return (response.choices[0].message.content or "").strip()
        except Exception as e:
            logger.error(f"{self.config.provider} API error: {e}")
            raise


class GenericHTTPLLMClient(LLMClient):
    """Generic HTTP client for OpenAI-compatible LLM APIs."""

    def __init__(self, config: AgentConfig):
        """
        Initialize the generic HTTP client.

        Args:
            config: Agent configuration.
        """
        import requests
        self.config = config
        self.base_url = (config.base_url or "https://api.openai.com/v1").rstrip("/")
        self.api_key = config.api_key
        self.model = config.model
        self.requests = requests

    def complete(self, prompt: str, max_tokens: int, temperature: float, timeout: float) -> str:
        """
        Complete a prompt using a generic HTTP API (OpenAI-compatible).

        Args:
            prompt: The prompt to send to the LLM.
            max_tokens: Maximum number of tokens in the response.
            temperature: Sampling temperature.
            timeout: Seconds to wait for the response.

        Returns:
            The LLM's response text (trimmed).
        """
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "user", "content": prompt}
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        try:
            response = self.requests.post(url, json=payload, headers=headers, timeout=timeout)
            response.raise_for_status()
            data = response.json()
            choices = data.get("choices") or []
            if not choices:
                return ""
            return (choices[0]["message"].get("content") or "").strip()
        except Exception as e:
            logger.error(f"HTTP LLM API error: {e}")
            raise


def create_llm_client(config: AgentConfig) -> LLMClient:
    """Create an LLM client based on configuration."""
    if config.provider == "gemini":
        return GeminiLLMClient(config)
    logger.warning(
        f"Provider {config.provider!r} has no page-access tools; "
        "listings come from whatever the model can answer without opening the pages"
    )
    if config.provider == "openai":
        return OpenAILLMClient(config)
    return GenericHTTPLLMClient(config)
