"""
LLM Client - Unified text-generation interface for multiple LLM providers.
Supports OpenAI, Mistral, OpenRouter, and Ollama.
"""
from openai import AsyncOpenAI, APIError
from typing import Optional
import logging

import httpx

from ..config import get_llm_config, settings
from ..errors import BackendError

logger = logging.getLogger(__name__)


class LLMClient:
    """Async LLM client with OpenAI-compatible API."""

    def __init__(self):
        config = get_llm_config()

        # Use mock client if provider is 'mock'
        if settings.llm_provider == "mock":
            from .mock_llm import MockLLMClient
            self._mock = MockLLMClient()
            self.model = self._mock.model
            self.client = None
        else:
            self._mock = None
            self.client = AsyncOpenAI(
                api_key=config["api_key"],
                base_url=config["base_url"],
                timeout=httpx.Timeout(config["timeout"]),
                max_retries=1,
            )
            self.model = config["model"]

        self.temperature = config["temperature"]
        self.max_tokens = config["max_tokens"]
        logger.info(f"LLM client ready: provider={settings.llm_provider}, model={self.model}")

    async def generate(self, prompt: str) -> str:
        """
        Generate a reply for a fully assembled prompt.

        Args:
            prompt: Prompt payload built by the conversation planner

        Returns:
            The assistant's reply text

        Raises:
            BackendError: on transport errors, timeouts, quota errors or an
                empty response
        """
        if self._mock is not None:
            return await self._mock.generate(prompt)

        kwargs = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except APIError as e:
            logger.error(f"LLM request failed: {e}")
            raise BackendError(str(e)) from e

        if not response.choices:
            raise BackendError("LLM response had no choices")

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise BackendError("LLM returned an empty reply")
        return content


# Global LLM client instance
llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client."""
    global llm_client
    if llm_client is None:
        llm_client = LLMClient()
    return llm_client
