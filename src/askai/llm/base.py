import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

from ..errors import UpstreamError
from .models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """Abstract base class for completion providers.

    This module hides the design decision of which LLM provider to use.
    Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request/response format conversion
    - Mapping provider failures to UpstreamError

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            text = await provider.complete(system_prompt, user_text)
        # Automatically cleaned up
    """

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion.

        Args:
            messages: List of chat messages forming the conversation history
            model: Model to use (None uses provider's default)
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing generated content and metadata

        Raises:
            UpstreamError: Provider reported an error status or was unreachable
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def complete(
        self,
        system_prompt: str,
        user_text: str,
        max_tokens: int | None = None,
        timeout: float | None = None
    ) -> str:
        """Turn a system prompt and user text into raw generated text.

        Args:
            system_prompt: Instructions for the model
            user_text: The user's message
            max_tokens: Maximum tokens to generate
            timeout: Seconds to wait before giving up (None waits forever)

        Returns:
            Generated text

        Raises:
            UpstreamError: On provider failure, or status 504 on timeout
        """
        messages = [
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=user_text),
        ]
        try:
            response = await asyncio.wait_for(
                self.chat_completion(messages, max_tokens=max_tokens),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning("completion timed out after %ss", timeout)
            raise UpstreamError(504, "Completion timed out") from e
        return response.content

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            # Suppress harmless cleanup errors from httpx/anyio
            if "Event loop is closed" not in str(e):
                raise
