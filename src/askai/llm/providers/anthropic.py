"""Anthropic Claude completion provider.

Uses the official Anthropic Python SDK for async chat completions.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

import logging
from typing import Any

from anthropic import APIConnectionError, APIStatusError, AsyncAnthropic

from ...config import DEFAULT_ANTHROPIC_MODEL
from ...errors import UpstreamError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM provider implementation.

    Hidden design decisions:
    - Anthropic API client initialization
    - Message format conversion (system message handling)
    - Error status mapping
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_ANTHROPIC_MODEL,
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            model: Default model to use
            base_url: Optional custom API base URL
            **client_kwargs: Additional kwargs for AsyncAnthropic client
        """
        self._model = model
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Anthropic Claude.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (default: 1024)
            **kwargs: Additional Anthropic-specific parameters

        Returns:
            LLMResponse with generated content

        Raises:
            UpstreamError: With the API status code, or 502 when unreachable
        """
        model_to_use = model or self._model

        # Extract system message and convert to Anthropic format
        system_message = None
        anthropic_messages = []

        for msg in messages:
            if msg.role == "system":
                system_message = msg.content
            else:
                anthropic_messages.append({
                    "role": msg.role,
                    "content": msg.content
                })

        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": anthropic_messages,
            "temperature": temperature,
            "max_tokens": max_tokens or 1024,  # Anthropic requires max_tokens
            **kwargs
        }

        if system_message:
            request_params["system"] = system_message

        try:
            response = await self._client.messages.create(**request_params)
        except APIStatusError as e:
            logger.warning("anthropic returned %s: %s", e.status_code, e.message)
            raise UpstreamError(e.status_code, e.message) from e
        except APIConnectionError as e:
            logger.warning("anthropic unreachable: %s", e)
            raise UpstreamError(502, str(e)) from e

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens
            }

        # Text blocks are joined by newlines; other block types are ignored
        content = "\n".join(
            block.text for block in response.content if hasattr(block, "text")
        )

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Anthropic client."""
        await self._client.close()
