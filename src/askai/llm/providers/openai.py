import logging
from typing import Any

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from ...errors import UpstreamError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """OpenAI LLM provider implementation.

    Also serves any OpenAI-compatible endpoint through ``base_url``.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Error status mapping
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
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
        """Generate a chat completion using OpenAI.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional OpenAI-specific parameters

        Returns:
            LLMResponse with generated content

        Raises:
            UpstreamError: With the API status code, or 502 when unreachable
        """
        model_to_use = model or self._model

        openai_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        # Build request params, only including max_tokens if set
        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": openai_messages,
            "temperature": temperature,
            **kwargs
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        try:
            completion = await self._client.chat.completions.create(**request_params)
        except APIStatusError as e:
            logger.warning("%s returned %s: %s", type(self).__name__, e.status_code, e.message)
            raise UpstreamError(e.status_code, e.message) from e
        except APIConnectionError as e:
            logger.warning("%s unreachable: %s", type(self).__name__, e)
            raise UpstreamError(502, str(e)) from e

        usage = None
        if completion.usage:
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens
            }

        return LLMResponse(
            content=completion.choices[0].message.content or "",
            model=completion.model,
            usage=usage
        )

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
