from typing import Any

from ..errors import MisconfigurationError
from .base import LLMProvider
from .providers import AnthropicProvider, DeepSeekProvider, OpenAIProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type ('anthropic', 'openai', 'deepseek')
        **config: Provider-specific configuration
            For Anthropic (Claude):
                - api_key: str (required)
                - model: str (default: 'claude-3-5-sonnet-20241022')
                - base_url: str | None
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'gpt-4o')
                - base_url: str | None
                - organization: str | None
            For DeepSeek:
                - api_key: str (required)
                - model: str (default: 'deepseek-chat')
                - base_url: str (default: 'https://api.deepseek.com')

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported
        MisconfigurationError: If the API key is missing or empty

    Examples:
        >>> provider = create_llm_provider(
        ...     "anthropic",
        ...     api_key="sk-ant-...",
        ...     model="claude-3-5-sonnet-20241022"
        ... )
    """
    provider_lower = provider.lower()
    providers: dict[str, type[LLMProvider]] = {
        "anthropic": AnthropicProvider,
        "claude": AnthropicProvider,
        "openai": OpenAIProvider,
        "deepseek": DeepSeekProvider,
    }

    if provider_lower not in providers:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: 'anthropic', 'openai', 'deepseek'"
        )

    if not config.get("api_key"):
        raise MisconfigurationError(f"Service misconfigured: {provider_lower} key missing")

    # None model means "provider default"
    if config.get("model") is None:
        config.pop("model", None)

    return providers[provider_lower](**config)
