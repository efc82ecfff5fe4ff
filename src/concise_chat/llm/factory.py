from typing import Any

from .base import CompletionClient
from .providers import AnthropicProvider, GeminiProvider, OpenAIProvider

SUPPORTED_PROVIDERS = ("gemini", "openai", "anthropic")


def create_completion_client(provider: str, **config: Any) -> CompletionClient:
    """Create a completion client instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type ('gemini', 'openai', 'anthropic' or 'claude')
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-2.0-flash')
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'gpt-4o-mini')
                - base_url: str | None
                - organization: str | None
            For Anthropic (Claude):
                - api_key: str (required)
                - model: str (default: 'claude-sonnet-4-20250514')
                - base_url: str | None
            All providers accept request_timeout: float (default: 30.0)

    Returns:
        Initialized completion client

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> client = create_completion_client(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.0-flash"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "gemini":
        if "api_key" not in config:
            raise TypeError("Gemini provider requires 'api_key' in config")
        return GeminiProvider(**config)

    if provider_lower == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI provider requires 'api_key' in config")
        return OpenAIProvider(**config)

    if provider_lower in ("anthropic", "claude"):
        if "api_key" not in config:
            raise TypeError("Anthropic provider requires 'api_key' in config")
        return AnthropicProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini', 'openai', 'anthropic'"
    )
