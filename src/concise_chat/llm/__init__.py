from .base import (
    DEFAULT_REQUEST_TIMEOUT,
    EMPTY_RESPONSE_TEXT,
    CompletionClient,
    build_prompt,
)
from .factory import SUPPORTED_PROVIDERS, create_completion_client
from .providers import AnthropicProvider, GeminiProvider, OpenAIProvider

__all__ = [
    "DEFAULT_REQUEST_TIMEOUT",
    "EMPTY_RESPONSE_TEXT",
    "SUPPORTED_PROVIDERS",
    "AnthropicProvider",
    "CompletionClient",
    "GeminiProvider",
    "OpenAIProvider",
    "build_prompt",
    "create_completion_client",
]
