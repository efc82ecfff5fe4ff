"""Anthropic Claude completion provider.

Uses the official Anthropic Python SDK.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

from typing import Any

from anthropic import AsyncAnthropic

from ..base import DEFAULT_REQUEST_TIMEOUT, CompletionClient


class AnthropicProvider(CompletionClient):
    """Anthropic Claude completion provider.

    Hidden design decisions:
    - Anthropic API client initialization (SDK retries disabled)
    - max_tokens is mandatory for the Messages API
    - Only the first text block of the reply is used
    """

    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        max_tokens: int = 4096,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            model: Model to use (default: claude-sonnet-4-20250514)
            base_url: Optional custom API base URL
            max_tokens: Reply length cap required by the API
            request_timeout: Seconds before the request is abandoned
            **client_kwargs: Additional kwargs for AsyncAnthropic client
        """
        super().__init__(request_timeout=request_timeout)
        self._model = model
        self._max_tokens = max_tokens
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    async def _generate(self, prompt: str) -> str | None:
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=self._max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        for block in response.content:
            text = getattr(block, "text", None)
            if text:
                return text
        return None

    async def close(self) -> None:
        """Close the Anthropic client."""
        await self._client.close()
