from typing import Any

from openai import AsyncOpenAI

from ..base import DEFAULT_REQUEST_TIMEOUT, CompletionClient


class OpenAIProvider(CompletionClient):
    """OpenAI completion provider.

    Hidden design decisions:
    - OpenAI API client initialization (SDK retries disabled)
    - The turn is sent as one user message holding the combined prompt
    """

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model to use (default: gpt-4o-mini)
            base_url: Optional custom API base URL
            organization: Optional organization ID
            request_timeout: Seconds before the request is abandoned
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__(request_timeout=request_timeout)
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            max_retries=0,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    async def _generate(self, prompt: str) -> str | None:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
