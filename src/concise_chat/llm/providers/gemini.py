"""Google Gemini completion provider.

Uses the official Google GenAI SDK (async client).
Reference: https://github.com/googleapis/python-genai

The whole turn is sent as a single user text part, mirroring the REST
body ``{"contents": [{"parts": [{"text": ...}]}]}``. The reply is read
from ``candidates[0].content.parts[0].text``.
"""

from typing import Any

from google import genai
from google.genai import types

from ..base import DEFAULT_REQUEST_TIMEOUT, CompletionClient


class GeminiProvider(CompletionClient):
    """Google Gemini completion provider.

    Hidden design decisions:
    - Google GenAI client initialization
    - Request body shape (one content, one text part)
    - Location of the generated text in the response
    """

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Model name (default: gemini-2.0-flash)
            request_timeout: Seconds before the request is abandoned
            **client_kwargs: Additional kwargs for genai.Client
        """
        super().__init__(request_timeout=request_timeout)
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    @staticmethod
    def _extract_text(response: Any) -> str | None:
        """Return the first candidate's first text part, or None if absent."""
        candidates = getattr(response, "candidates", None)
        if not candidates:
            return None
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) if content is not None else None
        if not parts:
            return None
        return getattr(parts[0], "text", None)

    async def _generate(self, prompt: str) -> str | None:
        contents = [types.Content(role="user", parts=[types.Part(text=prompt)])]
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=contents,
        )
        return self._extract_text(response)

    async def close(self) -> None:
        """Close the Gemini client.

        The GenAI client does not hold connections that need explicit
        closing; implemented for interface consistency.
        """
        pass
