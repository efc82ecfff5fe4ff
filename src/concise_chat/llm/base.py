import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

from ..errors import RequestFailedError

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_TEXT = "Sorry, I couldn't generate a response. Please try again."
DEFAULT_REQUEST_TIMEOUT = 30.0


def build_prompt(system_prompt: str, user_text: str) -> str:
    """Combine persona prompt and user text into the single request text block."""
    return f"{system_prompt}\n\nUser: {user_text}"


class CompletionClient(ABC):
    """Abstract base class for completion backends.

    This module hides the design decision of which text-generation service
    answers a turn. Each call is stateless: the request carries only the
    persona prompt and the latest user text, never transcript history.

    The contract is enforced here rather than in each provider:
    - exactly one attempt per call, bounded by a timeout
    - any provider failure surfaces as RequestFailedError
    - a well-formed but empty response becomes EMPTY_RESPONSE_TEXT

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            text = await client.complete(persona.system_prompt, "hi")
    """

    name: str = "completion"

    def __init__(self, request_timeout: float = DEFAULT_REQUEST_TIMEOUT) -> None:
        if request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        self._request_timeout = request_timeout

    @property
    def request_timeout(self) -> float:
        """Seconds before a pending request is abandoned."""
        return self._request_timeout

    async def complete(self, system_prompt: str, user_text: str) -> str:
        """Generate a reply for one turn.

        Args:
            system_prompt: Active persona's instruction text
            user_text: Literal content of the submitted or edited user message

        Returns:
            Generated text, or EMPTY_RESPONSE_TEXT if the service returned none

        Raises:
            RequestFailedError: On transport errors, bad status, malformed
                responses or timeout
        """
        prompt = build_prompt(system_prompt, user_text)
        logger.debug("Requesting completion from %s (%d chars)", self.name, len(prompt))

        try:
            text = await asyncio.wait_for(self._generate(prompt), timeout=self._request_timeout)
        except RequestFailedError:
            raise
        except asyncio.TimeoutError:
            raise RequestFailedError(
                f"timed out after {self._request_timeout:g}s", provider=self.name
            ) from None
        except Exception as e:
            raise RequestFailedError(str(e) or type(e).__name__, provider=self.name) from e

        if not text or not text.strip():
            logger.info("Empty response from %s, using fallback text", self.name)
            return EMPTY_RESPONSE_TEXT
        return text

    @abstractmethod
    async def _generate(self, prompt: str) -> str | None:
        """Send one request and return the first candidate's text.

        Implementations return None (or "") for a well-formed response with
        no usable text, and raise for anything else.
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "CompletionClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Suppresses "Event loop is closed" errors raised by httpx/anyio
        when the loop is torn down before the client.
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
