"""Pytest configuration and shared fixtures."""
import asyncio
import os

import pytest

from concise_chat.llm import CompletionClient
from concise_chat.personas import Persona, PersonaRegistry


class FakeCompletionClient(CompletionClient):
    """Scripted completion client that records every prompt it receives.

    Each entry in ``replies`` is returned in order; an Exception instance is
    raised instead. When ``gate`` is set, requests block until it is released.
    """

    name = "fake"

    def __init__(self, replies=None, default_reply="ok", request_timeout=5.0):
        super().__init__(request_timeout=request_timeout)
        self.replies = list(replies or [])
        self.default_reply = default_reply
        self.prompts: list[str] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def _generate(self, prompt):
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else self.default_reply
        if isinstance(reply, BaseException):
            raise reply
        return reply

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    """Return a scripted completion client."""
    return FakeCompletionClient()


@pytest.fixture
def registry():
    """Return a small registry with deterministic prompts."""
    return PersonaRegistry(
        [
            Persona(id="general", display_name="General Assistant", system_prompt="Be helpful."),
            Persona(id="support", display_name="Customer Support", system_prompt="Be supportive."),
        ],
        default_id="general",
    )


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def make_client():
    """Return the scripted client class for tests that configure their own."""
    return FakeCompletionClient
