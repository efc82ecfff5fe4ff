"""
Concise Chat Assist: a single-session chat client with switchable personas.

Each package hides one design decision: the persona catalog, the
completion backend, the transcript representation and the conversation
state machine. The TUI and CLI only talk to the conversation controller.
"""

__version__ = "0.1.0"

from .conversation import ControllerState, ConversationController, SessionSnapshot
from .errors import (
    ChatError,
    InvalidArgumentError,
    NotFoundError,
    RequestFailedError,
    SessionBusyError,
)
from .llm import CompletionClient, create_completion_client
from .personas import Persona, PersonaRegistry, create_default_registry
from .transcript import Message, Sender, TranscriptStore

__all__ = [
    "ChatError",
    "CompletionClient",
    "ControllerState",
    "ConversationController",
    "InvalidArgumentError",
    "Message",
    "NotFoundError",
    "Persona",
    "PersonaRegistry",
    "RequestFailedError",
    "Sender",
    "SessionBusyError",
    "SessionSnapshot",
    "TranscriptStore",
    "create_completion_client",
    "create_default_registry",
]
