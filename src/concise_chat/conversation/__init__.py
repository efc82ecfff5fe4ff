"""Conversation module: the session state machine."""

from .controller import REQUEST_FAILED_TEXT, ConversationController, SessionListener
from .session import ControllerState, Session, SessionChange, SessionSnapshot

__all__ = [
    "REQUEST_FAILED_TEXT",
    "ControllerState",
    "ConversationController",
    "Session",
    "SessionChange",
    "SessionListener",
    "SessionSnapshot",
]
