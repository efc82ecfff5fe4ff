"""Terminal UI module for concise_chat.

Provides a Textual-based TUI that renders a ConversationController session.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (message views, edit form, input bar, log panel)
- styles.py: CSS styling (layout decisions)
- config.py: UI constants
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, SessionUpdated, run_chat_tui
from .widgets import ChatInputBar, LogPanel, MessageView, PersonaSelect, TranscriptView

__all__ = [
    "ChatApp",
    "ChatInputBar",
    "LogPanel",
    "MessageView",
    "PersonaSelect",
    "SessionUpdated",
    "TranscriptView",
    "run_chat_tui",
]
