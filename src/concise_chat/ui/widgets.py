"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Message rendering and the inline edit form
- Transcript re-rendering from session snapshots
- Input history management
- Log rendering and level filtering
"""

import logging
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, RichLog, Select, Static, TextArea

from ..conversation import SessionSnapshot
from ..personas import Persona
from ..transcript import Message as ChatMessage
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    LOG_LEVEL_NAMES,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
)


class MessageView(Vertical):
    """One transcript message, with an inline edit form for user messages."""

    class EditRequested(Message):
        """User asked to edit this message."""

        def __init__(self, message_id: int) -> None:
            super().__init__()
            self.message_id = message_id

    class EditCommitted(Message):
        """User saved new text for this message."""

        def __init__(self, message_id: int, text: str) -> None:
            super().__init__()
            self.message_id = message_id
            self.text = text

    class EditCancelled(Message):
        """User closed the edit form without saving."""

    def __init__(
        self,
        message: ChatMessage,
        persona: Persona,
        editing: bool = False,
        busy: bool = False,
        **kwargs,
    ) -> None:
        role_class = "user-message" if message.is_user else "assistant-message"
        super().__init__(classes=f"chat-message {role_class}", **kwargs)
        self._message = message
        self._persona = persona
        self._editing = editing
        self._busy = busy

    @property
    def message_id(self) -> int:
        return self._message.id

    def compose(self):
        msg = self._message
        timestamp = msg.created_at.strftime(MESSAGE_TIMESTAMP_FORMAT)
        if msg.is_user:
            header = f"> You [{timestamp}]"
        else:
            header = f"{self._persona.icon} {self._persona.display_name} [{timestamp}]"
        yield Static(header, classes="message-header", markup=False)

        if self._editing:
            yield TextArea(msg.text, id=f"edit-input-{msg.id}", classes="edit-input")
            with Horizontal(classes="edit-buttons"):
                yield Button("Save", id="edit-save", variant="success")
                yield Button("Cancel", id="edit-cancel", variant="error")
            return

        yield Static(Text(msg.text), classes="message-content")
        if msg.is_user:
            edit_btn = Button("Edit", classes="edit-btn", disabled=self._busy)
            yield edit_btn.with_tooltip("Edit and regenerate from here")

    def on_mount(self) -> None:
        if self._editing:
            self.query_one(TextArea).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("edit-btn"):
            self.post_message(self.EditRequested(self._message.id))
        elif event.button.id == "edit-save":
            text = self.query_one(TextArea).text
            if not text.strip():
                self.app.notify("Message cannot be empty", severity="warning", timeout=2)
                return
            self.post_message(self.EditCommitted(self._message.id, text))
        elif event.button.id == "edit-cancel":
            self.post_message(self.EditCancelled())


class ThinkingIndicator(Static):
    """Placeholder shown while a response is pending."""

    def __init__(self, persona: Persona, **kwargs) -> None:
        super().__init__(
            f"{persona.icon} Thinking...",
            classes="chat-message assistant-message thinking",
            markup=False,
            **kwargs,
        )


class TranscriptView(VerticalScroll):
    """Scrollable transcript, re-rendered from each session snapshot."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._snapshot: SessionSnapshot | None = None

    @property
    def snapshot(self) -> SessionSnapshot | None:
        return self._snapshot

    async def show(self, snapshot: SessionSnapshot) -> None:
        """Replace the displayed messages with those of snapshot."""
        self._snapshot = snapshot
        views: list = [
            MessageView(
                msg,
                snapshot.persona,
                editing=msg.id == snapshot.editing_message_id,
                busy=snapshot.is_busy,
            )
            for msg in snapshot.messages
        ]
        if snapshot.is_busy:
            views.append(ThinkingIndicator(snapshot.persona))

        await self.remove_children()
        await self.mount_all(views)
        self.border_title = f"Chat - {snapshot.persona.display_name}"
        self.border_subtitle = f"{len(snapshot.messages)} messages"
        if snapshot.editing_message_id is None:
            self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        if self._snapshot is None:
            return None
        for msg in reversed(self._snapshot.messages):
            if msg.is_assistant:
                return msg.text
        return None


class PersonaSelect(Select):
    """Drop-down of the available personas."""

    def __init__(self, personas: tuple[Persona, ...], active: Persona, **kwargs) -> None:
        options = [(f"{p.icon} {p.display_name}", p.id) for p in personas]
        super().__init__(options, value=active.id, allow_blank=False, **kwargs)


class InputHistory:
    """Bounded list of submitted inputs with a browse cursor."""

    def __init__(self, max_size: int = INPUT_HISTORY_MAX_SIZE) -> None:
        self._entries: list[str] = []
        self._max_size = max_size
        self._cursor: int | None = None

    def add(self, value: str) -> None:
        if not self._entries or self._entries[-1] != value:
            self._entries.append(value)
            del self._entries[:-self._max_size]
        self._cursor = None

    def older(self) -> str | None:
        """Step back one entry; stays on the oldest."""
        if not self._entries:
            return None
        if self._cursor is None:
            self._cursor = len(self._entries) - 1
        elif self._cursor > 0:
            self._cursor -= 1
        return self._entries[self._cursor]

    def newer(self) -> str | None:
        """Step forward one entry; returns "" past the newest."""
        if self._cursor is None:
            return None
        if self._cursor < len(self._entries) - 1:
            self._cursor += 1
            return self._entries[self._cursor]
        self._cursor = None
        return ""


class ChatInputBar(Horizontal):
    """Multi-line input with a Send button (Ctrl+J sends, Up/Down browse history)."""

    class Submitted(Message):
        """Posted with the text as typed."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.history = InputHistory()

    def compose(self):
        yield TextArea(id="chat-input", show_line_numbers=False)
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self._text_area
        text_area.cursor_blink = False
        text_area.highlight_cursor_line = False
        text_area.focus()

    @property
    def _text_area(self) -> TextArea:
        return self.query_one("#chat-input", TextArea)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._send()

    def on_key(self, event) -> None:
        # Terminals do not report ctrl+enter, so ctrl+j sends.
        text_area = self._text_area
        if event.key == "ctrl+j":
            self._send()
        elif event.key == "up" and text_area.cursor_location == (0, 0):
            self._recall(self.history.older())
        elif event.key == "down" and text_area.cursor_location == text_area.document.end:
            self._recall(self.history.newer())
        else:
            return
        event.prevent_default()
        event.stop()

    def _recall(self, value: str | None) -> None:
        if value is not None:
            self._text_area.text = value

    def set_busy(self, busy: bool) -> None:
        """Disable sending while a response is pending."""
        self.query_one("#send-btn", Button).disabled = busy

    def _send(self) -> None:
        if self.query_one("#send-btn", Button).disabled:
            self.app.notify("Please wait for the current response", severity="warning", timeout=2)
            return
        text_area = self._text_area
        value = text_area.text
        if not value.strip():
            return
        self.history.add(value)
        text_area.text = ""
        self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self._text_area.focus()


class LogPanel(RichLog):
    """Log panel showing records from the concise_chat loggers.

    Hidden by default, shown with --log-level debug/info or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Hidden"

    LEVEL_COLORS = {
        logging.DEBUG: "dim white",
        logging.INFO: "cyan",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
    }

    def __init__(self, *args, log_level: int = logging.WARNING, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LOG_LEVEL_NAMES.get(self._log_level, 'CUSTOM')}"
        else:
            self.border_subtitle = "Hidden"

    def add_record(self, level_name: str, component: str, message: str) -> None:
        """Add a log entry if it meets the current level threshold."""
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.INFO
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        line = Text()
        line.append(f"{timestamp} ", style="dim")
        line.append(f"{LOG_LEVEL_NAMES.get(level, level_name.upper()):<7} ",
                    style=self.LEVEL_COLORS.get(level, "white"))
        line.append(f"[{component}] ", style="magenta")
        line.append(message)
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
        else:
            self.show()
        return bool(self.display)
