"""Main Textual TUI application.

Renders the session owned by a ConversationController and forwards user
actions to its public surface (submit, begin/cancel/commit edit, switch
persona). The app never touches the transcript directly.
"""

import asyncio
import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Footer, Header, Select, Static

from ..conversation import ConversationController, SessionChange, SessionSnapshot
from ..errors import ChatError
from ..llm import CompletionClient
from ..logging_utils import PACKAGE_LOGGER, LogPanelHandler, configure_logging
from .config import APP_SUBTITLE, APP_TITLE, DISCLAIMER_TEXT, THEME_NAME, log_level_from_string
from .styles import APP_CSS
from .widgets import ChatInputBar, LogPanel, MessageView, PersonaSelect, TranscriptView

logger = logging.getLogger(__name__)


class SessionUpdated(Message):
    """Posted for every session mutation; carries the resulting snapshot."""

    def __init__(self, snapshot: SessionSnapshot) -> None:
        super().__init__()
        self.snapshot = snapshot


class ChatApp(App):
    """Textual TUI for a single chat session."""

    CSS = APP_CSS
    TITLE = APP_TITLE
    SUB_TITLE = APP_SUBTITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("escape", "cancel_edit", "Cancel Edit"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+b", "toggle_maximize_chat", "Max Chat"),
        Binding("ctrl+d", "toggle_log", "Log"),
    ]

    def __init__(
        self,
        controller: ConversationController,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._log_level = log_level
        self._unsubscribe = None
        self._log_handler: LogPanelHandler | None = None
        self._saved_logging: tuple[list[logging.Handler], int] | None = None

    @property
    def controller(self) -> ConversationController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="persona-bar"):
            yield Static("Persona", id="persona-label")
            yield PersonaSelect(
                self._controller.registry.list(),
                self._controller.persona,
                id="persona-select",
            )
        yield TranscriptView(id="transcript")
        yield LogPanel(id="log-panel")
        with Vertical(id="bottom-bar"):
            yield ChatInputBar(id="chat-input-bar")
            yield Static(DISCLAIMER_TEXT, id="disclaimer")
        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        self.theme = THEME_NAME

        log_panel = self.query_one("#log-panel", LogPanel)
        level = log_level_from_string(self._log_level or "warning")
        log_panel.log_level = level
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        self._saved_logging = (list(package_logger.handlers), package_logger.level)
        self._log_handler = LogPanelHandler(log_panel.add_record)
        configure_logging(level, handler=self._log_handler)
        if self._log_level is not None and level < logging.WARNING:
            log_panel.show()

        self._unsubscribe = self._controller.subscribe(self._on_session_change)
        await self.query_one("#transcript", TranscriptView).show(self._controller.snapshot())
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()
        logger.info("Session started with persona %s", self._controller.persona.id)

    def on_unmount(self) -> None:
        """Detach from the controller and restore the previous log handlers."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._log_handler is not None:
            self._restore_logging()
            self._log_handler = None

    def _restore_logging(self) -> None:
        """Put back the handlers that were installed before the app started."""
        handlers, level = self._saved_logging or ([], logging.WARNING)
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.removeHandler(self._log_handler)
        if handlers:
            for handler in handlers:
                package_logger.addHandler(handler)
            package_logger.setLevel(level)
        else:
            configure_logging(level or logging.WARNING)
        self._saved_logging = None

    def _on_session_change(self, change: SessionChange) -> None:
        self.post_message(SessionUpdated(change.after))

    async def on_session_updated(self, event: SessionUpdated) -> None:
        snapshot = event.snapshot
        await self.query_one("#transcript", TranscriptView).show(snapshot)
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(snapshot.is_busy)

        persona_select = self.query_one("#persona-select", PersonaSelect)
        persona_select.disabled = snapshot.is_busy
        if persona_select.value != snapshot.persona.id:
            persona_select.value = snapshot.persona.id

    # User actions

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        self._submit(event.value)

    def on_message_view_edit_requested(self, event: MessageView.EditRequested) -> None:
        try:
            self._controller.begin_edit(event.message_id)
        except ChatError as e:
            self.notify(str(e), severity="warning", timeout=3)

    def on_message_view_edit_cancelled(self, event: MessageView.EditCancelled) -> None:
        self._controller.cancel_edit()

    def on_message_view_edit_committed(self, event: MessageView.EditCommitted) -> None:
        self._commit_edit(event.message_id, event.text)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "persona-select" or event.value == Select.BLANK:
            return
        if event.value == self._controller.persona.id:
            return
        try:
            persona = self._controller.switch_persona(str(event.value))
        except ChatError as e:
            event.select.value = self._controller.persona.id
            self.notify(str(e), severity="warning", timeout=3)
            return
        self.notify(f"Switched to {persona.display_name}", timeout=2)

    @work(group="completion")
    async def _submit(self, text: str) -> None:
        """Run one turn as a background async worker."""
        try:
            await self._controller.submit(text)
        except ChatError as e:
            self.notify(str(e), severity="warning", timeout=3)
        except asyncio.CancelledError:
            logger.info("Submission cancelled")
            raise

    @work(group="completion")
    async def _commit_edit(self, message_id: int, text: str) -> None:
        """Apply an edit and regenerate the reply as a background worker."""
        try:
            await self._controller.commit_edit(message_id, text)
        except ChatError as e:
            self.notify(str(e), severity="warning", timeout=3)

    # Key bindings

    def action_cancel_edit(self) -> None:
        """Leave edit mode."""
        self._controller.cancel_edit()

    def action_toggle_log(self) -> None:
        """Toggle the log panel visibility."""
        is_visible = self.query_one("#log-panel", LogPanel).toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_toggle_maximize_chat(self) -> None:
        """Toggle maximize for the transcript panel."""
        transcript = self.query_one("#transcript", TranscriptView)
        if self.screen.maximized is transcript:
            self.screen.minimize()
        else:
            self.screen.maximize(transcript)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = self.query_one("#transcript", TranscriptView).get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_chat_tui(
    client: CompletionClient,
    persona_id: str | None = None,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI until the user quits.

    Args:
        client: Completion backend for every turn
        persona_id: Initial persona (default persona if None or unknown)
        log_level: Log panel level (debug/info/warning/error), None to hide
    """
    controller = ConversationController(client, persona_id=persona_id)
    app = ChatApp(controller, log_level=log_level)
    try:
        async with client:
            await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
