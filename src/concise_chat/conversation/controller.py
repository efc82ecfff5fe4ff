"""Conversation controller.

Orchestrates turn submission, edit-and-regenerate and persona switching
against the transcript store and the completion client. This is the only
code that mutates a Session.

Every mutation happens synchronously on the caller's event loop; the only
suspension point is awaiting the completion client. At most one request is
in flight per session: actions that would start a second one, or reset the
transcript underneath it, are rejected with SessionBusyError.
"""

import contextlib
import logging
from collections.abc import Callable, Iterator

from ..errors import InvalidArgumentError, NotFoundError, RequestFailedError, SessionBusyError
from ..llm import CompletionClient
from ..personas import Persona, PersonaRegistry, create_default_registry
from ..transcript import Message, Sender, TranscriptReader
from .session import ControllerState, Session, SessionChange, SessionSnapshot

logger = logging.getLogger(__name__)

REQUEST_FAILED_TEXT = "Sorry, I encountered an error. Please try again later."

SessionListener = Callable[[SessionChange], None]


class ConversationController:
    """State machine for a single chat session (Idle / AwaitingCompletion).

    Example:
        controller = ConversationController(client)
        await controller.submit("hi")
        controller.begin_edit(controller.transcript[1].id)
        await controller.commit_edit(controller.transcript[1].id, "bye")
        controller.switch_persona("support")
    """

    def __init__(
        self,
        client: CompletionClient,
        registry: PersonaRegistry | None = None,
        persona_id: str | None = None,
    ) -> None:
        """Start a session seeded with the greeting of the initial persona.

        Args:
            client: Completion backend used for every turn
            registry: Persona catalog (built-in personas if None)
            persona_id: Initial persona; unknown ids fall back to the default
        """
        self._client = client
        self._registry = registry or create_default_registry()
        persona = self._registry.resolve(persona_id)
        self._session = Session(persona=persona)
        self._session.transcript.reset(persona.greeting())
        self._transcript = TranscriptReader(self._session.transcript)
        self._listeners: list[SessionListener] = []

    # Outputs

    @property
    def registry(self) -> PersonaRegistry:
        return self._registry

    @property
    def persona(self) -> Persona:
        """The active persona."""
        return self._session.persona

    @property
    def transcript(self) -> TranscriptReader:
        """Read-only view of the transcript."""
        return self._transcript

    @property
    def state(self) -> ControllerState:
        return self._session.state

    @property
    def is_busy(self) -> bool:
        return self._session.pending

    @property
    def editing_message_id(self) -> int | None:
        """Id of the message currently open for editing, if any."""
        return self._session.editing_message_id

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot.of(self._session)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called after every session mutation.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Inputs

    async def submit(self, text: str) -> Message:
        """Send a new user message and append the assistant's reply.

        Args:
            text: Message as typed; only blank-ness is checked

        Returns:
            The assistant message appended for this turn

        Raises:
            SessionBusyError: If a response is still pending
            InvalidArgumentError: If text is blank
        """
        self._ensure_idle("send a message")
        if not text.strip():
            raise InvalidArgumentError("message text must not be empty")

        def start_turn() -> None:
            self._session.transcript.add(Sender.USER, text)

        return await self._run_turn(start_turn, text)

    def begin_edit(self, message_id: int) -> Message:
        """Mark a user message as editable.

        Only one message is editable at a time; the transcript is untouched.

        Returns:
            The message being edited

        Raises:
            NotFoundError: If message_id is not a user message
        """
        message = self._session.transcript.get(message_id)
        if not message.is_user:
            raise NotFoundError("User message", message_id)

        if self._session.editing_message_id != message_id:
            with self._mutation():
                self._session.editing_message_id = message_id
        return message

    def cancel_edit(self) -> None:
        """Leave edit mode without changing the transcript."""
        if self._session.editing_message_id is None:
            return
        with self._mutation():
            self._session.editing_message_id = None

    async def commit_edit(self, message_id: int, new_text: str) -> Message:
        """Rewrite a user message and regenerate the reply from it.

        Everything after the edited message is discarded first, then the
        reply is generated from new_text alone.

        Returns:
            The assistant message appended for the regenerated turn

        Raises:
            SessionBusyError: If a response is still pending
            NotFoundError: If message_id is not a user message
            InvalidArgumentError: If new_text is blank
        """
        self._ensure_idle("edit a message")

        def start_turn() -> None:
            self._session.transcript.edit_user_message(message_id, new_text)
            self._session.editing_message_id = None

        return await self._run_turn(start_turn, new_text)

    def switch_persona(self, persona_id: str) -> Persona:
        """Activate a persona and start a fresh transcript with its greeting.

        Unknown ids fall back to the default persona.

        Raises:
            SessionBusyError: If a response is still pending
        """
        self._ensure_idle("switch persona")
        persona = self._registry.resolve(persona_id)

        with self._mutation():
            self._session.persona = persona
            self._session.editing_message_id = None
            self._session.transcript.reset(persona.greeting())

        logger.info("Switched persona to %s", persona.id)
        return persona

    # Internals

    async def _run_turn(self, start_turn: Callable[[], None], user_text: str) -> Message:
        """Apply start_turn, await the reply for user_text and append it.

        The session is back in Idle when this returns or raises, even if
        start_turn or a listener fails or the task is cancelled.
        """
        try:
            with self._mutation():
                start_turn()
                self._session.pending = True

            reply = await self._request_reply(self._session.persona, user_text)

            with self._mutation():
                message = self._session.transcript.add(Sender.ASSISTANT, reply)
                self._session.pending = False
            return message
        finally:
            if self._session.pending:
                with self._mutation():
                    self._session.pending = False

    async def _request_reply(self, persona: Persona, user_text: str) -> str:
        try:
            return await self._client.complete(persona.system_prompt, user_text)
        except RequestFailedError as e:
            logger.warning("Completion failed for persona %s: %s", persona.id, e)
            return REQUEST_FAILED_TEXT

    def _ensure_idle(self, action: str) -> None:
        if self._session.pending:
            logger.debug("Rejected %r while awaiting completion", action)
            raise SessionBusyError(action)

    @contextlib.contextmanager
    def _mutation(self) -> Iterator[None]:
        """Notify listeners after the enclosed mutation succeeds."""
        before = self.snapshot()
        yield
        change = SessionChange(before=before, after=self.snapshot())
        for listener in list(self._listeners):
            listener(change)
