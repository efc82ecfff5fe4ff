"""Ordered message log.

The store is the single source of truth for what is rendered. Readers get
tuples; only the conversation controller calls the mutating methods.
"""

import logging
from collections.abc import Iterator

from ..errors import InvalidArgumentError, NotFoundError
from .ids import MessageIdGenerator
from .models import Message, Sender

logger = logging.getLogger(__name__)


class TranscriptStore:
    """Strictly ordered sequence of messages with unique, increasing ids.

    Ids are never reused, not even across reset(), so a stale id held by
    the presentation layer can never match a message from a later session.
    """

    def __init__(self, id_generator: MessageIdGenerator | None = None) -> None:
        self._ids = id_generator or MessageIdGenerator()
        self._messages: list[Message] = []

    # Mutations

    def reset(self, greeting_text: str) -> Message:
        """Replace the transcript with a single assistant greeting."""
        greeting = Message(id=self._ids.next(), text=greeting_text, sender=Sender.ASSISTANT)
        self._messages = [greeting]
        return greeting

    def append(self, message: Message) -> None:
        """Add a message to the end.

        Raises:
            ValueError: If the id is already used or not greater than the last id
        """
        if self._messages and message.id <= self._messages[-1].id:
            raise ValueError(
                f"Message id {message.id} must be greater than {self._messages[-1].id}"
            )
        self._messages.append(message)
        self._ids.advance(message.id)

    def add(self, sender: Sender, text: str) -> Message:
        """Create a message with the next id and append it."""
        message = Message(id=self._ids.next(), text=text, sender=sender)
        self.append(message)
        return message

    def edit_user_message(self, message_id: int, new_text: str) -> Message:
        """Replace a user message's text and drop everything after it.

        Later user messages are discarded too: the transcript ends exactly at
        the edited message. There is no undo.

        Args:
            message_id: Id of an existing user message
            new_text: Replacement text (stored as given)

        Returns:
            The edited message

        Raises:
            NotFoundError: If message_id is not a user message in the transcript
            InvalidArgumentError: If new_text is blank
        """
        index = self._find_index(message_id)
        if index is None or not self._messages[index].is_user:
            raise NotFoundError("User message", message_id)
        if not new_text.strip():
            raise InvalidArgumentError("message text must not be empty")

        edited = self._messages[index].model_copy(update={"text": new_text})
        dropped = len(self._messages) - index - 1
        self._messages = self._messages[:index] + [edited]
        logger.debug("Edited message %d, dropped %d later message(s)", message_id, dropped)
        return edited

    # Read-only accessors

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def messages_from(self, index: int) -> tuple[Message, ...]:
        """Messages at and after index."""
        if index < 0:
            raise IndexError("index must be non-negative")
        return tuple(self._messages[index:])

    def get(self, message_id: int) -> Message:
        """Look up a message by id.

        Raises:
            NotFoundError: If no message has this id
        """
        index = self._find_index(message_id)
        if index is None:
            raise NotFoundError("Message", message_id)
        return self._messages[index]

    def index_of(self, message_id: int) -> int:
        """Position of a message.

        Raises:
            NotFoundError: If no message has this id
        """
        index = self._find_index(message_id)
        if index is None:
            raise NotFoundError("Message", message_id)
        return index

    def _find_index(self, message_id: int) -> int | None:
        for i, msg in enumerate(self._messages):
            if msg.id == message_id:
                return i
        return None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]


class TranscriptReader:
    """Read-only view of a TranscriptStore.

    Always reflects the current contents of the store; exposes no mutators.
    """

    def __init__(self, store: TranscriptStore) -> None:
        self._store = store

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._store.messages

    @property
    def last(self) -> Message | None:
        return self._store.last

    def messages_from(self, index: int) -> tuple[Message, ...]:
        return self._store.messages_from(index)

    def get(self, message_id: int) -> Message:
        return self._store.get(message_id)

    def index_of(self, message_id: int) -> int:
        return self._store.index_of(message_id)

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._store)

    def __getitem__(self, index: int) -> Message:
        return self._store[index]
