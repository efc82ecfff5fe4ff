"""Session state and its read-only snapshots.

Hides the internal representation of a chat session from the presentation
layer, which only ever sees SessionSnapshot values.
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..personas import Persona
from ..transcript import Message, TranscriptStore


class ControllerState(str, Enum):
    """Controller-level state, mirrors Session.pending."""

    IDLE = "idle"
    AWAITING_COMPLETION = "awaiting_completion"


@dataclass
class Session:
    """Mutable state of one chat session, owned by the controller."""

    persona: Persona
    transcript: TranscriptStore = field(default_factory=TranscriptStore)
    pending: bool = False
    editing_message_id: int | None = None

    @property
    def state(self) -> ControllerState:
        return ControllerState.AWAITING_COMPLETION if self.pending else ControllerState.IDLE


class SessionSnapshot(BaseModel):
    """Immutable view of a session at one point in time."""

    model_config = ConfigDict(frozen=True)

    persona: Persona
    messages: tuple[Message, ...]
    state: ControllerState
    editing_message_id: int | None = None

    @property
    def is_busy(self) -> bool:
        return self.state == ControllerState.AWAITING_COMPLETION

    @classmethod
    def of(cls, session: Session) -> "SessionSnapshot":
        return cls(
            persona=session.persona,
            messages=session.transcript.messages,
            state=session.state,
            editing_message_id=session.editing_message_id,
        )


class SessionChange(BaseModel):
    """Before/after pair delivered to session listeners."""

    model_config = ConfigDict(frozen=True)

    before: SessionSnapshot
    after: SessionSnapshot

    @property
    def persona_changed(self) -> bool:
        return self.before.persona.id != self.after.persona.id
