"""Data models for the transcript.

Messages are immutable values. Editing a user message replaces it with a
copy that keeps the original id and creation time.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """One entry in the transcript."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, description="Unique id, increasing in creation order")
    text: str = Field(description="Message content")
    sender: Sender = Field(description="Who authored the message")
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_user(self) -> bool:
        return self.sender == Sender.USER

    @property
    def is_assistant(self) -> bool:
        return self.sender == Sender.ASSISTANT
