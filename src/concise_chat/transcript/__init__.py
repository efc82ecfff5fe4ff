"""Transcript module: the ordered message log of a chat session."""

from .ids import MessageIdGenerator
from .models import Message, Sender
from .store import TranscriptReader, TranscriptStore

__all__ = [
    "Message",
    "MessageIdGenerator",
    "Sender",
    "TranscriptReader",
    "TranscriptStore",
]
