"""Error taxonomy for the chat client.

Every failure a caller can observe derives from ChatError, so the
presentation layer can report rejections with a single except clause.
None of these are fatal: each has a local recovery path.
"""


class ChatError(Exception):
    """Base class for chat client errors."""


class InvalidArgumentError(ChatError):
    """Input rejected before any state change (e.g. blank message text)."""

    def __init__(self, message: str):
        super().__init__(f"Invalid argument: {message}")


class NotFoundError(ChatError):
    """A message or persona id does not exist."""

    def __init__(self, kind: str, key: object):
        super().__init__(f"{kind} not found: {key!r}")
        self.kind = kind
        self.key = key


class RequestFailedError(ChatError):
    """The completion request failed (transport, status, body or timeout)."""

    def __init__(self, message: str, provider: str | None = None):
        msg = f"Completion request failed: {message}"
        if provider:
            msg += f" (provider: {provider})"
        super().__init__(msg)
        self.provider = provider


class SessionBusyError(ChatError):
    """Action rejected because a completion request is still pending."""

    def __init__(self, action: str):
        super().__init__(f"Cannot {action} while a response is pending")
        self.action = action
