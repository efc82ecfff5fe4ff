"""Message id generation.

Ids come from a counter rather than the clock, so two messages created
within the same clock tick still get distinct, ordered ids.
"""

import itertools


class MessageIdGenerator:
    """Monotonic counter starting at 1.

    Not synchronized: a session lives on a single event loop.
    """

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError("start must be >= 1")
        self._counter = itertools.count(start)
        self._last = start - 1

    @property
    def last(self) -> int:
        """Most recently issued id (0 if none yet)."""
        return self._last

    def next(self) -> int:
        self._last = next(self._counter)
        return self._last

    def advance(self, to: int) -> None:
        """Mark every id up to and including ``to`` as used."""
        if to > self._last:
            self._last = to
            self._counter = itertools.count(to + 1)
