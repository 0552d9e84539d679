"""Confirmable token stream: one token of lookahead that must be confirmed."""

from __future__ import annotations

from enum import Enum, auto

from .dispenser import TokenSource
from .token import Token


class StreamState(Enum):
    IDLE = auto()
    PENDING = auto()
    FINISHED = auto()


class TokenStream:
    """Wraps a TokenSource so callers can peek before they commit.

    An advance loads the next token and leaves it *pending*. Until
    ``confirm`` is called, further advances return True and keep the same
    pending token, so looking at the next token (say, to see whether a
    ``{`` follows) costs nothing. Once the source runs dry ``advance_any``
    keeps returning False.
    """

    def __init__(self, source: TokenSource) -> None:
        self._source = source
        self._current = Token(file="", value="", line=0)
        self.state = StreamState.IDLE

    def advance_any(self) -> bool:
        """Load the next token, possibly from a following line."""
        if self.state is StreamState.FINISHED:
            return False
        if self.state is StreamState.PENDING:
            return True
        if self._source.next():
            self._current = self._source.token()
            self.state = StreamState.PENDING
            return True
        self.state = StreamState.FINISHED
        return False

    def advance_same_line(self) -> bool:
        """Load the next token only if it is on the current line."""
        if self.state is StreamState.FINISHED:
            return False
        if self.state is StreamState.PENDING:
            return True
        if self._source.next_arg():
            self._current = self._source.token()
            self.state = StreamState.PENDING
            return True
        return False

    def current(self) -> Token:
        return self._current

    def confirm(self) -> None:
        if self.state is StreamState.PENDING:
            self.state = StreamState.IDLE
