"""Token sources: the protocol the decoder reads from and a list-backed one."""

from __future__ import annotations

from typing import Protocol

from .lexer import tokenize
from .token import Token


class TokenSource(Protocol):
    """Anything able to hand out located tokens one at a time.

    ``next`` moves to the next token anywhere; ``next_arg`` only moves if the
    next token sits on the line the current one ends on. Both return whether
    they moved; ``token`` returns the token moved to.
    """

    def next(self) -> bool: ...

    def next_arg(self) -> bool: ...

    def token(self) -> Token: ...


class Dispenser:
    """TokenSource over an already lexed list of tokens."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = list(tokens)
        self._cursor = -1

    @classmethod
    def from_text(cls, text: str, filename: str = "Testfile") -> "Dispenser":
        return cls(tokenize(text, filename))

    def next(self) -> bool:
        if self._cursor < len(self._tokens) - 1:
            self._cursor += 1
            return True
        return False

    def next_arg(self) -> bool:
        if self._cursor < 0:
            return self.next()
        if self._cursor >= len(self._tokens) - 1:
            return False
        cur = self._tokens[self._cursor]
        nxt = self._tokens[self._cursor + 1]
        if cur.file == nxt.file and cur.line + cur.value.count("\n") == nxt.line:
            self._cursor += 1
            return True
        return False

    def token(self) -> Token:
        if 0 <= self._cursor < len(self._tokens):
            return self._tokens[self._cursor]
        return Token(file="", value="", line=0)
