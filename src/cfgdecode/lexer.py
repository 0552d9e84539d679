"""Lexer: turns directive-style configuration text into located tokens."""

from __future__ import annotations

from .token import Token

_WHITESPACE = " \t\r\n"


def tokenize(text: str, filename: str = "Testfile") -> list[Token]:
    """Split *text* into Tokens.

    - Words are separated by whitespace; ``{`` and ``}`` are ordinary words.
    - ``"..."`` is one word with the quotes removed; ``\\"`` escapes a quote
      and the word may span several lines.
    - ``#`` at the start of a word comments out the rest of the line.

    Each token records the line and column where it starts.
    """
    tokens: list[Token] = []
    i = 0
    n = len(text)
    line = 1
    col = 1

    while i < n:
        ch = text[i]

        if ch == "\n":
            i += 1
            line += 1
            col = 1
            continue

        if ch in _WHITESPACE:
            i += 1
            col += 1
            continue

        # comment runs to the end of the line
        if ch == "#":
            while i < n and text[i] != "\n":
                i += 1
            continue

        start_line, start_col = line, col

        if ch == '"':
            i += 1
            col += 1
            chars: list[str] = []
            while i < n:
                ch = text[i]
                if ch == "\\" and i + 1 < n and text[i + 1] == '"':
                    chars.append('"')
                    i += 2
                    col += 2
                    continue
                if ch == '"':
                    i += 1
                    col += 1
                    break
                chars.append(ch)
                i += 1
                if ch == "\n":
                    line += 1
                    col = 1
                else:
                    col += 1
            tokens.append(Token(filename, "".join(chars), start_line, start_col))
            continue

        start = i
        while i < n and text[i] not in _WHITESPACE:
            i += 1
        col += i - start
        tokens.append(Token(filename, text[start:i], start_line, start_col))

    return tokens
