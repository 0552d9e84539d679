"""Exception hierarchy for cfgdecode."""

from __future__ import annotations

from .token import Token


class CfgDecodeError(Exception):
    """Base class for every error raised by cfgdecode."""


class DefinitionError(CfgDecodeError):
    """The destination or its type cannot be decoded into, whatever the input."""


class TokenError(CfgDecodeError):
    """Input problem tied to the token that triggered it.

    Rendered as ``<file>:<line>: <message>``.
    """

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(message)
        self.token = token
        self.message = message

    def __str__(self) -> str:
        return f"{self.token.file}:{self.token.line}: {self.message}"


def token_error(token: Token, msg: str, *args: object) -> TokenError:
    """Build a TokenError with ``%``-style formatting of *msg*.

    Meant for user capability hooks (argument collectors, validators) that
    want their diagnostics to carry a location::

        raise token_error(arg, "port %s is out of range", arg.value)
    """
    if args:
        msg = msg % args
    return TokenError(token, msg)
