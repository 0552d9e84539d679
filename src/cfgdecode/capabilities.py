"""Optional contracts a target type can satisfy to take part in decoding.

A record may capture the positional arguments that precede its block::

    proxy /api backend1 backend2 {
        timeout 30
    }

Two ways are offered. ``ArgumentCollector`` receives the arguments one token
at a time and may reject any of them; a record implementing it can also be
written with arguments only and no block at all. ``ArgumentAccess`` (use the
``Args`` mixin) receives the finished list once the ``{`` is seen, so the
block is mandatory. When a type satisfies both, the per-token form is used.
"""

from __future__ import annotations

from typing import Protocol

from .token import Token


class ArgumentCollector(Protocol):
    def append_argument(self, arg: Token) -> None:
        """Take the next positional argument; raise to reject it."""
        ...

    @property
    def arguments(self) -> list[str]: ...


class ArgumentAccess(Protocol):
    def set_arguments(self, items: list[str]) -> None: ...

    @property
    def arguments(self) -> list[str]: ...


class Validator(Protocol):
    def validate(self, head: Token) -> None:
        """Raise if the decoded value is not acceptable."""
        ...


class Args:
    """Mixin storing the positional arguments that precede a record's block."""

    def set_arguments(self, items: list[str]) -> None:
        # frozen records included
        object.__setattr__(self, "_arguments", list(items))

    @property
    def arguments(self) -> list[str]:
        return list(getattr(self, "_arguments", []))


# ---------------------------------------------------------------------------
# Probes
# ---------------------------------------------------------------------------
#
# Capabilities are looked up on the class: a record field that happens to be
# called ``validate`` or ``arguments`` is config data, not a hook.

def _has_method(tp: object, name: str) -> bool:
    return isinstance(tp, type) and callable(getattr(tp, name, None))


def has_text_codec(tp: object) -> bool:
    """True if *tp* builds its instances from a single token's text.

    Such a type exposes ``from_text(text)`` as a classmethod (or
    staticmethod) returning the new value and raising ValueError when the
    text is not acceptable.
    """
    return _has_method(tp, "from_text")


def collects_arguments(tp: object) -> bool:
    """True if *tp* implements ArgumentCollector."""
    return _has_method(tp, "append_argument")


def accepts_arguments(tp: object) -> bool:
    """True if *tp* implements ArgumentAccess."""
    return _has_method(tp, "set_arguments")


def is_validator(tp: object) -> bool:
    return _has_method(tp, "validate")
