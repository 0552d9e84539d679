"""Token — the smallest located unit of configuration input."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """A word or brace together with where it came from."""

    file: str
    value: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        return self.value
