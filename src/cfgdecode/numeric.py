"""Sized numeric types and the parsing rules for each numeric family."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass
from typing import Annotated


@dataclass(frozen=True)
class IntBits:
    """Marks an ``int`` as a fixed-width integer."""

    bits: int
    signed: bool = True

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


@dataclass(frozen=True)
class FloatBits:
    """Marks a ``float`` as single (32) or double (64) precision."""

    bits: int


Int8 = Annotated[int, IntBits(8)]
Int16 = Annotated[int, IntBits(16)]
Int32 = Annotated[int, IntBits(32)]
Int64 = Annotated[int, IntBits(64)]

Uint = Annotated[int, IntBits(64, signed=False)]
Uint8 = Annotated[int, IntBits(8, signed=False)]
Uint16 = Annotated[int, IntBits(16, signed=False)]
Uint32 = Annotated[int, IntBits(32, signed=False)]
Uint64 = Annotated[int, IntBits(64, signed=False)]

Float32 = Annotated[float, FloatBits(32)]
Float64 = Annotated[float, FloatBits(64)]

# plain ``int`` / ``float`` annotations
NATIVE_INT = IntBits(64)
NATIVE_FLOAT = FloatBits(64)


_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)
# hexadecimal mantissa with a mandatory binary exponent, e.g. 0x1.8p-2
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)p[+-]?[0-9]+",
    re.IGNORECASE,
)


def _syntax(text: str) -> ValueError:
    return ValueError(f'parsing "{text}": invalid syntax')


def _range(text: str) -> ValueError:
    return ValueError(f'parsing "{text}": value out of range')


def parse_int(text: str, width: IntBits = NATIVE_INT) -> int:
    """Parse a base-10 integer that must fit *width*.

    Raises ValueError for anything but an optionally signed run of digits
    (no sign at all for unsigned types) or for values that do not fit.
    """
    pattern = _SIGNED_RE if width.signed else _UNSIGNED_RE
    if not pattern.fullmatch(text):
        raise _syntax(text)
    value = int(text)
    if not width.min <= value <= width.max:
        raise _range(text)
    return value


def parse_float(text: str, width: FloatBits = NATIVE_FLOAT) -> float:
    """Parse a decimal or hexadecimal float, rounding to single precision for 32-bit targets."""
    if _HEX_FLOAT_RE.fullmatch(text):
        try:
            value = float.fromhex(text)
        except OverflowError:
            raise _range(text) from None
    elif _FLOAT_RE.fullmatch(text):
        value = float(text)
    else:
        raise _syntax(text)
    literal_inf = "inf" in text.lower()
    if math.isinf(value) and not literal_inf:
        raise _range(text)
    if width.bits == 32:
        try:
            value = struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError:
            raise _range(text) from None
    return value
