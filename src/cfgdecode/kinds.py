"""Type descriptors: one probe turning a Python type into a decoding kind."""

from __future__ import annotations

import dataclasses
import types
from dataclasses import dataclass
from enum import Enum, auto
from typing import Annotated, Any, Union, get_args, get_origin

from .capabilities import has_text_codec
from .errors import DefinitionError
from .numeric import NATIVE_FLOAT, NATIVE_INT, FloatBits, IntBits


class Kind(Enum):
    CODEC = auto()
    BOOL = auto()
    INT = auto()
    FLOAT = auto()
    TEXT = auto()
    SEQUENCE = auto()
    MAPPING = auto()
    RECORD = auto()


# kinds allowed as mapping keys
SCALAR_KEY_KINDS = frozenset({Kind.BOOL, Kind.INT, Kind.TEXT})


@dataclass(frozen=True)
class TypeInfo:
    kind: Kind
    tp: Any
    name: str = ""
    int_bits: IntBits | None = None
    float_bits: FloatBits | None = None
    elem: Any = None   # sequence element / mapping value type
    key: Any = None    # mapping key type


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def unwrap_optional(tp: Any) -> Any:
    """``T | None`` → ``T``; anything else is returned unchanged."""
    if get_origin(tp) in (Union, types.UnionType):
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def is_optional(tp: Any) -> bool:
    return unwrap_optional(tp) is not tp


def split_annotated(tp: Any) -> tuple[Any, tuple]:
    if get_origin(tp) is Annotated:
        base, *meta = get_args(tp)
        return base, tuple(meta)
    return tp, ()


def is_record(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def type_name(tp: Any) -> str:
    """Short human name of *tp* for diagnostics."""
    tp = unwrap_optional(tp)
    base, meta = split_annotated(tp)
    for m in meta:
        if isinstance(m, IntBits):
            return f"{'int' if m.signed else 'uint'}{m.bits}"
        if isinstance(m, FloatBits):
            return f"float{m.bits}"
    origin = get_origin(base)
    if origin is not None:
        args = ", ".join(type_name(a) for a in get_args(base))
        return f"{getattr(origin, '__name__', str(origin))}[{args}]"
    return getattr(base, "__name__", str(base))


# ---------------------------------------------------------------------------
# describe
# ---------------------------------------------------------------------------

def describe(tp: Any) -> TypeInfo:
    """Classify *tp*, raising DefinitionError for types that cannot be decoded.

    ``Optional`` is looked through; the codec capability is probed before the
    structural kind so a class can take over its own parsing.
    """
    tp = unwrap_optional(tp)
    base, meta = split_annotated(tp)
    name = type_name(tp)

    if has_text_codec(base):
        return TypeInfo(Kind.CODEC, base, name)
    if base is bool:
        return TypeInfo(Kind.BOOL, base, name)
    if base is int:
        bits = next((m for m in meta if isinstance(m, IntBits)), NATIVE_INT)
        return TypeInfo(Kind.INT, base, name, int_bits=bits)
    if base is float:
        bits = next((m for m in meta if isinstance(m, FloatBits)), NATIVE_FLOAT)
        return TypeInfo(Kind.FLOAT, base, name, float_bits=bits)
    if base is str:
        return TypeInfo(Kind.TEXT, base, name)

    origin = get_origin(base)
    args = get_args(base)
    if origin is list and len(args) == 1:
        return TypeInfo(Kind.SEQUENCE, base, name, elem=args[0])
    if origin is dict and len(args) == 2:
        return TypeInfo(Kind.MAPPING, base, name, key=args[0], elem=args[1])
    if is_record(base):
        return TypeInfo(Kind.RECORD, base, name)

    raise DefinitionError(f"unmarshal into {type_name(tp)} is not supported")


def check_map_key(info: TypeInfo) -> TypeInfo:
    """Describe the key type of a mapping, which must be a plain scalar."""
    key_info = None
    if not is_optional(info.key):
        try:
            key_info = describe(info.key)
        except DefinitionError:
            pass
    if key_info is None or key_info.kind not in SCALAR_KEY_KINDS:
        raise DefinitionError(
            f"unmarshaling into a {type_name(info.tp)} is not supported: "
            "key can only be one of integer number type, boolean and string"
        )
    return key_info
