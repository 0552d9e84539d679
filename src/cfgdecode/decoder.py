"""Decoder: type-driven conversion of a token stream into Python values.

The grammar read is that of a directive::

    name [arg1 arg2 ...] [{
        nested content
    }]

where the nested content follows the same rules recursively. What is read
is decided by the target type alone.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Generic, TypeVar

from .capabilities import accepts_arguments, collects_arguments, is_validator
from .dispenser import TokenSource
from .errors import CfgDecodeError, DefinitionError, TokenError
from .fields import build_field_index, build_record, set_field
from .kinds import Kind, TypeInfo, check_map_key, describe, type_name
from .numeric import parse_float, parse_int
from .stream import TokenStream
from .token import Token

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Ref(Generic[T]):
    """Destination box: the type to decode into and, afterwards, the value."""

    def __init__(self, tp: Any, value: T | None = None) -> None:
        self.type = tp
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({type_name(self.type)}, {self.value!r})"


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def unmarshal_with_head(source: TokenSource, destination: Any) -> Token:
    """Decode the directive read from *source* into *destination*.

    *destination* is a Ref or a dataclass instance; the latter has all of its
    state replaced. Returns the head token (the directive name). Nothing is
    stored unless the whole directive decodes and validates.
    """
    tp = _destination_type(destination)
    describe(tp)

    stream = TokenStream(source)
    if not stream.advance_same_line():
        raise CfgDecodeError("got no config data")
    head = stream.current()
    stream.confirm()
    logger.debug("decoding directive %r into %s", head.value, type_name(tp))

    value = decode_value(head, stream, tp)
    if is_validator(type(value)):
        value.validate(head)

    if stream.advance_any():
        extra = stream.current()
        raise TokenError(extra, f"got unexpected data '{extra}' for directive '{head}'")

    _store(destination, value)
    return head


def unmarshal(source: TokenSource, destination: Any) -> None:
    unmarshal_with_head(source, destination)


def decode(source: TokenSource, tp: Any) -> Any:
    """Decode a directive from *source* as a fresh value of type *tp*."""
    ref: Ref[Any] = Ref(tp)
    unmarshal(source, ref)
    return ref.value


def _destination_type(destination: Any) -> Any:
    if isinstance(destination, Ref):
        return destination.type
    if dataclasses.is_dataclass(destination) and not isinstance(destination, type):
        return type(destination)
    raise DefinitionError(f"unmarshal into non-reference {type(destination).__name__}")


def _store(destination: Any, value: Any) -> None:
    if isinstance(destination, Ref):
        destination.value = value
        return
    state = vars(destination)
    state.clear()
    state.update(vars(value))


# ---------------------------------------------------------------------------
# Recursive decoding
# ---------------------------------------------------------------------------

def decode_value(head: Token, stream: TokenStream, tp: Any) -> Any:
    """Read one value of type *tp*; *head* is the token that introduced it."""
    info = describe(tp)
    if info.kind is Kind.CODEC:
        return _decode_codec(head, stream, info)
    if info.kind is Kind.BOOL:
        return _decode_bool(head, stream, info)
    if info.kind is Kind.INT:
        tok = _need_arg(head, stream, info)
        return _parsed(stream, tok, parse_int, info.int_bits)
    if info.kind is Kind.FLOAT:
        tok = _need_arg(head, stream, info)
        return _parsed(stream, tok, parse_float, info.float_bits)
    if info.kind is Kind.TEXT:
        tok = _need_arg(head, stream, info)
        stream.confirm()
        return tok.value
    if info.kind is Kind.SEQUENCE:
        return _decode_sequence(head, stream, info)
    if info.kind is Kind.MAPPING:
        return _decode_mapping(head, stream, info)
    return _decode_record(head, stream, info)


def _need_arg(head: Token, stream: TokenStream, info: TypeInfo) -> Token:
    if not stream.advance_same_line():
        raise TokenError(head, f"got no data for {info.name}")
    return stream.current()


def _parsed(stream: TokenStream, tok: Token, parse, bits) -> Any:
    try:
        value = parse(tok.value, bits)
    except ValueError as err:
        raise TokenError(tok, str(err)) from err
    stream.confirm()
    return value


# -- Leaves -----------------------------------------------------------------

def _decode_codec(head: Token, stream: TokenStream, info: TypeInfo) -> Any:
    tok = _need_arg(head, stream, info)
    try:
        value = info.tp.from_text(tok.value)
    except ValueError:
        try:
            value = info.tp.from_text(f'"{tok.value}"')
        except ValueError as err:
            raise TokenError(tok, f"cannot unmarshal: {err}") from err
    stream.confirm()
    return value


def _decode_bool(head: Token, stream: TokenStream, info: TypeInfo) -> bool:
    tok = _need_arg(head, stream, info)
    if tok.value == "true":
        value = True
    elif tok.value == "false":
        value = False
    else:
        raise TokenError(tok, f"true or false expected, got {tok}")
    stream.confirm()
    return value


# -- Sequences --------------------------------------------------------------

def _decode_sequence(head: Token, stream: TokenStream, info: TypeInfo) -> list:
    """Read either ``key v1 v2 ... vn`` or ``key { v1 ... vn }``."""
    if stream.advance_same_line() and stream.current().value == "{":
        return _decode_blocked_sequence(stream, info)

    items = []
    while stream.advance_same_line():
        tok = stream.current()
        if tok.value == "{":
            raise TokenError(tok, f"unmarshal block with arguments into {info.name}")
        items.append(decode_value(tok, stream, info.elem))
    return items


def _decode_blocked_sequence(stream: TokenStream, info: TypeInfo) -> list:
    stream.confirm()

    items = []
    while stream.advance_any():
        tok = stream.current()
        if tok.value == "}":
            stream.confirm()
            return items
        items.append(decode_value(tok, stream, info.elem))

    raise TokenError(stream.current(), "} expected")


# -- Mappings ---------------------------------------------------------------

def _decode_mapping(head: Token, stream: TokenStream, info: TypeInfo) -> dict:
    check_map_key(info)

    if not stream.advance_same_line():
        raise TokenError(head, "{ expected")
    tok = stream.current()
    if tok.value != "{":
        raise TokenError(tok, f"{{ was expected, got {tok}")
    stream.confirm()

    result: dict = {}
    taken: dict[Any, Token] = {}
    while stream.advance_any():
        tok = stream.current()
        if tok.value == "}":
            stream.confirm()
            return result

        key = decode_value(tok, stream, info.key)
        if key in taken:
            first = taken[key]
            shown = str(key).lower() if isinstance(key, bool) else key
            raise TokenError(
                tok,
                f"using key {shown} which has already been taken at {first.file}:{first.line}",
            )
        taken[key] = tok
        result[key] = decode_value(tok, stream, info.elem)

    raise TokenError(stream.current(), "} expected")


# -- Records ----------------------------------------------------------------

def _decode_record(head: Token, stream: TokenStream, info: TypeInfo) -> Any:
    name = info.name
    index = build_field_index(info.tp)

    if not stream.advance_same_line():
        raise TokenError(head, f"unmarshal into {name}: no data")

    args: list[Token] = []
    values: dict[str, Any] = {}
    if stream.current().value != "{":
        if not _read_arguments(stream, info, args):
            # arguments alone are enough
            return _finish_record(head, info, values, args)
    else:
        stream.confirm()

    while stream.advance_any():
        tok = stream.current()
        stream.confirm()
        if tok.value == "}":
            return _finish_record(head, info, values, args)

        path = index.lookup(tok.value)
        if path is None:
            raise _unknown_key(tok, name, index.keys())
        set_field(values, path, decode_value(tok, stream, path.tp))

    raise TokenError(stream.current(), f"unmarshal into {name}: }} expected")


def _read_arguments(stream: TokenStream, info: TypeInfo, args: list[Token]) -> bool:
    """Gather the leading positional tokens into *args*; True if a block follows."""
    collects = collects_arguments(info.tp)
    if not collects and not accepts_arguments(info.tp):
        tok = stream.current()
        raise TokenError(tok, f"{{ expected, got {tok}")

    while stream.advance_same_line():
        tok = stream.current()
        stream.confirm()
        if tok.value == "{":
            return True
        args.append(tok)

    if collects:
        return False
    raise TokenError(stream.current(), f"unmarshal into {info.name}: {{ expected")


def _finish_record(head: Token, info: TypeInfo, values: dict[str, Any], args: list[Token]) -> Any:
    """Build the record from everything read, then hand it its arguments."""
    try:
        record = build_record(info.tp, values)
    except ValueError as err:
        raise TokenError(head, f"unmarshal into {info.name}: {err}") from err

    if collects_arguments(info.tp):
        for tok in args:
            try:
                record.append_argument(tok)
            except ValueError as err:
                raise TokenError(tok, str(err)) from err
    elif accepts_arguments(info.tp) and args:
        record.set_arguments([tok.value for tok in args])
    return record


def _unknown_key(tok: Token, name: str, allowed: list[str]) -> TokenError:
    quoted = [f"'{k}'" for k in allowed]
    if not quoted:
        msg = f"unmarshal into {name}: it has no fields to store config data, got field {tok}"
    elif len(quoted) == 1:
        msg = f"unmarshal into {name}: unknown key {tok}, only this one is allowed - {quoted[0]}"
    else:
        msg = (
            f"unmarshal into {name}: unknown key {tok}, "
            f"only these are allowed - {', '.join(quoted)}"
        )
    return TokenError(tok, msg)
