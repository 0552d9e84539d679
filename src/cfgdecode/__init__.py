"""cfgdecode — type-driven decoding of directive-style configuration tokens."""

from .capabilities import Args, ArgumentAccess, ArgumentCollector, Validator
from .decoder import Ref, decode, decode_value, unmarshal, unmarshal_with_head
from .dispenser import Dispenser, TokenSource
from .errors import CfgDecodeError, DefinitionError, TokenError, token_error
from .fields import FieldIndex, build_field_index, embed, key
from .lexer import tokenize
from .numeric import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)
from .stream import TokenStream
from .token import Token

__all__ = [
    "unmarshal",
    "unmarshal_with_head",
    "decode",
    "decode_value",
    "Ref",
    "Token",
    "TokenSource",
    "TokenStream",
    "Dispenser",
    "tokenize",
    "key",
    "embed",
    "FieldIndex",
    "build_field_index",
    "Args",
    "ArgumentAccess",
    "ArgumentCollector",
    "Validator",
    "CfgDecodeError",
    "DefinitionError",
    "TokenError",
    "token_error",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Float32",
    "Float64",
]
