"""Record fields: external keys, the flattened field index and zero values."""

from __future__ import annotations

import logging
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, get_origin, get_type_hints

from .errors import DefinitionError
from .kinds import is_optional, is_record, split_annotated

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Field declaration helpers
# ---------------------------------------------------------------------------

def key(name: str, **kwargs: Any) -> Any:
    """Declare a dataclass field addressed as *name* in the configuration."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata["key"] = name
    return field(metadata=metadata, **kwargs)


def embed(**kwargs: Any) -> Any:
    """Declare an embedded record whose keys belong to the enclosing record."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata["embed"] = True
    return field(metadata=metadata, **kwargs)


def record_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except NameError as err:
        raise DefinitionError(f"cannot resolve field types of {cls.__name__}: {err}") from err


# ---------------------------------------------------------------------------
# Field index
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldPath:
    """Route from a record to one of its (possibly embedded) fields."""

    positions: tuple[int, ...]
    names: tuple[str, ...]
    tp: Any


@dataclass
class FieldIndex:
    record: type
    paths: dict[str, FieldPath] = field(default_factory=dict)

    def lookup(self, name: str) -> FieldPath | None:
        return self.paths.get(name)

    def keys(self) -> list[str]:
        """Keys in declaration order, embedded fields at their place."""
        return sorted(self.paths, key=lambda k: self.paths[k].positions)

    def __len__(self) -> int:
        return len(self.paths)


def build_field_index(cls: type) -> FieldIndex:
    """Flatten the keyed fields of record *cls* into one key namespace.

    Fields starting with ``_`` are skipped. Every other field needs a key;
    a missing or repeated key is a DefinitionError.
    """
    index = FieldIndex(record=cls)
    _collect(index.paths, cls, (), ())
    logger.debug("field index for %s: %s", cls.__name__, index.keys())
    return index


def _collect(
    paths: dict[str, FieldPath],
    cls: type,
    positions: tuple[int, ...],
    names: tuple[str, ...],
) -> None:
    hints = record_hints(cls)
    for pos, f in enumerate(fields(cls)):
        tp = hints.get(f.name, f.type)

        if f.metadata.get("embed"):
            sub, _ = split_annotated(tp)
            if not is_record(sub):
                raise DefinitionError(
                    f"embedded field '{f.name}' from {cls.__name__} is not a dataclass"
                )
            _collect(paths, sub, positions + (pos,), names + (f.name,))
            continue

        if f.name.startswith("_"):
            continue

        name = f.metadata.get("key")
        if name is None:
            raise DefinitionError(f"field '{f.name}' from {cls.__name__} doesn't have a key")
        if name in paths:
            raise DefinitionError(
                f"field '{f.name}' from {cls.__name__} has duplicate key '{name}'"
            )
        paths[name] = FieldPath(positions + (pos,), names + (f.name,), tp)


def set_field(values: dict[str, Any], path: FieldPath, value: Any) -> None:
    """Store *value* in the keyword tree *values*, one level per embedding."""
    level = values
    for name in path.names[:-1]:
        level = level.setdefault(name, {})
    level[path.names[-1]] = value


# ---------------------------------------------------------------------------
# Record construction
# ---------------------------------------------------------------------------

def zero_value(tp: Any) -> Any:
    """Value a field holds when the input does not mention it."""
    if is_optional(tp):
        return None
    base, _ = split_annotated(tp)
    if base in (bool, int, float, str):
        return base()
    origin = get_origin(base)
    if origin is list:
        return []
    if origin is dict:
        return {}
    if is_record(base):
        return build_record(base)
    return None


def build_record(cls: type, values: dict[str, Any] | None = None) -> Any:
    """Instantiate *cls* once from the keyword tree *values*.

    Embedded records are built from their own level of the tree. Fields not
    in the tree take their declared default, or their zero value.
    """
    values = values or {}
    hints = record_hints(cls)
    kwargs = {}
    late = {}
    for f in fields(cls):
        tp = hints.get(f.name, f.type)
        if f.name in values:
            value = values[f.name]
            if f.metadata.get("embed"):
                value = build_record(split_annotated(tp)[0], value)
        elif f.default is not MISSING or f.default_factory is not MISSING:
            continue
        elif f.init:
            value = zero_value(tp)
        else:
            continue

        if f.init:
            kwargs[f.name] = value
        else:
            late[f.name] = value

    record = cls(**kwargs)
    for name, value in late.items():
        object.__setattr__(record, name, value)
    return record
