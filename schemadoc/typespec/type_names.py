"""
Type Names - Human readable names for raw field types.

`normalize_type` accepts anything a SpecSource or SchemaReflector can hand
back (contract nodes, Python classes, typing constructs, plain strings) and
always answers with a non-empty display string.
"""

import collections.abc
import inspect
import logging
import uuid
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from types import UnionType
from typing import (
    Annotated,
    Any,
    Dict,
    Iterable,
    List,
    Literal,
    Mapping,
    NewType,
    NotRequired,
    Optional,
    Required,
    Tuple,
    Union,
    get_args,
    get_origin,
)

from .nodes import ParameterizedPrimitive, Primitive, RemoteType

logger = logging.getLogger(__name__)

# Domain wrappers that schemas can annotate fields with
Encrypted = NewType("Encrypted", str)
Cents = NewType("Cents", int)

PRIMITIVE_NAMES: Dict[Any, str] = {
    str: "string",
    bytes: "binary",
    int: "integer",
    float: "float",
    bool: "boolean",
    Decimal: "decimal",
    uuid.UUID: "id",
    datetime: "utc_datetime_usec",
    date: "date",
    time: "time",
    dict: "map",
    list: "list",
    type(None): "null",
    object: "any",
    Any: "any",
}

TYPE_LABELS: Dict[str, str] = {
    "binary": "string",
    "id": "string",
    "utc_datetime_usec": "UTC Datetime with milliseconds",
    "Encrypted": "encrypted string",
    "Cents": "integer, in cents",
}

SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.Iterable,
)

WRAPPER_ORIGINS = (Annotated, Required, NotRequired)


def normalize_type(raw: Any, labels: Optional[Mapping[str, str]] = None) -> str:
    """
    Convert a raw field type into its display name

    Args:
        raw: Contract node, Python type, typing construct or type name
        labels: Extra `type name -> label` overrides

    Returns:
        Non-empty display string (unknown types fall back to their own name)
    """
    try:
        name = _normalize(raw, labels or {})
    except Exception as e:
        logger.debug(f"Could not normalize type {raw!r}: {e}")
        name = ""

    return name or repr(raw)


def _normalize(raw: Any, labels: Mapping[str, str]) -> str:
    values = enum_values(raw)
    if values:
        return " | ".join(f'"{_literal(value)}"' for value in values)

    origin = get_origin(raw)
    if origin in WRAPPER_ORIGINS:
        return _normalize(get_args(raw)[0], labels)

    if origin is Union or origin is UnionType:
        names = [_normalize(arg, labels) for arg in get_args(raw)]
        return " | ".join(unique(names))

    if origin in SEQUENCE_ORIGINS:
        args = get_args(raw)
        return f"list of {_normalize(args[0], labels)}" if args else "list"

    if origin in (dict, collections.abc.Mapping, collections.abc.MutableMapping):
        return "map"

    name = type_name(raw)
    return labels.get(name) or TYPE_LABELS.get(name) or name


def enum_values(raw: Any) -> Optional[Tuple[Any, ...]]:
    """Literal values of an enumerated type, None for anything else"""
    if isinstance(raw, ParameterizedPrimitive):
        return tuple(raw.values) or None

    if inspect.isclass(raw) and issubclass(raw, Enum):
        return tuple(member.value for member in raw)

    if get_origin(raw) is Literal:
        return get_args(raw)

    return None


def type_name(raw: Any) -> str:
    """Bare name of a type, without any label applied"""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (Primitive, ParameterizedPrimitive)):
        return raw.name
    if isinstance(raw, RemoteType):
        return raw.qualified_name
    if raw is None:
        return "null"

    try:
        if raw in PRIMITIVE_NAMES:
            return PRIMITIVE_NAMES[raw]
    except TypeError:
        # unhashable
        pass

    name = getattr(raw, "__qualname__", None) or getattr(raw, "__name__", None)
    if isinstance(name, str) and name:
        return name

    return str(raw)


def short_name(obj: Any) -> str:
    """Unqualified name of a module, class or dispatch table"""
    if obj is None:
        return ""
    if isinstance(obj, Mapping):
        return short_name(obj.get("_"))
    if isinstance(obj, str):
        return obj.rsplit(".", 1)[-1]
    if inspect.ismodule(obj):
        return obj.__name__.rsplit(".", 1)[-1]

    name = getattr(obj, "__name__", None)
    if isinstance(name, str) and name:
        return name

    return type(obj).__name__


def qualified_name(obj: Any) -> str:
    """Dotted `module.Name` of a module, class or function"""
    if obj is None:
        return ""
    if isinstance(obj, str):
        return obj
    if inspect.ismodule(obj):
        return obj.__name__

    qualname = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None)
    module = getattr(obj, "__module__", None)
    if qualname and module:
        return f"{module}.{qualname}"

    return str(qualname or obj)


def unique(items: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping the first occurrence"""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def _literal(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
