from typing import Any
from time import struct_time
from decimal import Decimal
from datetime import date, datetime
from dataclasses import fields, is_dataclass
from pathlib import Path
from enum import Enum


TLiteral = bool | int | float | str | bytes
TComposite = (
    list[TLiteral] | dict[TLiteral, TLiteral] | set[TLiteral] | tuple[TLiteral, ...]
)
TComposite2 = (
    list[TLiteral | TComposite]
    | dict[TLiteral, TLiteral | TComposite]
    | set[TLiteral | TComposite]
    | tuple[TLiteral | TComposite, ...]
)
TComposite3 = (
    list[TLiteral | TComposite | TComposite2]
    | dict[TLiteral, TLiteral | TComposite | TComposite2]
    | set[TLiteral | TComposite | TComposite2]
    | tuple[TLiteral | TComposite | TComposite2, ...]
)
TPrimitive = bool | int | float | str | bytes | TComposite | TComposite2 | TComposite3


def isComposite(value: Any) -> bool:
    """Tells if the value is something that has entries (a mapping, a
    sequence or an object with fields), as opposed to a scalar."""
    if value is None or isinstance(value, (bool, int, float, str, bytes, Enum)):
        return False
    elif isinstance(value, (list, tuple, set, frozenset, dict)):
        return True
    elif is_dataclass(value) and not isinstance(value, type):
        return True
    else:
        return hasattr(value, "__dict__") and not callable(value)


def asPrimitive(value: Any, *, currentDepth: int = 0) -> Any:
    """Converts the given value to a primitive value, that can be converted
    to JSON or XML. Cyclic values are not detected and exhaust the
    recursion limit."""
    if value is None or type(value) in (bool, float, int, str, bytes):
        return value
    elif isinstance(value, tuple) and hasattr(value, "_fields"):
        t = type(value)
        f = getattr(t, "asPrimitive") if hasattr(t, "asPrimitive") else None
        return (
            f(value)
            if f
            else {
                k: asPrimitive(getattr(value, k), currentDepth=currentDepth + 1)
                for k in value._fields
            }
        )
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [asPrimitive(v, currentDepth=currentDepth + 1) for v in value]
    elif is_dataclass(value) and not isinstance(value, type):
        return {
            _.name: asPrimitive(
                getattr(value, _.name), currentDepth=currentDepth + 1
            )
            for _ in fields(value)
        }
    elif isinstance(value, Enum):
        return asPrimitive(value.value)
    elif isinstance(value, dict):
        return {
            asPrimitive(k): asPrimitive(v, currentDepth=currentDepth + 1)
            for k, v in value.items()
        }
    elif isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Path):
        return str(value)
    elif isinstance(value, datetime) or isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, struct_time):
        return list(value)
    elif isComposite(value):
        # Plain objects expose their public attributes
        return {
            k: asPrimitive(v, currentDepth=currentDepth + 1)
            for k, v in vars(value).items()
            if not k.startswith("_")
        }
    else:
        return value


# EOF
