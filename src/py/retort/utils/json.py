from typing import Any, TypeAlias, cast
import json as basejson
from .primitives import asPrimitive


TJSON: TypeAlias = None | int | float | bool | str | list[Any] | dict[str, Any]

# Compact output, as produced by most web stacks
JSON_SEPARATORS: tuple[str, str] = (",", ":")


def _default(value: Any) -> Any:
	if isinstance(value, bytes):
		return value.decode("utf8")
	raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def jsonText(value: Any) -> str:
	"""Encodes the value as a JSON string. Non-finite numbers, cyclic
	structures and values with no JSON form raise a `ValueError`."""
	try:
		return basejson.dumps(
			asPrimitive(value),
			separators=JSON_SEPARATORS,
			allow_nan=False,
			default=_default,
		)
	except RecursionError as e:
		raise ValueError("Circular reference detected") from e
	except TypeError as e:
		raise ValueError(str(e)) from e


def unjson(value: bytes | str) -> TJSON:
	"""Converts JSON-encoded text back to a value."""
	return cast(TJSON, basejson.loads(value))


# EOF
