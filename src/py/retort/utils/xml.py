from typing import Any, Iterator, NamedTuple, TypeAlias, Union
from .htmpl import escape
from .primitives import asPrimitive

# --
# An ad-hoc XML encoding of nested data. Sequences and mappings become
# elements, scalars become text leaves, and the elements of a sequence are
# named after the singular form of the sequence's name:
#
# ```
# {"users": [{"name": "Ann"}]}
# ```
#
# becomes
#
# ```
# <users>
# 	<user>
# 		<name>Ann</name>
# 	</user>
# </users>
# ```
#
# Only the text of leaves is escaped: element names are written as-is, and
# cyclic values recurse until the interpreter's recursion limit.

XML_DECLARATION: str = '<?xml version="1.0" encoding="utf-8"?>'


class XMLScalar(NamedTuple):
	"""A leaf, already converted to its text form."""

	text: str


class XMLSequence(NamedTuple):
	"""Values keyed by their position."""

	items: tuple["TXMLValue", ...]


class XMLMapping(NamedTuple):
	"""Values keyed by name, or by position when the key is an integer."""

	entries: tuple[tuple[str | int, "TXMLValue"], ...]


TXMLValue: TypeAlias = Union[XMLScalar, XMLSequence, XMLMapping]


def singularize(name: str) -> str:
	"""Returns the name without its trailing `s`, if any. This is the naive
	inverse of the English plural ("items" gives "item", but "cacti" stays
	"cacti") and must stay that way, as it defines the element names."""
	return name[:-1] if name.endswith("s") else name


def scalarText(value: Any) -> str:
	if value is None:
		return ""
	elif value is True or value is False:
		return "true" if value else "false"
	elif isinstance(value, (bytes, bytearray)):
		return bytes(value).decode("utf8", "replace")
	else:
		return str(value)


def key(value: Any) -> str | int:
	"""Integer keys are positional, anything else is a name."""
	return (
		value
		if isinstance(value, int) and not isinstance(value, bool)
		else scalarText(value)
	)


def classify(value: Any) -> TXMLValue:
	"""Classifies an already primitive value."""
	if isinstance(value, dict):
		return XMLMapping(tuple((key(k), classify(v)) for k, v in value.items()))
	elif isinstance(value, list):
		return XMLSequence(tuple(classify(_) for _ in value))
	else:
		return XMLScalar(scalarText(value))


def asXMLValue(value: Any) -> TXMLValue:
	"""Converts any value (see `asPrimitive`) to an XML value."""
	if isinstance(value, (XMLScalar, XMLSequence, XMLMapping)):
		return value
	return classify(asPrimitive(value))


def entries(value: XMLSequence | XMLMapping) -> Iterator[tuple[str | int, TXMLValue]]:
	if isinstance(value, XMLSequence):
		yield from enumerate(value.items)
	else:
		yield from value.entries


def encode(data: TXMLValue, node: str | int, depth: int, parent: str) -> Iterator[str]:
	"""Yields the lines encoding `data` as an element at the given depth. When
	`node` is a position, the element is named after its parent."""
	name: str = singularize(parent) if isinstance(node, int) else node
	indent: str = "\t" * depth
	if isinstance(data, XMLScalar):
		yield f"{indent}<{name}>{escape(data.text)}</{name}>\n"
	else:
		yield f"{indent}<{name}>\n"
		for k, v in entries(data):
			yield from encode(v, k, depth + 1, name)
		yield f"{indent}</{name}>\n"


def xmlEncode(value: Any, rootNode: str = "response") -> str:
	"""Encodes the value as an XML document. A mapping with a single entry
	uses that entry as the root element, any other value is wrapped in
	`rootNode`."""
	data: TXMLValue = asXMLValue(value)
	lines: list[str] = [XML_DECLARATION, "\n"]
	if isinstance(data, XMLMapping) and len(data.entries) == 1:
		k, v = data.entries[0]
		lines += encode(v, k, 0, rootNode)
	else:
		lines += encode(data, rootNode, 0, rootNode)
	return "".join(lines)


# EOF
