from typing import (
    Optional,
    Iterable,
    Iterator,
    Union,
    Callable,
    cast,
)
from mypy_extensions import KwArg, VarArg

# --
# HTMPL defines functions to create HTML snippets, used for the debugging
# output of responses.

HTML_ESCAPED = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#x27;"}
)

HTML_QUOTED = str.maketrans({"&": "&amp;", '"': "&quot;"})


def escape(text: str) -> str:
    return text.translate(HTML_ESCAPED)


def quoted(text: Optional[str]) -> str:
    return text.translate(HTML_QUOTED) if text else ""


TNodeContent = Union["Node", str, bool, float, int]
TAttributeContent = str | bool | float | int | None


class Node:
    __slots__ = ["name", "attributes", "children"]

    def __init__(
        self,
        name: str,
        children: Optional[Iterable[TNodeContent]] = None,
        attributes: Optional[dict[str, TAttributeContent]] = None,
    ):
        self.name = name
        self.attributes: dict[str, TAttributeContent] = attributes or {}
        self.children: list[TNodeContent] = [_ for _ in children] if children else []

    def iterXML(self) -> Iterator[str]:
        if self.name == "#raw":
            yield str(self.attributes.get("#value") or "")
        elif self.name == "#text":
            yield escape(str(self.attributes.get("#value") or ""))
        else:
            yield f"<{self.name}"
            for k, v in (self.attributes or {}).items():
                yield f' {k}="{quoted(str(v))}"' if v is not None else f" {k}"
            if not self.children:
                yield " />"
            else:
                yield ">"
                for _ in self.children:
                    if isinstance(_, Node):
                        yield from _.iterXML()
                    else:
                        yield escape(str(_))
                yield f"</{self.name}>"

    def __str__(self) -> str:
        return "".join(self.iterXML())


def text(text: str) -> Node:
    return Node("#text", attributes={"#value": text})


def raw(html: str) -> Node:
    """A node whose text is already escaped."""
    return Node("#raw", attributes={"#value": html})


def node(
    name: str,
    children: Optional[Iterable[TNodeContent]] = None,
    attributes: Optional[dict[str, TAttributeContent]] = None,
) -> Node:
    return Node(
        name,
        children=[text(_) if isinstance(_, str) else _ for _ in children or ()],
        attributes=attributes,
    )


NodeFactory = Callable[
    [
        VarArg(TNodeContent),
        KwArg(TAttributeContent),
    ],
    Node,
]


def nodeFactory(name: str) -> NodeFactory:
    def f(*children: TNodeContent, **attributes: TAttributeContent) -> Node:
        attrs: dict[str, TAttributeContent] = {}
        for k, v in attributes.items():
            attrs["class" if k == "_" else k] = v
        return node(name, children, attrs)

    f.__name__ = name
    return cast(NodeFactory, f)


class Markup:
    __slots__ = ["_factories", "_name"]

    def __init__(self, name: str, factories: dict[str, NodeFactory]):
        self._name: str = name
        self._factories: dict[str, NodeFactory] = factories

    def __getattribute__(self, name: str) -> NodeFactory:
        if name.startswith("_"):
            return cast(NodeFactory, super().__getattribute__(name))
        else:
            factories = self._factories
            if name not in factories:
                raise KeyError(
                    f"No tag {name}, pick one of {','.join(factories.keys())}"
                )
            else:
                return factories[name]


def markup(name: str, tags: list[str]) -> Markup:
    return Markup(name, {_: nodeFactory(_) for _ in tags})


# The tags used to render debug dumps
H: Markup = markup("html", ["pre", "br"])


# EOF
