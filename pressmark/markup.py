"""Immutable markup node tree used to compose and serialize HTML documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, TypeVar, Union

from markupsafe import escape

T = TypeVar("T")

VOID_ELEMENTS = frozenset({"meta", "link", "br", "hr", "img", "input"})
DOCTYPE = "<!DOCTYPE html>"


@dataclass(frozen=True, slots=True)
class Text:
    """Plain text, escaped when rendered."""

    value: str


@dataclass(frozen=True, slots=True)
class Raw:
    """Trusted, pre-rendered markup emitted verbatim (e.g. content bodies)."""

    html: str


@dataclass(frozen=True, slots=True)
class Group:
    """Transparent sequence of nodes with no wrapping element."""

    children: tuple["Node", ...] = ()


@dataclass(frozen=True, slots=True)
class Conditional:
    """Render ``node`` when ``condition`` holds, otherwise ``otherwise`` (if any)."""

    condition: bool
    node: "Node"
    otherwise: "Node | None" = None

    @property
    def selected(self) -> "Node | None":
        return self.node if self.condition else self.otherwise


@dataclass(frozen=True, slots=True)
class ForEach:
    """Subtrees produced by mapping a builder over a sequence, flattened on output."""

    children: tuple["Node", ...] = ()


@dataclass(frozen=True, slots=True)
class Element:
    """An HTML element with ordered attributes and children."""

    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple["Node", ...] = ()

    def attribute(self, name: str) -> str | None:
        for key, value in self.attributes:
            if key == name:
                return value
        return None

    @property
    def classes(self) -> tuple[str, ...]:
        value = self.attribute("class")
        return tuple(value.split()) if value else ()

    def child_nodes(self) -> Iterator["Node"]:
        """Yield direct content children, flattening groups and control nodes."""
        for child in self.children:
            yield from _flatten(child)

    def child_elements(self) -> list["Element"]:
        return [child for child in self.child_nodes() if isinstance(child, Element)]

    def iter_elements(self) -> Iterator["Element"]:
        """Traverse the tree depth-first, yielding self then descendant elements."""
        yield self
        for child in self.child_elements():
            yield from child.iter_elements()

    def find_all(self, tag: str, class_: str | None = None) -> list["Element"]:
        return [
            node
            for node in self.iter_elements()
            if node.tag == tag and (class_ is None or class_ in node.classes)
        ]

    def find(self, tag: str, class_: str | None = None) -> "Element | None":
        matches = self.find_all(tag, class_)
        return matches[0] if matches else None

    def text_content(self) -> str:
        parts: list[str] = []
        for child in self.child_nodes():
            if isinstance(child, Text):
                parts.append(child.value)
            elif isinstance(child, Element):
                parts.append(child.text_content())
        return "".join(parts)


@dataclass(frozen=True, slots=True)
class Document:
    """A complete HTML document rooted at an ``<html>`` element."""

    root: Element
    doctype: str = field(default=DOCTYPE)

    @property
    def head(self) -> Element:
        found = self.root.find("head")
        if found is None:
            raise LookupError("document has no <head> element")
        return found

    @property
    def body(self) -> Element:
        found = self.root.find("body")
        if found is None:
            raise LookupError("document has no <body> element")
        return found

    def render(self) -> str:
        return render_document(self)


Node = Union[Text, Raw, Group, Conditional, ForEach, Element]
Child = Union[Node, str, None]


def _flatten(node: Node) -> Iterator[Node]:
    if isinstance(node, (Group, ForEach)):
        for child in node.children:
            yield from _flatten(child)
    elif isinstance(node, Conditional):
        selected = node.selected
        if selected is not None:
            yield from _flatten(selected)
    else:
        yield node


def _coerce(children: Iterable[Child]) -> tuple[Node, ...]:
    nodes: list[Node] = []
    for child in children:
        if child is None:
            continue
        if isinstance(child, str):
            nodes.append(Text(child))
        else:
            nodes.append(child)
    return tuple(nodes)


def _attribute_name(name: str) -> str:
    # ``class_`` and ``http_equiv`` style keywords map to ``class`` / ``http-equiv``.
    return name.rstrip("_").replace("_", "-")


def element(tag: str, *children: Child, **attributes: str | None) -> Element:
    """Build an element; attributes set to ``None`` are omitted."""
    attrs = tuple(
        (_attribute_name(name), str(value)) for name, value in attributes.items() if value is not None
    )
    return Element(tag=tag, attributes=attrs, children=_coerce(children))


def text(value: object) -> Text:
    return Text(str(value))


def raw(value: str) -> Raw:
    return Raw(value)


def group(*children: Child) -> Group:
    return Group(_coerce(children))


def if_(condition: bool, node: Child, otherwise: Child = None) -> Conditional:
    """Tagged conditional node; only the selected branch is rendered."""
    (then_node,) = _coerce([node]) or (Group(),)
    other = _coerce([otherwise])
    return Conditional(condition=bool(condition), node=then_node, otherwise=other[0] if other else None)


def for_each(items: Iterable[T], builder: Callable[[T], Child]) -> ForEach:
    """Map ``builder`` over ``items``; an empty sequence yields an empty node."""
    return ForEach(_coerce(builder(item) for item in items))


def _tag_builder(tag: str) -> Callable[..., Element]:
    def build(*children: Child, **attributes: str | None) -> Element:
        return element(tag, *children, **attributes)

    build.__name__ = tag
    build.__doc__ = f"Build a ``<{tag}>`` element."
    return build


html = _tag_builder("html")
head = _tag_builder("head")
body = _tag_builder("body")
meta = _tag_builder("meta")
title = _tag_builder("title")
link = _tag_builder("link")
header = _tag_builder("header")
nav = _tag_builder("nav")
ul = _tag_builder("ul")
li = _tag_builder("li")
a = _tag_builder("a")
div = _tag_builder("div")
h1 = _tag_builder("h1")
h2 = _tag_builder("h2")
p = _tag_builder("p")
span = _tag_builder("span")
article = _tag_builder("article")
footer = _tag_builder("footer")


def render(node: Node) -> str:
    """Serialize a node (and its subtree) to an HTML string."""
    return "".join(_render_parts(node))


def _render_parts(node: Node) -> Iterator[str]:
    if isinstance(node, Text):
        yield str(escape(node.value))
    elif isinstance(node, Raw):
        yield node.html
    elif isinstance(node, (Group, ForEach)):
        for child in node.children:
            yield from _render_parts(child)
    elif isinstance(node, Conditional):
        selected = node.selected
        if selected is not None:
            yield from _render_parts(selected)
    elif isinstance(node, Element):
        attrs = "".join(f' {name}="{escape(value)}"' for name, value in node.attributes)
        yield f"<{node.tag}{attrs}>"
        if node.tag in VOID_ELEMENTS:
            return
        for child in node.children:
            yield from _render_parts(child)
        yield f"</{node.tag}>"
    else:  # pragma: no cover - guarded by the Node union
        raise TypeError(f"Unsupported markup node: {node!r}")


def render_document(document: Document) -> str:
    """Serialize a full document, including its doctype."""
    return f"{document.doctype}{render(document.root)}"


__all__ = [
    "Child",
    "Conditional",
    "Document",
    "Element",
    "ForEach",
    "Group",
    "Node",
    "Raw",
    "Text",
    "a",
    "article",
    "body",
    "div",
    "element",
    "footer",
    "for_each",
    "group",
    "h1",
    "h2",
    "head",
    "header",
    "html",
    "if_",
    "li",
    "link",
    "meta",
    "nav",
    "p",
    "raw",
    "render",
    "render_document",
    "span",
    "text",
    "title",
    "ul",
]
