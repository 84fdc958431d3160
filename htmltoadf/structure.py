"""The ADF node vocabulary: permitted nesting and the HTML element mapping."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence, Tuple, Union

Pair = Tuple[str, str]
Attribute = Tuple[str, Any]


class Element(Protocol):
    """Anything that exposes HTML attributes by name."""

    def attr(self, name: str) -> Optional[str]:
        ...


AttributeExtractor = Callable[[Element], list]
ChildrenExtractor = Callable[[Element], Tuple[list, list]]
MarkAttributes = Union[Tuple[Pair, ...], Callable[[Element], list]]


@dataclass(frozen=True)
class PermittedChildren:
    """Child types allowed under a node; some types are only valid first."""

    permitted_types: Tuple[str, ...] = ()
    starts_with_types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AdfMark:
    """A mark with either fixed attribute pairs or a generator of them."""

    typename: str
    attributes: MarkAttributes = ()

    def attribute_pairs(self, element: Element) -> list:
        """Return the (name, value) string pairs of this mark for an element."""
        if callable(self.attributes):
            return list(self.attributes(element))
        return list(self.attributes)


@dataclass(frozen=True)
class ContentType:
    """How an HTML element maps onto an ADF node type."""

    typename: str
    marks: Tuple[AdfMark, ...] = ()
    attributes: Optional[AttributeExtractor] = field(default=None, compare=False)
    children: Optional[ChildrenExtractor] = field(default=None, compare=False)


_TABLE_CELL_CONTENT = (
    "codeBlock", "blockCard", "paragraph", "bulletList", "mediaSingle",
    "orderedList", "heading", "panel", "blockquote", "rule", "mediaGroup",
    "decisionList", "taskList", "extension", "embedCard", "nestedExpand",
)

LEGAL_CHILD_TYPES: Mapping[str, PermittedChildren] = MappingProxyType({
    "paragraph": PermittedChildren(("text", "emoji", "hardBreak")),
    "heading": PermittedChildren(("text", "emoji", "hardBreak")),
    "bulletList": PermittedChildren(("listItem",)),
    "orderedList": PermittedChildren(("listItem",)),
    "blockquote": PermittedChildren(("paragraph",)),
    "codeBlock": PermittedChildren(("paragraph",)),
    "listItem": PermittedChildren(
        permitted_types=(
            "paragraph", "mediaAdfPermittedChildren", "codeBlock",
            "orderedList", "bulletList",
        ),
        starts_with_types=("paragraph", "mediaSingle", "codeBlock"),
    ),
    "table": PermittedChildren(("tableRow",)),
    "tableRow": PermittedChildren(("tableHeader", "tableCell")),
    "tableHeader": PermittedChildren(_TABLE_CELL_CONTENT),
    "tableCell": PermittedChildren(_TABLE_CELL_CONTENT + ("hardBreak",)),
    "doc": PermittedChildren((
        "blockCard", "blockquote", "bodiedExtension", "bulletList", "codeBlock",
        "decisionList", "embedCard", "expand", "extension", "heading",
        "layoutSection", "mediaGroup", "mediaSingle", "orderedList", "panel",
        "paragraph", "rule", "table", "taskList",
    )),
})

_EMPTY_CHILDREN = PermittedChildren()

_I64_MIN, _I64_MAX = -(2 ** 63), 2 ** 63 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_i64(value: str) -> Optional[int]:
    if not _INTEGER.fullmatch(value):
        return None
    number = int(value)
    return number if _I64_MIN <= number <= _I64_MAX else None


def _iframe_attributes(element: Element) -> list:
    src = element.attr("src")
    return [("src", src)] if src is not None else []


def _heading(level: int) -> ContentType:
    return ContentType("heading", attributes=lambda _element: [("level", level)])


def _link_attributes(element: Element) -> list:
    href = element.attr("href")
    return [("href", href)] if href is not None else []


def _image_children(element: Element) -> Tuple[list, list]:
    layout = element.attr("data-layout") or "center"
    if element.attr("data-layout") is not None:
        layout = element.attr("data-layout")
    parent_attrs = [("layout", layout)]
    child: dict = {"type": "media", "attrs": {}}

    src = element.attr("src")
    media_id = element.attr("data-media-id")
    if src is not None:
        child["attrs"] = {"url": src, "type": "external"}
    elif media_id is not None:
        media_attrs: dict = {"id": media_id, "type": "file"}
        collection = element.attr("data-collection")
        if collection is not None:
            media_attrs["collection"] = collection
        alt = element.attr("alt")
        if alt is not None:
            media_attrs["alt"] = alt
        for source_name, key in (("data-width", "width"), ("data-height", "height")):
            raw = element.attr(source_name)
            if raw is not None:
                parsed = _parse_i64(raw)
                if parsed is not None:
                    media_attrs[key] = parsed
        width_type = element.attr("data-width-type")
        if width_type in ("pixel", "percentage"):
            media_attrs["widthType"] = width_type
        child["attrs"] = media_attrs

    return parent_attrs, [child]


def _marked_text(*marks: AdfMark) -> ContentType:
    return ContentType("text", marks=marks)


_STRONG = AdfMark("strong")
_EM = AdfMark("em")

NODE_MAP: Mapping[str, ContentType] = MappingProxyType({
    "p": ContentType("paragraph"),
    "blockquote": ContentType("blockquote"),
    "span": ContentType("text"),
    "text": ContentType("text"),
    "ul": ContentType("bulletList"),
    "ol": ContentType("orderedList"),
    "li": ContentType("listItem"),
    "hr": ContentType("rule"),
    "br": ContentType("hardBreak"),
    "html": ContentType("doc"),
    "body": ContentType("doc"),
    "table": ContentType("table"),
    "tr": ContentType("tableRow"),
    "th": ContentType("tableHeader"),
    "td": ContentType("tableCell"),
    "iframe": ContentType("paragraph", attributes=_iframe_attributes),
    "b": _marked_text(_STRONG),
    "strong": _marked_text(_STRONG),
    "i": _marked_text(_EM),
    "em": _marked_text(_EM),
    "u": _marked_text(AdfMark("underline")),
    "code": _marked_text(AdfMark("code")),
    "a": _marked_text(AdfMark("link", _link_attributes)),
    "sub": _marked_text(AdfMark("subsup", (("type", "sub"),))),
    "sup": _marked_text(AdfMark("subsup", (("type", "sup"),))),
    "h1": _heading(1),
    "h2": _heading(2),
    "h3": _heading(3),
    "h4": _heading(4),
    "h5": _heading(5),
    "h6": _heading(6),
    "img": ContentType("mediaSingle", children=_image_children),
})

_TEXT_TYPE = ContentType("text")


def content_type_for_node_type(node_type: str) -> ContentType:
    """Return the content type for an HTML element name; unknown names are text."""
    return NODE_MAP.get(node_type, _TEXT_TYPE)


def allowed_child_types(typename: str, index: int) -> Sequence[str]:
    """Return the child types allowed at the given position under a node type."""
    legal = LEGAL_CHILD_TYPES.get(typename, _EMPTY_CHILDREN)
    if legal.starts_with_types and index == 0:
        return legal.starts_with_types
    return legal.permitted_types


def is_valid_child_type(parent_typename: str, child_typename: str, index: int) -> bool:
    """Whether a child type may appear at a position under a parent type."""
    return child_typename in allowed_child_types(parent_typename, index)