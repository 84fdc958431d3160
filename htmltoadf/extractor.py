"""HTML parsing and extraction of the leaf nodes an ADF document is built from."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

import html5lib

# The parser closes every open element at an <hr>; a placeholder element keeps
# the surrounding structure open and is turned back into a rule afterwards.
HRBR_PLACEHOLDER = "hrbr"

_HR_TAG = re.compile(r"</?hr/?>")

_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000"
)


class NodeKind(Enum):
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


@dataclass(eq=False)
class HtmlNode:
    """A node of a parsed HTML tree; compared and hashed by identity."""

    kind: NodeKind
    name: str = ""
    text: str = ""
    attributes: dict = field(default_factory=dict)
    parent: Optional[HtmlNode] = field(default=None, repr=False)
    children: list = field(default_factory=list, repr=False)

    @property
    def is_element(self) -> bool:
        return self.kind is NodeKind.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.kind is NodeKind.TEXT

    def attr(self, name: str) -> Optional[str]:
        """Return an attribute value, or None when absent or not an element."""
        return self.attributes.get(name) if self.is_element else None

    def ancestors(self) -> Iterator[HtmlNode]:
        """Yield the parent, its parent, and so on up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def append(self, child: HtmlNode) -> None:
        child.parent = self
        self.children.append(child)


@dataclass
class DocNode:
    """A leaf of the HTML tree, under the name used to place it in the document."""

    name: str
    text: str
    node: HtmlNode

    def __repr__(self) -> str:
        inner = self.node.name if self.node.is_element else "None"
        return f"<{self.name}({inner})>{self.text}</{self.name}>"


def escape_hr(html: str) -> str:
    """Replace every hr tag with an empty placeholder element."""
    return _HR_TAG.sub(f"<{HRBR_PLACEHOLDER}></{HRBR_PLACEHOLDER}>", html)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _append_text(parent: HtmlNode, text: str) -> None:
    if parent.children and parent.children[-1].is_text:
        parent.children[-1].text += text
    else:
        parent.append(HtmlNode(NodeKind.TEXT, text=text))


def _adopt(parent: HtmlNode, source) -> None:
    if source.text:
        _append_text(parent, source.text)
    for child in source:
        if isinstance(child.tag, str):
            element = HtmlNode(
                NodeKind.ELEMENT,
                name=_local_name(child.tag),
                attributes={_local_name(k): v for k, v in child.attrib.items()},
            )
            parent.append(element)
            _adopt(element, child)
        else:
            parent.append(HtmlNode(NodeKind.COMMENT, text=child.text or ""))
        if child.tail:
            _append_text(parent, child.tail)


def parse_fragment(html: str) -> HtmlNode:
    """Parse an HTML fragment in body context under a root html element."""
    fragment = html5lib.parseFragment(
        html, container="body", treebuilder="etree", namespaceHTMLElements=False
    )
    root = HtmlNode(NodeKind.ELEMENT, name="html")
    _adopt(root, fragment)
    return root


def _trim(text: str) -> str:
    return text.strip(_WHITESPACE)


def is_inside_pre(node: HtmlNode) -> bool:
    """Whether any ancestor of the node is a pre element."""
    return any(a.is_element and a.name == "pre" for a in node.ancestors())


def _significant_text(node: HtmlNode) -> bool:
    if is_inside_pre(node):
        return bool(node.text)
    return bool(_trim(node.text))


def has_text_node(node: HtmlNode) -> bool:
    """Whether the subtree holds a line break or text that is not just whitespace."""
    for child in node.children:
        if child.is_element:
            if child.name == "br" or has_text_node(child):
                return True
        elif child.is_text and _significant_text(child):
            return True
    return False


def _closing_order(root: HtmlNode) -> Iterator[HtmlNode]:
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))


def extract_leaves(root: HtmlNode) -> list[DocNode]:
    """Return the leaf nodes of a tree in the order their elements close."""
    leaves: list[DocNode] = []
    for node in _closing_order(root):
        if node.is_element:
            name = node.name
            if name in ("iframe", "img", "br"):
                leaves.append(DocNode(name, "", node))
            elif name == HRBR_PLACEHOLDER:
                leaves.append(DocNode("hr", "", node))
            elif name == "td" and not has_text_node(node):
                leaves.append(DocNode("td", "", node))
        elif node.is_text and node.parent is not None and _significant_text(node):
            leaves.append(DocNode("text", node.text, node))
    return leaves