"""Assembling an ADF document from the leaves of an HTML tree."""

from __future__ import annotations

import json
from typing import Iterable, Optional

from htmltoadf.extractor import DocNode, HtmlNode, escape_hr, extract_leaves, parse_fragment
from htmltoadf.node_list import NodeList
from htmltoadf.placement import build_parent_path, find_valid_insertion_point, make_mark
from htmltoadf.structure import ContentType, content_type_for_node_type, is_valid_child_type

VALID_EMPTY_TYPES = frozenset({"hr", "iframe", "img", "br", "td"})
_TABLE_CELLS = frozenset({"td", "th"})
_INLINE_TYPES = ("text", "hardBreak")


def _parent_element(node: Optional[HtmlNode]) -> Optional[HtmlNode]:
    if node is None or node.parent is None or not node.parent.is_element:
        return None
    return node.parent


def _is_named(node: Optional[HtmlNode], names: Iterable[str]) -> bool:
    return node is not None and node.name in names


class _DocumentBuilder:
    """Places leaves one after another, reusing the paragraph opened last."""

    def __init__(self) -> None:
        self.nodes = NodeList()
        self.current_paragraph = 0

    def add(self, leaf: DocNode) -> None:
        parent_element = _parent_element(leaf.node)
        is_cell_paragraph = leaf.name == "p" and _is_named(parent_element, _TABLE_CELLS)
        if not leaf.text and leaf.name not in VALID_EMPTY_TYPES and not is_cell_paragraph:
            return

        content_type = content_type_for_node_type(leaf.name)
        parent, marks = build_parent_path(leaf, self.nodes)
        insertion_point = find_valid_insertion_point(leaf, parent, self.nodes)
        attributes = content_type.attributes(leaf.node) if content_type.attributes else []

        if leaf.name == "img":
            self._add_image(leaf, content_type, insertion_point, attributes)
        elif leaf.name == "iframe":
            self._add_iframe(insertion_point, attributes)
        elif leaf.name == "hr":
            self.nodes.push_anon(insertion_point, content_type.typename, "", [], [])
        elif leaf.name == "p":
            paragraph = self.nodes.push_anon(insertion_point, content_type.typename, "", [], [])
            self.nodes.push_anon(paragraph, "text", leaf.text, attributes, marks)
        elif leaf.name == "br" and self._in_table_cell(leaf):
            cell = find_valid_insertion_point(leaf, parent, self.nodes)
            self.nodes.push_anon(cell, "paragraph", "", [], [])
        else:
            self._add_default(leaf, content_type, parent, insertion_point, attributes, marks)

    @staticmethod
    def _in_table_cell(leaf: DocNode) -> bool:
        parent = _parent_element(leaf.node)
        if _is_named(parent, _TABLE_CELLS):
            return True
        return _is_named(parent, ("p",)) and _is_named(_parent_element(parent), _TABLE_CELLS)

    def _add_image(self, leaf: DocNode, content_type: ContentType,
                   insertion_point: int, attributes: list) -> None:
        if content_type.children is None:
            group = self.nodes.push_anon(insertion_point, content_type.typename, "", [], [])
            self.nodes.push_anon(group, "media", "", attributes, [])
            return
        parent_attrs, children = content_type.children(leaf.node)
        media_single = self.nodes.push_anon(
            insertion_point, content_type.typename, "", parent_attrs, []
        )
        for child in children:
            if not isinstance(child, dict) or not isinstance(child.get("type"), str):
                continue
            child_attrs = child.get("attrs")
            pairs = list(child_attrs.items()) if isinstance(child_attrs, dict) else []
            self.nodes.push_anon(media_single, child["type"], "", pairs, [])

    def _add_iframe(self, insertion_point: int, attributes: list) -> None:
        paragraph = self.nodes.push_anon(insertion_point, "paragraph", "", [], [])
        src = next((value for name, value in attributes if name == "src"), "")
        # The link target is the JSON rendering of the source value, quotes included.
        href = json.dumps(src, ensure_ascii=False)
        self.nodes.push_anon(
            paragraph,
            "text",
            "",
            [("text", "External Content")],
            [make_mark("link", [("href", href)])],
        )

    def _add_default(self, leaf: DocNode, content_type: ContentType, parent: int,
                     insertion_point: int, attributes: list, marks: list) -> None:
        typename = content_type.typename
        insertion_node = self.nodes.node(insertion_point)
        needs_paragraph = (
            insertion_node is None
            or not is_valid_child_type(insertion_node.node_type, "text", 0)
            or insertion_point == 1
        )

        if needs_paragraph and typename in _INLINE_TYPES:
            parent_node = self.nodes.node(parent)
            if parent_node is not None and is_valid_child_type(
                parent_node.node_type, "paragraph", 0
            ):
                insertion_point = parent
            insertion_node = self.nodes.node(insertion_point)
            last_child = (
                insertion_node.children[-1]
                if insertion_node is not None and insertion_node.children
                else 0
            )
            if not (self.current_paragraph != 0 and insertion_node is not None
                    and last_child == self.current_paragraph):
                self.current_paragraph = self.nodes.push_anon(
                    insertion_point, "paragraph", "", [], []
                )
            self.nodes.push_anon(
                self.current_paragraph,
                typename,
                leaf.text,
                attributes,
                marks if typename == "text" else [],
            )
            return

        if insertion_node is None or not is_valid_child_type(
            insertion_node.node_type, typename, len(insertion_node.children)
        ):
            return

        if leaf.text and typename != "text":
            holder = self.nodes.push_anon(insertion_point, typename, "", attributes, [])
            if not is_valid_child_type(typename, "text", 0):
                holder = self.nodes.push_anon(holder, "paragraph", "", [], [])
            self.nodes.push_anon(holder, "text", leaf.text, [], marks)
        else:
            self.nodes.push_anon(insertion_point, typename, leaf.text, attributes, marks)


def build_adf_doc(leaves: Iterable[DocNode]) -> NodeList:
    """Build the ADF node tree for a sequence of leaves."""
    builder = _DocumentBuilder()
    for leaf in leaves:
        builder.add(leaf)
    return builder.nodes


def convert_html_str_to_adf_str(html: str) -> str:
    """Convert an HTML string into a compact ADF JSON string."""
    root = parse_fragment(escape_hr(html))
    return build_adf_doc(extract_leaves(root)).to_json()