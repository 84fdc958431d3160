"""Placing leaf nodes in the ADF tree: parent paths, marks and insertion points."""

from __future__ import annotations

import re
from itertools import takewhile
from typing import Iterable, Optional

from htmltoadf.extractor import DocNode, HtmlNode
from htmltoadf.node_list import NodeList
from htmltoadf.structure import (
    AdfMark,
    content_type_for_node_type,
    is_valid_child_type,
)

_FULL_HEX = re.compile(r"#([0-9A-F]{6})", re.IGNORECASE)
_HALF_HEX = re.compile(r"#([0-9A-F])([0-9A-F])([0-9A-F])", re.IGNORECASE)
_RGB = re.compile(
    r"RGB\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)", re.IGNORECASE | re.ASCII
)
_RGBA = re.compile(
    r"RGBA\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)",
    re.IGNORECASE | re.ASCII,
)

_I32_MAX = 2 ** 31 - 1
_CODE_COMPATIBLE = ("code", "link")


def _ascii_equals_ignore_case(value: str, expected: str) -> bool:
    return value.isascii() and value.lower() == expected


def make_mark(typename: str, pairs: Iterable) -> dict:
    """Return an ADF mark, with an attrs object only when pairs are given."""
    mark: dict = {"type": typename}
    attrs = {name: value for name, value in pairs}
    if attrs:
        mark["attrs"] = attrs
    return mark


def mark_value(mark: AdfMark, element: HtmlNode) -> dict:
    """Return the ADF mark that a mark definition produces for an element."""
    return make_mark(mark.typename, mark.attribute_pairs(element))


def extract_styles(node: HtmlNode) -> Optional[list]:
    """Return the [property, value] pairs of an inline style, or None without one."""
    inline_style = node.attr("style")
    if inline_style is None:
        return None
    declarations = (
        [part.strip() for part in declaration.split(":")]
        for declaration in inline_style.split(";")
    )
    return [pair for pair in declarations if len(pair) == 2]


def _rgb_hex(components: Iterable[str]) -> str:
    values = [int(component) for component in components]
    if any(value > _I32_MAX for value in values):
        raise ValueError("colour component out of range")
    return "".join(f"{value:02x}" for value in values)


def hex_code_for_color(color_str: str) -> Optional[str]:
    """Turn a hex or rgb(a) CSS colour into six hex digits, or None."""
    match = _FULL_HEX.search(color_str)
    if match:
        return match.group(1)
    match = _HALF_HEX.search(color_str)
    if match:
        r, g, b = match.groups()
        return f"{r}{r}{g}{g}{b}{b}"
    match = _RGB.search(color_str) or _RGBA.search(color_str)
    if match:
        return _rgb_hex(match.groups()[:3])
    return None


def remove_illegal_marks(marks: list) -> list:
    """Drop marks that may not accompany a code mark; other lists pass unchanged."""
    if any(mark.get("type") == "code" for mark in marks):
        return [mark for mark in marks if mark.get("type") in _CODE_COMPATIBLE]
    return list(marks)


def _style_marks(node: HtmlNode) -> Iterable[dict]:
    styles = extract_styles(node)
    if styles is None:
        return
    color = next(
        (value for name, value in styles if _ascii_equals_ignore_case(name, "color")),
        None,
    )
    if color is not None:
        text_color = hex_code_for_color(color)
        if text_color is not None:
            yield make_mark("textColor", [("color", f"#{text_color}")])
    decoration = next(
        (
            value
            for name, value in styles
            if _ascii_equals_ignore_case(name, "text-decoration")
        ),
        None,
    )
    if decoration is not None:
        if _ascii_equals_ignore_case(decoration, "underline"):
            yield make_mark("underline", [])
        elif _ascii_equals_ignore_case(decoration, "line-through"):
            yield make_mark("strike", [])


def build_parent_path(leaf: DocNode, node_list: NodeList) -> tuple[int, list]:
    """Insert the legal ancestors of a leaf and collect the marks they impose.

    Returns the handle of the nearest inserted ancestor and the marks that
    apply to the leaf.
    """
    ancestors = list(takewhile(lambda n: n.is_element, leaf.node.ancestors()))
    marks: list = []
    current_handle = 0

    for node in reversed(ancestors):
        content_type = content_type_for_node_type(node.name)
        marks.extend(mark_value(mark, node) for mark in content_type.marks)
        marks.extend(_style_marks(node))

        current = node_list.node(current_handle)
        if current is not None and (
            content_type.typename == "text"
            or not is_valid_child_type(
                current.node_type, content_type.typename, len(current.children)
            )
        ):
            continue

        attributes = content_type.attributes(node) if content_type.attributes else []
        current_handle = node_list.push(
            node, current_handle, content_type.typename, "", attributes, []
        )

    return current_handle, remove_illegal_marks(marks)


def find_valid_insertion_point(leaf: DocNode, parent: int, node_list: NodeList) -> int:
    """Climb from a parent handle to the nearest node that may hold the leaf.

    Nodes passed over are detached from their source ids; the document root is
    used when nothing below it fits.
    """
    typename = content_type_for_node_type(leaf.name).typename
    handle = parent
    while (parent_node := node_list.node(handle)) is not None:
        if node_list.node(parent_node.parent) is None:
            break
        if is_valid_child_type(parent_node.node_type, typename, 0):
            break
        if typename == "text" and is_valid_child_type(
            parent_node.node_type, "paragraph", 0
        ):
            break
        prior = handle
        handle = parent_node.parent
        node_list.delete(prior)
    return handle