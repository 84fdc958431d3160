"""A flat, handle-addressed tree of ADF nodes and its JSON rendering."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable

EMPTY_TYPES = frozenset({"media", "emoji", "rule", "hardBreak", "tableCell"})


@dataclass
class AdfNode:
    """One node of the ADF document being built."""

    node_type: str
    text: str = ""
    attributes: list = field(default_factory=list)
    marks: list = field(default_factory=list)
    parent: int = 0
    children: list = field(default_factory=list)

    def is_droppable(self) -> bool:
        """Whether this node carries nothing and may be left out of the output."""
        return not self.text and self.node_type not in EMPTY_TYPES and not self.children


class NodeList:
    """Nodes addressed by handles starting at 1; handle 0 means no node.

    Nodes pushed with a source node id are inserted at most once per id.
    """

    def __init__(self) -> None:
        self.nodes: list[AdfNode] = []
        self.handles: dict[Hashable, int] = {}

    @property
    def count(self) -> int:
        return len(self.nodes)

    def node(self, handle: int) -> AdfNode | None:
        """Return the node for a handle, or None for 0 or an unknown handle."""
        if 0 < handle <= len(self.nodes):
            return self.nodes[handle - 1]
        return None

    def delete(self, handle: int) -> None:
        """Forget every source id mapped to the given handle."""
        self.handles = {key: value for key, value in self.handles.items() if value != handle}

    def push(
        self,
        node_id: Hashable,
        parent_handle: int,
        node_type: str,
        text: str,
        attributes: Iterable,
        marks: Iterable,
    ) -> int:
        """Insert a node tied to a source id; an id seen before yields its existing handle."""
        existing = self.handles.get(node_id)
        if existing is not None:
            return existing
        handle = self._append(parent_handle, node_type, text, attributes, marks)
        self.handles[node_id] = handle
        return handle

    def push_anon(
        self,
        parent_handle: int,
        node_type: str,
        text: str,
        attributes: Iterable,
        marks: Iterable,
    ) -> int:
        """Insert a node not tied to any source id and return its handle."""
        return self._append(parent_handle, node_type, text, attributes, marks)

    def _append(self, parent_handle: int, node_type: str, text: str,
                attributes: Iterable, marks: Iterable) -> int:
        handle = len(self.nodes) + 1
        if parent_handle == handle:
            raise ValueError("a node cannot be its own parent")
        parent = self.node(parent_handle)
        if parent is not None:
            parent.children.append(handle)
        self.nodes.append(AdfNode(
            node_type=node_type,
            text=text,
            attributes=list(attributes),
            marks=list(marks),
            parent=parent_handle,
        ))
        return handle

    def to_dict(self) -> dict[str, Any]:
        """Return the document as JSON-ready dictionaries, rooted at handle 1."""
        root: dict[str, Any] = {"version": 1}
        root.update(self._render(1))
        return root

    def to_json(self) -> str:
        """Return the document as compact JSON text."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def _render(self, handle: int) -> dict[str, Any]:
        node = self.node(handle)
        if node is None:
            return {"type": "doc", "content": []}
        rendered: dict[str, Any] = {"type": node.node_type}
        if node.text:
            rendered["text"] = node.text
        if node.marks:
            rendered["marks"] = list(node.marks)
        if node.attributes:
            rendered["attrs"] = dict(node.attributes)
        if node.children:
            rendered["content"] = [
                self._render(child)
                for child in node.children
                if not self.nodes[child - 1].is_droppable()
            ]
        return rendered