#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/richdoc/nodes.py
"""Rich document model used by the editor.

The rich document is a tree of blocks and inlines whose text lives in
*leaves*: runs of characters sharing one set of marks. Formatting is flat
(``{"bold", "italic"}`` on a leaf) rather than nested as in Markdown.

JSON format
-----------
Every node serializes to a dict tagged with ``kind``::

    {"kind": "document", "data": {}, "nodes": [...]}
    {"kind": "block", "type": "paragraph", "data": {}, "isVoid": false, "nodes": [...]}
    {"kind": "inline", "type": "link", "data": {"url": "..."}, "isVoid": false, "nodes": [...]}
    {"kind": "text", "leaves": [{"text": "hi", "marks": [{"type": "bold"}]}]}

``from_dict`` also accepts ``object`` in place of ``kind``, a root written as
``{"kind": "block", "type": "root", ...}``, a ``{"document": ...}`` wrapper,
leaves without ``marks`` and text nodes given as ``{"text": "..."}``.

Examples
--------
    >>> doc = RichDocument(nodes=[RichBlock("paragraph", nodes=[RichText([Leaf("hi", {"bold"})])])])
    >>> document_from_json(document_to_json(doc)) == doc
    True

"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Union

from mdbridge.constants import MARK_TYPES
from mdbridge.exceptions import ValidationError

RichNode = Union["RichBlock", "RichInline", "RichText"]

# Node types that hold no editable text
VOID_TYPES: frozenset[str] = frozenset({"image", "html", "component", "thematic-break", "break"})


def _marks_from_data(raw: Any) -> frozenset[str]:
    """Read marks given as ``[{"type": "bold"}]``, ``["bold"]`` or omitted."""
    if raw is None:
        return frozenset()
    if not isinstance(raw, (list, tuple, set, frozenset)):
        raise ValidationError("Leaf marks must be a list", parameter_name="marks", parameter_value=raw)
    marks = set()
    for mark in raw:
        mark_type = mark.get("type") if isinstance(mark, dict) else mark
        if not isinstance(mark_type, str):
            raise ValidationError(f"Invalid mark: {mark!r}", parameter_name="marks", parameter_value=raw)
        marks.add(mark_type)
    return frozenset(marks)


@dataclass
class Leaf:
    """Run of text sharing one mark set.

    Parameters
    ----------
    text : str, default = ""
        Characters of the run; a soft line break is ``"\\n"``
    marks : frozenset of str, default = empty
        Subset of ``{"bold", "italic", "strikethrough", "code"}``

    Raises
    ------
    ValidationError
        If a mark is not one of the known mark types

    """

    text: str = ""
    marks: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Freeze and validate the mark set."""
        self.marks = frozenset(self.marks)
        unknown = self.marks - MARK_TYPES
        if unknown:
            raise ValidationError(
                f"Unknown mark type(s): {', '.join(sorted(unknown))}",
                parameter_name="marks",
                parameter_value=sorted(self.marks),
            )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready dict, marks sorted by name."""
        return {"text": self.text, "marks": [{"type": mark} for mark in sorted(self.marks)]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Leaf":
        """Build a leaf from its dict form."""
        return cls(text=str(data.get("text", "")), marks=_marks_from_data(data.get("marks")))


@dataclass
class RichText:
    """Text node: an ordered list of leaves."""

    leaves: list[Leaf] = field(default_factory=list)

    kind = "text"

    @property
    def text(self) -> str:
        """Concatenated text of all leaves."""
        return "".join(leaf.text for leaf in self.leaves)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready dict."""
        return {"kind": self.kind, "leaves": [leaf.to_dict() for leaf in self.leaves]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RichText":
        """Build a text node from its dict form."""
        if "leaves" in data:
            leaves = data["leaves"]
            if not isinstance(leaves, list):
                raise ValidationError("Text leaves must be a list", parameter_name="leaves", parameter_value=leaves)
            return cls(leaves=[Leaf.from_dict(leaf) for leaf in leaves])
        return cls(leaves=[Leaf(text=str(data.get("text", "")), marks=_marks_from_data(data.get("marks")))])


@dataclass
class _ElementNode:
    type: str
    nodes: list[RichNode] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)
    is_void: bool = False

    kind = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready dict."""
        return {
            "kind": self.kind,
            "type": self.type,
            "data": dict(self.data),
            "isVoid": self.is_void,
            "nodes": [node.to_dict() for node in self.nodes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]):  # type: ignore[no-untyped-def]
        """Build the node and its descendants from dict form."""
        node_type = data.get("type")
        if not isinstance(node_type, str) or not node_type:
            raise ValidationError(f"{cls.kind} node without a type", parameter_name="type", parameter_value=node_type)
        node_data = data.get("data") or {}
        if not isinstance(node_data, dict):
            raise ValidationError("Node data must be an object", parameter_name="data", parameter_value=node_data)
        return cls(
            type=node_type,
            nodes=_nodes_from_data(data.get("nodes") or []),
            data=dict(node_data),
            is_void=bool(data.get("isVoid", node_type in VOID_TYPES)),
        )


@dataclass
class RichBlock(_ElementNode):
    """Block element (paragraph, heading, list, code, component...)."""

    kind = "block"


@dataclass
class RichInline(_ElementNode):
    """Inline element (link, image, html, component, break)."""

    kind = "inline"


@dataclass
class RichDocument:
    """Root of a rich document."""

    nodes: list[RichNode] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)

    kind = "document"

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready dict."""
        return {"kind": self.kind, "data": dict(self.data), "nodes": [node.to_dict() for node in self.nodes]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RichDocument":
        """Build a document from dict form.

        Raises
        ------
        ValidationError
            If the structure has an unknown kind or mark, or is not a dict

        """
        if not isinstance(data, dict):
            raise ValidationError(
                f"Rich document must be a dict, got {type(data).__name__}",
                parameter_name="document",
                parameter_value=data,
            )
        if "document" in data and isinstance(data["document"], dict):
            data = data["document"]

        kind = data.get("kind", data.get("object"))
        if kind not in ("document", "block"):
            raise ValidationError(f"Unknown root kind: {kind!r}", parameter_name="kind", parameter_value=kind)
        if kind == "block" and data.get("type") != "root":
            raise ValidationError(
                "A block root must have type 'root'", parameter_name="type", parameter_value=data.get("type")
            )
        return cls(nodes=_nodes_from_data(data.get("nodes") or []), data=dict(data.get("data") or {}))


_NODE_CLASSES: dict[str, Any] = {
    "block": RichBlock,
    "inline": RichInline,
    "text": RichText,
}


def node_from_dict(data: dict[str, Any]) -> RichNode:
    """Build any non-root node from its dict form.

    Raises
    ------
    ValidationError
        For an unknown ``kind``

    """
    if not isinstance(data, dict):
        raise ValidationError(f"Node must be a dict, got {type(data).__name__}", parameter_value=data)
    kind = data.get("kind", data.get("object"))
    node_class = _NODE_CLASSES.get(kind)  # type: ignore[arg-type]
    if node_class is None:
        raise ValidationError(f"Unknown node kind: {kind!r}", parameter_name="kind", parameter_value=kind)
    return node_class.from_dict(data)


def _nodes_from_data(items: Any) -> list[RichNode]:
    if not isinstance(items, list):
        raise ValidationError("Node children must be a list", parameter_name="nodes", parameter_value=items)
    return [node_from_dict(item) for item in items]


def void_node(
    node_class: type[RichBlock] | type[RichInline],
    node_type: str,
    data: dict[str, Any] | None = None,
    marks: Iterable[str] = (),
) -> RichBlock | RichInline:
    """Create a void node holding one empty leaf with the given marks.

    Examples
    --------
        >>> void_node(RichInline, "break").to_dict()["nodes"]
        [{'kind': 'text', 'leaves': [{'text': '', 'marks': []}]}]

    """
    return node_class(
        type=node_type,
        nodes=[RichText(leaves=[Leaf(text="", marks=frozenset(marks))])],
        data=data or {},
        is_void=True,
    )


def document_to_json(document: RichDocument, indent: int | None = None) -> str:
    """Serialize a rich document to a JSON string.

    Parameters
    ----------
    document : RichDocument
        Document to serialize
    indent : int or None, default = None
        Indentation (None for compact output)

    Returns
    -------
    str
        JSON text; non-ASCII characters are kept as they are

    """
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False)


def document_from_json(json_str: str) -> RichDocument:
    """Deserialize a rich document from a JSON string.

    Raises
    ------
    json.JSONDecodeError
        If the string is not valid JSON
    ValidationError
        If the JSON is not a valid rich document

    """
    return RichDocument.from_dict(json.loads(json_str))
