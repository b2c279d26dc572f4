"""Encode Document objects as dotMind JSON or freemind XML."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET

from .models import Document, Node


def encode_json(document: Document) -> bytes:
    """Serialize a Document as the compact ``map.json`` payload.

    Leaves are written with ``"children": []`` rather than omitting the key.
    """
    root: dict = {}
    for node, obj in _pair_nodes(document.node, root, _json_child):
        obj["title"] = node.text
        obj.setdefault("children", [])

    payload = {"map_version": document.version, "root": root}
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def encode_xml(document: Document) -> bytes:
    """Serialize a Document as a freemind ``.mm`` file (no XML declaration)."""
    map_elem = ET.Element("map")
    map_elem.set("version", document.version)

    top = ET.SubElement(map_elem, "node")
    for node, elem in _pair_nodes(document.node, top, _xml_child):
        elem.set("TEXT", node.text)

    return ET.tostring(map_elem, encoding="unicode").encode("utf-8")


def _json_child(parent: dict) -> dict:
    child: dict = {}
    parent.setdefault("children", []).append(child)
    return child


def _xml_child(parent: ET.Element) -> ET.Element:
    return ET.SubElement(parent, "node")


def _pair_nodes(root: Node, target, make_child):
    """Walk `root` in document order, yielding each node with its output object.

    `make_child(parent_target)` creates the output object for the next child.
    Child targets are created in order before descending so sibling order is
    kept.

    Raises:
        ValueError: If the node tree contains a cycle.
    """
    seen: set[int] = set()
    stack = [(root, target)]
    while stack:
        node, out = stack.pop()
        if id(node) in seen:
            raise ValueError(f"Node tree contains a cycle at {node.text!r}")
        seen.add(id(node))
        yield node, out

        pairs = [(child, make_child(out)) for child in node.children]
        stack.extend(reversed(pairs))
