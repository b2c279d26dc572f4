"""Decode dotMind JSON and freemind XML payloads into Document objects."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET

from .errors import DecodeError
from .models import Document, Node

# Each level costs a dict and a list when json.dumps serializes it, so
# 2 * DEFAULT_MAX_DEPTH has to stay well under sys.getrecursionlimit()
DEFAULT_MAX_DEPTH = 250


def decode_json(data: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Document:
    """Parse the ``map.json`` payload of a dotMind archive.

    Expected shape::

        {"map_version": "2.6", "root": {"title": "...", "children": [...]}}

    `map_version`, `title` and `children` may be absent or null; a missing
    title or version becomes ``""``, missing children become ``[]`` and a
    null child becomes an empty node.

    Raises:
        DecodeError: If the bytes aren't JSON, the tree is deeper than
            `max_depth`, or a structural field is missing or mistyped.
    """
    try:
        payload = json.loads(data)
    except RecursionError as exc:
        raise DecodeError(f"Node tree is nested deeper than {max_depth} levels") from exc
    except ValueError as exc:
        raise DecodeError(f"Invalid dotMind JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DecodeError("dotMind JSON must be an object")
    if not isinstance(payload.get("root"), dict):
        raise DecodeError("dotMind JSON has no 'root' object")

    version = payload.get("map_version")
    if version is None:
        version = ""
    if not isinstance(version, str):
        raise DecodeError(f"'map_version' must be a string, got {type(version).__name__}")

    root = Node()
    stack = [(payload["root"], root, 1)]
    while stack:
        obj, node, level = stack.pop()
        if level > max_depth:
            raise DecodeError(f"Node tree is nested deeper than {max_depth} levels")

        title = obj.get("title")
        if title is None:
            title = ""
        if not isinstance(title, str):
            raise DecodeError(f"'title' must be a string, got {type(title).__name__}")
        node.text = title

        children = obj.get("children")
        if children is None:
            continue
        if not isinstance(children, list):
            raise DecodeError(f"'children' must be a list, got {type(children).__name__}")
        for child_obj in children:
            if child_obj is None:
                child_obj = {}
            if not isinstance(child_obj, dict):
                raise DecodeError("Every child node must be a JSON object")
            child = Node()
            node.children.append(child)
            stack.append((child_obj, child, level + 1))

    return Document(version=version, node=root)


def decode_xml(data: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Document:
    """Parse a freemind ``.mm`` document.

    Only the ``version`` attribute of ``<map>`` and the ``TEXT`` attribute and
    nesting of ``<node>`` elements are read; icons, fonts, rich content and
    other child elements are ignored.

    Raises:
        DecodeError: If the bytes aren't well-formed XML, the document element
            isn't ``<map>`` with exactly one ``<node>``, or the tree is deeper
            than `max_depth`.
    """
    try:
        root_elem = ET.fromstring(data)
    except ET.ParseError as exc:
        raise DecodeError(f"Invalid freemind XML: {exc}") from exc

    if root_elem.tag != "map":
        raise DecodeError(f"Expected <map> document element, found <{root_elem.tag}>")

    top_nodes = root_elem.findall("node")
    if len(top_nodes) != 1:
        raise DecodeError(f"<map> must contain exactly one <node>, found {len(top_nodes)}")

    root = Node()
    stack = [(top_nodes[0], root, 1)]
    while stack:
        elem, node, level = stack.pop()
        if level > max_depth:
            raise DecodeError(f"Node tree is nested deeper than {max_depth} levels")

        node.text = elem.get("TEXT", "")
        for child_elem in elem.findall("node"):
            child = Node()
            node.children.append(child)
            stack.append((child_elem, child, level + 1))

    return Document(version=root_elem.get("version", ""), node=root)
