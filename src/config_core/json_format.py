"""JSON codec: text ↔ Node."""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from .errors import JsonDumpError, JsonParseError, NodeError
from .node import INT64_MAX, INT64_MIN, Node, NodeType

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 4


# ---------------------------------------------------------------------------
# Parse
# ---------------------------------------------------------------------------

def _reject_constant(name: str) -> Any:
    raise JsonParseError(f"Invalid number literal: {name}")


def _to_node(value: Any) -> Node:
    if value is None or isinstance(value, (str, bool)):
        return Node(value)
    if isinstance(value, float):
        # literals such as 1e400 overflow to inf
        if not math.isfinite(value):
            raise JsonParseError(f"Number {value} is out of range")
        return Node(value)
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise JsonParseError(f"Integer {value} is outside the 64-bit range")
        return Node(value)
    if isinstance(value, list):
        output = Node([])
        elements = output.as_sequence()
        for element in value:
            elements.append(_to_node(element))
        return output
    if isinstance(value, dict):
        output = Node({})
        fields = output.as_object()
        for key, element in value.items():
            fields[key] = _to_node(element)
        return output
    raise JsonParseError(f"Unsupported JSON value type: {type(value).__name__}")


def parse(text: str) -> Node:
    """Parse a JSON document into a Node tree.

    Raises JsonParseError on malformed input, ``NaN``/``Infinity`` literals,
    numbers too large for a double, or integers that do not fit in 64 bits.
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as error:
        raise JsonParseError(str(error)) from error
    node = _to_node(data)
    logger.debug("Parsed JSON document (%d chars) into %s node", len(text), node.type().name)
    return node


# ---------------------------------------------------------------------------
# Dump
# ---------------------------------------------------------------------------

def _from_node(node: Node) -> Any:
    kind = node.type()
    if kind is NodeType.Null:
        return None
    if kind is NodeType.String:
        return node.as_string()
    if kind is NodeType.Boolean:
        return node.as_boolean()
    if kind is NodeType.Integer:
        return node.as_integer()
    if kind is NodeType.Floating:
        return node.as_floating()
    if kind is NodeType.Sequence:
        return [_from_node(element) for element in node.as_sequence()]
    return {key: _from_node(element) for key, element in node.as_object().items()}


def dump(node: Node, indent: int | None = DEFAULT_INDENT) -> str:
    """Write *node* as pretty-printed JSON (``indent=None`` for one line).

    Raises JsonDumpError for an undeterminable node type or a value JSON
    cannot represent (NaN, infinities).
    """
    try:
        data = _from_node(node)
        text = json.dumps(data, indent=indent, ensure_ascii=False, allow_nan=False)
    except (NodeError, ValueError) as error:
        raise JsonDumpError(str(error)) from error
    logger.debug("Dumped %s node to JSON (%d chars)", node.type().name, len(text))
    return text
