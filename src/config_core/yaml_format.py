"""YAML codec: text ↔ Node, with scalar type resolution.

YAML does not tag plain scalars, so :func:`resolve_scalar` infers the variant
by trying, in order: Integer, Floating, Boolean, and falling back to String.
Quoted and block scalars are always strings; explicit ``!!str``, ``!!int``,
``!!float``, ``!!bool`` and ``!!null`` tags are honoured.

The dumper quotes a string whenever its plain form would resolve to another
variant, so ``parse(dump(node)) == node``.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Callable

import yaml
from yaml.nodes import MappingNode, ScalarNode, SequenceNode

from .errors import NodeError, YamlDumpError, YamlParseError
from .node import INT64_MAX, INT64_MIN, Node, NodeType

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 2

_NULL_TAG = "tag:yaml.org,2002:null"
_STR_TAG = "tag:yaml.org,2002:str"
_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_BOOL_TAG = "tag:yaml.org,2002:bool"
# Assigned by the loader to untagged plain scalars; never emitted.
_PLAIN_TAG = "tag:config-core,2024:plain"

_NULL_RE = re.compile(r"(?:~|null|Null|NULL|)\Z")
_INTEGER_RE = re.compile(r"(?:[-+]?[0-9]+|0x[0-9a-fA-F]+|0o[0-7]+)\Z")
_FLOATING_RE = re.compile(
    r"(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
    r"|[-+]?\.(?:inf|Inf|INF)"
    r"|\.(?:nan|NaN|NAN))\Z"
)
_TRUE_TOKENS = frozenset({"true", "True", "TRUE", "yes", "Yes", "YES", "on", "On", "ON"})
_FALSE_TOKENS = frozenset({"false", "False", "FALSE", "no", "No", "NO", "off", "Off", "OFF"})
_BOOLEAN_RE = re.compile(
    "(?:" + "|".join(sorted(_TRUE_TOKENS | _FALSE_TOKENS)) + r")\Z"
)


# ---------------------------------------------------------------------------
# Scalar resolution
# ---------------------------------------------------------------------------

def _integer(text: str) -> int | None:
    if not _INTEGER_RE.match(text):
        return None
    if text.startswith("0x"):
        value = int(text[2:], 16)
    elif text.startswith("0o"):
        value = int(text[2:], 8)
    else:
        value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def _floating(text: str) -> float | None:
    if not _FLOATING_RE.match(text):
        return None
    lowered = text.lower()
    if lowered.endswith(".inf"):
        return -math.inf if text.startswith("-") else math.inf
    if lowered == ".nan":
        return math.nan
    return float(text)


def _boolean(text: str) -> bool | None:
    if text in _TRUE_TOKENS:
        return True
    if text in _FALSE_TOKENS:
        return False
    return None


_TRIALS: tuple[Callable[[str], Any], ...] = (_integer, _floating, _boolean)


def resolve_scalar(text: str) -> Node:
    """Infer the Node variant of an untyped scalar.

    ``"42"`` → Integer, ``"42.0"`` → Floating, ``"true"`` → Boolean,
    ``"42abc"`` → String. Integers that overflow 64 bits become Floating.
    """
    for trial in _TRIALS:
        value = trial(text)
        if value is not None:
            return Node(value)
    return Node(text)


# ---------------------------------------------------------------------------
# PyYAML plumbing
# ---------------------------------------------------------------------------

class _Loader(yaml.SafeLoader):
    yaml_implicit_resolvers: dict = {}


_Loader.add_implicit_resolver(_NULL_TAG, _NULL_RE, None)
_Loader.add_implicit_resolver(_PLAIN_TAG, re.compile(r".*", re.DOTALL), None)


class _Dumper(yaml.SafeDumper):
    yaml_implicit_resolvers: dict = {}


for _tag, _pattern in (
    (_NULL_TAG, _NULL_RE),
    (_INT_TAG, _INTEGER_RE),
    (_FLOAT_TAG, _FLOATING_RE),
    (_BOOL_TAG, _BOOLEAN_RE),
):
    _Dumper.add_implicit_resolver(_tag, _pattern, None)


# ---------------------------------------------------------------------------
# Parse
# ---------------------------------------------------------------------------

_TAGGED: dict[str, tuple[Callable[[str], Any], str]] = {
    _INT_TAG: (_integer, NodeType.Integer.name),
    _FLOAT_TAG: (_floating, NodeType.Floating.name),
    _BOOL_TAG: (_boolean, NodeType.Boolean.name),
}


def _convert_scalar(node: ScalarNode) -> Node:
    tag, text = node.tag, node.value
    if tag == _NULL_TAG:
        return Node()
    if tag == _STR_TAG:
        return Node(text)
    if tag in _TAGGED:
        convert, kind = _TAGGED[tag]
        value = convert(text)
        if value is None:
            raise YamlParseError(f"Cannot read {text!r} as {kind} {node.start_mark}")
        return Node(value)
    # plain scalars and unknown tags
    return resolve_scalar(text)


def _convert(node: yaml.Node, active: set[int]) -> Node:
    if isinstance(node, ScalarNode):
        return _convert_scalar(node)

    if id(node) in active:
        raise YamlParseError(f"Recursive alias {node.start_mark}")
    active.add(id(node))
    try:
        if isinstance(node, SequenceNode):
            output = Node([])
            elements = output.as_sequence()
            for element in node.value:
                elements.append(_convert(element, active))
            return output

        if isinstance(node, MappingNode):
            output = Node({})
            fields = output.as_object()
            for key_node, value_node in node.value:
                if not isinstance(key_node, ScalarNode):
                    raise YamlParseError(f"Mapping keys must be scalars {key_node.start_mark}")
                fields[key_node.value] = _convert(value_node, active)
            return output
    finally:
        active.discard(id(node))

    raise YamlParseError(f"Undefined YAML node type: {type(node).__name__}")


def parse(text: str) -> Node:
    """Parse a single YAML document into a Node tree.

    Raises YamlParseError on malformed YAML, multiple documents, recursive
    aliases, non-scalar keys or values that contradict their explicit tag.
    """
    try:
        root = yaml.compose(text, Loader=_Loader)
    except yaml.YAMLError as error:
        raise YamlParseError(str(error)) from error
    node = Node() if root is None else _convert(root, set())
    logger.debug("Parsed YAML document (%d chars) into %s node", len(text), node.type().name)
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


def dump(node: Node, indent: int = DEFAULT_INDENT) -> str:
    """Write *node* as block-style YAML, keys in insertion order.

    Raises YamlDumpError for an undeterminable node type or a PyYAML error.
    """
    try:
        data = _from_node(node)
        text = yaml.dump(
            data,
            Dumper=_Dumper,
            indent=indent,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except NodeError as error:
        raise YamlDumpError(str(error)) from error
    except yaml.YAMLError as error:
        raise YamlDumpError(str(error)) from error
    logger.debug("Dumped %s node to YAML (%d chars)", node.type().name, len(text))
    return text
