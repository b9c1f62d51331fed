"""Conversion protocol between Nodes and Python values.

Built-in conversions cover ``str``, ``bool``, integral and real numbers,
``list`` and ``dict``. Any other type converts through a custom converter,
looked up once per type and cached:

1. an internal hook defined on the type itself:
   ``__serialize__(self, node)`` / ``__deserialize__(self, node)``;
2. otherwise an external converter registered with :func:`serializer` /
   :func:`deserializer` for the type or the nearest base class in its MRO.

Serializers populate the given Node; deserializers populate an instance
created with ``cls.__new__(cls)`` (``__init__`` is not called).
"""

from __future__ import annotations

import numbers
from functools import lru_cache
from typing import Any, Callable, ClassVar, get_origin

from .errors import IntegerOverflow, NotConvertible, TypeMismatch
from .node import INT64_MAX, INT64_MIN, Node, NodeType


Serializer = Callable[[Any, Node], None]
Deserializer = Callable[[Node, Any], None]

_serializers: dict[type, Serializer] = {}
_deserializers: dict[type, Deserializer] = {}


# ---------------------------------------------------------------------------
# Fixed-width integers
# ---------------------------------------------------------------------------

class FixedWidthInt(int):
    """An ``int`` restricted to a range; out-of-range values raise IntegerOverflow."""

    min_value: ClassVar[int]
    max_value: ClassVar[int]

    def __new__(cls, value: int = 0) -> FixedWidthInt:
        if not cls.min_value <= value <= cls.max_value:
            raise IntegerOverflow(value, cls.__name__)
        return super().__new__(cls, value)


class Int8(FixedWidthInt):
    min_value, max_value = -(2 ** 7), 2 ** 7 - 1


class Int16(FixedWidthInt):
    min_value, max_value = -(2 ** 15), 2 ** 15 - 1


class Int32(FixedWidthInt):
    min_value, max_value = -(2 ** 31), 2 ** 31 - 1


class Int64(FixedWidthInt):
    min_value, max_value = INT64_MIN, INT64_MAX


class UInt8(FixedWidthInt):
    min_value, max_value = 0, 2 ** 8 - 1


class UInt16(FixedWidthInt):
    min_value, max_value = 0, 2 ** 16 - 1


class UInt32(FixedWidthInt):
    min_value, max_value = 0, 2 ** 32 - 1


class UInt64(FixedWidthInt):
    min_value, max_value = 0, 2 ** 64 - 1


# ---------------------------------------------------------------------------
# Built-in categories
# ---------------------------------------------------------------------------

def type_name(target: Any) -> str:
    """Best-effort readable name of a conversion target, for messages."""
    return getattr(target, "__qualname__", None) or repr(target)


@lru_cache(maxsize=None)
def category_of(target: Any) -> NodeType | None:
    """Map a Python type onto the Node variant it converts to/from, if any."""
    target = get_origin(target) or target
    if not isinstance(target, type):
        return None
    if issubclass(target, bool):
        return NodeType.Boolean
    if issubclass(target, numbers.Integral):
        return NodeType.Integer
    if issubclass(target, numbers.Real):
        return NodeType.Floating
    if issubclass(target, str):
        return NodeType.String
    if issubclass(target, list):
        return NodeType.Sequence
    if issubclass(target, dict):
        return NodeType.Object
    return None


_ACCESSORS: dict[NodeType, Callable[[Node], Any]] = {
    NodeType.String: Node.as_string,
    NodeType.Boolean: Node.as_boolean,
    NodeType.Integer: Node.as_integer,
    NodeType.Floating: Node.as_floating,
    NodeType.Sequence: lambda node: list(node.as_sequence()),
    NodeType.Object: lambda node: dict(node.as_object()),
}


# ---------------------------------------------------------------------------
# Custom converter registry
# ---------------------------------------------------------------------------

def register_serializer(cls: type, func: Serializer) -> None:
    _serializers[cls] = func
    find_serializer.cache_clear()


def register_deserializer(cls: type, func: Deserializer) -> None:
    _deserializers[cls] = func
    find_deserializer.cache_clear()


def serializer(cls: type) -> Callable[[Serializer], Serializer]:
    """Decorator registering ``func(value, node)`` as the external serializer of *cls*."""
    def decorate(func: Serializer) -> Serializer:
        register_serializer(cls, func)
        return func
    return decorate


def deserializer(cls: type) -> Callable[[Deserializer], Deserializer]:
    """Decorator registering ``func(node, output)`` as the external deserializer of *cls*."""
    def decorate(func: Deserializer) -> Deserializer:
        register_deserializer(cls, func)
        return func
    return decorate


def _external(registry: dict[type, Callable], cls: type) -> Callable | None:
    for base in cls.__mro__:
        if base in registry:
            return registry[base]
    return None


@lru_cache(maxsize=None)
def find_serializer(cls: Any) -> Serializer | None:
    """Internal ``__serialize__`` hook first, then the external registry."""
    if not isinstance(cls, type):
        return None
    hook = getattr(cls, "__serialize__", None)
    if hook is not None:
        return hook
    return _external(_serializers, cls)


@lru_cache(maxsize=None)
def find_deserializer(cls: Any) -> Deserializer | None:
    """Internal ``__deserialize__`` hook first, then the external registry.

    The returned callable always takes ``(node, output)``.
    """
    if not isinstance(cls, type):
        return None
    hook = getattr(cls, "__deserialize__", None)
    if hook is not None:
        return lambda node, output: hook(output, node)
    return _external(_deserializers, cls)


# ---------------------------------------------------------------------------
# Node ↔ value
# ---------------------------------------------------------------------------

def node_to(node: Node, target: Any) -> Any:
    """Convert *node* to *target*.

    Built-in category first (TypeMismatch if the variant disagrees), then a
    discovered deserializer; anything else raises NotConvertible.
    """
    category = category_of(target)
    target = get_origin(target) or target
    if category is not None:
        value = _ACCESSORS[category](node)
        return value if isinstance(value, target) else target(value)

    deserialize = find_deserializer(target)
    if deserialize is None:
        raise NotConvertible(
            f"Conversion {node.type().name} -> {type_name(target)} failed: "
            "no deserializer."
        )
    output = target.__new__(target)
    deserialize(node, output)
    return output


def to_payload(value: Any) -> Any:
    """Turn *value* into the payload a Node stores.

    Nodes are deep-copied; list and dict members that are not Nodes are
    converted recursively.
    """
    if isinstance(value, Node):
        return value.copy()._value
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return str(value)
    if isinstance(value, numbers.Integral):
        value = int(value)
        if not INT64_MIN <= value <= INT64_MAX:
            raise IntegerOverflow(value, NodeType.Integer.name)
        return value
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, (list, tuple)):
        return [Node(item) for item in value]
    if isinstance(value, dict):
        fields: dict[str, Node] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeMismatch(
                    type_name(type(key)), NodeType.String.name,
                    f"Object keys must be strings, got {type_name(type(key))}.",
                )
            fields[key] = Node(item)
        return fields

    serialize = find_serializer(type(value))
    if serialize is None:
        raise NotConvertible(
            f"Conversion {type_name(type(value))} -> Node failed: no serializer."
        )
    output = Node()
    serialize(value, output)
    return output._value
