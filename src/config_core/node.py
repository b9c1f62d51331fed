"""Node — the format-agnostic configuration tree."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Iterator

from .errors import IndexOutOfRange, MissingKey, NodeError, TypeMismatch


# ---------------------------------------------------------------------------
# NodeType
# ---------------------------------------------------------------------------

class NodeType(Enum):
    Null = auto()
    String = auto()
    Boolean = auto()
    Integer = auto()
    Floating = auto()
    Sequence = auto()
    Object = auto()


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------

class Node:
    """One point in a configuration tree.

    The payload is exactly one of ``None``, ``str``, ``bool``, ``int``
    (signed 64-bit), ``float``, ``list[Node]`` or ``dict[str, Node]``.
    Children are owned by their parent; assigning a Node anywhere copies it.

    Usage::

        root = Node()
        root["server"]["port"] = 8080      # Null auto-vivifies into Objects
        root["hosts"].push("a.example")    # ... and into a Sequence
        root["server"]["port"].to(int)     # → 8080
        root.at("missing")                 # raises MissingKey
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any = None) -> None:
        from .convert import to_payload
        self._value = to_payload(value)

    # -- Variant queries ------------------------------------------------

    def type(self) -> NodeType:
        value = self._value
        if value is None:
            return NodeType.Null
        if isinstance(value, str):
            return NodeType.String
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return NodeType.Boolean
        if isinstance(value, int):
            return NodeType.Integer
        if isinstance(value, float):
            return NodeType.Floating
        if isinstance(value, list):
            return NodeType.Sequence
        if isinstance(value, dict):
            return NodeType.Object
        raise NodeError("Failed to determine node type.")

    def is_null(self) -> bool:
        return self._value is None

    def is_string(self) -> bool:
        return isinstance(self._value, str)

    def is_boolean(self) -> bool:
        return isinstance(self._value, bool)

    def is_integer(self) -> bool:
        return isinstance(self._value, int) and not isinstance(self._value, bool)

    def is_floating(self) -> bool:
        return isinstance(self._value, float)

    def is_sequence(self) -> bool:
        return isinstance(self._value, list)

    def is_object(self) -> bool:
        return isinstance(self._value, dict)

    def is_(self, target: Any) -> bool:
        """Return True if *target* maps onto the variant this node holds.

        ``str`` → String, ``bool`` → Boolean, integral types → Integer,
        real types → Floating, ``list`` → Sequence, ``dict`` → Object.
        Any other type (including ones with custom converters) → False.
        """
        from .convert import category_of
        return category_of(target) is self.type()

    # -- Typed access ---------------------------------------------------

    def _expect(self, kind: NodeType) -> Any:
        actual = self.type()
        if actual is not kind:
            raise TypeMismatch(actual.name, kind.name)
        return self._value

    def as_string(self) -> str:
        return self._expect(NodeType.String)

    def as_boolean(self) -> bool:
        return self._expect(NodeType.Boolean)

    def as_integer(self) -> int:
        return self._expect(NodeType.Integer)

    def as_floating(self) -> float:
        return self._expect(NodeType.Floating)

    def as_sequence(self) -> list[Node]:
        """The live list of children; mutating it mutates the node."""
        return self._expect(NodeType.Sequence)

    def as_object(self) -> dict[str, Node]:
        """The live mapping of children; mutating it mutates the node."""
        return self._expect(NodeType.Object)

    # -- Conversion -----------------------------------------------------

    def to(self, target: Any) -> Any:
        """Convert to *target* via a built-in conversion or a deserializer."""
        from .convert import node_to
        return node_to(self, target)

    def value_or(self, default: Any, type_: Any = None) -> Any:
        """Return ``to(T)`` if ``is_(T)``, else *default*. Never raises.

        ``T`` is *type_* when given, otherwise ``type(default)``.
        """
        target = type(default) if type_ is None else type_
        if not self.is_(target):
            return default
        try:
            return self.to(target)
        except (NodeError, ValueError, TypeError, OverflowError):
            # the target's own constructor may reject the value
            return default

    def assign(self, value: Any) -> Node:
        """Replace the whole payload with the conversion of *value*."""
        from .convert import to_payload
        self._value = to_payload(value)
        return self

    def to_python(self) -> Any:
        """Return the tree as plain ``None``/``str``/``bool``/``int``/``float``/``list``/``dict``."""
        value = self._value
        if isinstance(value, list):
            return [item.to_python() for item in value]
        if isinstance(value, dict):
            return {key: item.to_python() for key, item in value.items()}
        return value

    # -- Structural access ----------------------------------------------

    def _field(self, key: str) -> Node:
        if self._value is None:
            self._value = {}
        if not isinstance(self._value, dict):
            actual = self.type().name
            raise TypeMismatch(
                actual, NodeType.Object.name,
                f"Cannot access field '{key}' on {actual} node.",
            )
        child = self._value.get(key)
        if child is None:
            child = self._value[key] = Node()
        return child

    def _element(self, index: int) -> Node:
        items = self.as_sequence()
        if not 0 <= index < len(items):
            raise IndexOutOfRange(index, len(items))
        return items[index]

    @staticmethod
    def _check_key(key: Any) -> None:
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            raise TypeError(
                f"Node keys must be str or int, not {type(key).__name__}"
            )

    def __getitem__(self, key: str | int) -> Node:
        """Mutable subscript: string keys auto-vivify a Null node into an Object."""
        self._check_key(key)
        if isinstance(key, str):
            return self._field(key)
        return self._element(key)

    def __setitem__(self, key: str | int, value: Any) -> None:
        self._check_key(key)
        # convert before touching the tree so a failure leaves it unchanged
        payload = Node(value)._value
        if isinstance(key, str):
            self._field(key)._value = payload
        else:
            self._element(key)._value = payload

    def at(self, key: str | int) -> Node:
        """Read-only subscript: never creates anything."""
        self._check_key(key)
        if isinstance(key, int):
            return self._element(key)
        if self._value is None:
            raise MissingKey(key)
        fields = self.as_object()
        if key not in fields:
            raise MissingKey(key)
        return fields[key]

    def length(self) -> int:
        if isinstance(self._value, (list, dict)):
            return len(self._value)
        return 0

    def contains(self, key: str) -> bool:
        return isinstance(key, str) and isinstance(self._value, dict) and key in self._value

    def push(self, value: Any) -> None:
        element = Node(value)
        if self._value is None:
            self._value = []
        if not isinstance(self._value, list):
            actual = self.type().name
            raise TypeMismatch(
                actual, NodeType.Sequence.name,
                f"Cannot push to {actual} node.",
            )
        self._value.append(element)

    def keys(self):
        return self.as_object().keys()

    def values(self):
        return self.as_object().values()

    def items(self):
        return self.as_object().items()

    # -- Python protocols -----------------------------------------------

    def __len__(self) -> int:
        return self.length()

    def __bool__(self) -> bool:
        return self._value is not None

    def __contains__(self, key: object) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[Any]:
        if isinstance(self._value, (list, dict)):
            return iter(self._value)
        if self._value is None:
            return iter(())
        actual = self.type().name
        raise TypeMismatch(actual, NodeType.Sequence.name, f"{actual} node is not iterable.")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.type() is other.type() and self._value == other._value

    __hash__ = None  # mutable

    def copy(self) -> Node:
        """Deep copy."""
        clone = Node.__new__(Node)
        value = self._value
        if isinstance(value, list):
            clone._value = [item.copy() for item in value]
        elif isinstance(value, dict):
            clone._value = {key: item.copy() for key, item in value.items()}
        else:
            clone._value = value
        return clone

    def __copy__(self) -> Node:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Node:
        return self.copy()

    def __repr__(self) -> str:
        return f"Node({self._value!r})"
