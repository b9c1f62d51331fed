"""Exception hierarchy for Config Core."""

from __future__ import annotations


class ConfigError(Exception):
    """Base class for every error raised by config_core."""


# ---------------------------------------------------------------------------
# Node faults
# ---------------------------------------------------------------------------

class NodeError(ConfigError):
    """Misuse of a Node (wrong variant, missing key, bad index...)."""


class TypeMismatch(NodeError, TypeError):
    """The node does not hold the variant the caller asked for."""

    def __init__(self, actual: str, requested: str, message: str | None = None) -> None:
        self.actual = actual
        self.requested = requested
        super().__init__(message or f"Conversion {actual} -> {requested} failed.")


class MissingKey(NodeError, KeyError):
    """Read-only access to a key an Object node does not have."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Missing key '{key}'.")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


class IndexOutOfRange(NodeError, IndexError):
    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"Index out of bounds (index: {index}, length: {length}).")


class IntegerOverflow(NodeError, OverflowError):
    """An integer does not fit the requested fixed-width type."""

    def __init__(self, value: int, target: str) -> None:
        self.value = value
        self.target = target
        super().__init__(f"Integer {value} does not fit in {target}.")


class NotConvertible(NodeError, TypeError):
    """No built-in conversion and no registered converter for a type."""


# ---------------------------------------------------------------------------
# Codec faults
# ---------------------------------------------------------------------------

class ParseError(ConfigError):
    """Input text could not be turned into a Node tree."""


class DumpError(ConfigError):
    """A Node tree could not be written out."""


class JsonError(ConfigError):
    pass


class JsonParseError(JsonError, ParseError):
    pass


class JsonDumpError(JsonError, DumpError):
    pass


class YamlError(ConfigError):
    pass


class YamlParseError(YamlError, ParseError):
    pass


class YamlDumpError(YamlError, DumpError):
    pass


# ---------------------------------------------------------------------------
# Format selection and file access
# ---------------------------------------------------------------------------

class UnsupportedFormat(ConfigError, ValueError):
    """The format name or file extension does not map to a codec."""


class IoError(ConfigError):
    pass


class OpenError(IoError):
    pass


class SaveError(IoError):
    pass
