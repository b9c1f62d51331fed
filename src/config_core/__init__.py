"""Config Core — a format-agnostic configuration tree with JSON and YAML codecs."""

from . import json_format, yaml_format
from .node import Node, NodeType
from .convert import (
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    deserializer,
    register_deserializer,
    register_serializer,
    serializer,
)
from .errors import (
    ConfigError,
    DumpError,
    IndexOutOfRange,
    IntegerOverflow,
    IoError,
    JsonDumpError,
    JsonError,
    JsonParseError,
    MissingKey,
    NodeError,
    NotConvertible,
    OpenError,
    ParseError,
    SaveError,
    TypeMismatch,
    UnsupportedFormat,
    YamlDumpError,
    YamlError,
    YamlParseError,
)
from .formats import Format, deduce_format, dump, parse
from .files import open_config, read_all_text, save_config, write_all_text

__all__ = [
    "Node",
    "NodeType",
    "json_format",
    "yaml_format",
    "Format",
    "deduce_format",
    "parse",
    "dump",
    "open_config",
    "save_config",
    "read_all_text",
    "write_all_text",
    "serializer",
    "deserializer",
    "register_serializer",
    "register_deserializer",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "ConfigError",
    "NodeError",
    "TypeMismatch",
    "MissingKey",
    "IndexOutOfRange",
    "IntegerOverflow",
    "NotConvertible",
    "ParseError",
    "DumpError",
    "JsonError",
    "JsonParseError",
    "JsonDumpError",
    "YamlError",
    "YamlParseError",
    "YamlDumpError",
    "UnsupportedFormat",
    "IoError",
    "OpenError",
    "SaveError",
]
