"""Format selection: names and file extensions → codec."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from types import ModuleType

from . import json_format, yaml_format
from .errors import UnsupportedFormat
from .node import Node

logger = logging.getLogger(__name__)


class Format(Enum):
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def from_name(cls, name: str) -> Format:
        """``"json"`` / ``"yaml"`` / ``"yml"``, case-insensitive."""
        key = name.strip().lower()
        if key == "yml":
            key = "yaml"
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedFormat(f"Undefined format: {name!r}") from None


_EXTENSIONS = {
    ".json": Format.JSON,
    ".yml": Format.YAML,
    ".yaml": Format.YAML,
}

_CODECS: dict[Format, ModuleType] = {
    Format.JSON: json_format,
    Format.YAML: yaml_format,
}


def deduce_format(path: str | Path) -> Format:
    """Pick a format from the file extension only; contents are never read."""
    suffix = Path(path).suffix.lower()
    try:
        fmt = _EXTENSIONS[suffix]
    except KeyError:
        raise UnsupportedFormat(f"Undefined format for extension {suffix!r}: {path}") from None
    logger.debug("Deduced %s format for %s", fmt.name, path)
    return fmt


def _codec(fmt: Format | str) -> ModuleType:
    if isinstance(fmt, str):
        fmt = Format.from_name(fmt)
    if fmt not in _CODECS:
        raise UnsupportedFormat(f"Undefined format: {fmt!r}")
    return _CODECS[fmt]


def parse(text: str, fmt: Format | str) -> Node:
    return _codec(fmt).parse(text)


def dump(node: Node, fmt: Format | str) -> str:
    return _codec(fmt).dump(node)
