"""Whole-file helpers around the codecs."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import OpenError, SaveError
from .formats import Format, deduce_format, dump, parse
from .node import Node

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def read_all_text(path: str | Path) -> str:
    try:
        with open(path, "r", encoding=ENCODING) as f:
            text = f.read()
    except OSError as error:
        raise OpenError(f"Cannot read {path}: {error}") from error
    logger.debug("Read %d chars from %s", len(text), path)
    return text


def write_all_text(path: str | Path, text: str) -> None:
    try:
        with open(path, "w", encoding=ENCODING) as f:
            f.write(text)
    except OSError as error:
        raise SaveError(f"Cannot write {path}: {error}") from error
    logger.debug("Wrote %d chars to %s", len(text), path)


def open_config(path: str | Path, fmt: Format | str | None = None) -> Node:
    """Load a configuration file.

    The format is deduced from the extension (``.json``, ``.yml``, ``.yaml``)
    unless *fmt* is given. The format is checked before the file is read.
    """
    if fmt is None:
        fmt = deduce_format(path)
    elif isinstance(fmt, str):
        fmt = Format.from_name(fmt)
    return parse(read_all_text(path), fmt)


def save_config(node: Node, path: str | Path, fmt: Format | str | None = None) -> None:
    """Write *node* to *path*, deducing the format like :func:`open_config`."""
    if fmt is None:
        fmt = deduce_format(path)
    elif isinstance(fmt, str):
        fmt = Format.from_name(fmt)
    write_all_text(path, dump(node, fmt))
