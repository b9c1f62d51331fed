"""Tests for format selection and codec dispatch."""

from pathlib import Path

import pytest

from config_core import (
    Format,
    Node,
    UnsupportedFormat,
    deduce_format,
    dump,
    parse,
)


# ---------------------------------------------------------------------------
# Format / deduce_format
# ---------------------------------------------------------------------------

class TestFormatName:
    @pytest.mark.parametrize(
        "name, fmt",
        [("json", Format.JSON), ("JSON", Format.JSON), ("yaml", Format.YAML), ("yml", Format.YAML)],
    )
    def test_known(self, name, fmt):
        assert Format.from_name(name) is fmt

    def test_unknown(self):
        with pytest.raises(UnsupportedFormat):
            Format.from_name("toml")

    def test_unsupported_is_value_error(self):
        with pytest.raises(ValueError):
            Format.from_name("ini")


class TestDeduceFormat:
    @pytest.mark.parametrize(
        "path, fmt",
        [
            ("config.json", Format.JSON),
            ("config.yml", Format.YAML),
            ("dir/config.yaml", Format.YAML),
            (Path("CONFIG.YAML"), Format.YAML),
        ],
    )
    def test_extensions(self, path, fmt):
        assert deduce_format(path) is fmt

    @pytest.mark.parametrize("path", ["config.toml", "config", "json"])
    def test_unknown_extension(self, path):
        with pytest.raises(UnsupportedFormat):
            deduce_format(path)


def test_parse_and_dump_dispatch():
    node = parse('{"a": [1]}', Format.JSON)
    assert node == parse("a:\n  - 1\n", "yaml")
    assert dump(node, "json") == '{\n    "a": [\n        1\n    ]\n}'
    assert dump(node, Format.YAML) == "a:\n- 1\n"


def test_dispatch_unknown_format():
    with pytest.raises(UnsupportedFormat):
        dump(Node(), "xml")
    with pytest.raises(UnsupportedFormat):
        parse("", 3)
