"""Tests for the YAML codec and scalar resolution."""

import math

import pytest
import yaml

from config_core import DumpError, Node, NodeType, ParseError, YamlDumpError, YamlParseError, yaml_format
from config_core.yaml_format import resolve_scalar


# ---------------------------------------------------------------------------
# resolve_scalar
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, kind",
    [
        ("42", NodeType.Integer),
        ("-17", NodeType.Integer),
        ("+3", NodeType.Integer),
        ("0x1F", NodeType.Integer),
        ("0o17", NodeType.Integer),
        ("42.0", NodeType.Floating),
        ("1e3", NodeType.Floating),
        (".5", NodeType.Floating),
        ("-.inf", NodeType.Floating),
        ("true", NodeType.Boolean),
        ("False", NodeType.Boolean),
        ("yes", NodeType.Boolean),
        ("OFF", NodeType.Boolean),
        ("hello", NodeType.String),
        ("42abc", NodeType.String),
        ("1_000", NodeType.String),
        ("2024-01-15", NodeType.String),
        ("tRue", NodeType.String),
        ("y", NodeType.String),
    ],
)
def test_resolution_order(text, kind):
    assert resolve_scalar(text).type() is kind


def test_resolved_values():
    assert resolve_scalar("0x1F") == Node(31)
    assert resolve_scalar("0o17") == Node(15)
    assert resolve_scalar("007") == Node(7)
    assert resolve_scalar("42.0") == Node(42.0)
    assert resolve_scalar("no") == Node(False)
    assert resolve_scalar(".inf") == Node(math.inf)
    assert math.isnan(resolve_scalar(".NaN").as_floating())


def test_integer_overflow_falls_back_to_floating():
    node = resolve_scalar("99999999999999999999")
    assert node.type() is NodeType.Floating
    assert node.as_floating() == 1e20


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------

def test_parse_ports_are_integers():
    root = yaml_format.parse("ports:\n  - 8080\n  - 8081")
    ports = root.at("ports")
    assert ports.is_sequence()
    assert ports.to_python() == [8080, 8081]
    assert all(p.is_integer() for p in ports)


def test_parse_mapping():
    text = """
name: MyApp
version: 1
ratio: 0.75
debug: false
owner: ~
tags: [a, "1"]
"""
    root = yaml_format.parse(text)
    assert root.to_python() == {
        "name": "MyApp",
        "version": 1,
        "ratio": 0.75,
        "debug": False,
        "owner": None,
        "tags": ["a", "1"],
    }


@pytest.mark.parametrize("text", ["", "# only a comment\n", "null", "~"])
def test_parse_null_documents(text):
    assert yaml_format.parse(text).is_null()


def test_empty_value_is_null():
    assert yaml_format.parse("key:").at("key").is_null()


def test_quoted_scalars_stay_strings():
    root = yaml_format.parse("a: '42'\nb: \"true\"\nc: |\n  7\n")
    assert root.at("a") == Node("42")
    assert root.at("b") == Node("true")
    assert root.at("c") == Node("7\n")


def test_explicit_tags():
    root = yaml_format.parse("a: !!str 42\nb: !!float 3\nc: !!int '5'\nd: !!null ''\n")
    assert root.at("a") == Node("42")
    assert root.at("b") == Node(3.0)
    assert root.at("c") == Node(5)
    assert root.at("d").is_null()


def test_explicit_tag_contradiction():
    with pytest.raises(YamlParseError):
        yaml_format.parse("a: !!int abc")


def test_unknown_tag_resolves_as_plain():
    assert yaml_format.parse("a: !custom 12").at("a") == Node(12)


def test_numeric_keys_are_strings():
    root = yaml_format.parse("1: one\ntrue: yes")
    assert root.at("1") == Node("one")
    assert root.at("true") == Node(True)


def test_duplicate_keys_last_wins():
    assert yaml_format.parse("a: 1\na: 2").at("a") == Node(2)


def test_aliases_are_copied():
    root = yaml_format.parse("base: &b {x: 1}\nother: *b")
    root["other"]["x"] = 2
    assert root.at("base").at("x") == Node(1)


def test_recursive_alias():
    with pytest.raises(YamlParseError):
        yaml_format.parse("a: &a [*a]")


def test_complex_key():
    with pytest.raises(YamlParseError):
        yaml_format.parse("? [a, b]\n: value")


def test_multiple_documents():
    with pytest.raises(YamlParseError):
        yaml_format.parse("a: 1\n---\nb: 2\n")


def test_malformed_yaml():
    with pytest.raises(YamlParseError) as info:
        yaml_format.parse("a: [1, 2\nb: 3")
    assert isinstance(info.value, ParseError)
    assert isinstance(info.value.__cause__, yaml.YAMLError)


def test_bad_indentation():
    with pytest.raises(YamlParseError):
        yaml_format.parse("a:\n  b: 1\n c: 2")


# ---------------------------------------------------------------------------
# dump
# ---------------------------------------------------------------------------

def test_dump_block_style_in_insertion_order():
    root = Node()
    root["zeta"] = 1
    root["alpha"] = [True, None]
    assert yaml_format.dump(root) == "zeta: 1\nalpha:\n- true\n- null\n"


@pytest.mark.parametrize("text", ["42", "true", "yes", "", "null", "~", "1.5", "0x10", ".inf"])
def test_dump_quotes_ambiguous_strings(text):
    dumped = yaml_format.dump(Node({"v": text}))
    assert dumped != f"v: {text}\n"
    assert yaml_format.parse(dumped).at("v") == Node(text)


def test_dump_plain_strings_unquoted():
    assert yaml_format.dump(Node({"v": "hello"})) == "v: hello\n"


@pytest.mark.parametrize("letter", ["y", "Y", "n", "N"])
def test_single_letter_answers_stay_strings(letter):
    dumped = yaml_format.dump(Node({"v": letter}))
    assert dumped == f"v: {letter}\n"
    assert yaml_format.parse(dumped).at("v") == Node(letter)


def test_dump_undeterminable_node():
    node = Node([1])
    node.at(0)._value = object()
    with pytest.raises(YamlDumpError) as info:
        yaml_format.dump(node)
    assert isinstance(info.value, DumpError)


# ---------------------------------------------------------------------------
# round trip
# ---------------------------------------------------------------------------

def test_round_trip_all_variants():
    root = Node()
    root["null"] = None
    root["string"] = "hello world"
    root["numeric_string"] = "42"
    root["boolean"] = False
    root["integer"] = 2 ** 63 - 1
    root["floating"] = 42.0
    root["tiny"] = 1e-7
    root["huge"] = 1e300
    root["infinity"] = -math.inf
    root["sequence"] = [1, 1.0, "1", True, "true", None, [], {}]
    root["object"]["nested"]["key with spaces"] = "multi\nline"
    root["unicode"] = "héllo"
    assert yaml_format.parse(yaml_format.dump(root)) == root


@pytest.mark.parametrize("value", [None, "x", True, 0, -1.25])
def test_round_trip_scalar_roots(value):
    node = Node(value)
    assert yaml_format.parse(yaml_format.dump(node)) == node
