"""Tests for the canonical value formatter."""

from __future__ import annotations

from prophistory.core.contracts.value_node import MappingNode, ScalarNode, SequenceNode
from prophistory.engine.document import parse_document
from prophistory.engine.formatter import format_node
from prophistory.engine.locator import locate_fields
from prophistory.engine.traverser import parse_property_path, traverse


def test_scalar_is_verbatim() -> None:
    """Scalars render exactly as stored, with no numeric normalisation."""
    assert format_node(ScalarNode("1.50")) == "1.50"
    assert format_node(ScalarNode("")) == ""


def test_mapping_keeps_insertion_order() -> None:
    """Mappings render `{ k: v, ... }` in document order."""
    node = MappingNode((("z", ScalarNode("1")), ("a", ScalarNode("2"))))
    assert format_node(node) == "{ z: 1, a: 2 }"


def test_sequence_and_empty_sequence() -> None:
    """Sequences render `[a, b]`; the empty sequence is `[]`."""
    assert format_node(SequenceNode((ScalarNode("a"), ScalarNode("b")))) == "[a, b]"
    assert format_node(SequenceNode(())) == "[]"


def test_nested_structure() -> None:
    """Formatting recurses through mixed nesting."""
    node = MappingNode(
        (
            ("pos", MappingNode((("x", ScalarNode("0")), ("y", ScalarNode("1"))))),
            ("tags", SequenceNode((ScalarNode("a"), SequenceNode(())))),
        )
    )
    assert format_node(node) == "{ pos: { x: 0, y: 1 }, tags: [a, []] }"


def test_position_from_prefab(prefab_text: str) -> None:
    """A Unity vector renders as a compact one-liner."""
    doc = parse_document(prefab_text).unwrap()
    fields = locate_fields(doc, "400000").unwrap()
    node = traverse(fields, parse_property_path("m_LocalPosition")).unwrap()
    assert format_node(node) == "{ x: 1.5, y: 0, z: -2 }"


def test_formatting_is_idempotent_and_structural() -> None:
    """Same structure, same string; node identity and anchors do not matter."""
    a = MappingNode((("x", ScalarNode("1")),), anchor="10")
    b = MappingNode((("x", ScalarNode("1")),))
    assert format_node(a) == format_node(a)
    assert format_node(a) == format_node(b)
