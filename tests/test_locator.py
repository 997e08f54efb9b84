"""Tests for locating an anchored object's field set."""

from __future__ import annotations

from prophistory.core.contracts.failures import FailureKind
from prophistory.core.contracts.value_node import MappingNode, ScalarNode
from prophistory.engine.document import parse_document
from prophistory.engine.locator import locate_fields, type_name


def test_locate_returns_fields_under_type_key(prefab_text: str) -> None:
    """The single `Transform:` wrapper is stepped over."""
    doc = parse_document(prefab_text).unwrap()
    fields = locate_fields(doc, "400000").unwrap()
    assert isinstance(fields, MappingNode)
    assert "m_LocalPosition" in fields.keys()


def test_missing_anchor_is_anchor_not_found(prefab_text: str) -> None:
    """An object absent from this revision is a normal outcome."""
    doc = parse_document(prefab_text).unwrap()
    failure = locate_fields(doc, "999").unwrap_err()
    assert failure.kind is FailureKind.ANCHOR_NOT_FOUND
    assert "999" in failure.reason


def test_scalar_root_is_unexpected_shape() -> None:
    """An anchored scalar document cannot hold fields."""
    doc = parse_document("--- &5 just text\n").unwrap()
    failure = locate_fields(doc, "5").unwrap_err()
    assert failure.kind is FailureKind.UNEXPECTED_SHAPE


def test_empty_mapping_root_is_unexpected_shape() -> None:
    """`{}` has no type entry to step into."""
    doc = parse_document("--- &5 {}\n").unwrap()
    failure = locate_fields(doc, "5").unwrap_err()
    assert failure.kind is FailureKind.UNEXPECTED_SHAPE


def test_missing_and_malformed_are_distinguishable(prefab_text: str) -> None:
    """Callers can tell 'not there' from 'wrong shape'."""
    missing = locate_fields(parse_document(prefab_text).unwrap(), "1").unwrap_err()
    malformed = locate_fields(parse_document("--- &1 [a, b]\n").unwrap(), "1").unwrap_err()
    assert missing.kind is not malformed.kind


def test_wrapper_value_may_be_scalar() -> None:
    """The located node is returned as-is; its shape is the traverser's concern."""
    doc = parse_document("--- &9\nTag: plain\n").unwrap()
    assert locate_fields(doc, "9").unwrap() == ScalarNode("plain")


def test_type_name(prefab_text: str) -> None:
    """`type_name` reports the wrapper key, or None for non-objects."""
    doc = parse_document(prefab_text).unwrap()
    assert type_name(doc.anchors["11400000"]) == "MonoBehaviour"
    assert type_name(ScalarNode("x")) is None
