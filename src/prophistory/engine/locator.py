"""Object locator: find an anchored object and step into its field set.

A serialised object looks like::

    --- !u!4 &400000
    Transform:
      m_LocalPosition: {x: 0, y: 1, z: 0}
      m_Children: []

The anchored root is a one-entry mapping whose key is the type name and
whose value holds the fields. :func:`locate_fields` returns that inner node.
"""

from __future__ import annotations

from prophistory.core.contracts.failures import Failure, FailureKind
from prophistory.core.contracts.value_node import MappingNode, ValueNode
from prophistory.core.result import Result, err, ok
from prophistory.engine.document import ParsedDocument


def locate_fields(doc: ParsedDocument, anchor_id: str) -> Result[ValueNode, Failure]:
    """Return the field-set node of the object anchored as ``anchor_id``.

    ``ANCHOR_NOT_FOUND`` means the object does not exist in this revision;
    ``UNEXPECTED_SHAPE`` means it exists but is not a ``Type: {...}`` mapping.
    When the wrapper has several entries the first one is used.
    """
    root = doc.find(anchor_id)
    if root is None:
        return err(
            Failure(FailureKind.ANCHOR_NOT_FOUND, f"object &{anchor_id} not found in document")
        )
    if not isinstance(root, MappingNode):
        return err(
            Failure(
                FailureKind.UNEXPECTED_SHAPE,
                f"object &{anchor_id} is a {type(root).__name__}, expected a mapping",
            )
        )
    if not root.entries:
        return err(
            Failure(FailureKind.UNEXPECTED_SHAPE, f"object &{anchor_id} has no type entry")
        )
    _, fields = root.entries[0]
    return ok(fields)


def type_name(root: ValueNode) -> str | None:
    """Return the type key wrapping an object's fields (e.g. ``"Transform"``)."""
    if isinstance(root, MappingNode) and root.entries:
        return root.entries[0][0]
    return None


__all__ = ["locate_fields", "type_name"]
