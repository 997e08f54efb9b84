"""Value formatter: render any ValueNode as one comparable line of text.

Rendering rules
---------------
- scalar    -> its text verbatim (``0.5`` stays ``0.5``; no type coercion)
- mapping   -> ``{ x: 0, y: 1, z: 0 }`` in document order
- sequence  -> ``[a, b, c]``; the empty sequence is ``[]``

The output is a pure function of the tree's structure, so two revisions with
the same field content always produce byte-identical strings. The timeline
builder relies on that for change detection.
"""

from __future__ import annotations

from prophistory.core.contracts.value_node import (
    MappingNode,
    ScalarNode,
    SequenceNode,
    ValueNode,
)


def format_node(node: ValueNode) -> str:
    """Return the canonical string form of ``node`` (recursive, total)."""
    if isinstance(node, ScalarNode):
        return node.text
    if isinstance(node, MappingNode):
        body = ", ".join(f"{key}: {format_node(value)}" for key, value in node.entries)
        return "{ " + body + " }"
    if isinstance(node, SequenceNode):
        return "[" + ", ".join(format_node(item) for item in node.items) + "]"
    raise TypeError(f"not a ValueNode: {type(node).__name__}")


__all__ = ["format_node"]
