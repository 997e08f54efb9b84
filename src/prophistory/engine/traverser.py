"""Path traverser: walk a field path from an object's field set.

Rules, applied segment by segment to a "current node":

1. ``Array`` (no index) is skipped when the current node is a mapping or
   when the next segment is indexed. Unity writes collection paths as
   ``items.Array.data[3]`` although the YAML stores ``items`` as a plain
   sequence.
2. An indexed segment ``name[i]`` indexes the current node directly if it is
   already a sequence (the ``data[i]`` form), otherwise looks up ``name`` in
   the current mapping and indexes the sequence found there.
3. A plain segment looks up a key in the current mapping.

The first miss stops the walk with ``Err(PATH_NOT_FOUND)``; on success the
node reached is returned as-is for the formatter to render.
"""

from __future__ import annotations

from collections.abc import Sequence

from prophistory.core.contracts.failures import Failure, FailureKind
from prophistory.core.contracts.query import PathSegment, parse_property_path
from prophistory.core.contracts.value_node import MappingNode, SequenceNode, ValueNode
from prophistory.core.result import Result, err, ok


def _missing(segment: PathSegment, reason: str) -> Result[ValueNode, Failure]:
    return err(Failure(FailureKind.PATH_NOT_FOUND, f"'{segment}': {reason}"))


def _kind(node: ValueNode) -> str:
    return {MappingNode: "mapping", SequenceNode: "sequence"}.get(type(node), "scalar")


def _index_into(
    node: ValueNode, segment: PathSegment, index: int
) -> Result[ValueNode, Failure]:
    if not isinstance(node, SequenceNode):
        return _missing(segment, f"expected a sequence, found a {_kind(node)}")
    if index >= len(node.items):
        return _missing(segment, f"index out of range (length {len(node.items)})")
    return ok(node.items[index])


def _step(current: ValueNode, segment: PathSegment) -> Result[ValueNode, Failure]:
    if segment.index is not None:
        if isinstance(current, SequenceNode):
            return _index_into(current, segment, segment.index)
        if not isinstance(current, MappingNode):
            return _missing(segment, f"cannot index into a {_kind(current)}")
        collection = current.get(segment.name)
        if collection is None:
            return _missing(segment, "no such collection")
        return _index_into(collection, segment, segment.index)

    if not isinstance(current, MappingNode):
        return _missing(segment, f"cannot look up a field on a {_kind(current)}")
    child = current.get(segment.name)
    if child is None:
        return _missing(segment, "no such field")
    return ok(child)


def traverse(root: ValueNode, path: Sequence[PathSegment]) -> Result[ValueNode, Failure]:
    """Follow ``path`` from ``root`` and return the node it designates."""
    current = root
    for position, segment in enumerate(path):
        if segment.is_array_sentinel:
            next_indexed = position + 1 < len(path) and path[position + 1].index is not None
            if isinstance(current, MappingNode) or next_indexed:
                continue

        result = _step(current, segment)
        if result.is_err():
            return result
        current = result.unwrap()
    return ok(current)


__all__ = ["parse_property_path", "traverse"]
