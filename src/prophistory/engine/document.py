"""
Document parser: raw multi-document YAML text -> ValueNode trees + anchor index.

Responsibilities
----------------
- Accept the full text of one revision of a file (``str`` or ``bytes``).
- Normalise Unity-style document headers so the text is plain YAML.
- Build one :class:`ValueNode` tree per sub-document from PyYAML's event
  stream, attaching each sub-document's root anchor to its root node.
- Merge the root anchors of all sub-documents into a single index
  (first occurrence of an anchor id wins).
- Report problems as values, never as exceptions:
  * empty / whitespace-only input -> ``Err(CONTENT_ABSENT)``
  * undecodable bytes, YAML syntax errors, truncated text
    -> ``Err(PARSE_FAILURE)``

Events, not composed nodes
--------------------------
PyYAML's composed ``Node`` objects do not remember their anchors; the
anchor is only visible on the ``*StartEvent`` / ``ScalarEvent`` that opens
a node. Unity identifies every object by the anchor on its document root
(``--- !u!4 &400000``), so the tree is composed directly from events.

Unity headers
-------------
A Unity asset starts each object with ``--- !u!<classID> &<fileID>``,
sometimes followed by ``stripped``. PyYAML only honours a ``%TAG``
directive for the document it precedes, so the ``!u!`` local tags of the
second and later documents would be rejected. Headers are therefore
rewritten to ``--- &<fileID>`` before parsing; the class id is not needed
to locate objects.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import yaml

from prophistory.core.contracts.failures import Failure, FailureKind
from prophistory.core.contracts.value_node import (
    MappingNode,
    ScalarNode,
    SequenceNode,
    ValueNode,
)
from prophistory.core.result import Result, err, ok
from prophistory.engine.formatter import format_node

_UNITY_HEADER = re.compile(
    r"^---[ \t]+!u!-?\d+(?:[ \t]+&(?P<anchor>[-\w]+))?(?:[ \t]+stripped)?[ \t]*\r?$",
    flags=re.MULTILINE,
)


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """One parsed revision: the sub-document trees and their anchor index.

    Attributes
    ----------
    roots : tuple[ValueNode, ...]
        One tree per sub-document, in file order.
    anchors : Mapping[str, ValueNode]
        Read-only index from root anchor id to the anchored root node.
    """

    roots: tuple[ValueNode, ...] = ()
    anchors: Mapping[str, ValueNode] = field(default_factory=lambda: MappingProxyType({}))

    def find(self, anchor_id: str) -> ValueNode | None:
        """Return the root node anchored as ``anchor_id``, or ``None``."""
        return self.anchors.get(anchor_id)


class _ComposeError(Exception):
    """Raised inside the composer for structural problems PyYAML lets through."""


class _EventComposer:
    """Turn a PyYAML event stream into ValueNode trees.

    Mirrors the shape of PyYAML's own ``Composer``: one method walks the
    stream, one recursive method builds a node from its opening event.
    Aliases resolve to the node carrying that anchor in the current
    sub-document.
    """

    def __init__(self, events: Iterator[yaml.Event]) -> None:
        self._events = events
        self._aliases: dict[str, ValueNode] = {}

    def _next(self) -> yaml.Event:
        try:
            return next(self._events)
        except StopIteration:
            raise _ComposeError("unexpected end of YAML event stream") from None

    def compose_stream(self) -> list[ValueNode]:
        """Return the root node of every sub-document in the stream."""
        roots: list[ValueNode] = []
        event = self._next()
        if not isinstance(event, yaml.StreamStartEvent):
            raise _ComposeError(f"expected stream start, got {type(event).__name__}")

        while True:
            event = self._next()
            if isinstance(event, yaml.StreamEndEvent):
                return roots
            if not isinstance(event, yaml.DocumentStartEvent):
                raise _ComposeError(f"expected document start, got {type(event).__name__}")

            self._aliases = {}
            roots.append(self._compose(self._next(), is_root=True))

            event = self._next()
            if not isinstance(event, yaml.DocumentEndEvent):
                raise _ComposeError(f"expected document end, got {type(event).__name__}")

    def _compose(self, event: yaml.Event, *, is_root: bool) -> ValueNode:
        if isinstance(event, yaml.AliasEvent):
            target = self._aliases.get(event.anchor)
            if target is None:
                raise _ComposeError(f"found undefined alias {event.anchor!r}")
            return target

        anchor = event.anchor if is_root else None
        node: ValueNode
        if isinstance(event, yaml.ScalarEvent):
            node = ScalarNode(event.value, anchor=anchor)
        elif isinstance(event, yaml.SequenceStartEvent):
            items: list[ValueNode] = []
            child = self._next()
            while not isinstance(child, yaml.SequenceEndEvent):
                items.append(self._compose(child, is_root=False))
                child = self._next()
            node = SequenceNode(tuple(items), anchor=anchor)
        elif isinstance(event, yaml.MappingStartEvent):
            entries: list[tuple[str, ValueNode]] = []
            key_event = self._next()
            while not isinstance(key_event, yaml.MappingEndEvent):
                key = self._compose(key_event, is_root=False)
                value = self._compose(self._next(), is_root=False)
                entries.append((_key_text(key), value))
                key_event = self._next()
            node = MappingNode(tuple(entries), anchor=anchor)
        else:
            raise _ComposeError(f"unexpected {type(event).__name__} inside a document")

        if event.anchor is not None:
            self._aliases[event.anchor] = node
        return node


def _key_text(key: ValueNode) -> str:
    """Mapping keys are scalars in practice; complex keys use their formatted text."""
    if isinstance(key, ScalarNode):
        return key.text
    return format_node(key)


def normalize_unity_headers(text: str) -> str:
    """Rewrite ``--- !u!<class> &<id> [stripped]`` headers to ``--- &<id>``."""

    def _replace(match: re.Match[str]) -> str:
        anchor = match.group("anchor")
        return f"--- &{anchor}" if anchor else "---"

    return _UNITY_HEADER.sub(_replace, text)


def _index_anchors(roots: list[ValueNode]) -> Mapping[str, ValueNode]:
    index: dict[str, ValueNode] = {}
    for root in roots:
        if root.anchor is not None and root.anchor not in index:
            index[root.anchor] = root
    return MappingProxyType(index)


def parse_document(raw_text: str | bytes) -> Result[ParsedDocument, Failure]:
    """Parse one revision's raw text.

    Parameters
    ----------
    raw_text : str | bytes
        Whole-file content. Bytes are decoded as UTF-8.

    Returns
    -------
    Result[ParsedDocument, Failure]
        ``Ok(ParsedDocument)`` (possibly with zero sub-documents), or ``Err``
        with ``CONTENT_ABSENT`` for empty input and ``PARSE_FAILURE`` for
        anything that is not readable YAML.
    """
    if isinstance(raw_text, bytes):
        try:
            text = raw_text.decode("utf-8")
        except UnicodeDecodeError as exc:
            return err(Failure(FailureKind.PARSE_FAILURE, f"content is not valid UTF-8: {exc}"))
    else:
        text = raw_text

    if not text.strip():
        return err(Failure(FailureKind.CONTENT_ABSENT, "document is empty at this revision"))

    composer = _EventComposer(yaml.parse(normalize_unity_headers(text), Loader=yaml.SafeLoader))
    try:
        roots = composer.compose_stream()
    except yaml.YAMLError as exc:
        return err(Failure(FailureKind.PARSE_FAILURE, _describe_yaml_error(exc)))
    except (_ComposeError, RecursionError) as exc:
        return err(Failure(FailureKind.PARSE_FAILURE, str(exc) or type(exc).__name__))

    return ok(ParsedDocument(roots=tuple(roots), anchors=_index_anchors(roots)))


def _describe_yaml_error(exc: yaml.YAMLError) -> str:
    """Condense a PyYAML error into one line, keeping the position if known."""
    if isinstance(exc, yaml.MarkedYAMLError) and exc.problem:
        where = ""
        if exc.problem_mark is not None:
            where = f" (line {exc.problem_mark.line + 1}, column {exc.problem_mark.column + 1})"
        return f"{exc.problem}{where}"
    return str(exc).splitlines()[0] if str(exc) else type(exc).__name__


__all__ = ["ParsedDocument", "normalize_unity_headers", "parse_document"]
