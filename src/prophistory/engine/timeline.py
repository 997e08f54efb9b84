"""
Timeline builder: compress a revision list into a property changelog.

For every revision, in the order supplied by the caller:

1. empty content                -> absent
2. parse (document parser)      -> parse failure is an *error* row
3. locate the anchored object   -> missing/malformed object is absent
4. traverse the field path      -> missing field is absent
5. format the reached node      -> present, with the formatted string

Compression
-----------
The first revision is always kept. Each later revision is kept only if its
comparison key differs from the key of the most recently *kept* entry
(not the previous raw revision). Present values compare by exact string
equality, all absent revisions share one key, and an error never equals
anything, so every unreadable revision shows up as its own row.

Nothing here raises for per-revision problems and nothing is cached; the
input records are shared, not copied or mutated.
"""

from __future__ import annotations

from collections.abc import Iterable

from prophistory.core.contracts.failures import Failure
from prophistory.core.contracts.query import PropertyQuery
from prophistory.core.contracts.revision import RevisionRecord
from prophistory.core.contracts.timeline import TimelineEntry, ValueStatus
from prophistory.core.result import Result
from prophistory.core.settings import get_logger
from prophistory.engine.document import parse_document
from prophistory.engine.formatter import format_node
from prophistory.engine.locator import locate_fields
from prophistory.engine.traverser import traverse

logger = get_logger(__name__)

# Comparison key shared by every absent value.
_ABSENT_KEY = object()


def resolve_value(query: PropertyQuery, raw_content: str | bytes) -> Result[str, Failure]:
    """Run parse -> locate -> traverse -> format for a single snapshot."""
    return (
        parse_document(raw_content)
        .flat_map(lambda doc: locate_fields(doc, query.anchor_id))
        .flat_map(lambda fields: traverse(fields, query.field_path))
        .map(format_node)
    )


def _entry_for(query: PropertyQuery, revision: RevisionRecord) -> TimelineEntry:
    outcome = resolve_value(query, revision.raw_content)
    if outcome.is_ok():
        return TimelineEntry(revision=revision, formatted_value=outcome.unwrap())

    failure = outcome.unwrap_err()
    status = ValueStatus.ERROR if failure.kind.is_error else ValueStatus.ABSENT
    return TimelineEntry(revision=revision, status=status, reason=str(failure))


def _comparison_key(entry: TimelineEntry) -> object:
    if entry.status is ValueStatus.PRESENT:
        return entry.formatted_value
    if entry.status is ValueStatus.ABSENT:
        return _ABSENT_KEY
    return object()


def build_timeline(
    query: PropertyQuery, revisions: Iterable[RevisionRecord]
) -> list[TimelineEntry]:
    """Build the compressed timeline of ``query`` across ``revisions``.

    Parameters
    ----------
    query : PropertyQuery
        Anchor of the tracked object and path of the tracked field.
    revisions : Iterable[RevisionRecord]
        Snapshots in the order the timeline should follow (usually
        newest first, as ``git log`` lists them).

    Returns
    -------
    list[TimelineEntry]
        A new list holding the kept entries, in input order.
    """
    timeline: list[TimelineEntry] = []
    last_key: object = None
    scanned = 0

    for revision in revisions:
        scanned += 1
        entry = _entry_for(query, revision)
        key = _comparison_key(entry)
        logger.debug(
            "revision %s: %s %s",
            revision.short_id,
            entry.status.value,
            entry.formatted_value if entry.formatted_value is not None else entry.reason,
        )

        if timeline and key == last_key:
            continue
        timeline.append(entry)
        last_key = key

    logger.debug(
        "timeline for &%s %s: kept %d of %d revisions",
        query.anchor_id,
        query.path_text,
        len(timeline),
        scanned,
    )
    return timeline


__all__ = ["build_timeline", "resolve_value"]
