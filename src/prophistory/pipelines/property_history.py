"""
Property-history pipeline: from (asset, anchor, field path) to a timeline.

Flow Overview
-------------
1. Parse the textual field path into a :class:`PropertyQuery`
   (a malformed path raises ``ValueError``; it is a caller error).
2. Ask the history collaborator for every revision of the asset,
   newest first, with full file content.
3. Hand the revisions to :func:`build_timeline`.

The engine never raises for per-revision problems; the only exceptions that
leave this module are ``ValueError`` (bad path) and
:class:`GitHistoryError` (history unavailable), both meant to be reported once
by the caller.

Also exposed: :func:`list_objects`, which enumerates the anchored objects of
one snapshot so a user can find the anchor id to query.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict

from prophistory.core.contracts.failures import Failure
from prophistory.core.contracts.query import PropertyQuery
from prophistory.core.contracts.timeline import TimelineEntry
from prophistory.core.result import Result
from prophistory.core.settings import get_logger, load_settings
from prophistory.engine.document import parse_document
from prophistory.engine.locator import type_name
from prophistory.engine.timeline import build_timeline
from prophistory.history.git import GitHistory

logger = get_logger(__name__)


class PropertyHistoryResult(TypedDict):
    """Structured payload returned by :func:`run_property_history`.

    Attributes
    ----------
    query:
        The parsed query the timeline was built for.
    asset_path:
        Repo-relative path of the asset whose history was read.
    revisions_scanned:
        How many revisions the history collaborator returned.
    entries:
        The compressed timeline, newest first.
    """

    query: PropertyQuery
    asset_path: str
    revisions_scanned: int
    entries: list[TimelineEntry]


@dataclass(frozen=True, slots=True)
class ObjectSummary:
    """One anchored object of a snapshot."""

    anchor_id: str
    type_name: str | None


def run_property_history(
    asset_path: str | Path,
    anchor_id: str | int,
    field_path: str,
    *,
    repo_root: str | Path | None = None,
    limit: int | None = None,
    history: GitHistory | None = None,
) -> PropertyHistoryResult:
    """Build the change timeline of one property of one object in a tracked file.

    Parameters
    ----------
    asset_path:
        Path of the file, absolute or relative to the repository root.
    anchor_id:
        Anchor (Unity file ID) of the object inside the file.
    field_path:
        Dotted/indexed property path, e.g. ``"m_LocalPosition.x"``.
    repo_root:
        Directory inside the repository; defaults to the working directory.
    limit:
        Maximum number of revisions to scan; defaults to
        ``PROPHISTORY_MAX_REVISIONS`` (unbounded when unset).
    history:
        Pre-built collaborator, mainly for tests.
    """
    query = PropertyQuery.from_path(anchor_id, field_path)
    git = history if history is not None else GitHistory.discover(repo_root)
    relative = git.repo_relative(asset_path)
    effective_limit = limit if limit is not None else load_settings().max_revisions

    revisions = git.load_revisions(relative, limit=effective_limit)
    logger.info("loaded %d revisions of %s", len(revisions), relative)

    return {
        "query": query,
        "asset_path": relative,
        "revisions_scanned": len(revisions),
        "entries": build_timeline(query, revisions),
    }


def list_objects(raw_text: str | bytes) -> Result[list[ObjectSummary], Failure]:
    """Return the anchored objects of one snapshot, in file order."""
    return parse_document(raw_text).map(
        lambda doc: [
            ObjectSummary(anchor_id=anchor, type_name=type_name(root))
            for anchor, root in doc.anchors.items()
        ]
    )


__all__ = ["ObjectSummary", "PropertyHistoryResult", "list_objects", "run_property_history"]
