"""Failure taxonomy for per-revision lookups.

None of these are fatal. The timeline builder turns each one into a sentinel
value for the revision at hand and moves on to the next revision.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureKind(str, Enum):
    """Why a revision did not yield a value."""

    CONTENT_ABSENT = "content_absent"  # file missing at this revision
    PARSE_FAILURE = "parse_failure"  # malformed text or bad encoding
    ANCHOR_NOT_FOUND = "anchor_not_found"  # object not in this revision
    UNEXPECTED_SHAPE = "unexpected_shape"  # object found but not `Type: {fields}`
    PATH_NOT_FOUND = "path_not_found"  # schema drift

    @property
    def is_error(self) -> bool:
        """Return True for failures shown to the user as errors, not absences."""
        return self is FailureKind.PARSE_FAILURE


@dataclass(frozen=True, slots=True)
class Failure:
    """Diagnostic payload carried by every ``Err`` of the engine."""

    kind: FailureKind
    reason: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.reason}"


__all__ = ["Failure", "FailureKind"]
