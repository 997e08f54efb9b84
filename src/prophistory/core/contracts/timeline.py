"""TimelineEntry: one row of a compressed property history."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .revision import RevisionRecord

ABSENT_TEXT = "[absent]"


class ValueStatus(str, Enum):
    """What a revision yielded for the tracked field."""

    PRESENT = "present"
    ABSENT = "absent"
    ERROR = "error"


class TimelineEntry(BaseModel):
    """A kept revision and the field's formatted value at that revision."""

    model_config = ConfigDict(frozen=True)

    revision: RevisionRecord
    formatted_value: str | None = Field(
        default=None, description="Formatted value, or None when absent/unparseable"
    )
    status: ValueStatus = ValueStatus.PRESENT
    reason: str | None = Field(default=None, description="Diagnostic for absent/error rows")

    @model_validator(mode="after")
    def _value_matches_status(self) -> TimelineEntry:
        """Only PRESENT rows carry a value."""
        if (self.status is ValueStatus.PRESENT) != (self.formatted_value is not None):
            raise ValueError("formatted_value must be set exactly when status is 'present'")
        return self

    @property
    def display_value(self) -> str:
        """Return the text a presentation layer should show for this row."""
        if self.status is ValueStatus.PRESENT:
            return self.formatted_value or ""
        if self.status is ValueStatus.ERROR:
            return f"[error: {self.reason}]" if self.reason else "[error]"
        return ABSENT_TEXT


__all__ = ["ABSENT_TEXT", "TimelineEntry", "ValueStatus"]
