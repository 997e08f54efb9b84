"""RevisionRecord: one historical snapshot of the tracked file."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SHORT_ID_LENGTH = 7


class RevisionRecord(BaseModel):
    """A revision descriptor plus the full file text at that revision.

    ``raw_content`` is empty when the file did not exist at this revision
    (or the history collaborator could not read it).
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(description="Opaque revision id, e.g. a commit hash")
    author: str = ""
    summary: str = ""
    raw_content: str = Field(default="", repr=False)

    @property
    def short_id(self) -> str:
        """Return the abbreviated identifier shown in listings."""
        return self.identifier[:SHORT_ID_LENGTH]


__all__ = ["RevisionRecord", "SHORT_ID_LENGTH"]
