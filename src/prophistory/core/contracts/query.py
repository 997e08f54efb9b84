"""PropertyQuery: which object and which field a timeline is built for.

A field path is a sequence of :class:`PathSegment`. The textual form follows
Unity's ``SerializedProperty.propertyPath`` convention:

- ``m_LocalPosition.x``       plain field names joined by dots
- ``items.Array.data[1]``     element 1 of the ``items`` collection

The ``Array`` segment is a serialisation artifact; the traverser skips it.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

ARRAY_SENTINEL = "Array"

_SEGMENT = re.compile(r"^(?P<name>[^\[\]]+)(?:\[(?P<index>\d+)\])?$")


class PathSegment(BaseModel):
    """One step of a field path: a named lookup, optionally indexed."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    index: int | None = Field(default=None, ge=0)

    @property
    def is_array_sentinel(self) -> bool:
        """Return True for the bare ``Array`` marker segment."""
        return self.index is None and self.name == ARRAY_SENTINEL

    def __str__(self) -> str:
        if self.index is None:
            return self.name
        return f"{self.name}[{self.index}]"


def parse_property_path(text: str) -> tuple[PathSegment, ...]:
    """Split a dotted/indexed property path into segments.

    Parameters
    ----------
    text : str
        Path such as ``"m_Color.r"`` or ``"items.Array.data[2]"``.

    Returns
    -------
    tuple[PathSegment, ...]
        Segments in traversal order.

    Raises
    ------
    ValueError
        If the path is empty, has an empty segment, or a malformed index.
    """
    stripped = text.strip()
    if not stripped:
        raise ValueError("property path must not be empty")

    segments: list[PathSegment] = []
    for raw in stripped.split("."):
        match = _SEGMENT.match(raw.strip())
        if match is None:
            raise ValueError(f"malformed path segment {raw!r} in {text!r}")
        index = match.group("index")
        segments.append(
            PathSegment(
                name=match.group("name"),
                index=int(index) if index is not None else None,
            )
        )
    return tuple(segments)


def format_property_path(path: tuple[PathSegment, ...]) -> str:
    """Render segments back into dotted form."""
    return ".".join(str(segment) for segment in path)


class PropertyQuery(BaseModel):
    """Immutable input of one timeline build."""

    model_config = ConfigDict(frozen=True)

    anchor_id: str = Field(min_length=1, description="Anchor (file ID) of the target object")
    field_path: tuple[PathSegment, ...] = Field(min_length=1)

    @classmethod
    def from_path(cls, anchor_id: str | int, path: str) -> PropertyQuery:
        """Build a query from an anchor and a textual property path."""
        return cls(anchor_id=str(anchor_id), field_path=parse_property_path(path))

    @property
    def path_text(self) -> str:
        """Return the dotted form of ``field_path``."""
        return format_property_path(self.field_path)


__all__ = [
    "ARRAY_SENTINEL",
    "PathSegment",
    "PropertyQuery",
    "format_property_path",
    "parse_property_path",
]
