"""Shared fixtures: a realistic Unity prefab and small document builders."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from prophistory.core.contracts.revision import RevisionRecord

FIXTURES = Path(__file__).parent / "fixtures"

TRANSFORM_TEMPLATE = """%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!1 &100
GameObject:
  m_Name: Cube
  m_Component:
  - component: {{fileID: {anchor}}}
--- !u!4 &{anchor}
Transform:
  m_GameObject: {{fileID: 100}}
  m_LocalPosition: {{x: {x}, y: 0, z: 0}}
  m_Children: []
"""


@pytest.fixture  # type: ignore[misc]
def prefab_text() -> str:
    """Full text of ``tests/fixtures/Player.prefab``."""
    return (FIXTURES / "Player.prefab").read_text(encoding="utf-8")


@pytest.fixture  # type: ignore[misc]
def transform_doc() -> Callable[..., str]:
    """Build a two-object scene whose Transform has the given ``x`` position."""

    def _build(x: object, anchor: str = "400") -> str:
        return TRANSFORM_TEMPLATE.format(anchor=anchor, x=x)

    return _build


@pytest.fixture  # type: ignore[misc]
def revision() -> Callable[..., RevisionRecord]:
    """Factory for RevisionRecords with placeholder metadata."""

    def _make(identifier: str, content: str = "", author: str = "dev") -> RevisionRecord:
        return RevisionRecord(
            identifier=identifier,
            author=author,
            summary=f"commit {identifier}",
            raw_content=content,
        )

    return _make
