from __future__ import annotations

from .git import GitHistory, GitHistoryError, RevisionInfo

__all__ = ["GitHistory", "GitHistoryError", "RevisionInfo"]
