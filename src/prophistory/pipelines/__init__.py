"""Pipeline entry points for prophistory.

Currently exposed:

- :func:`run_property_history`: git history -> compressed property timeline,
  implemented in ``property_history.py``.
- :func:`list_objects`: anchored objects of a single snapshot.
"""

from __future__ import annotations

from .property_history import (
    ObjectSummary,
    PropertyHistoryResult,
    list_objects,
    run_property_history,
)

__all__ = ["run_property_history", "list_objects", "ObjectSummary", "PropertyHistoryResult"]
