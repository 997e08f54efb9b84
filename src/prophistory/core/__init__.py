"""Core package initializer for prophistory.

Holds the shared building blocks: typed contracts, the `Result` container,
and the settings/logging helpers:
    from prophistory.core.settings import settings, load_settings, Settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
