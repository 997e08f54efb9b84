"""prophistory: reconstruct the git history of one field of one object in a YAML asset.

Given the revisions of a multi-document YAML file (Unity scenes, prefabs and
assets are the motivating case), an object anchor and a property path, the
engine produces a compressed timeline with one entry per value change.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
