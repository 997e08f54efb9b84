from __future__ import annotations

from .document import ParsedDocument, parse_document
from .formatter import format_node
from .locator import locate_fields, type_name
from .timeline import build_timeline, resolve_value
from .traverser import parse_property_path, traverse

__all__ = [
    "ParsedDocument",
    "parse_document",
    "locate_fields",
    "type_name",
    "parse_property_path",
    "traverse",
    "format_node",
    "build_timeline",
    "resolve_value",
]
