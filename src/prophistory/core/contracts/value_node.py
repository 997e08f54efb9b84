"""ValueNode: the in-memory tree a parsed YAML document is turned into.

A node is one of three frozen variants:

- :class:`ScalarNode`   raw scalar text, no int/float/bool coercion.
- :class:`MappingNode`  ordered ``(key, value)`` pairs.
- :class:`SequenceNode` ordered items.

``anchor`` is populated only on the root node of an anchored sub-document
(a Unity object's ``&fileID``); every nested node carries ``None``.

Design Notes
------------
- **Closed hierarchy**: ``ValueNode`` is a plain union of the three classes,
  so ``isinstance`` dispatch is exhaustive.
- **Duplicate keys**: a mapping keeps every entry so formatting shows what
  the file contains, but :meth:`MappingNode.get` returns the *first* match.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ScalarNode:
    """Leaf value holding the scalar text exactly as parsed."""

    text: str
    anchor: str | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class MappingNode:
    """Ordered mapping of string keys to child nodes."""

    entries: tuple[tuple[str, ValueNode], ...] = ()
    anchor: str | None = field(default=None, compare=False)

    def get(self, key: str) -> ValueNode | None:
        """Return the value of the first entry named ``key``, or ``None``."""
        for name, value in self.entries:
            if name == key:
                return value
        return None

    def keys(self) -> list[str]:
        """Return entry keys in document order (duplicates included)."""
        return [name for name, _ in self.entries]

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class SequenceNode:
    """Ordered list of child nodes."""

    items: tuple[ValueNode, ...] = ()
    anchor: str | None = field(default=None, compare=False)

    def __len__(self) -> int:
        return len(self.items)


ValueNode = ScalarNode | MappingNode | SequenceNode


__all__ = ["ScalarNode", "MappingNode", "SequenceNode", "ValueNode"]
