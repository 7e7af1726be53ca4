"""Prefix tree mapping path prefixes to location blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .directives import LocationBlock, indent
from .logger import get_logger


@dataclass
class TrieNode:
    """One character step of a stored prefix."""

    children: Dict[str, "TrieNode"] = field(default_factory=dict)
    is_end_of_prefix: bool = False
    location: Optional[LocationBlock] = None


class Trie:
    """Stores location blocks by prefix and finds the longest matching one."""

    def __init__(self) -> None:
        self.root = TrieNode()
        super().__init__()

    def insert(self, location: LocationBlock) -> None:
        """Store ``location`` under its prefix, replacing any earlier one."""
        current = self.root
        for char in location.prefix:
            current = current.children.setdefault(char, TrieNode())
        if current.location is not None:
            get_logger().debug(
                f"Overwriting existing LocationBlock for prefix: {location.prefix}"
            )
        current.is_end_of_prefix = True
        current.location = location

    def search(self, uri: str) -> Optional[LocationBlock]:
        """Return the location with the longest prefix of ``uri``, or None."""
        current = self.root
        longest: Optional[LocationBlock] = None
        for char in uri:
            child = current.children.get(char)
            if child is None:
                break
            current = child
            if current.is_end_of_prefix:
                longest = current.location
        return longest

    def to_json(self, indent_level: int = 0) -> str:
        """Render every stored location as a ``"prefix": {...}`` entry."""
        parts: List[str] = []
        self._write_paths(parts, self.root, "", indent_level + 1)
        return "".join(parts)

    def _write_paths(
        self, parts: List[str], node: TrieNode, path: str, level: int
    ) -> None:
        ind = indent(level)
        ind2 = indent(level + 1)
        has_location = node.is_end_of_prefix and node.location is not None

        if has_location:
            parts.append(f'{ind}"{path}": {{\n')
            parts.append(f'{ind2}"directives": {{\n{node.location.to_json(level + 1)}\n')
            parts.append(f"{ind2}}}\n")
            parts.append(f"{ind}}}")
            if node.children:
                parts.append(",\n")

        first = True
        for char, child in sorted(node.children.items()):
            if not first and not has_location:
                parts.append(",\n")
            self._write_paths(parts, child, path + char, level)
            first = False