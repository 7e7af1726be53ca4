"""Blocks of key/value directives and their JSON fragment output."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from .messages import ErrorMessages
from .tokens import DirectiveMap, DirectiveValue, Token, TokenType


def indent(level: int) -> str:
    """Return ``level`` tab characters."""
    return "\t" * max(level, 0)


class DirectiveBlock:
    """A set of directives, each a key with a list of string values."""

    def __init__(self) -> None:
        self._directives: DirectiveMap = {}
        super().__init__()

    @property
    def directives(self) -> Mapping[str, DirectiveValue]:
        """Read-only view of the stored directives."""
        return MappingProxyType(self._directives)

    def add_directive(self, tokens: Iterable[Token]) -> None:
        """Store a directive from tokens: key, values, then a semicolon.

        Tokens after the semicolon are ignored. An existing directive with the
        same key is replaced. Raises ValueError if no semicolon ends the values.
        """
        stream = iter(tokens)
        key = next(stream, None)
        if key is None:
            raise ValueError(ErrorMessages.E_BAD_ARG)
        values: DirectiveValue = []
        for token in stream:
            if token.type == TokenType.SEMICOLON:
                self._directives[key.value] = values
                return
            values.append(token.value)
        raise ValueError(ErrorMessages.E_BAD_ARG)

    def to_json(self, indent_level: int = 0) -> str:
        """Render the directives as comma separated ``"key": [values]`` lines."""
        ind = indent(indent_level)
        entries = []
        for key in sorted(self._directives):
            values = ", ".join(f'"{value}"' for value in self._directives[key])
            entries.append(f'{ind}"{key}": [{values}]')
        return ",\n".join(entries)


class LocationBlock(DirectiveBlock):
    """Directives that apply to requests under a path prefix."""

    def __init__(self, prefix: str) -> None:
        super().__init__()
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def __repr__(self) -> str:
        return f"LocationBlock(prefix={self._prefix!r})"