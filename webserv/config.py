"""Builds server blocks from a validated configuration token stream."""

from __future__ import annotations

from itertools import islice
from typing import Iterable, List, Sequence

from .directives import LocationBlock
from .logger import get_logger
from .messages import ErrorMessages
from .server_block import ServerBlock
from .tokens import Token, TokenType

_SERVER_DEPTH = 1
_LOCATION_DEPTH = 2


class ConfigError(ValueError):
    """Raised when a token stream cannot be turned into server blocks."""


class Config:
    """Server blocks described by a configuration token stream.

    Directive tokens at brace depth one belong to the latest server block;
    at depth two they belong to that block's latest location.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._server_blocks: List[ServerBlock] = []
        self._build(list(tokens))
        get_logger().debug("Config created")

    @property
    def server_blocks(self) -> Sequence[ServerBlock]:
        return tuple(self._server_blocks)

    def _current_server(self) -> ServerBlock:
        if not self._server_blocks:
            get_logger().critical(ErrorMessages.E_BAD_ARG)
            raise ConfigError(f"{ErrorMessages.E_BAD_ARG}: no server block")
        return self._server_blocks[-1]

    def _build(self, tokens: List[Token]) -> None:
        depth = 0
        prefix = ""
        for index, token in enumerate(tokens):
            kind = token.type
            if kind == TokenType.SERVER:
                self._server_blocks.append(ServerBlock())
            elif kind == TokenType.DIRECTIVE:
                self._add_directive(islice(tokens, index, None), depth, prefix)
                if token.value == "listen":
                    self._set_listen(tokens[index + 1 : index + 2])
            elif kind == TokenType.LOCATION:
                self._current_server().insert(LocationBlock(token.value))
                prefix = token.value
            elif kind == TokenType.RBRACE:
                depth -= 1
            elif kind == TokenType.LBRACE:
                depth += 1

    def _add_directive(self, tokens: Iterable[Token], depth: int, prefix: str) -> None:
        server = self._current_server()
        try:
            if depth == _SERVER_DEPTH:
                server.add_directive(tokens)
            elif depth == _LOCATION_DEPTH:
                location = server.search(prefix)
                if location is None:
                    get_logger().critical(f"'{prefix}' {ErrorMessages.E_BAD_ROUTE}")
                    raise ConfigError(f"{ErrorMessages.E_BAD_ROUTE}: {prefix!r}")
                location.add_directive(tokens)
        except ConfigError:
            raise
        except ValueError as exc:
            get_logger().critical(ErrorMessages.E_BAD_ARG)
            raise ConfigError(ErrorMessages.E_BAD_ARG) from exc

    def _set_listen(self, following: List[Token]) -> None:
        value = following[0].value if following else ""
        if not self._current_server().set_ip_port(value):
            get_logger().critical(f"{ErrorMessages.E_BAD_IP} {value}")
            raise ConfigError(f"{ErrorMessages.E_BAD_IP}: {value!r}")

    def to_json(self, indent_level: int = 0) -> str:
        """Render every server block as a ``"server" {...}`` entry per line."""
        last = len(self._server_blocks) - 1
        lines = []
        for position, block in enumerate(self._server_blocks):
            separator = "," if position < last else ""
            lines.append(f'"server" {block.to_json(indent_level)}{separator}\n')
        return "".join(lines)