"""A server block: its directives and its location blocks."""

from __future__ import annotations

from typing import Optional, Tuple

from .directives import DirectiveBlock, indent
from .netutils import ipv4_to_nl
from .trie import Trie

_MAX_PORT = 0xFFFF


def _parse_ip_port(ip_port: str) -> Optional[Tuple[int, int]]:
    if not ip_port:
        return None
    host, sep, port_text = ip_port.partition(":")
    if not sep:
        return None
    try:
        ip = ipv4_to_nl(host)
    except ValueError:
        return None
    if not (port_text.isascii() and port_text.isdigit()):
        return None
    port = int(port_text)
    if port > _MAX_PORT:
        return None
    return ip, port


class ServerBlock(Trie, DirectiveBlock):
    """Directives of one server and its locations, searchable by prefix.

    ``ip`` is kept in network byte order, ``port`` as a plain number.
    """

    def __init__(self) -> None:
        super().__init__()
        self._ip = 0
        self._port = 0

    @property
    def ip(self) -> int:
        return self._ip

    @property
    def port(self) -> int:
        return self._port

    def set_ip_port(self, ip_port: str) -> bool:
        """Set the address from ``"a.b.c.d:port"``; return whether it was valid."""
        parsed = _parse_ip_port(ip_port)
        if parsed is None:
            return False
        self._ip, self._port = parsed
        return True

    def to_json(self, indent_level: int = 0) -> str:
        """Render the block as a JSON object of directives and locations."""
        ind = indent(indent_level)
        ind2 = indent(indent_level + 1)
        directives = DirectiveBlock.to_json(self, indent_level + 1)
        locations = Trie.to_json(self, indent_level + 1)
        return (
            f"{ind}{{\n"
            f'{ind2}"directives": {{\n{directives}\n{ind2}}},\n'
            f'{ind2}"locations": {{\n{locations}\n{ind2}}}\n'
            f"{ind}}}"
        )

    def __repr__(self) -> str:
        return f"ServerBlock(ip={self._ip!r}, port={self._port!r})"