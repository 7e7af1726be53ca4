"""Finds the server block and location that answer a request."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence, Tuple, Union

from .config import Config
from .directives import LocationBlock
from .logger import get_logger
from .messages import ErrorMessages, SuccessMessages
from .netutils import ipv4_to_nl
from .server_block import ServerBlock
from .tokens import DirectiveValue

AddressPair = Tuple[int, int]


def _resolve_address(address) -> AddressPair:
    """Turn a bound socket or an ``(ip, port)`` pair into ``(ip_nl, port)``."""
    if hasattr(address, "getsockname"):
        address = address.getsockname()
    host, port = address[0], address[1]
    ip = host if isinstance(host, int) else ipv4_to_nl(host)
    return ip, int(port)


class Searcher:
    """Answers directive lookups against a configuration.

    An ``address`` is a bound socket or an ``(ip, port)`` pair, where ``ip``
    is dotted text or a value in network byte order.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._addresses: List[AddressPair] = []
        for block in config.server_blocks:
            pair = (block.ip, block.port)
            if pair not in self._addresses:
                self._addresses.append(pair)
        get_logger().debug("Searcher created")

    @property
    def addresses(self) -> List[AddressPair]:
        """Distinct ``(ip_nl, port)`` pairs in configuration order."""
        return list(self._addresses)

    @staticmethod
    def _has_server_name(
        directives: Mapping[str, DirectiveValue], hostname: Optional[str]
    ) -> bool:
        names = directives.get("server_name")
        if names is None:
            return False
        if hostname is None or hostname not in names:
            get_logger().info(ErrorMessages.HOST_NAME_NOT_FOUND)
            return False
        get_logger().info(f"Hostname '{hostname}' {SuccessMessages.HOST_NAME_FOUND}")
        return True

    def _default_server(self, address, hostname: Optional[str]) -> ServerBlock:
        ip, port = _resolve_address(address)
        default: Optional[ServerBlock] = None
        for block in self._config.server_blocks:
            if block.ip != ip or block.port != port:
                continue
            if default is None:
                default = block
            if self._has_server_name(block.directives, hostname):
                return block
        if default is None:
            raise LookupError(f"no server block listens on {address!r}")
        return default

    def _location(self, address, host, route) -> Optional[LocationBlock]:
        if route is None:
            return None
        return self._default_server(address, host).search(route)

    def get_location_prefix(self, address, host, url) -> Optional[str]:
        """Return the prefix of the location serving ``url``, or None."""
        location = self._location(address, host, url)
        return location.prefix if location is not None else None

    def find_location_directive(self, address, key, host, route) -> Optional[DirectiveValue]:
        """Return the values of ``key`` in the location for ``route``, or None."""
        server = self._default_server(address, host)
        location = server.search(route) if route is not None else None
        if location is None:
            get_logger().error(f"'{route}' {ErrorMessages.E_BAD_ROUTE}")
            return None
        values = location.directives.get(key)
        if values is None:
            get_logger().info(f"'{key}' {ErrorMessages.KEY_NOT_FOUND}")
            return None
        return list(values)

    def find_server_directive(self, address, key, host) -> Optional[DirectiveValue]:
        """Return the values of ``key`` in the server answering ``host``, or None."""
        values = self._default_server(address, host).directives.get(key)
        if values is None:
            get_logger().info(f"'{key}' {ErrorMessages.KEY_NOT_FOUND}")
            return None
        get_logger().info(f"'{key}' {SuccessMessages.KEY_FOUND}")
        return list(values)


__all__: Sequence[str] = ("Searcher",)