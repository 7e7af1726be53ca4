"""IPv4 conversions in network byte order and the shared shutdown flag."""

from __future__ import annotations

import struct
import threading

from .messages import ErrorMessages

_shutdown = threading.Event()


def ipv4_to_nl(text: str) -> int:
    """Convert dotted IPv4 text to a 32-bit value in network byte order.

    The result is the integer the four address bytes form when read in
    this host's native order, as an address field of a socket structure.
    Raises ValueError for malformed addresses.
    """
    parts = text.replace(".", " ").split()
    if len(parts) != 4 or not all(part.isdigit() and part.isascii() for part in parts):
        raise ValueError(f"{ErrorMessages.E_BAD_IP}: {text!r}")
    octets = [int(part) for part in parts]
    if any(octet > 255 for octet in octets):
        raise ValueError(f"{ErrorMessages.E_BAD_IP}: {text!r}")
    return struct.unpack("=I", bytes(octets))[0]


def nl_to_ipv4(net_long: int) -> str:
    """Convert a 32-bit network byte order value back to dotted text."""
    try:
        packed = struct.pack("=I", net_long)
    except struct.error as exc:
        raise ValueError(f"{ErrorMessages.E_BAD_IP}: {net_long!r}") from exc
    return ".".join(str(octet) for octet in packed)


def shutdown_event() -> threading.Event:
    """Return the process-wide flag that asks the server loop to stop."""
    return _shutdown