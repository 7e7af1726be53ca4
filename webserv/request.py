"""Accumulates the bytes of an HTTP request and parses its head."""

from __future__ import annotations

import socket
from typing import Dict

from .logger import get_logger

BUFFSIZE = 1000
_HEAD_END = b"\r\n\r\n"
_INDEX_FILENAME = "/index.html"


class Request:
    """Raw request bytes read from a client, and the parsed request line and headers."""

    def __init__(self) -> None:
        self._raw = bytearray()
        self._method = ""
        self._path = ""
        self._version = ""
        self._headers: Dict[str, str] = {}
        super().__init__()

    @property
    def raw(self) -> bytes:
        return bytes(self._raw)

    @property
    def method(self) -> str:
        return self._method

    @property
    def filename(self) -> str:
        return self._path

    @property
    def version(self) -> str:
        return self._version

    @property
    def headers(self) -> Dict[str, str]:
        return self._headers

    def feed(self, data: bytes) -> bool:
        """Add received bytes; return True once the request can be answered.

        A chunk shorter than the read size means the client has nothing more
        to send right now. A full chunk means more may follow, unless the blank
        line that ends the head has already arrived.
        """
        self._raw.extend(data)
        if len(data) < BUFFSIZE:
            return True
        return _HEAD_END in self._raw

    def read(self, sock: socket.socket) -> bool:
        """Receive one chunk from ``sock`` and feed it; see ``feed``."""
        try:
            data = sock.recv(BUFFSIZE)
        except OSError as exc:
            raise ConnectionError("Error Reading from Client") from exc
        return self.feed(data)

    def parse_headers(self) -> Dict[str, str]:
        """Parse the request line and headers received so far.

        Header names are lower-cased; the first occurrence of a name wins.
        A request for ``/`` is mapped to ``/index.html``.
        """
        get_logger().debug("REQUEST set headers")
        text = self._raw.decode("latin-1")
        lines = text.split("\n")
        if text:
            parts = lines[0].split()
            self._method = parts[0] if len(parts) > 0 else ""
            self._path = parts[1] if len(parts) > 1 else ""
            self._version = parts[2] if len(parts) > 2 else ""
            if self._path == "/":
                self._path = _INDEX_FILENAME
        for line in lines[1:]:
            if line == "\r":
                break
            key, sep, value = line.partition(":")
            if not sep:
                continue
            key = key.rstrip(" ").lower()
            value = value.lstrip(" ").rstrip("\r")
            self._headers.setdefault(key, value)
        get_logger().debug(f"Map size: {len(self._headers)}")
        return self._headers