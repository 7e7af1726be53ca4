"""Client connections: read a request, answer it, then close."""

from __future__ import annotations

import socket
from typing import Dict, Optional, Tuple

from .events import EVENT_READ, EVENT_WRITE, Event, EventHandler, EventManager
from .logger import get_logger
from .request import Request
from .response import DEFAULT_CGI_SCRIPT, Response


class Connection(EventHandler, Request, Response):
    """One accepted client, read until its request is complete, then answered."""

    def __init__(
        self,
        manager: "ConnectionManager",
        client_sock: socket.socket,
        listen_sock: Optional[socket.socket] = None,
        cgi_script: str = DEFAULT_CGI_SCRIPT,
    ) -> None:
        super().__init__()
        self.cgi_script = cgi_script
        self._manager = manager
        self._client_sock = client_sock
        self._listen_sock = listen_sock
        self._fd = client_sock.fileno()
        self._closed = False
        self.process = None

    @property
    def fd(self) -> int:
        """Descriptor number the client socket had when accepted."""
        return self._fd

    @property
    def client_sock(self) -> socket.socket:
        return self._client_sock

    @property
    def listen_sock(self) -> Optional[socket.socket]:
        return self._listen_sock

    @property
    def closed(self) -> bool:
        return self._closed

    def handle_event(self, event: Event, flags: int):
        """Read on readiness to read; answer and close on readiness to write.

        Returns the started CGI process after answering, otherwise None.
        """
        if self._closed:
            return None
        if flags & EVENT_READ:
            try:
                complete = self.read(self._client_sock)
            except ConnectionError as exc:
                get_logger().error(str(exc))
                self.handle_error()
                return None
            if complete:
                self._manager.modify_event(EVENT_WRITE, event)
            return None
        if flags & EVENT_WRITE:
            headers = self.parse_headers()
            try:
                self.process = self.send_response(
                    self._client_sock,
                    self.filename,
                    self.method,
                    self._manager.searcher,
                    headers,
                )
            except (LookupError, OSError, ValueError) as exc:
                get_logger().error(f"could not answer request: {exc}")
            finally:
                self._close()
            return self.process
        return None

    def handle_error(self) -> int:
        """Drop the connection."""
        self._close()
        return 1

    def _close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._manager.unregister_event(self._client_sock)
        self._client_sock.close()
        self._manager._release(self)


class ConnectionManager(EventManager):
    """Event manager that also owns the connections of accepted clients."""

    MAX_CONN = 1000

    def __init__(self, searcher, cgi_script: str = DEFAULT_CGI_SCRIPT) -> None:
        super().__init__()
        self.searcher = searcher
        self.cgi_script = cgi_script
        self._connections: Dict[int, Connection] = {}
        self._manager_closed = False
        get_logger().debug("Connection Manager created")

    @property
    def connections(self) -> Tuple[Connection, ...]:
        """Connections that are still open."""
        return tuple(self._connections.values())

    def init_new_connection(
        self, client_sock: socket.socket, listen_sock: Optional[socket.socket]
    ) -> Connection:
        """Create a connection for ``client_sock`` and watch it for reading.

        Raises RuntimeError when the connection cannot be registered.
        """
        if len(self._connections) >= self.MAX_CONN:
            get_logger().error("too many open connections")
            raise RuntimeError("too many open connections")
        connection = Connection(self, client_sock, listen_sock, self.cgi_script)
        self.register_event(EVENT_READ, Event(client_sock, connection))
        self._connections[connection.fd] = connection
        return connection

    def _release(self, connection: Connection) -> None:
        if self._connections.get(connection.fd) is connection:
            del self._connections[connection.fd]

    def close(self) -> None:
        """Close every open connection and the event manager."""
        if self._manager_closed:
            return
        self._manager_closed = True
        for connection in list(self._connections.values()):
            connection.handle_error()
        super().close()
        get_logger().debug("Connection Manager destroyed")