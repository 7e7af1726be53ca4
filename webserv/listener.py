"""Listening sockets and the server's main event loop."""

from __future__ import annotations

import socket
from typing import Iterable, List, Tuple, Union

from .connection import ConnectionManager
from .events import Event, EventHandler
from .logger import get_logger
from .messages import ErrorMessages, SuccessMessages
from .netutils import nl_to_ipv4, shutdown_event
from .response import DEFAULT_CGI_SCRIPT

Address = Tuple[Union[int, str], int]


class Listener(EventHandler, ConnectionManager):
    """Listens on every configured address and dispatches ready events.

    Each address is an ``(ip, port)`` pair whose ``ip`` is dotted text or a
    value in network byte order. Raises RuntimeError if a socket cannot be set up.
    """

    def __init__(
        self,
        addresses: Iterable[Address],
        searcher,
        cgi_script: str = DEFAULT_CGI_SCRIPT,
        poll_timeout: float = 0.1,
    ) -> None:
        super().__init__(searcher, cgi_script)
        self.poll_timeout = poll_timeout
        self._sockets: List[socket.socket] = []
        try:
            for address in addresses:
                self._sockets.append(self._init_socket(address))
            for sock in self._sockets:
                self.add_tcp_event(sock, self)
        except BaseException:
            self.close()
            raise

    @property
    def sockets(self) -> Tuple[socket.socket, ...]:
        return tuple(self._sockets)

    @staticmethod
    def _init_socket(address: Address) -> socket.socket:
        ip, port = address
        host = nl_to_ipv4(ip) if isinstance(ip, int) else ip
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setblocking(False)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
            sock.listen(socket.SOMAXCONN)
        except OSError as exc:
            sock.close()
            get_logger().critical(f"{ErrorMessages.E_SOCK_INIT}{exc}")
            raise RuntimeError(f"{ErrorMessages.E_SOCK_INIT}{exc}") from exc
        get_logger().info(f"{SuccessMessages.SOCK_INIT} {host}:{port}")
        return sock

    def run(self) -> None:
        """Dispatch ready events until the shutdown flag is set."""
        stop = shutdown_event()
        while not stop.is_set():
            for event, flags in self.poll(self.poll_timeout):
                event.handler.handle_event(event, flags)

    def handle_event(self, event: Event, flags: int) -> bool:
        """Accept a pending client on ``event``'s socket; return whether one was added."""
        log = get_logger()
        log.info("New connection request")
        try:
            client, _ = event.fd.accept()
        except BlockingIOError:
            return False
        except OSError as exc:
            log.error(f"accept failed: {exc}")
            return False
        try:
            self.init_new_connection(client, event.fd)
        except RuntimeError:
            client.close()
            return False
        log.info("Connection accepted")
        return True

    def handle_error(self) -> bool:
        return False

    def close(self) -> None:
        """Close every connection, the event manager and the listening sockets."""
        super().close()
        for sock in getattr(self, "_sockets", ()):
            sock.close()