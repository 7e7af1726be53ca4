"""Answers a parsed request: locates the file and hands it to the CGI script."""

from __future__ import annotations

import os
import socket
import subprocess
from typing import Mapping, Optional

from .logger import get_logger

DEFAULT_CGI_SCRIPT = "./cgi-bin/GET.cgi"
_INDEX_FILENAME = "/index.html"
_INDEX_PATH = "./index.html"

NOT_IMPLEMENTED_RESPONSE = (
    b"HTTP/1.0 501 Not Implemented\r\n"
    b"Content-Type: text/plain\r\n"
    b"Content-Length: 19\r\n"
    b"Connection: close\r\n"
    b"Last-Modified: Mon, 23 Mar 2020 02:49:28 GMT\r\n"
    b"Expires: Sun, 17 Jan 2038 19:14:07 GMT\r\n"
    b"Date: Mon, 23 Mar 2020 04:49:28 GMT\n\n"
    b"501 Not Implemented"
)


class Response:
    """Sends the answer to a request over a client socket."""

    def __init__(self, cgi_script: str = DEFAULT_CGI_SCRIPT) -> None:
        self.cgi_script = cgi_script
        super().__init__()

    def send_to_cgi(self, sock: socket.socket, path: str) -> Optional[subprocess.Popen]:
        """Start the CGI script writing to ``sock`` with ``QUERY_STRING`` set to ``path``.

        Returns the running process, or None if the script could not be started.
        """
        env = dict(os.environ, QUERY_STRING=path)
        try:
            return subprocess.Popen(
                [path],
                executable=self.cgi_script,
                stdout=sock.fileno(),
                env=env,
            )
        except OSError as exc:
            get_logger().error(f"result false: {exc}")
            return None

    def send_response(
        self,
        sock: socket.socket,
        filename: str,
        method: str,
        searcher,
        headers: Mapping[str, str],
    ) -> Optional[subprocess.Popen]:
        """Answer a request for ``filename`` with ``method`` on client ``sock``.

        The location serving ``filename`` supplies the ``root`` the rest of the
        path is appended to. A missing file gets a 501 reply; an existing file
        requested with GET is passed to the CGI script, whose process is
        returned. Returns None whenever no script was started.
        """
        log = get_logger()
        log.debug(f"filename is {filename}")
        log.debug(f"method is {method}")

        host_header = headers.get("host")
        host = host_header.partition(":")[0] if host_header else None

        route = searcher.get_location_prefix(sock, host, filename)
        if route is None:
            return None
        roots = searcher.find_location_directive(sock, "root", host, route)
        if not roots:
            return None
        root_directory = roots[-1]

        if filename == _INDEX_FILENAME:
            path = _INDEX_PATH
        else:
            path = root_directory + filename[len(route):]

        if not os.path.exists(path):
            log.info(f"file not found: {path}")
            sock.sendall(NOT_IMPLEMENTED_RESPONSE)
            return None
        if method == "GET":
            log.debug("Received GET method")
            return self.send_to_cgi(sock, path)
        return None