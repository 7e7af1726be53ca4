import socket

import pytest

from webserv.request import BUFFSIZE, Request


def test_short_chunk_completes_request():
    request = Request()
    assert request.feed(b"GET / HTTP/1.1\r\n") is True
    assert request.raw == b"GET / HTTP/1.1\r\n"


def test_full_chunk_without_head_end_waits_for_more():
    request = Request()
    assert request.feed(b"a" * BUFFSIZE) is False
    assert request.feed(b"\r\n\r\n") is True
    assert len(request.raw) == BUFFSIZE + 4


def test_full_chunk_with_head_end_completes():
    request = Request()
    chunk = b"GET / HTTP/1.1\r\n\r\n"
    chunk += b"x" * (BUFFSIZE - len(chunk))
    assert request.feed(chunk) is True


def test_parse_request_line_and_headers():
    request = Request()
    request.feed(
        b"GET / HTTP/1.1\r\nHost: example.com\r\nX-Key :  val \r\n\r\nBody: ignored\r\n"
    )
    headers = request.parse_headers()
    assert request.method == "GET"
    assert request.filename == "/index.html"
    assert request.version == "HTTP/1.1"
    assert headers == {"host": "example.com", "x-key": "val "}


def test_path_other_than_root_is_kept():
    request = Request()
    request.feed(b"POST /contents/page.html HTTP/1.0\r\n\r\n")
    request.parse_headers()
    assert request.method == "POST"
    assert request.filename == "/contents/page.html"


def test_first_header_occurrence_wins():
    request = Request()
    request.feed(b"GET /a HTTP/1.1\r\nHost: first\r\nHOST: second\r\n\r\n")
    assert request.parse_headers()["host"] == "first"


def test_lines_without_colon_are_skipped():
    request = Request()
    request.feed(b"GET /a HTTP/1.1\r\nnocolon\r\nAccept: */*\r\n\r\n")
    assert request.parse_headers() == {"accept": "*/*"}


def test_empty_request_parses_to_nothing():
    request = Request()
    assert request.parse_headers() == {}
    assert request.method == ""


def test_read_from_socket():
    left, right = socket.socketpair()
    try:
        right.sendall(b"GET /x HTTP/1.1\r\n\r\n")
        request = Request()
        assert request.read(left) is True
        request.parse_headers()
        assert request.filename == "/x"
    finally:
        left.close()
        right.close()


def test_read_from_closed_socket_raises():
    left, right = socket.socketpair()
    right.close()
    left.close()
    with pytest.raises(ConnectionError):
        Request().read(left)