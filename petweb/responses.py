"""Wire formats and request parsing shared by the HTTP/1.0 file servers."""

from __future__ import annotations

import os
import re

BUFSIZE = 1024
MIN_PORT = 1500
HEADER_END = b"\r\n\r\n"

OK_HEADER_FORMAT = (
    "HTTP/1.0 200 OK\r\n"
    "Content-type: text/plain\r\n"
    "Content-length: {} \r\n\r\n"
)

NOT_FOUND_HEADER_FORMAT = (
    "HTTP/1.0 404 FILE NOT FOUND\r\n"
    "Content-type: text/html\r\n"
    "Content-length: {}\r\n\r\n"
)

NOT_FOUND_BODY = (
    b"<html><body bgColor=black text=white>\n"
    b"<h2>404 FILE NOT FOUND</h2>\n"
    b"</body></html>\n"
)

_GET_TARGET = re.compile(rb"GET\s*(\S+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def ok_header(size: int) -> bytes:
    """Header of a 200 reply announcing a plain-text body of size bytes."""
    return OK_HEADER_FORMAT.format(size).encode("ascii")


def not_found_response() -> bytes:
    """Complete 404 reply, header and HTML body."""
    header = NOT_FOUND_HEADER_FORMAT.format(len(NOT_FOUND_BODY)).encode("ascii")
    return header + NOT_FOUND_BODY


def request_filename(request: bytes) -> str:
    """Return the file named by a GET request, without one leading slash.

    Raises ValueError when the request is not a GET with a target.
    """
    match = _GET_TARGET.match(request)
    if match is None:
        raise ValueError("request is not a GET with a target")
    target = match.group(1)
    if target.startswith(b"/"):
        target = target[1:]
    return os.fsdecode(target)


def request_complete(request: bytes) -> bool:
    """True once the request ends with the blank line closing its headers."""
    return request.endswith(HEADER_END)


def parse_port(text: str) -> int:
    """Read a port number the way atoi does; ports below 1500 are refused."""
    match = _LEADING_INT.match(text)
    port = int(match.group(1)) if match else 0
    if port < MIN_PORT:
        raise ValueError(f"INVALID PORT NUMBER: {port}; can't be < {MIN_PORT}")
    return port