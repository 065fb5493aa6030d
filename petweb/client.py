"""Minimal HTTP/1.0 client: fetch one path and copy the reply to the output streams."""

from __future__ import annotations

import os
import re
import socket
import sys
from typing import BinaryIO, Optional, Sequence

BUFSIZE = 1024
HEADER_END = b"\r\n\r\n"

_STATUS = re.compile(rb"HTTP/\s*\S+\s+([+-]?\d+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def build_request(path: str) -> bytes:
    """GET request line for path, closed by a blank line."""
    return b"GET " + os.fsencode(path) + b" HTTP/1.0\r\n\r\n"


def parse_status_code(data: bytes) -> int:
    """Status code of an HTTP reply, or 0 if the status line cannot be read."""
    match = _STATUS.match(data)
    return int(match.group(1)) if match else 0


def split_header(data: bytes) -> tuple[bytes, bytes]:
    """Split a reply into header (with its terminator) and the body seen so far."""
    end = data.find(HEADER_END)
    if end < 0:
        return data, b""
    end += len(HEADER_END)
    return data[:end], data[end:]


def _read_head(sock: socket.socket) -> bytes:
    head = bytearray()
    while len(head) < BUFSIZE:
        chunk = sock.recv(BUFSIZE - len(head))
        if not chunk:
            break
        head += chunk
        if HEADER_END in head:
            break
    return bytes(head)


def fetch(host: str, port: int, path: str, out: BinaryIO, err: BinaryIO) -> int:
    """Request path from host:port and return the reply's status code.

    On status 200 the body goes to out; otherwise the whole reply,
    header included, goes to err.
    """
    address = socket.gethostbyname(host)
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP) as sock:
        sock.connect((address, port & 0xFFFF))
        sock.sendall(build_request(path))
        head = _read_head(sock)
        status = parse_status_code(head)
        if status == 200:
            out.write(split_header(head)[1])
            sink = out
        else:
            err.write(head)
            sink = err
        while chunk := sock.recv(BUFSIZE):
            sink.write(chunk)
    return status


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: http_client <hostname> <port> <path>."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3:
        print("usage: http_client <hostname> <port> <path>", file=sys.stderr)
        return 1
    host, port_text, path = args
    out = sys.stdout.buffer
    err = sys.stderr.buffer
    try:
        status = fetch(host, _atoi(port_text), path, out, err)
    except socket.gaierror:
        print("Error resolving hostname", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error communicating with server: {exc}", file=sys.stderr)
        return 1
    finally:
        out.flush()
        err.flush()
    return 0 if status == 200 else 1


if __name__ == "__main__":
    sys.exit(main())