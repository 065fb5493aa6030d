"""Blocking HTTP/1.0 file server that handles one connection at a time."""

from __future__ import annotations

import os
import re
import socket
import sys
from typing import Optional, Sequence

from petweb.responses import BUFSIZE, HEADER_END, NOT_FOUND_BODY, ok_header, parse_port

NOT_FOUND_RESPONSE = (
    b"HTTP/1.0 404 FILE NOT FOUND\r\n"
    b"Content-type: text/html\r\n\r\n" + NOT_FOUND_BODY
)

_FILENAME = re.compile(rb"GET\s*/\s*(\S+)")


def parse_filename(request: bytes) -> str:
    """File name after "GET /", or an empty string when there is none."""
    match = _FILENAME.match(request)
    return os.fsdecode(match.group(1)) if match else ""


def _read_headers(sock: socket.socket) -> bytes:
    data = b""
    while len(data) < BUFSIZE:
        chunk = sock.recv(BUFSIZE - len(data))
        if not chunk:
            break
        data += chunk
        if HEADER_END in data:
            break
    return data


def _log_not_found() -> None:
    sys.stderr.write(NOT_FOUND_RESPONSE.decode("ascii"))


def _send_not_found(sock: socket.socket) -> bool:
    _log_not_found()
    sock.sendall(NOT_FOUND_RESPONSE)
    return False


def handle_connection(sock: socket.socket) -> bool:
    """Serve one request on sock and close it; True if a file was sent."""
    with sock:
        try:
            request = _read_headers(sock)
        except OSError:
            _log_not_found()
            return False
        filename = parse_filename(request)
        if not filename:
            return _send_not_found(sock)
        try:
            handle = open(filename, "rb")
        except OSError:
            return _send_not_found(sock)
        with handle:
            sock.sendall(ok_header(os.fstat(handle.fileno()).st_size))
            while chunk := handle.read(BUFSIZE):
                sock.sendall(chunk)
    return True


class BlockingServer:
    """Listening socket served by accepting and handling connections in turn."""

    def __init__(self, port: int) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
        try:
            self._sock.bind(("", port))
            self._sock.listen(10)
        except OSError:
            self._sock.close()
            raise
        self.port = self._sock.getsockname()[1]

    def handle_one(self) -> bool:
        """Accept one connection and serve it; True if a file was sent."""
        client, _ = self._sock.accept()
        return handle_connection(client)

    def serve_forever(self) -> None:
        """Accept and serve connections until the server is closed."""
        while self._sock.fileno() != -1:
            try:
                client, _ = self._sock.accept()
            except OSError:
                if self._sock.fileno() == -1:
                    break
                print("Error accepting connection", file=sys.stderr)
                continue
            try:
                served = handle_connection(client)
            except OSError:
                served = False
            if not served:
                print("Error handling connection", file=sys.stderr)

    def close(self) -> None:
        """Stop listening."""
        self._sock.close()

    def __enter__(self) -> "BlockingServer":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: http_server1 port."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: http_server1 port", file=sys.stderr)
        return 1
    try:
        port = parse_port(args[0])
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        server = BlockingServer(port)
    except OSError as exc:
        print(f"Error binding socket: {exc}", file=sys.stderr)
        return 1
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())