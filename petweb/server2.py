"""HTTP/1.0 file server multiplexing its connections with select()."""

from __future__ import annotations

import select
import socket
import sys
from typing import Optional, Sequence

from petweb.responses import (
    BUFSIZE,
    HEADER_END,
    not_found_response,
    ok_header,
    parse_port,
    request_filename,
)

MAX_CONNECTIONS = 64
MAX_REQUEST = BUFSIZE - 1


def read_request(sock: socket.socket) -> bytes:
    """Read a byte at a time until the headers end, EOF, or the size cap."""
    request = bytearray()
    while len(request) < MAX_REQUEST:
        try:
            byte = sock.recv(1)
        except OSError:
            break
        if not byte:
            break
        request += byte
        if request.endswith(HEADER_END):
            break
    return bytes(request)


def handle_connection(sock: socket.socket) -> bool:
    """Serve one request on sock and close it; True if a file was sent."""
    with sock:
        request = read_request(sock)
        try:
            filename = request_filename(request)
        except ValueError:
            return False
        try:
            with open(filename, "rb") as handle:
                data = handle.read()
        except OSError:
            sock.sendall(not_found_response())
            return False
        sock.sendall(ok_header(len(data)) + data)
    return True


class SelectServer:
    """Listening socket plus a fixed number of connection slots, driven by select()."""

    def __init__(self, port: int, max_connections: int = MAX_CONNECTIONS) -> None:
        if max_connections < 1:
            raise ValueError("max_connections must be at least 1")
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind(("", port))
            listener.listen(10)
        except OSError:
            listener.close()
            raise
        self._listener = listener
        self.port = listener.getsockname()[1]
        self._slots: list[Optional[socket.socket]] = [None] * max_connections

    def poll(self, timeout: Optional[float] = None) -> int:
        """Run one select round; return how many connections were served."""
        active = [conn for conn in self._slots if conn is not None]
        readable, _, _ = select.select([self._listener, *active], [], [], timeout)
        ready = set(readable)
        if self._listener in ready:
            try:
                client, _ = self._listener.accept()
            except OSError as exc:
                print(f"accept: {exc}", file=sys.stderr)
                return 0
            free = next((i for i, conn in enumerate(self._slots) if conn is None), None)
            if free is None:
                client.close()
            else:
                self._slots[free] = client
        handled = 0
        for slot, conn in enumerate(self._slots):
            if conn is not None and conn in ready:
                self._slots[slot] = None
                try:
                    handle_connection(conn)
                except OSError:
                    pass
                handled += 1
        return handled

    def serve_forever(self) -> None:
        """Poll until the server is closed."""
        while self._listener.fileno() != -1:
            try:
                self.poll()
            except (OSError, ValueError) as exc:
                if self._listener.fileno() == -1:
                    break
                print(f"select: {exc}", file=sys.stderr)

    def close(self) -> None:
        """Close every open connection and the listening socket."""
        for conn in self._slots:
            if conn is not None:
                conn.close()
        self._slots = [None] * len(self._slots)
        self._listener.close()

    def __enter__(self) -> "SelectServer":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: http_server2 port."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: http_server2 port", file=sys.stderr)
        return 1
    try:
        port = parse_port(args[0])
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        server = SelectServer(port)
    except OSError as exc:
        print(f"bind: {exc}", file=sys.stderr)
        return 1
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())