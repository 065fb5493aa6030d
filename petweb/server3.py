"""Event-driven HTTP/1.0 file server: non-blocking sockets and files under one select() loop."""

from __future__ import annotations

import os
import select
import socket
import sys
from enum import Enum, auto
from typing import Optional, Sequence

from petweb.responses import (
    BUFSIZE,
    not_found_response,
    ok_header,
    parse_port,
    request_complete,
    request_filename,
)

MAX_REQUEST = BUFSIZE - 1

_O_NONBLOCK = getattr(os, "O_NONBLOCK", 0)


class ConnectionState(Enum):
    """What a connection is waiting for."""

    READING_REQUEST = auto()
    READING_FILE = auto()
    WRITING_RESPONSE = auto()


class Connection:
    """One client connection moving from request, to file read, to response."""

    def __init__(self, sock: socket.socket) -> None:
        sock.setblocking(False)
        self.sock = sock
        self.fd: Optional[int] = None
        self.state = ConnectionState.READING_REQUEST
        self.request = bytearray()
        self.response = b""
        self.sent = 0
        self.file_size = 0
        self.file_data: Optional[bytearray] = None
        self.closed = False

    @property
    def finished(self) -> bool:
        """True once the connection is closed or its response fully sent."""
        if self.closed:
            return True
        return (
            self.state is ConnectionState.WRITING_RESPONSE
            and self.sent >= len(self.response)
        )

    def handle_network_data(self) -> None:
        """Read whatever request bytes are available; act once the headers end.

        A peer that hangs up, or fills the buffer, before finishing its
        request is dropped.
        """
        while len(self.request) < MAX_REQUEST:
            try:
                chunk = self.sock.recv(MAX_REQUEST - len(self.request))
            except BlockingIOError:
                break
            except OSError:
                self.close()
                return
            if not chunk:
                self.close()
                return
            self.request += chunk
            if request_complete(self.request):
                break
        if request_complete(self.request):
            self.handle_request()
        elif len(self.request) >= MAX_REQUEST:
            self.close()

    def _respond(self) -> None:
        self.build_response()
        self.write_pending()

    def handle_request(self) -> None:
        """Open the requested file and start reading it, or answer 404."""
        try:
            filename = request_filename(bytes(self.request))
        except ValueError:
            self._respond()
            return
        try:
            size = os.stat(filename).st_size
        except OSError:
            self.file_data = None
            self.file_size = 0
            self._respond()
            return
        try:
            fd = os.open(filename, os.O_RDONLY | _O_NONBLOCK)
        except OSError:
            self.file_data = None
            self.file_size = 0
            self._respond()
            return
        self.fd = fd
        self.file_size = size
        self.file_data = bytearray()
        self.state = ConnectionState.READING_FILE
        self.handle_file_data()

    def handle_file_data(self) -> None:
        """Read available file data; respond once the whole file is in."""
        if self.fd is None or self.file_data is None:
            return
        while len(self.file_data) < self.file_size:
            try:
                chunk = os.read(self.fd, self.file_size - len(self.file_data))
            except BlockingIOError:
                return
            except OSError:
                self.close()
                return
            if not chunk:
                break
            self.file_data += chunk
        if len(self.file_data) < self.file_size:
            return
        os.close(self.fd)
        self.fd = None
        self._respond()

    def build_response(self) -> bytes:
        """Assemble the reply (200 with the file, else 404) and switch to writing."""
        if self.file_data is not None:
            response = ok_header(self.file_size) + bytes(self.file_data)
        else:
            response = not_found_response()
        self.response = response
        self.sent = 0
        self.state = ConnectionState.WRITING_RESPONSE
        return response

    def write_pending(self) -> bool:
        """Send as much of the reply as the socket takes; True when nothing is left."""
        view = memoryview(self.response)
        while self.sent < len(self.response):
            try:
                written = self.sock.send(view[self.sent:])
            except BlockingIOError:
                break
            except OSError:
                self.close()
                return True
            self.sent += written
        return self.sent >= len(self.response)

    def close(self) -> None:
        """Release the file and the socket."""
        if self.fd is not None:
            os.close(self.fd)
            self.fd = None
        if not self.closed:
            self.sock.close()
            self.closed = True


class EventServer:
    """Listening socket and its connections, advanced one select() round at a time."""

    def __init__(self, port: int) -> None:
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.setblocking(False)
            listener.bind(("", port))
            listener.listen(10)
        except OSError:
            listener.close()
            raise
        self._listener = listener
        self.port = listener.getsockname()[1]
        self.connections: list[Connection] = []

    def poll(self, timeout: Optional[float] = None) -> int:
        """Run one select round; return how many connections were completed."""
        listen_fd = self._listener.fileno()
        readers = [listen_fd]
        writers = []
        for conn in self.connections:
            if conn.state is ConnectionState.READING_REQUEST:
                readers.append(conn.sock.fileno())
            elif conn.state is ConnectionState.READING_FILE and conn.fd is not None:
                readers.append(conn.fd)
            elif conn.state is ConnectionState.WRITING_RESPONSE:
                writers.append(conn.sock.fileno())

        readable, writable, _ = select.select(readers, writers, [], timeout)
        readable_set = set(readable)
        writable_set = set(writable)

        if listen_fd in readable_set:
            try:
                client, _ = self._listener.accept()
            except BlockingIOError:
                pass
            except OSError as exc:
                print(f"accept: {exc}", file=sys.stderr)
            else:
                self.connections.append(Connection(client))

        for conn in list(self.connections):
            if (
                not conn.closed
                and conn.state is ConnectionState.READING_REQUEST
                and conn.sock.fileno() in readable_set
            ):
                conn.handle_network_data()

        for conn in list(self.connections):
            if (
                not conn.closed
                and conn.state is ConnectionState.READING_FILE
                and conn.fd is not None
                and conn.fd in readable_set
            ):
                conn.handle_file_data()

        completed = 0
        for conn in list(self.connections):
            if (
                not conn.closed
                and conn.state is ConnectionState.WRITING_RESPONSE
                and conn.sock.fileno() in writable_set
            ):
                if conn.write_pending():
                    conn.close()
                    completed += 1

        self.connections = [conn for conn in self.connections if not conn.closed]
        return completed

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
        """Close every connection and the listening socket."""
        for conn in self.connections:
            conn.close()
        self.connections = []
        self._listener.close()

    def __enter__(self) -> "EventServer":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: http_server3 port."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: http_server3 port", file=sys.stderr)
        return 1
    try:
        port = parse_port(args[0])
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        server = EventServer(port)
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