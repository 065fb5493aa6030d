import socket

import pytest

from petweb import server2
from petweb.responses import not_found_response, ok_header

REQUEST = b"GET /page.txt HTTP/1.0\r\n\r\n"
CONTENT = b"hello world"


def _recv_all(sock):
    data = b""
    while chunk := sock.recv(4096):
        data += chunk
    return data


@pytest.fixture
def site(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "page.txt").write_bytes(CONTENT)
    return tmp_path


def test_read_request_stops_at_header_end():
    peer, sock = socket.socketpair()
    with peer, sock:
        peer.sendall(REQUEST + b"EXTRA")
        assert server2.read_request(sock) == REQUEST
        assert sock.recv(16) == b"EXTRA"


def test_read_request_caps_size():
    peer, sock = socket.socketpair()
    with peer, sock:
        peer.sendall(b"a" * 2000)
        assert len(server2.read_request(sock)) == server2.MAX_REQUEST


def test_read_request_stops_at_eof():
    peer, sock = socket.socketpair()
    with sock:
        peer.sendall(b"GET /a")
        peer.close()
        assert server2.read_request(sock) == b"GET /a"


def test_handle_connection_serves_file(site):
    peer, sock = socket.socketpair()
    with peer:
        peer.sendall(REQUEST)
        assert server2.handle_connection(sock) is True
        assert _recv_all(peer) == ok_header(len(CONTENT)) + CONTENT


def test_handle_connection_missing_file(site):
    peer, sock = socket.socketpair()
    with peer:
        peer.sendall(b"GET /missing.txt HTTP/1.0\r\n\r\n")
        assert server2.handle_connection(sock) is False
        assert _recv_all(peer) == not_found_response()


def test_handle_connection_malformed_request_closes_silently(site):
    peer, sock = socket.socketpair()
    with peer:
        peer.sendall(b"POST /page.txt HTTP/1.0\r\n\r\n")
        assert server2.handle_connection(sock) is False
        assert _recv_all(peer) == b""


def test_select_server_accepts_then_serves(site):
    with server2.SelectServer(0) as server:
        with socket.create_connection(("127.0.0.1", server.port)) as client:
            client.sendall(REQUEST)
            assert server.poll(2.0) == 0
            assert server.poll(2.0) == 1
            assert _recv_all(client) == ok_header(len(CONTENT)) + CONTENT


def test_select_server_drops_connection_when_full(site):
    with server2.SelectServer(0, max_connections=1) as server:
        first = socket.create_connection(("127.0.0.1", server.port))
        with first:
            assert server.poll(2.0) == 0
            second = socket.create_connection(("127.0.0.1", server.port))
            with second:
                assert server.poll(2.0) == 0
                second.settimeout(2.0)
                assert _recv_all(second) == b""
            first.sendall(REQUEST)
            assert server.poll(2.0) == 1
            assert _recv_all(first) == ok_header(len(CONTENT)) + CONTENT


def test_select_server_rejects_zero_slots():
    with pytest.raises(ValueError):
        server2.SelectServer(0, max_connections=0)


def test_main_usage(capsys):
    assert server2.main([]) == 1
    assert "usage: http_server2 port" in capsys.readouterr().err


def test_main_rejects_low_port(capsys):
    assert server2.main(["1000"]) == 1
    assert "1000" in capsys.readouterr().err