import queue
import socket

import pytest

from urclient.tcp_server import TCPServer

TIMEOUT = 2.0


class _Recorder:
    def __init__(self):
        self.connects = queue.Queue()
        self.messages = queue.Queue()
        self.disconnects = queue.Queue()

    def on_connect(self, client):
        self.connects.put(client)

    def on_message(self, client, data):
        self.messages.put((client, data))

    def on_disconnect(self, client):
        self.disconnects.put(client)


@pytest.fixture
def served():
    server = TCPServer(0)
    recorder = _Recorder()
    server.connect_callback = recorder.on_connect
    server.message_callback = recorder.on_message
    server.disconnect_callback = recorder.on_disconnect
    server.start()
    yield server, recorder
    server.close()


@pytest.fixture
def connect():
    opened = []

    def _connect(port):
        client = socket.create_connection(("127.0.0.1", port), timeout=TIMEOUT)
        opened.append(client)
        return client

    yield _connect
    for client in opened:
        client.close()


def test_connect_invokes_callback(served, connect):
    server, recorder = served
    connect(server.port)
    accepted = recorder.connects.get(timeout=TIMEOUT)
    assert server.clients == (accepted,)


def test_message_is_delivered(served, connect):
    server, recorder = served
    client = connect(server.port)
    accepted = recorder.connects.get(timeout=TIMEOUT)
    client.sendall(b"test message")
    sender, data = recorder.messages.get(timeout=TIMEOUT)
    assert sender is accepted
    assert data == b"test message"


def test_server_write_reaches_client(served, connect):
    server, recorder = served
    client = connect(server.port)
    accepted = recorder.connects.get(timeout=TIMEOUT)
    package = bytes([0x00, 0x0C, 0x55, 0x01, 0x40, 0xCF, 0x8F, 0xF9, 0xDB, 0x22, 0xD0, 0xE5])
    assert server.write(accepted, package) is True
    received = b""
    while len(received) < len(package):
        chunk = client.recv(4096)
        assert chunk
        received += chunk
    assert received == package


def test_disconnect_invokes_callback(served, connect):
    server, recorder = served
    client = connect(server.port)
    accepted = recorder.connects.get(timeout=TIMEOUT)
    client.close()
    gone = recorder.disconnects.get(timeout=TIMEOUT)
    assert gone is accepted
    assert server.clients == ()


def test_max_clients_rejects_extra_connection(served, connect):
    server, recorder = served
    server.max_clients_allowed = 1
    connect(server.port)
    first = recorder.connects.get(timeout=TIMEOUT)
    second = connect(server.port)
    assert second.recv(16) == b""
    assert server.clients == (first,)
    assert recorder.connects.empty()


def test_write_to_closed_socket_fails(served):
    server, _ = served
    dead = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    dead.close()
    assert server.write(dead, b"data") is False


def test_port_in_use_raises(served):
    server, _ = served
    with pytest.raises(OSError) as info:
        TCPServer(server.port)
    assert f"port {server.port}" in str(info.value)


def test_start_and_shutdown(connect):
    server = TCPServer(0)
    try:
        server.start()
        assert server.running is True
        with pytest.raises(RuntimeError):
            server.start()
        server.shutdown()
        assert server.running is False
    finally:
        server.close()


def test_context_manager_closes_listener():
    with TCPServer(0) as server:
        server.start()
        port = server.port
        assert server.running is True
    assert server.running is False
    with pytest.raises(OSError):
        socket.create_connection(("127.0.0.1", port), timeout=TIMEOUT)