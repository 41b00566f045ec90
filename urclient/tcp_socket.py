"""A TCP client socket with automatic reconnection on setup."""

from __future__ import annotations

import datetime
import enum
import socket
import time

from . import log


class SocketState(enum.Enum):
    """Connection state of a :class:`TCPSocket`."""

    INVALID = "invalid"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    CLOSED = "closed"


class TCPSocket:
    """A client socket that keeps retrying until a connection is made.

    ``reconnection_time`` is the pause in seconds between connection attempts.
    Subclasses may override :meth:`open` to change how a socket is opened.
    """

    def __init__(self) -> None:
        self._sock: socket.socket | None = None
        self._state = SocketState.INVALID
        self._recv_timeout: float | None = None
        self.reconnection_time: float = 10.0

    @property
    def state(self) -> SocketState:
        """The current connection state."""
        return self._state

    def open(self, sock: socket.socket, address: tuple) -> bool:
        """Connect ``sock`` to ``address``; return True on success."""
        try:
            sock.connect(address)
        except OSError:
            return False
        return True

    def _set_options(self, sock: socket.socket) -> None:
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        quickack = getattr(socket, "TCP_QUICKACK", None)
        if quickack is not None:
            try:
                sock.setsockopt(socket.IPPROTO_TCP, quickack, 1)
            except OSError:
                pass
        if self._recv_timeout is not None:
            sock.settimeout(self._recv_timeout)

    def _connect_any(self, infos: list) -> socket.socket | None:
        for family, socktype, proto, _, address in infos:
            try:
                sock = socket.socket(family, socktype, proto)
            except OSError:
                continue
            if self.open(sock, address):
                return sock
            sock.close()
        return None

    def setup(self, host: str, port: int) -> bool:
        """Connect to ``host``:``port``, retrying until it succeeds.

        Returns False if the socket is already connected or the address
        cannot be resolved.
        """
        if self._state is SocketState.CONNECTED:
            return False

        log.debug("Setting up connection: %s:%d", host, port)
        while True:
            try:
                infos = socket.getaddrinfo(
                    host or None, port, socket.AF_UNSPEC, socket.SOCK_STREAM, 0, socket.AI_PASSIVE
                )
            except (socket.gaierror, UnicodeError):
                log.error("Failed to get address for %s:%d", host, port)
                return False

            sock = self._connect_any(infos)
            if sock is not None:
                break

            self._state = SocketState.INVALID
            log.error(
                "Failed to connect to robot on IP %s. Please check that the robot is booted and "
                "reachable on %s. Retrying in %g seconds",
                host,
                host,
                self.reconnection_time,
            )
            time.sleep(self.reconnection_time)

        self._sock = sock
        self._set_options(sock)
        self._state = SocketState.CONNECTED
        log.debug("Connection established for %s:%d", host, port)
        return True

    def close(self) -> None:
        """Close the connection if one is open."""
        if self._sock is not None:
            self._state = SocketState.CLOSED
            self._sock.close()
            self._sock = None

    def get_ip(self) -> str:
        """Return the local IP address of the connection, or an empty string."""
        if self._sock is None:
            log.error("Could not get local IP")
            return ""
        try:
            return self._sock.getsockname()[0]
        except OSError:
            log.error("Could not get local IP")
            return ""

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes.

        Returns an empty bytes object when nothing could be read: the socket is
        not connected, the peer closed the connection or the receive timed out.
        """
        if self._state is not SocketState.CONNECTED or self._sock is None or size <= 0:
            return b""
        try:
            data = self._sock.recv(size)
        except OSError:
            return b""
        if not data:
            self._state = SocketState.DISCONNECTED
        return data

    def write(self, data: bytes) -> bool:
        """Send all of ``data``; return False if the socket is not connected or sending failed."""
        if self._state is not SocketState.CONNECTED or self._sock is None:
            log.error("Attempt to write on a non-connected socket")
            return False
        view = memoryview(data)
        while view:
            try:
                sent = self._sock.send(view)
            except OSError:
                sent = 0
            if sent <= 0:
                log.error("Sending data through socket failed.")
                return False
            view = view[sent:]
        return True

    def set_receive_timeout(self, timeout: float | datetime.timedelta) -> None:
        """Limit how long :meth:`read` blocks, in seconds."""
        if isinstance(timeout, datetime.timedelta):
            timeout = timeout.total_seconds()
        self._recv_timeout = float(timeout)
        if self._state is SocketState.CONNECTED and self._sock is not None:
            self._set_options(self._sock)