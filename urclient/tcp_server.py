"""A small TCP server running its event loop in a background thread."""

from __future__ import annotations

import selectors
import socket
import threading
from collections.abc import Callable

from . import log

INPUT_BUFFER_SIZE = 4096

MessageCallback = Callable[[socket.socket, bytes], None]
ClientCallback = Callable[[socket.socket], None]


class TCPServer:
    """Listens on a port and reports connects, messages and disconnects.

    Callbacks are plain attributes and run on the worker thread:
    ``connect_callback(client)``, ``message_callback(client, data)`` and
    ``disconnect_callback(client)``. ``max_clients_allowed`` of 0 means no limit.
    Port 0 picks a free port; the bound port is available as ``port``.
    """

    def __init__(self, port: int) -> None:
        self.message_callback: MessageCallback | None = None
        self.connect_callback: ClientCallback | None = None
        self.disconnect_callback: ClientCallback | None = None
        self.max_clients_allowed = 0

        self._clients: list[socket.socket] = []
        self._lock = threading.Lock()
        self._keep_running = False
        self._thread: threading.Thread | None = None
        self._closed = False

        self._selector = selectors.DefaultSelector()
        self._wake_r, self._wake_w = socket.socketpair()
        self._listener: socket.socket | None = None
        try:
            self._wake_r.setblocking(False)
            self._wake_w.setblocking(False)
            self._selector.register(self._wake_r, selectors.EVENT_READ)
            self._listener = self._create_listener(port)
        except BaseException:
            self._release()
            raise
        self.port: int = self._listener.getsockname()[1]
        self._selector.register(self._listener, selectors.EVENT_READ)
        log.debug("Listening on port %d", self.port)

    @staticmethod
    def _create_listener(port: int) -> socket.socket:
        try:
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            raise OSError(exc.errno, "Failed to create socket endpoint") from exc
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
            log.debug("Created socket with FD %d", listener.fileno())
            try:
                listener.bind(("", port))
            except OSError as exc:
                raise OSError(
                    exc.errno,
                    f"Failed to bind socket for port {port} to address. Reason: {exc.strerror}",
                ) from exc
            try:
                listener.listen(1)
            except OSError as exc:
                raise OSError(exc.errno, f"Failed to start listen on port {port}") from exc
        except BaseException:
            listener.close()
            raise
        return listener

    @property
    def clients(self) -> tuple[socket.socket, ...]:
        """The currently connected clients."""
        with self._lock:
            return tuple(self._clients)

    @property
    def running(self) -> bool:
        """True while the worker thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the worker thread handling connections and data."""
        if self._closed:
            raise RuntimeError("Server has been closed")
        if self.running:
            raise RuntimeError("Server is already running")
        log.debug("Starting worker thread")
        self._keep_running = True
        self._thread = threading.Thread(target=self._worker, name="TCPServer", daemon=True)
        self._thread.start()

    def shutdown(self) -> None:
        """Stop the worker thread and wait for it to finish."""
        self._keep_running = False
        if self._wake_w.fileno() != -1:
            try:
                self._wake_w.send(b"x")
            except BlockingIOError:
                pass
            except OSError as exc:
                raise OSError(exc.errno, "Writing to self-pipe failed.") from exc
        thread = self._thread
        if thread is not None and thread.is_alive() and thread is not threading.current_thread():
            thread.join()
            log.debug("Worker thread joined.")

    def write(self, client: socket.socket, data: bytes) -> bool:
        """Send all of ``data`` to ``client``; return False if sending failed."""
        view = memoryview(data)
        while view:
            try:
                sent = client.send(view)
            except OSError:
                sent = 0
            if sent <= 0:
                log.error("Sending data through socket failed.")
                return False
            view = view[sent:]
        return True

    def close(self) -> None:
        """Stop the server and close every socket it holds."""
        if self._closed:
            return
        log.debug("Destroying TCPServer object.")
        self.shutdown()
        self._closed = True
        with self._lock:
            clients = list(self._clients)
            self._clients.clear()
        for client in clients:
            client.close()
        self._release()

    def _release(self) -> None:
        self._selector.close()
        if self._listener is not None:
            self._listener.close()
        self._wake_r.close()
        self._wake_w.close()

    def __enter__(self) -> TCPServer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _worker(self) -> None:
        while self._keep_running:
            self._spin()
        log.debug("Finished worker thread of TCPServer")

    def _spin(self) -> None:
        try:
            events = self._selector.select()
        except (OSError, ValueError):
            log.error("select() failed. Shutting down socket event handler.")
            self._keep_running = False
            return

        ready = [key.fileobj for key, _ in events]
        if self._wake_r in ready and self._drain_wakeup():
            log.debug("Self-pipe triggered")
            return

        for sock in ready:
            if sock is self._wake_r:
                continue
            if sock is self._listener:
                self._handle_connect()
            else:
                self._read_data(sock)

    def _drain_wakeup(self) -> bool:
        triggered = False
        while True:
            try:
                chunk = self._wake_r.recv(64)
            except BlockingIOError:
                return triggered
            except OSError:
                log.error("read failed")
                return triggered
            if not chunk:
                return triggered
            triggered = True

    def _handle_connect(self) -> None:
        try:
            client, _ = self._listener.accept()
        except OSError as exc:
            log.error(
                "Failed to accept connection request on port %d: %s", self.port, exc.strerror
            )
            return

        with self._lock:
            accepted = self.max_clients_allowed == 0 or len(self._clients) < self.max_clients_allowed
            if accepted:
                self._clients.append(client)
        if not accepted:
            log.warn(
                "Connection attempt on port %d while maximum number of clients (%d) is already "
                "connected. Closing connection.",
                self.port,
                self.max_clients_allowed,
            )
            client.close()
            return

        self._selector.register(client, selectors.EVENT_READ)
        if self.connect_callback is not None:
            self.connect_callback(client)

    def _read_data(self, client: socket.socket) -> None:
        fd = client.fileno()
        try:
            data = client.recv(INPUT_BUFFER_SIZE)
        except ConnectionResetError:
            log.debug("client from FD %d sent a connection reset package.", fd)
            data = b""
        except OSError:
            log.error("recv() on FD %d failed.", fd)
            data = b""

        if data:
            if self.message_callback is not None:
                self.message_callback(client, data)
        else:
            self._handle_disconnect(client)

    def _handle_disconnect(self, client: socket.socket) -> None:
        log.debug("%d disconnected.", client.fileno())
        try:
            self._selector.unregister(client)
        except (KeyError, ValueError):
            pass
        client.close()
        with self._lock:
            if client in self._clients:
                self._clients.remove(client)
        if self.disconnect_callback is not None:
            self.disconnect_callback(client)