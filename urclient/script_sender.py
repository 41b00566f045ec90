"""Serves the control script to the robot when it asks for it."""

from __future__ import annotations

import socket

from . import log
from .tcp_server import TCPServer

PROGRAM_REQUEST = b"request_program\n"


class ScriptSender:
    """Answers a ``request_program`` line with the configured program."""

    def __init__(self, port: int, program: str) -> None:
        self._program = program.encode("utf-8")
        self._server = TCPServer(port)
        self._server.message_callback = self._on_message
        self._server.connect_callback = self._on_connect
        self._server.disconnect_callback = self._on_disconnect
        self._server.start()

    @property
    def port(self) -> int:
        """The port the sender listens on."""
        return self._server.port

    def close(self) -> None:
        """Stop serving and close all connections."""
        self._server.close()

    def __enter__(self) -> ScriptSender:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _on_connect(self, client: socket.socket) -> None:
        log.debug("New client connected at FD %d.", client.fileno())

    def _on_disconnect(self, client: socket.socket) -> None:
        log.debug("Client disconnected.")

    def _on_message(self, client: socket.socket, data: bytes) -> None:
        if data.split(b"\0", 1)[0] == PROGRAM_REQUEST:
            log.info("Robot requested program")
            self._send_program(client)

    def _send_program(self, client: socket.socket) -> None:
        if self._server.write(client, self._program):
            log.info("Sent program to robot")
        else:
            log.error("Could not send program to robot")