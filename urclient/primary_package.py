"""Base of packages received on the primary interface and a reader for their bytes."""

from __future__ import annotations

import abc
import enum
import functools
import struct
from typing import Any

UR_PRIMARY_PORT = 30001
UR_SECONDARY_PORT = 30002


class RobotPackageType(enum.IntEnum):
    """Types of packages sent on the primary interface."""

    DISCONNECT = -1
    ROBOT_STATE = 16
    ROBOT_MESSAGE = 20
    HMC_MESSAGE = 22
    MODBUS_INFO_MESSAGE = 5
    SAFETY_SETUP_BROADCAST_MESSAGE = 23
    SAFETY_COMPLIANCE_TOLERANCES_MESSAGE = 24
    PROGRAM_STATE_MESSAGE = 25


def get_package_length(data: bytes) -> int:
    """Return the package size stored big-endian in the first four bytes of ``data``."""
    if len(data) < 4:
        raise ValueError("At least 4 bytes are needed to read a package length")
    return struct.unpack_from(">I", data)[0]


@functools.lru_cache(maxsize=128)
def _compiled(fmt: str) -> struct.Struct:
    if not fmt or fmt[0] not in "@=<>!":
        fmt = ">" + fmt
    return struct.Struct(fmt)


class BinaryReader:
    """Reads values from a byte string front to back.

    Formats are :mod:`struct` formats; without an explicit byte order they
    are read big-endian, as the robot sends them. Reading past the end
    raises ValueError.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    @property
    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def has(self, size: int) -> bool:
        """True if at least ``size`` bytes are left."""
        return size <= self.remaining

    def empty(self) -> bool:
        """True if every byte has been consumed."""
        return self.remaining == 0

    def peek(self, fmt: str) -> Any:
        """Read ``fmt`` without consuming it.

        Returns the value itself when ``fmt`` describes one field, a tuple otherwise.
        """
        compiled = _compiled(fmt)
        if not self.has(compiled.size):
            raise ValueError(
                f"Cannot read {compiled.size} bytes, only {self.remaining} remaining"
            )
        values = compiled.unpack_from(self._data, self._pos)
        return values[0] if len(values) == 1 else values

    def unpack(self, fmt: str) -> Any:
        """Read and consume ``fmt``; the result is shaped as in :meth:`peek`."""
        values = self.peek(fmt)
        self._pos += _compiled(fmt).size
        return values

    def take(self, size: int) -> bytes:
        """Consume and return the next ``size`` bytes."""
        if size < 0:
            raise ValueError("Size must not be negative")
        if not self.has(size):
            raise ValueError(f"Cannot read {size} bytes, only {self.remaining} remaining")
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def take_rest(self) -> bytes:
        """Consume and return every remaining byte."""
        return self.take(self.remaining)


class PrimaryPackage(abc.ABC):
    """A package from the primary interface, keeping its raw bytes."""

    def __init__(self) -> None:
        self.data: bytes = b""

    def parse_with(self, reader: BinaryReader) -> bool:
        """Store everything left in ``reader`` as the raw package data."""
        self.data = reader.take_rest()
        return True

    @abc.abstractmethod
    def consume_with(self, consumer: Any) -> bool:
        """Hand this package to the matching method of ``consumer``."""

    def __str__(self) -> str:
        hex_bytes = "".join(f"{byte:x} " for byte in self.data)
        return f"Raw byte stream: {hex_bytes}\n"