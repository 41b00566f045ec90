"""Tool communication settings: voltage, parity, baud rate and bounded values."""

from __future__ import annotations

import enum
from typing import Generic, TypeVar

T = TypeVar("T", int, float)


class ToolVoltage(enum.IntEnum):
    """Voltage supplied to the tool flange."""

    OFF = 0
    V12 = 12
    V24 = 24


class Parity(enum.IntEnum):
    """Parity setting of the tool's serial line."""

    NONE = 0
    ODD = 1
    EVEN = 2


class Limited(Generic[T]):
    """A value that must stay within an inclusive lower and upper bound.

    The value starts out at the lower bound.
    """

    def __init__(self, lower: T, upper: T) -> None:
        self._lower = lower
        self._upper = upper
        self._data = lower

    @property
    def lower(self) -> T:
        """Smallest value allowed."""
        return self._lower

    @property
    def upper(self) -> T:
        """Largest value allowed."""
        return self._upper

    @property
    def data(self) -> T:
        """The stored value."""
        return self._data

    @data.setter
    def data(self, value: T) -> None:
        if not self._lower <= value <= self._upper:
            raise ValueError("Given data is out of range")
        self._data = value

    def __repr__(self) -> str:
        return f"Limited(data={self._data!r}, lower={self._lower!r}, upper={self._upper!r})"


BAUD_RATES_ALLOWED = frozenset(
    {9600, 19200, 38400, 57600, 115200, 1_000_000, 2_000_000, 5_000_000}
)


class ToolCommSetup:
    """A tool communication configuration.

    Setting values only stores them here; nothing is sent to the robot.
    """

    def __init__(self) -> None:
        self._tool_voltage = ToolVoltage.OFF
        self._parity = Parity.NONE
        self._baud_rate = min(BAUD_RATES_ALLOWED)
        self._stop_bits: Limited[int] = Limited(1, 2)
        self._rx_idle_chars: Limited[float] = Limited(1.0, 40.0)
        self._tx_idle_chars: Limited[float] = Limited(0.0, 40.0)

    @property
    def tool_voltage(self) -> ToolVoltage:
        """Voltage to be configured on the tool."""
        return self._tool_voltage

    @tool_voltage.setter
    def tool_voltage(self, voltage: ToolVoltage | int) -> None:
        self._tool_voltage = ToolVoltage(voltage)

    @property
    def parity(self) -> Parity:
        """Parity of the tool's serial line."""
        return self._parity

    @parity.setter
    def parity(self, parity: Parity | int) -> None:
        self._parity = Parity(parity)

    @property
    def baud_rate(self) -> int:
        """Baud rate; must be one of ``BAUD_RATES_ALLOWED``."""
        return self._baud_rate

    @baud_rate.setter
    def baud_rate(self, baud_rate: int) -> None:
        if baud_rate not in BAUD_RATES_ALLOWED:
            raise ValueError(f"Provided baud rate {baud_rate} is not allowed")
        self._baud_rate = int(baud_rate)

    @property
    def stop_bits(self) -> int:
        """Number of stop bits, in [1, 2]."""
        return self._stop_bits.data

    @stop_bits.setter
    def stop_bits(self, stop_bits: int) -> None:
        self._stop_bits.data = stop_bits

    @property
    def rx_idle_chars(self) -> float:
        """Idle characters on the receive channel, in [1.0, 40]."""
        return self._rx_idle_chars.data

    @rx_idle_chars.setter
    def rx_idle_chars(self, rx_idle_chars: float) -> None:
        self._rx_idle_chars.data = rx_idle_chars

    @property
    def tx_idle_chars(self) -> float:
        """Idle characters on the transmit channel, in [0.0, 40]."""
        return self._tx_idle_chars.data

    @tx_idle_chars.setter
    def tx_idle_chars(self, tx_idle_chars: float) -> None:
        self._tx_idle_chars.data = tx_idle_chars