"""Messages sent by the robot on the primary interface."""

from __future__ import annotations

import enum
from typing import Any

from .primary_package import BinaryReader, PrimaryPackage


class RobotMessagePackageType(enum.IntEnum):
    """Kinds of robot messages."""

    ROBOT_MESSAGE_TEXT = 0
    ROBOT_MESSAGE_PROGRAM_LABEL = 1
    PROGRAM_STATE_MESSAGE_VARIABLE_UPDATE = 2
    ROBOT_MESSAGE_VERSION = 3
    ROBOT_MESSAGE_SAFETY_MODE = 5
    ROBOT_MESSAGE_ERROR_CODE = 6
    ROBOT_MESSAGE_KEY = 7
    ROBOT_MESSAGE_REQUEST_VALUE = 9
    ROBOT_MESSAGE_RUNTIME_EXCEPTION = 10


def _message_type(value: int) -> RobotMessagePackageType | int:
    try:
        return RobotMessagePackageType(value)
    except ValueError:
        return int(value)


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


class RobotMessage(PrimaryPackage):
    """A robot message with its timestamp, source and type.

    Types that are not known are kept as plain integers.
    """

    def __init__(
        self,
        timestamp: int,
        source: int,
        message_type: RobotMessagePackageType | int = RobotMessagePackageType.ROBOT_MESSAGE_TEXT,
    ) -> None:
        super().__init__()
        self.timestamp = int(timestamp)
        self.source = int(source)
        self.message_type = _message_type(message_type)

    def parse_with(self, reader: BinaryReader) -> bool:
        """Generic messages carry nothing this class interprets; nothing is consumed."""
        return True

    def consume_with(self, consumer: Any) -> bool:
        """Hand this message to ``consumer.consume_robot_message``."""
        return consumer.consume_robot_message(self)

    def __str__(self) -> str:
        return (
            f"timestamp: {self.timestamp}\n"
            f"source: {self.source}\n"
            f"message_type: {int(self.message_type)}\n"
        )


class VersionMessage(RobotMessage):
    """The controller's software version, sent once after connecting."""

    def __init__(
        self,
        timestamp: int,
        source: int,
        message_type: RobotMessagePackageType | int = RobotMessagePackageType.ROBOT_MESSAGE_VERSION,
    ) -> None:
        super().__init__(timestamp, source, message_type)
        self.project_name_length = 0
        self.project_name = ""
        self.major_version = 0
        self.minor_version = 0
        self.svn_version = 0
        self.build_number = 0
        self.build_date = ""

    def parse_with(self, reader: BinaryReader) -> bool:
        """Read name, version numbers and build date; raises ValueError on short data."""
        self.project_name_length = reader.unpack("b")
        self.project_name = _decode(reader.take(self.project_name_length))
        (
            self.major_version,
            self.minor_version,
            self.svn_version,
            self.build_number,
        ) = reader.unpack("BBii")
        self.build_date = _decode(reader.take_rest())
        return True

    def consume_with(self, consumer: Any) -> bool:
        """Hand this message to ``consumer.consume_version_message``."""
        return consumer.consume_version_message(self)

    def __str__(self) -> str:
        return (
            f"project name: {self.project_name}\n"
            f"version: {self.major_version}.{self.minor_version}.{self.svn_version}\n"
            f"build date: {self.build_date}"
        )