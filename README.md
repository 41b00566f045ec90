# urclient

Building blocks for talking to Universal Robots controllers from a host PC.
The package has no dependencies outside the standard library.

## What is in it

- `urclient.log` holds a process-wide logger.
  - `LogLevel` runs from `DEBUG` to `FATAL`. The default threshold is `WARN`. Change it with `set_log_level` and read it with `get_log_level`.
  - Messages are formatted printf-style, for example `log.warn("port %d", 50002)`. They go to the registered `LogHandler`.
  - The default `DefaultLogHandler` prints to standard output. Replace it with `register_log_handler` and restore it with `unregister_log_handler`.
  - `debug`, `info`, `warn`, `error` and `fatal` record the caller's file and line.
- `urclient.exceptions` defines `UrException` and the errors derived from it:
  - `VersionMismatch` carries `version_required` and `version_actual`.
  - `ToolCommNotAvailable`.
  - `TimeoutException` accepts seconds or a `timedelta`.
- `urclient.datatypes` provides:
  - The enums `RobotMode`, `SafetyMode` and `SafetyStatus`.
  - `robot_mode_string`, `safety_mode_string` and `safety_status_string`. Each raises `ValueError` for values that are not defined. `robot_mode_string` also raises it for `UNKNOWN`.
  - `format_array`, which renders a sequence as `[a, b, c]`.
- `urclient.tool_communication` stores tool settings in `ToolCommSetup`. Nothing is sent to the robot.
  - Voltage uses `ToolVoltage` and parity uses `Parity`.
  - The baud rate must be one of `BAUD_RATES_ALLOWED`.
  - Stop bits must be in [1, 2], `rx_idle_chars` in [1, 40] and `tx_idle_chars` in [0, 40]. These bounds are enforced through `Limited`, which raises `ValueError` when a value is out of range.
- `urclient.helpers.set_fifo_scheduling(priority, pid=0)` tries to switch a process or thread to `SCHED_FIFO`. It returns `True` only if the policy and priority can be verified afterwards.
- `urclient.tcp_server.TCPServer` is a selector-based server that runs its loop in a background thread.
  - Set the attributes `connect_callback`, `message_callback` and `disconnect_callback`.
  - `max_clients_allowed` of 0 means no limit.
  - Port 0 picks a free port; the chosen port is in `port`.
  - `write(client, data)` sends all of `data`.
  - Use it as a context manager, or call `close()`.
- `urclient.tcp_socket.TCPSocket` is a client socket.
  - `setup(host, port)` retries every `reconnection_time` seconds until it connects. It returns `False` if the address cannot be resolved or the socket is already connected.
  - `read(size)` returns bytes; an empty result means nothing was read.
  - `write(data)` returns whether everything was sent.
  - `set_receive_timeout` limits how long a read can block.
  - `state` holds a `SocketState`.
- `urclient.script_sender.ScriptSender` listens on a port. When a client sends the line `request_program\n`, it answers with the program text.
- `urclient.primary_package` provides:
  - The port constants `UR_PRIMARY_PORT` and `UR_SECONDARY_PORT`.
  - `RobotPackageType`.
  - `get_package_length`, which reads the big-endian size at the start of a package.
  - `BinaryReader`, a big-endian `struct` reader.
  - The base class `PrimaryPackage`.
- `urclient.robot_message` provides `RobotMessagePackageType`, `RobotMessage` and `VersionMessage`. `VersionMessage` decodes the project name, version numbers and build date.

## Example: serving a script

```python
from urclient.script_sender import ScriptSender

with ScriptSender(0, 'def main():\n  textmsg("hello")\nend\n') as sender:
    print("serving on port", sender.port)
    ...  # a client sending b"request_program\n" receives the program
```

## Example: decoding a version message

```python
from urclient.primary_package import BinaryReader
from urclient.robot_message import VersionMessage

message = VersionMessage(timestamp=0, source=255)
message.parse_with(BinaryReader(payload))  # payload: the bytes after the message header
print(message.project_name, message.major_version, message.minor_version)
```

## Example: a custom log handler

```python
from urclient import log

class Collect(log.LogHandler):
    def __init__(self):
        self.lines = []

    def log(self, file, line, loglevel, message):
        self.lines.append((loglevel, message))

handler = Collect()
log.register_log_handler(handler)
log.set_log_level(log.LogLevel.DEBUG)
log.info("connected to %s", "192.0.2.10")
```

## What it does not do

The package does not stream joint or trajectory commands to the robot. It also does not send payload, force-mode or tool-contact commands.

For primary interface data, it reads package lengths, raw packages and robot and version messages. It does not split robot state packages into their sub-packages. It has no kinematics or calibration check.

It has no command-line program.

## Installation and tests

Install with `pip install urclient`. The tests use pytest, which is available through the `test` extra.