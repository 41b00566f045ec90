"""Universal Robots client tools: logging, datatypes, tool settings, TCP server and socket, script serving and primary interface messages."""

__version__ = "0.1.0"