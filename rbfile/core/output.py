"""Output streams for interpreter ``print`` / ``puts``.

An ``Output`` receives raw bytes destined for the interpreter's stdout.
``Process`` forwards them to the real process stdout; ``Captured`` keeps them
in memory so tests and embedders can inspect what a script printed.
"""

import sys
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

from rbfile.common.errors import WriteFailed


class Output(ABC):
    """Destination for interpreter stdout bytes."""

    @abstractmethod
    def write_stdout(self, data: bytes) -> None:
        """Write bytes to the stdout stream."""
        pass


class Process(Output):
    """Write to the process stdout (or any binary stream)."""

    def __init__(self, stream: Optional[BinaryIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> BinaryIO:
        if self._stream is not None:
            return self._stream
        return sys.stdout.buffer

    def write_stdout(self, data: bytes) -> None:
        try:
            self.stream.write(data)
            self.stream.flush()
        except OSError as e:
            raise WriteFailed(f"write to stdout failed: {e}", errno=e.errno) from e


class Captured(Output):
    """Buffer stdout bytes in memory."""

    def __init__(self) -> None:
        self._stdout = bytearray()

    def write_stdout(self, data: bytes) -> None:
        self._stdout.extend(data)

    @property
    def stdout(self) -> bytes:
        return bytes(self._stdout)

    def clear(self) -> None:
        self._stdout.clear()


def print_bytes(output: Output, message: bytes) -> None:
    """Write *message* to the output stream as-is."""
    output.write_stdout(message)


def puts(output: Output, message: bytes) -> None:
    """Write *message* followed by a newline.

    Uses two calls to :func:`print_bytes`, so an ``Output`` that fails on
    the newline has already received *message*.
    """
    print_bytes(output, message)
    print_bytes(output, b"\n")

