"""Request and result models for rbfile primitives.

Ruby's ``IO.binread(name, length = nil, offset = nil)`` and
``IO.write(name, string, offset = nil)`` overload one method name on which
arguments are present. Here each call shape is its own request type, and the
``read_request`` / ``write_request`` builders map optional arguments onto them.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from rbfile.common.errors import InvalidArgument, PathLike


class ReadMode(str, Enum):
    """How the caller tags the bytes returned by a read."""

    BINARY = "binary"
    TEXT = "text"


@dataclass(frozen=True)
class WholeRead:
    """Read the whole file."""

    path: str


@dataclass(frozen=True)
class BoundedRead:
    """Read at most ``length`` bytes from the start of the file."""

    path: str
    length: int


@dataclass(frozen=True)
class WindowRead:
    """Read at most ``length`` bytes starting at ``offset``."""

    path: str
    length: int
    offset: int


ReadRequest = Union[WholeRead, BoundedRead, WindowRead]


@dataclass(frozen=True)
class Overwrite:
    """Replace the whole file content with ``data``."""

    path: str
    data: bytes


@dataclass(frozen=True)
class PositionalWrite:
    """Write ``data`` at ``offset`` without truncating the rest of the file."""

    path: str
    data: bytes
    offset: int


WriteRequest = Union[Overwrite, PositionalWrite]


class ReadResult(BaseModel):
    """Bytes produced by a read, tagged with the mode they were read in."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Bytes read from the file")
    mode: ReadMode = Field(ReadMode.BINARY, description="Binary or text tag")

    @property
    def is_text(self) -> bool:
        return self.mode is ReadMode.TEXT

    def __len__(self) -> int:
        return len(self.data)


def _check_int(name: str, value: object, path: str) -> int:
    # bool is an int subclass but never a valid length or offset
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(
            f"no implicit conversion of {type(value).__name__} into Integer ({name})",
            path=path,
        )
    return value


def read_request(
    path: PathLike,
    length: Optional[int] = None,
    offset: Optional[int] = None,
) -> ReadRequest:
    """Build the read request matching the given call shape.

    Negative values are accepted here; they are reported by the primitive
    once the file has been opened, as Ruby does.

    Raises:
        InvalidArgument: If ``offset`` is given without ``length``, or either
            is not an integer
    """
    path = os.fspath(path)
    if length is None:
        if offset is not None:
            raise InvalidArgument("offset given without length", path=path)
        return WholeRead(path)
    length = _check_int("length", length, path)
    if offset is None:
        return BoundedRead(path, length)
    return WindowRead(path, length, _check_int("offset", offset, path))


def write_request(
    path: PathLike,
    data: Union[bytes, bytearray, memoryview],
    offset: Optional[int] = None,
) -> WriteRequest:
    """Build the write request matching the given call shape.

    An absent ``offset`` replaces the file. Any explicit offset, including 0,
    is a positional write that keeps the existing tail.

    Raises:
        InvalidArgument: If ``data`` is not bytes-like, or ``offset`` is not a
            non-negative integer
    """
    path = os.fspath(path)
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgument(
            f"expected bytes-like data, got {type(data).__name__}",
            path=path,
        )
    data = bytes(data)
    if offset is None:
        return Overwrite(path, data)
    offset = _check_int("offset", offset, path)
    if offset < 0:
        raise InvalidArgument(f"negative offset {offset} given", path=path)
    return PositionalWrite(path, data, offset)
