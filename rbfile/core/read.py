"""Whole-file read primitives (``IO.binread`` / ``IO.read``).

Three call shapes:

- ``WholeRead``: every byte of the file.
- ``BoundedRead``: at most ``length`` bytes from offset 0.
- ``WindowRead``: at most ``length`` bytes from ``offset``.

Short results at end of file are not errors. The binary and text variants do
identical I/O and differ only in the mode tag on the result.
"""

import logging
from typing import Optional

from rbfile.common.config import Settings
from rbfile.common.errors import PathLike, RbFileError
from rbfile.common.models import BoundedRead, ReadMode, ReadRequest, ReadResult, WholeRead, WindowRead, read_request
from rbfile.core.accessor import FileAccessor

logger = logging.getLogger("rbfile.core.read")


def read_file(
    request: ReadRequest,
    mode: ReadMode = ReadMode.BINARY,
    *,
    settings: Optional[Settings] = None,
) -> ReadResult:
    """Execute a read request.

    The file is opened before any argument is checked, so a missing file is
    reported ahead of a bad offset, and a bad offset ahead of a bad length.

    Args:
        request: One of ``WholeRead``, ``BoundedRead``, ``WindowRead``
        mode: Tag for the returned bytes
        settings: Settings to use (None = process defaults)

    Returns:
        The bytes read, tagged with *mode*

    Raises:
        NotFound: If the file does not exist
        PermissionDenied: If the OS refuses read access
        IsADirectory: If the path is a directory
        InvalidOffset: If a ``WindowRead`` offset is negative
        InvalidArgument: If a length is negative
    """
    accessor = FileAccessor(settings)
    try:
        with accessor.open_read(request.path) as handle:
            if isinstance(request, WholeRead):
                data = accessor.read_to_end(handle)
            elif isinstance(request, BoundedRead):
                data = accessor.read_up_to(handle, request.length)
            elif isinstance(request, WindowRead):
                accessor.seek(handle, request.offset)
                data = accessor.read_up_to(handle, request.length)
            else:
                raise TypeError(f"unsupported read request: {type(request).__name__}")
    except RbFileError as e:
        logger.debug("%s of %r failed: %s (%s)", mode.value, request.path, e, e.ruby_name)
        raise

    logger.debug("%s read %d bytes from %r (%s)", mode.value, len(data), request.path, type(request).__name__)
    return ReadResult(data=data, mode=mode)


def binread_result(
    path: PathLike,
    length: Optional[int] = None,
    offset: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> ReadResult:
    """Like :func:`binread` but returns the tagged ``ReadResult``."""
    return read_file(read_request(path, length, offset), ReadMode.BINARY, settings=settings)


def textread_result(
    path: PathLike,
    length: Optional[int] = None,
    offset: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> ReadResult:
    """Like :func:`textread` but returns the tagged ``ReadResult``."""
    return read_file(read_request(path, length, offset), ReadMode.TEXT, settings=settings)


def binread(
    path: PathLike,
    length: Optional[int] = None,
    offset: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> bytes:
    """Read a file in binary mode, the way ``IO.binread`` does.

    Examples:
        >>> binread("testfile")          # whole file
        >>> binread("testfile", 20)      # first 20 bytes
        >>> binread("testfile", 20, 10)  # 20 bytes starting at byte 10
    """
    return binread_result(path, length, offset, settings=settings).data


def textread(
    path: PathLike,
    length: Optional[int] = None,
    offset: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> bytes:
    """Read a file in text mode, the way ``IO.read`` does.

    No newline translation or decoding is performed.
    """
    return textread_result(path, length, offset, settings=settings).data
