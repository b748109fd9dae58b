"""Whole-file write primitive (``IO.write``).

- ``Overwrite``: the file ends up containing exactly ``data``.
- ``PositionalWrite``: ``data`` lands at ``offset``; bytes after
  ``offset + len(data)`` are kept, and a gap past the old end of file reads
  back as zeros.

Both create the file when it does not exist.
"""

import logging
from typing import Optional, Union

from rbfile.common.config import Settings
from rbfile.common.constants import MAX_FILE_OFFSET
from rbfile.common.errors import InvalidArgument, PathLike, RbFileError, WriteFailed
from rbfile.common.models import Overwrite, PositionalWrite, WriteRequest, write_request
from rbfile.core.accessor import FileAccessor

logger = logging.getLogger("rbfile.core.write")


def write_file(request: WriteRequest, *, settings: Optional[Settings] = None) -> int:
    """Execute a write request.

    Args:
        request: ``Overwrite`` or ``PositionalWrite``
        settings: Settings to use (None = process defaults)

    Returns:
        Number of bytes written, always ``len(request.data)``

    Raises:
        InvalidArgument: If a ``PositionalWrite`` offset is negative or past
            the largest representable file position
        WriteFailed: For any OS-level failure; the original error is chained
            as ``__cause__``
    """
    if isinstance(request, PositionalWrite) and request.offset < 0:
        raise InvalidArgument(f"negative offset {request.offset} given", path=request.path)
    if isinstance(request, PositionalWrite) and request.offset > MAX_FILE_OFFSET:
        raise InvalidArgument(f"offset {request.offset} too large", path=request.path)

    accessor = FileAccessor(settings)
    try:
        with accessor.open_read_write(request.path) as handle:
            if isinstance(request, Overwrite):
                accessor.truncate_to(handle, 0)
                written = accessor.write_at(handle, request.data)
            elif isinstance(request, PositionalWrite):
                accessor.seek(handle, request.offset)
                written = accessor.write_at(handle, request.data)
            else:
                raise TypeError(f"unsupported write request: {type(request).__name__}")
    except RbFileError as e:
        logger.debug("write to %r failed: %s (%s)", request.path, e, e.ruby_name)
        raise WriteFailed(f"write failed @ {request.path}: {e}", path=request.path, errno=e.errno) from e

    if isinstance(request, PositionalWrite):
        logger.debug("Wrote %d bytes to %r at offset %d", written, request.path, request.offset)
    else:
        logger.debug("Replaced %r with %d bytes", request.path, written)
    return written


def write(
    path: PathLike,
    data: Union[bytes, bytearray, memoryview],
    offset: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> int:
    """Write *data* to *path*, the way ``IO.write`` does.

    Without *offset* the file is replaced. With an offset (0 included) the
    file is written in place and its tail is kept.

    Examples:
        >>> write("testfile", b"0123456789")       # file is now b"0123456789"
        >>> write("testfile2", b"0123456789", 20)  # bytes 20..29 replaced
    """
    return write_file(write_request(path, data, offset), settings=settings)
