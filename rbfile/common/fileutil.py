"""Cross-platform low-level file I/O helpers.

Provides ``ftruncate`` that works on all platforms including Windows where
``os.ftruncate`` is not available, plus loops that complete short reads and
writes and materialize zero bytes over a gap.
"""

import errno
import os
import sys

if sys.platform == "win32":

    def ftruncate(fd: int, length: int) -> None:
        """Truncate file to *length* bytes, emulated on Windows via _chsize_s."""
        import ctypes

        ucrt = ctypes.cdll.msvcrt
        ret = ucrt._chsize_s(fd, ctypes.c_int64(length))
        if ret != 0:
            raise OSError(ret, os.strerror(ret))

else:
    ftruncate = os.ftruncate


def write_all(fd: int, data: bytes) -> int:
    """Write every byte of *data* at the current position of *fd*.

    ``os.write`` may transfer fewer bytes than asked; the remainder is
    written with further calls until nothing is left.

    Returns:
        Number of bytes written, always ``len(data)``

    Raises:
        OSError: On the first failing low-level write. A write that makes no
            progress is reported as ``ENOSPC``.
    """
    view = memoryview(data).cast("B")
    total = len(view)
    written = 0
    while written < total:
        n = os.write(fd, view[written:])
        if n == 0:
            raise OSError(errno.ENOSPC, os.strerror(errno.ENOSPC))
        written += n
    return written


def read_exact(fd: int, length: int, chunk_size: int) -> bytes:
    """Read up to *length* bytes, stopping early only at end of file.

    Each low-level read asks for at most *chunk_size* bytes, so memory use
    follows the bytes actually read rather than *length*.
    """
    parts = []
    remaining = length
    while remaining > 0:
        chunk = os.read(fd, min(remaining, chunk_size))
        if not chunk:
            break
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def zero_fill(fd: int, start: int, stop: int, block_size: int) -> int:
    """Write zero bytes over ``[start, stop)`` and leave the cursor at *stop*.

    Returns:
        Number of zero bytes written
    """
    if stop <= start:
        return 0
    os.lseek(fd, start, os.SEEK_SET)
    block = bytes(min(block_size, stop - start))
    remaining = stop - start
    while remaining > 0:
        n = min(remaining, len(block))
        write_all(fd, block[:n])
        remaining -= n
    return stop - start
