"""File accessor: the mechanism layer under the read and write primitives.

A ``FileAccessor`` opens one named file per call and exposes cursor-based
seek/read/write/truncate on the resulting ``FileHandle``. It applies no
call-shape policy; that lives in :mod:`rbfile.core.read` and
:mod:`rbfile.core.write`. Raw ``OSError``s are translated into the
:mod:`rbfile.common.errors` taxonomy here.
"""

import logging
import os
import stat
from contextlib import contextmanager
from typing import Iterator, Optional

from rbfile.common.config import Settings, get_settings
from rbfile.common.constants import READ_FLAGS, READ_WRITE_CREATE_FLAGS
from rbfile.common.errors import InvalidArgument, InvalidOffset, IsADirectory, PathLike, translate_os_error
from rbfile.common.fileutil import ftruncate, read_exact, write_all, zero_fill

logger = logging.getLogger("rbfile.core.accessor")


class FileHandle:
    """An open OS descriptor owned by a single primitive call."""

    def __init__(self, fd: int, path: str, writable: bool) -> None:
        self.fd = fd
        self.path = path
        self.writable = writable
        self.closed = False

    def close(self, quiet: bool = False) -> None:
        """Release the descriptor. Later calls are no-ops.

        With *quiet* a failing close is logged instead of raised, so an
        exception already propagating is not replaced.
        """
        if self.closed:
            return
        self.closed = True
        try:
            os.close(self.fd)
        except OSError as e:
            if quiet:
                logger.warning("Closing %r failed: %s", self.path, e)
                return
            raise translate_os_error(e, self.path) from e

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"fd={self.fd}"
        mode = "rw" if self.writable else "r"
        return f"<FileHandle {self.path!r} {mode} {state}>"


class FileAccessor:
    """Open, position, read, write and resize regular files."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Scoped acquisition
    # ------------------------------------------------------------------

    @contextmanager
    def open_read(self, path: PathLike) -> Iterator[FileHandle]:
        """Open *path* read-only, positioned at offset 0.

        Raises:
            NotFound: If the path does not exist
            PermissionDenied: If the OS refuses read access
            IsADirectory: If the path is a directory
        """
        handle = self._open(os.fspath(path), READ_FLAGS, writable=False)
        try:
            yield handle
        except BaseException:
            handle.close(quiet=True)
            raise
        handle.close()

    @contextmanager
    def open_read_write(self, path: PathLike) -> Iterator[FileHandle]:
        """Open *path* for reading and writing, creating it if missing.

        Existing content is preserved; the cursor starts at offset 0.

        Raises:
            NotFound: If a parent directory does not exist
            PermissionDenied: If the OS refuses write access
            IsADirectory: If the path is a directory
        """
        handle = self._open(os.fspath(path), READ_WRITE_CREATE_FLAGS, writable=True)
        try:
            yield handle
        except BaseException:
            handle.close(quiet=True)
            raise
        handle.close()

    def _open(self, path: str, flags: int, writable: bool) -> FileHandle:
        try:
            fd = os.open(path, flags, self.settings.file_permissions)
        except OSError as e:
            raise translate_os_error(e, path) from e

        handle = FileHandle(fd, path, writable)
        # A read-only open of a directory succeeds on POSIX; reject it here
        try:
            st_mode = os.fstat(fd).st_mode
        except OSError as e:
            handle.close(quiet=True)
            raise translate_os_error(e, path) from e
        if stat.S_ISDIR(st_mode):
            handle.close(quiet=True)
            raise IsADirectory(f"Is a directory @ {path}", path=path)

        logger.debug("Opened %r (%s) as fd %d", path, "rw" if writable else "r", fd)
        return handle

    # ------------------------------------------------------------------
    # Queries and positioning
    # ------------------------------------------------------------------

    def length(self, handle: FileHandle) -> int:
        """Current byte length of the underlying file."""
        try:
            return os.fstat(handle.fd).st_size
        except OSError as e:
            raise translate_os_error(e, handle.path) from e

    def tell(self, handle: FileHandle) -> int:
        """Current cursor position."""
        try:
            return os.lseek(handle.fd, 0, os.SEEK_CUR)
        except OSError as e:
            raise translate_os_error(e, handle.path) from e

    def seek(self, handle: FileHandle, pos: int) -> int:
        """Move the cursor to absolute byte position *pos*.

        Positions past end of file are allowed.

        Raises:
            InvalidOffset: If *pos* is negative or too large for the OS
        """
        message = f"Invalid argument @ rb_io_seek - {handle.path}"
        if pos < 0:
            raise InvalidOffset(message, path=handle.path)
        try:
            return os.lseek(handle.fd, pos, os.SEEK_SET)
        except OverflowError as e:
            raise InvalidOffset(message, path=handle.path) from e
        except OSError as e:
            raise translate_os_error(e, handle.path) from e

    # ------------------------------------------------------------------
    # Data transfer
    # ------------------------------------------------------------------

    def read_up_to(self, handle: FileHandle, n: int) -> bytes:
        """Read at most *n* bytes from the cursor.

        Returns fewer than *n* bytes only when end of file is reached first;
        an empty result at end of file is not an error.

        Raises:
            InvalidArgument: If *n* is negative
        """
        if n < 0:
            raise InvalidArgument(f"negative length {n} given", path=handle.path)
        try:
            return read_exact(handle.fd, n, self.settings.read_chunk_size)
        except OSError as e:
            raise translate_os_error(e, handle.path) from e

    def read_to_end(self, handle: FileHandle) -> bytes:
        """Read from the cursor until a zero-length read is observed."""
        chunk_size = self.settings.read_chunk_size
        parts = []
        try:
            while True:
                chunk = os.read(handle.fd, chunk_size)
                if not chunk:
                    break
                parts.append(chunk)
        except OSError as e:
            raise translate_os_error(e, handle.path) from e
        return b"".join(parts)

    def write_at(self, handle: FileHandle, data: bytes) -> int:
        """Write *data* at the cursor, extending the file as needed.

        When the cursor lies past end of file and ``zero_fill_gaps`` is set,
        the gap is filled with zero bytes before *data* is written. Writing
        no bytes never extends the file.

        Returns:
            Number of bytes of *data* written, always ``len(data)``
        """
        try:
            if self.settings.zero_fill_gaps and data:
                cursor = os.lseek(handle.fd, 0, os.SEEK_CUR)
                eof = os.fstat(handle.fd).st_size
                if cursor > eof:
                    filled = zero_fill(handle.fd, eof, cursor, self.settings.zero_fill_block_size)
                    logger.debug("Zero-filled %d bytes of %r at [%d, %d)", filled, handle.path, eof, cursor)
            return write_all(handle.fd, data)
        except OSError as e:
            raise translate_os_error(e, handle.path) from e

    def truncate_to(self, handle: FileHandle, n: int) -> None:
        """Set the file length to exactly *n*, discarding or zero-extending.

        Raises:
            InvalidArgument: If *n* is negative
        """
        if n < 0:
            raise InvalidArgument(f"negative length {n} given", path=handle.path)
        try:
            ftruncate(handle.fd, n)
        except OverflowError as e:
            raise InvalidArgument(f"length {n} too large", path=handle.path) from e
        except OSError as e:
            raise translate_os_error(e, handle.path) from e
