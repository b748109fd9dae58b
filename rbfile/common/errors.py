"""Error taxonomy for rbfile primitives.

Every failure raised by a primitive is an ``RbFileError``. Each kind carries
the path it concerns and ``ruby_name``, the Ruby exception class the
interpreter layer raises for it. Translating these into interpreter objects
happens outside this package.
"""

import errno as _errno
import os
from typing import Optional, Union

from rbfile.common.constants import RubyErrors

PathLike = Union[str, "os.PathLike[str]"]


class RbFileError(OSError):
    """Base class for all rbfile errors."""

    ruby_name = RubyErrors.IO_ERROR

    def __init__(
        self,
        message: str,
        path: Optional[PathLike] = None,
        errno: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = os.fspath(path) if path is not None else None
        self.filename = self.path
        self.errno = errno

    def __str__(self) -> str:
        return self.message


class NotFound(RbFileError):
    """The path does not exist."""

    ruby_name = RubyErrors.ENOENT


class NotADirectory(NotFound):
    """A component of the path prefix is a regular file, not a directory."""

    ruby_name = RubyErrors.ENOTDIR


class PermissionDenied(RbFileError):
    """The OS refused access to the path."""

    ruby_name = RubyErrors.EACCES


class IsADirectory(RbFileError):
    """The path names a directory, not a regular file."""

    ruby_name = RubyErrors.EISDIR


class InvalidArgument(RbFileError):
    """A length or offset argument is out of range, or the call shape is unsupported."""

    ruby_name = RubyErrors.ARGUMENT_ERROR


class InvalidOffset(InvalidArgument):
    """A seek to a position outside the representable file range was requested."""

    ruby_name = RubyErrors.EINVAL


class WriteFailed(RbFileError):
    """A write could not be completed. The OS-level error is chained as ``__cause__``."""

    ruby_name = RubyErrors.IO_ERROR


_ERRNO_KINDS = {
    _errno.ENOENT: NotFound,
    _errno.ENOTDIR: NotADirectory,
    _errno.EACCES: PermissionDenied,
    _errno.EPERM: PermissionDenied,
    _errno.EROFS: PermissionDenied,
    _errno.EISDIR: IsADirectory,
}


def translate_os_error(exc: OSError, path: Optional[PathLike] = None) -> RbFileError:
    """Map a raw ``OSError`` onto the rbfile taxonomy.

    Args:
        exc: The error raised by an ``os`` call
        path: Path the failing call was operating on

    Returns:
        A new error of the matching kind, not yet raised. Errors already in
        the taxonomy are returned unchanged.
    """
    if isinstance(exc, RbFileError):
        return exc

    if path is None:
        path = exc.filename
    kind = _ERRNO_KINDS.get(exc.errno or 0, RbFileError)
    reason = exc.strerror or str(exc)
    message = f"{reason} @ {os.fspath(path)}" if path is not None else reason
    return kind(message, path=path, errno=exc.errno)
