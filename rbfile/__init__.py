"""rbfile - Ruby-compatible whole-file I/O primitives."""

__version__ = "0.1.0"

from rbfile.common.errors import (  # noqa: E402
    InvalidArgument,
    InvalidOffset,
    IsADirectory,
    NotADirectory,
    NotFound,
    PermissionDenied,
    RbFileError,
    WriteFailed,
)
from rbfile.common.models import ReadMode, ReadResult, read_request, write_request  # noqa: E402
from rbfile.core.read import binread, read_file, textread  # noqa: E402
from rbfile.core.write import write, write_file  # noqa: E402

__all__ = [
    "__version__",
    "RbFileError",
    "NotFound",
    "NotADirectory",
    "PermissionDenied",
    "IsADirectory",
    "InvalidArgument",
    "InvalidOffset",
    "WriteFailed",
    "ReadMode",
    "ReadResult",
    "read_request",
    "write_request",
    "binread",
    "textread",
    "read_file",
    "write",
    "write_file",
]
