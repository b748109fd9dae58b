"""Constants for rbfile."""

import os

# Chunk size for whole-file reads: 64KB
DEFAULT_READ_CHUNK_SIZE = 64 * 1024  # 64KB

# Block size used when materializing zero bytes over a sparse gap: 64KB
DEFAULT_ZERO_FILL_BLOCK_SIZE = 64 * 1024  # 64KB

# Mode for newly created files, before the process umask is applied
DEFAULT_FILE_PERMISSIONS = 0o666

# Environment variable naming an explicit config file
CONFIG_ENV_VAR = "RBFILE_CONFIG"

# Config directory name under the user's home
CONFIG_DIR_NAME = ".rbfile"

# Largest position a 64-bit off_t can hold
MAX_FILE_OFFSET = 2**63 - 1

# Open flags. O_BINARY only exists on Windows; elsewhere it is a no-op.
O_BINARY = getattr(os, "O_BINARY", 0)
READ_FLAGS = os.O_RDONLY | O_BINARY
READ_WRITE_CREATE_FLAGS = os.O_RDWR | os.O_CREAT | O_BINARY


# Ruby exception class names reported alongside each error kind


class RubyErrors:
    ENOENT = "Errno::ENOENT"
    EACCES = "Errno::EACCES"
    ENOTDIR = "Errno::ENOTDIR"
    EISDIR = "Errno::EISDIR"
    EINVAL = "Errno::EINVAL"
    ARGUMENT_ERROR = "ArgumentError"
    IO_ERROR = "IOError"
