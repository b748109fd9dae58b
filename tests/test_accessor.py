#!/usr/bin/env python3
"""
Unit tests for FileAccessor: open/seek/read/write/truncate mechanics.

Run:
    python -m pytest tests/test_accessor.py -v
"""

import errno
import logging
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from rbfile.common.config import Settings  # noqa: E402
from rbfile.common.errors import InvalidArgument, InvalidOffset, IsADirectory, NotFound, RbFileError  # noqa: E402
from rbfile.core.accessor import FileAccessor  # noqa: E402

CONTENT = b"This is line one\nThis is line two\nThis is line three\nAnd so on...\n"


@pytest.fixture
def accessor() -> FileAccessor:
    return FileAccessor(Settings())


# ── Scoped acquisition ────────────────────────────────────────


def test_open_read_starts_at_zero(accessor, testfile):
    with accessor.open_read(testfile) as handle:
        assert accessor.tell(handle) == 0
        assert not handle.writable
    assert handle.closed


def test_handle_released_on_exception(accessor, testfile):
    with pytest.raises(RuntimeError):
        with accessor.open_read(testfile) as handle:
            raise RuntimeError("boom")
    assert handle.closed


def test_close_is_idempotent(accessor, testfile):
    with accessor.open_read(testfile) as handle:
        handle.close()
        assert handle.closed
    assert "closed" in repr(handle)


def test_open_read_missing(accessor, tmp_path):
    with pytest.raises(NotFound):
        with accessor.open_read(tmp_path / "missing"):
            pass


def test_open_read_directory(accessor, tmp_path):
    with pytest.raises(IsADirectory):
        with accessor.open_read(tmp_path):
            pass


def test_open_read_write_preserves_content(accessor, testfile):
    with accessor.open_read_write(testfile) as handle:
        assert handle.writable
        assert accessor.tell(handle) == 0
        assert accessor.length(handle) == len(CONTENT)
    assert testfile.read_bytes() == CONTENT


def test_open_read_write_creates(accessor, tmp_path):
    path = tmp_path / "created"
    with accessor.open_read_write(path) as handle:
        assert accessor.length(handle) == 0
    assert path.exists()


def test_open_read_write_directory(accessor, tmp_path):
    with pytest.raises(IsADirectory):
        with accessor.open_read_write(tmp_path):
            pass


def _failing_close(monkeypatch):
    """Make os.close release the descriptor and then report EIO."""
    from rbfile.core import accessor as accessor_module

    real_close = os.close

    def failing_close(fd):
        real_close(fd)
        raise OSError(errno.EIO, os.strerror(errno.EIO))

    monkeypatch.setattr(accessor_module.os, "close", failing_close)


def test_close_failure_does_not_mask_error(accessor, testfile, monkeypatch, caplog):
    _failing_close(monkeypatch)
    with caplog.at_level(logging.WARNING, logger="rbfile.core.accessor"):
        with pytest.raises(RuntimeError, match="boom"):
            with accessor.open_read(testfile) as handle:
                raise RuntimeError("boom")
    monkeypatch.undo()

    assert handle.closed
    assert "Closing" in caplog.text


def test_close_failure_raises_on_success(accessor, testfile, monkeypatch):
    _failing_close(monkeypatch)
    with pytest.raises(RbFileError) as exc_info:
        with accessor.open_read(testfile):
            pass
    monkeypatch.undo()

    assert exc_info.value.errno == errno.EIO


# ── Seek and read ─────────────────────────────────────────────


def test_seek_past_eof_is_legal(accessor, testfile):
    with accessor.open_read(testfile) as handle:
        assert accessor.seek(handle, len(CONTENT) + 500) == len(CONTENT) + 500
        assert accessor.read_up_to(handle, 10) == b""


def test_seek_negative(accessor, testfile):
    with accessor.open_read(testfile) as handle:
        with pytest.raises(InvalidOffset):
            accessor.seek(handle, -1)


def test_seek_beyond_os_range(accessor, testfile):
    with accessor.open_read(testfile) as handle:
        with pytest.raises(InvalidOffset):
            accessor.seek(handle, 1 << 63)


def test_read_up_to_short_at_eof(accessor, testfile):
    with accessor.open_read(testfile) as handle:
        accessor.seek(handle, len(CONTENT) - 5)
        assert accessor.read_up_to(handle, 100) == CONTENT[-5:]
        assert accessor.read_up_to(handle, 100) == b""


def test_read_up_to_advances_cursor(accessor, testfile):
    with accessor.open_read(testfile) as handle:
        assert accessor.read_up_to(handle, 5) == b"This "
        assert accessor.read_up_to(handle, 3) == b"is "
        assert accessor.tell(handle) == 8


def test_read_up_to_negative(accessor, testfile):
    with accessor.open_read(testfile) as handle:
        with pytest.raises(InvalidArgument):
            accessor.read_up_to(handle, -2)


def test_read_to_end_from_cursor(accessor, testfile):
    with accessor.open_read(testfile) as handle:
        accessor.seek(handle, 17)
        assert accessor.read_to_end(handle) == CONTENT[17:]


# ── Write and truncate ────────────────────────────────────────


def test_length_is_not_cached(accessor, testfile):
    with accessor.open_read_write(testfile) as handle:
        before = accessor.length(handle)
        accessor.seek(handle, before)
        accessor.write_at(handle, b"more")
        assert accessor.length(handle) == before + 4


def test_write_at_fills_gap(accessor, tmp_path):
    path = tmp_path / "gap"
    path.write_bytes(b"ab")
    with accessor.open_read_write(path) as handle:
        accessor.seek(handle, 6)
        assert accessor.write_at(handle, b"cd") == 2
        assert accessor.tell(handle) == 8
    assert path.read_bytes() == b"ab\x00\x00\x00\x00cd"


def test_write_at_overwrites_without_truncating(accessor, testfile):
    with accessor.open_read_write(testfile) as handle:
        accessor.seek(handle, 5)
        accessor.write_at(handle, b"IS")
    assert testfile.read_bytes() == CONTENT[:5] + b"IS" + CONTENT[7:]


def test_truncate_shrinks(accessor, testfile):
    with accessor.open_read_write(testfile) as handle:
        accessor.truncate_to(handle, 4)
        assert accessor.length(handle) == 4
    assert testfile.read_bytes() == b"This"


def test_truncate_zero_extends(accessor, tmp_path):
    path = tmp_path / "ext"
    path.write_bytes(b"xy")
    with accessor.open_read_write(path) as handle:
        accessor.truncate_to(handle, 5)
    assert path.read_bytes() == b"xy\x00\x00\x00"


def test_truncate_negative(accessor, testfile):
    with accessor.open_read_write(testfile) as handle:
        with pytest.raises(InvalidArgument):
            accessor.truncate_to(handle, -1)


def test_new_file_permissions(tmp_path):
    """Created files get the configured mode, minus the umask."""
    umask = os.umask(0)
    os.umask(umask)
    path = tmp_path / "perm"
    accessor = FileAccessor(Settings(file_permissions=0o640))
    with accessor.open_read_write(path):
        pass
    if sys.platform != "win32":
        assert path.stat().st_mode & 0o777 == 0o640 & ~umask
