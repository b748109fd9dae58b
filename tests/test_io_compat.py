#!/usr/bin/env python3
"""
Conformance tests: the IO.binread / IO.write examples from the Ruby 2.6 docs.

Run:
    python -m pytest tests/test_io_compat.py -v
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

import rbfile  # noqa: E402

CONTENT = b"This is line one\nThis is line two\nThis is line three\nAnd so on...\n"


@pytest.fixture
def files(tmp_path: Path) -> tuple[Path, Path]:
    testfile = tmp_path / "testfile"
    testfile2 = tmp_path / "testfile2"
    testfile.write_bytes(CONTENT)
    testfile2.write_bytes(CONTENT)
    return testfile, testfile2


def test_binread_testfile(files):
    testfile, _ = files
    assert rbfile.binread(testfile) == CONTENT


def test_binread_testfile_with_length(files):
    testfile, _ = files
    assert rbfile.binread(testfile, 20) == b"This is line one\nThi"


def test_binread_testfile_with_length_and_offset(files):
    testfile, _ = files
    assert rbfile.binread(testfile, 20, 10) == b"ne one\nThis is line "


def test_write(files):
    testfile, _ = files
    assert rbfile.write(testfile, b"0123456789") == 10
    assert rbfile.binread(testfile) == b"0123456789"


def test_write_with_offset(files):
    _, testfile2 = files
    assert rbfile.write(testfile2, b"0123456789", 20) == 10
    assert rbfile.binread(testfile2) == b"This is line one\nThi0123456789two\nThis is line three\nAnd so on...\n"


def test_textread_matches_binread(files):
    testfile, _ = files
    assert rbfile.textread(testfile) == CONTENT
    assert rbfile.textread(testfile, 20) == b"This is line one\nThi"
    assert rbfile.textread(testfile, 20, 10) == b"ne one\nThis is line "


def test_str_path_accepted(files):
    testfile, _ = files
    assert rbfile.binread(str(testfile), 4) == b"This"
