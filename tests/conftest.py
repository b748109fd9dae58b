"""Shared fixtures: isolate tests from any local config file or RBFILE_* env."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from rbfile.common.config import Settings, set_settings  # noqa: E402

FIXTURE_CONTENT = b"This is line one\nThis is line two\nThis is line three\nAnd so on...\n"

_ENV_KEYS = (
    "RBFILE_CONFIG",
    "RBFILE_READ_CHUNK_SIZE",
    "RBFILE_ZERO_FILL_GAPS",
    "RBFILE_ZERO_FILL_BLOCK_SIZE",
    "RBFILE_FILE_PERMISSIONS",
    "RBFILE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def default_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Install default settings as the process-wide settings for each test."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    settings = Settings()
    set_settings(settings)
    yield settings
    set_settings(None)


@pytest.fixture
def testfile(tmp_path: Path) -> Path:
    """A file holding the four-line fixture text."""
    path = tmp_path / "testfile"
    path.write_bytes(FIXTURE_CONTENT)
    return path
