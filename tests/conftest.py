"""Shared fixtures for dotboot tests."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from tests.fakes import BOOSTER_SCRIPT, make_tar_gz

git_available = pytest.mark.skipif(
    shutil.which("git") is None, reason="git is not installed"
)


@pytest.fixture
def booster_archive(tmp_path: Path) -> Path:
    """A release archive containing a booster executable."""
    release = tmp_path / "release"
    release.mkdir()
    return make_tar_gz(release / "booster_0.3.0_linux_amd64.tar.gz", {"booster": BOOSTER_SCRIPT})


@pytest.fixture
def temp_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect tempfile to a known directory so leftovers can be checked."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture(autouse=True)
def reset_dotboot_logger():
    """Drop handlers installed by configure_logging between tests."""
    yield
    logger = logging.getLogger("dotboot")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
