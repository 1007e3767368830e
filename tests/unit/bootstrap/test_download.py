"""Tests for dotboot.bootstrap.download."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from dotboot.bootstrap.download import (
    CurlTransfer,
    UrllibTransfer,
    WgetTransfer,
    artifact_name,
    artifact_url,
    default_transfers,
    fetch_artifact,
)
from dotboot.bootstrap.platform import PlatformKey
from dotboot.core.errors import DownloadError, MissingDependencyError
from tests.fakes import FakeTransfer

URL = "https://github.com/lukelukes/booster/releases/download/v0.3.0/booster_0.3.0_linux_amd64.tar.gz"


class TestArtifactNaming:
    def test_artifact_name(self) -> None:
        assert artifact_name("0.3.0", PlatformKey("linux", "amd64")) == "booster_0.3.0_linux_amd64.tar.gz"

    def test_artifact_url(self) -> None:
        url = artifact_url("lukelukes/booster", "0.3.0", PlatformKey("linux", "amd64"))
        assert url == URL

    def test_artifact_url_darwin(self) -> None:
        url = artifact_url("me/booster", "1.2.3", PlatformKey("darwin", "arm64"))
        assert url.endswith("/me/booster/releases/download/v1.2.3/booster_1.2.3_darwin_arm64.tar.gz")


class TestFetchArtifact:
    def test_downloads_into_workspace(self, tmp_path: Path, booster_archive: Path) -> None:
        workspace = tmp_path / "ws"
        workspace.mkdir()
        transfer = FakeTransfer(booster_archive)

        result = fetch_artifact(URL, workspace, [transfer])

        assert result == workspace / "booster_0.3.0_linux_amd64.tar.gz"
        assert result.read_bytes() == booster_archive.read_bytes()
        assert transfer.calls == [(URL, result)]

    def test_first_available_tool_wins(self, tmp_path: Path, booster_archive: Path) -> None:
        first = FakeTransfer(booster_archive, name="first")
        second = FakeTransfer(booster_archive, name="second")

        fetch_artifact(URL, tmp_path, [first, second])

        assert len(first.calls) == 1
        assert second.calls == []

    def test_skips_unavailable_tools(self, tmp_path: Path, booster_archive: Path) -> None:
        missing = FakeTransfer(booster_archive, available=False, name="missing")
        present = FakeTransfer(booster_archive, name="present")

        fetch_artifact(URL, tmp_path, [missing, present])

        assert missing.calls == []
        assert len(present.calls) == 1

    def test_no_fallback_after_failure(self, tmp_path: Path, booster_archive: Path) -> None:
        failing = FakeTransfer(fail=True, name="failing")
        backup = FakeTransfer(booster_archive, name="backup")

        with pytest.raises(DownloadError) as exc_info:
            fetch_artifact(URL, tmp_path, [failing, backup])

        assert exc_info.value.url == URL
        assert URL in str(exc_info.value)
        assert backup.calls == []

    def test_no_tool_available(self, tmp_path: Path) -> None:
        tools = [FakeTransfer(available=False, name="curl"), FakeTransfer(available=False, name="wget")]
        with pytest.raises(MissingDependencyError, match="curl or wget"):
            fetch_artifact(URL, tmp_path, tools)

    def test_rejects_non_github_url(self, tmp_path: Path, booster_archive: Path) -> None:
        transfer = FakeTransfer(booster_archive)
        with pytest.raises(DownloadError, match="github.com"):
            fetch_artifact("http://example.com/booster.tar.gz", tmp_path, [transfer])
        assert transfer.calls == []

    def test_missing_output_file_is_error(self, tmp_path: Path) -> None:
        transfer = MagicMock()
        transfer.name = "silent"
        transfer.is_available.return_value = True
        with pytest.raises(DownloadError, match="wrote no file"):
            fetch_artifact(URL, tmp_path, [transfer])


class TestCommandTransfers:
    def test_curl_command(self, tmp_path: Path) -> None:
        with patch("dotboot.core.tools.shutil.which", return_value="/usr/bin/curl"):
            cmd = CurlTransfer().build_command(URL, tmp_path / "a.tar.gz")
        assert cmd == ["/usr/bin/curl", "-fsSL", URL, "-o", str(tmp_path / "a.tar.gz")]

    def test_wget_command(self, tmp_path: Path) -> None:
        with patch("dotboot.core.tools.shutil.which", return_value="/usr/bin/wget"):
            cmd = WgetTransfer().build_command(URL, tmp_path / "a.tar.gz")
        assert cmd == ["/usr/bin/wget", "-q", URL, "-O", str(tmp_path / "a.tar.gz")]

    def test_nonzero_exit_raises_download_error(self, tmp_path: Path) -> None:
        failed = subprocess.CompletedProcess(args=[], returncode=22, stdout="", stderr="404 Not Found")
        with patch("dotboot.core.tools.shutil.which", return_value="/usr/bin/curl"), patch(
            "dotboot.bootstrap.download.subprocess.run", return_value=failed
        ):
            with pytest.raises(DownloadError, match="404 Not Found"):
                CurlTransfer().download(URL, tmp_path / "a.tar.gz")

    def test_availability_follows_path(self) -> None:
        with patch("dotboot.core.tools.shutil.which", return_value=None):
            assert CurlTransfer().is_available() is False
            assert WgetTransfer().is_available() is False

    def test_default_order(self) -> None:
        names = [t.name for t in default_transfers()]
        assert names == ["curl", "wget", "urllib"]


class TestUrllibTransfer:
    def test_writes_response_body(self, tmp_path: Path) -> None:
        response = MagicMock()
        response.__enter__.return_value = response
        response.read.side_effect = [b"payload", b""]
        dest = tmp_path / "out.tar.gz"

        with patch("dotboot.bootstrap.download.secure_urlopen", return_value=response):
            UrllibTransfer().download(URL, dest)

        assert dest.read_bytes() == b"payload"

    def test_errors_become_download_error(self, tmp_path: Path) -> None:
        with patch("dotboot.bootstrap.download.secure_urlopen", side_effect=OSError("boom")):
            with pytest.raises(DownloadError, match="boom"):
                UrllibTransfer().download(URL, tmp_path / "out.tar.gz")
