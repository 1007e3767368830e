"""Tests for dotboot.bootstrap.platform."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from dotboot.bootstrap.platform import (
    PlatformKey,
    detect_platform,
    normalize_arch,
    normalize_os,
    supported_platforms,
)
from dotboot.core.errors import UnsupportedPlatformError


class TestDetectPlatform:
    """Tests for detect_platform."""

    @pytest.mark.parametrize(
        "system, machine, expected",
        [
            ("Linux", "x86_64", PlatformKey("linux", "amd64")),
            ("Linux", "amd64", PlatformKey("linux", "amd64")),
            ("Linux", "aarch64", PlatformKey("linux", "arm64")),
            ("Linux", "arm64", PlatformKey("linux", "arm64")),
            ("Darwin", "x86_64", PlatformKey("darwin", "amd64")),
            ("Darwin", "arm64", PlatformKey("darwin", "arm64")),
            ("darwin", "AARCH64", PlatformKey("darwin", "arm64")),
        ],
    )
    def test_supported_combinations(self, system: str, machine: str, expected: PlatformKey) -> None:
        assert detect_platform(system, machine) == expected

    @pytest.mark.parametrize("system", ["Windows", "FreeBSD", "SunOS", ""])
    def test_unsupported_os(self, system: str) -> None:
        with pytest.raises(UnsupportedPlatformError, match="Unsupported OS"):
            detect_platform(system, "x86_64")

    @pytest.mark.parametrize("machine", ["i386", "i686", "armv7l", "ppc64le", "riscv64", ""])
    def test_unsupported_arch(self, machine: str) -> None:
        with pytest.raises(UnsupportedPlatformError, match="Unsupported architecture"):
            detect_platform("Linux", machine)

    def test_defaults_to_host_values(self) -> None:
        with patch("dotboot.bootstrap.platform.platform.system", return_value="Linux"), patch(
            "dotboot.bootstrap.platform.platform.machine", return_value="x86_64"
        ):
            assert detect_platform() == PlatformKey("linux", "amd64")


class TestPlatformKey:
    def test_key_and_str(self) -> None:
        key = PlatformKey("darwin", "arm64")
        assert key.key == "darwin_arm64"
        assert str(key) == "darwin/arm64"

    def test_supported_platforms_are_four(self) -> None:
        keys = {p.key for p in supported_platforms()}
        assert keys == {"linux_amd64", "linux_arm64", "darwin_amd64", "darwin_arm64"}


def test_normalizers_strip_whitespace() -> None:
    assert normalize_os(" Linux\n") == "linux"
    assert normalize_arch(" x86_64 ") == "amd64"
