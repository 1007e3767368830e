"""Platform detection for booster release artifacts.

Maps the raw OS and machine strings reported by the interpreter onto the
``os``/``arch`` names used in release archive names.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from dotboot.core.errors import UnsupportedPlatformError

SUPPORTED_OS: Tuple[str, ...] = ("linux", "darwin")

ARCH_ALIASES: Dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}

SUPPORTED_ARCH: Tuple[str, ...] = ("amd64", "arm64")


@dataclass(frozen=True)
class PlatformKey:
    """Normalized platform identifier."""

    os: str
    arch: str

    @property
    def key(self) -> str:
        """Checksum table key, e.g. ``linux_amd64``."""
        return f"{self.os}_{self.arch}"

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


def normalize_os(raw: str) -> str:
    """Normalize a raw OS name.

    Raises:
        UnsupportedPlatformError: If the OS is not linux or darwin.
    """
    os_name = raw.strip().lower()
    if os_name not in SUPPORTED_OS:
        raise UnsupportedPlatformError(
            f"Unsupported OS: {os_name or raw!r} (only linux and darwin are supported)"
        )
    return os_name


def normalize_arch(raw: str) -> str:
    """Normalize a raw machine name, accepting common aliases.

    Raises:
        UnsupportedPlatformError: If the architecture is not recognised.
    """
    arch = ARCH_ALIASES.get(raw.strip().lower())
    if arch is None:
        raise UnsupportedPlatformError(f"Unsupported architecture: {raw}")
    return arch


def detect_platform(
    system: Optional[str] = None,
    machine: Optional[str] = None,
) -> PlatformKey:
    """Detect the current platform.

    Args:
        system: Raw OS name (defaults to ``platform.system()``).
        machine: Raw machine name (defaults to ``platform.machine()``).

    Returns:
        Normalized PlatformKey.

    Raises:
        UnsupportedPlatformError: For any OS or architecture outside the
            supported set.
    """
    if system is None:
        system = platform.system()
    if machine is None:
        machine = platform.machine()
    return PlatformKey(os=normalize_os(system), arch=normalize_arch(machine))


def supported_platforms() -> Tuple[PlatformKey, ...]:
    """All supported platform combinations."""
    return tuple(
        PlatformKey(os=os_name, arch=arch)
        for os_name in SUPPORTED_OS
        for arch in SUPPORTED_ARCH
    )
