"""Error types raised by the bootstrap stages.

Every stage failure is fatal. The CLI runner catches ``BootstrapError``,
logs the message and exits non-zero.
"""

from __future__ import annotations

from typing import Optional


class BootstrapError(Exception):
    """Base class for all bootstrap failures."""


class UnsupportedPlatformError(BootstrapError):
    """Host OS or architecture is not supported."""


class MissingDependencyError(BootstrapError):
    """No usable tool was found for a required step."""


class DownloadError(BootstrapError):
    """The artifact could not be downloaded."""

    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        self.url = url
        self.reason = reason
        message = f"Failed to download {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ChecksumMismatchError(BootstrapError):
    """Digest of the downloaded artifact differs from the pinned one."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            "Checksum verification failed!\n"
            f"  Expected: {expected}\n"
            f"  Got:      {actual}\n"
            "Binary may be corrupted or tampered with. Aborting."
        )


class ChecksumNotDefinedError(BootstrapError):
    """No pinned checksum exists for the platform."""

    def __init__(self, platform_key: str) -> None:
        self.platform_key = platform_key
        super().__init__(f"No checksum defined for platform: {platform_key}")


class ArchiveError(BootstrapError):
    """The downloaded archive could not be extracted."""


class MissingBinaryError(BootstrapError):
    """The archive does not contain the expected executable."""


class InstallError(BootstrapError):
    """The extracted binary could not be placed in the checkout."""


class ChecksumToolError(BootstrapError):
    """A hashing tool was found but failed to digest the file."""


class RepositoryCloneError(BootstrapError):
    """The dotfiles repository could not be cloned."""


class ConfigNotFoundError(BootstrapError):
    """The bootstrap config file is missing from the checkout."""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"Bootstrap config not found: {path}")
