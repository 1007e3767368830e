"""SHA-256 verification of downloaded archives."""

from __future__ import annotations

import hashlib
import subprocess
from abc import abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from dotboot.core.errors import ChecksumMismatchError, ChecksumToolError
from dotboot.core.logging import get_logger, log_success
from dotboot.core.tools import CommandTool, Tool, select_tool

LOGGER = get_logger(__name__)

_CHUNK_SIZE = 1024 * 1024


class Hasher(Tool):
    """Strategy computing the SHA-256 hex digest of a file."""

    @abstractmethod
    def digest(self, path: Path) -> str:
        """Return the lowercase hex digest of the file contents."""


class CommandHasher(CommandTool, Hasher):
    """Hasher backed by a ``*sum`` style command.

    The digest is the first whitespace-separated field of its output.
    """

    args: tuple[str, ...] = ()

    def digest(self, path: Path) -> str:
        cmd = [self.resolve() or self.executable, *self.args, str(path)]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise ChecksumToolError(f"Could not run {self.name}: {e}") from e
        if result.returncode != 0 or not result.stdout.strip():
            raise ChecksumToolError(
                f"{self.name} failed on {path}: {result.stderr.strip()}"
            )
        return result.stdout.split()[0]


class Sha256sumHasher(CommandHasher):
    executable = "sha256sum"


class ShasumHasher(CommandHasher):
    executable = "shasum"
    args = ("-a", "256")


class HashlibHasher(Hasher):
    """In-process hasher using hashlib."""

    @property
    def name(self) -> str:
        return "hashlib"

    def is_available(self) -> bool:
        return True

    def digest(self, path: Path) -> str:
        sha = hashlib.sha256()
        try:
            with open(path, "rb") as fh:
                for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
                    sha.update(chunk)
        except OSError as e:
            raise ChecksumToolError(f"Could not read {path}: {e}") from e
        return sha.hexdigest()


def default_hashers() -> list[Hasher]:
    """Hashers in order of preference."""
    return [Sha256sumHasher(), ShasumHasher(), HashlibHasher()]


def compute_sha256(path: Path, hashers: Optional[Sequence[Hasher]] = None) -> str:
    """Compute the SHA-256 digest of a file with the first available hasher.

    Raises:
        ChecksumToolError: If the selected hasher fails on the file.
        MissingDependencyError: If no hasher is available.
    """
    if hashers is None:
        hashers = default_hashers()
    return select_tool(hashers, "SHA256").digest(path)


def verify_checksum(
    path: Path,
    expected: str,
    skip: bool = False,
    hashers: Optional[Sequence[Hasher]] = None,
) -> None:
    """Verify a file against its pinned SHA-256 digest.

    Must be called before the file is extracted or executed. The
    comparison is exact and case-sensitive.

    Args:
        path: File to check.
        expected: Expected hex digest.
        skip: Skip verification entirely (logs a warning).
        hashers: Candidate hashers (defaults to sha256sum, shasum, hashlib).

    Raises:
        ChecksumMismatchError: If the digests differ.
        ChecksumToolError: If the selected hasher fails on the file.
        MissingDependencyError: If no hasher is available.
    """
    if skip:
        LOGGER.warning(
            "Skipping checksum validation (disabled by configuration, NOT recommended)"
        )
        return

    LOGGER.info("Validating checksum...")
    actual = compute_sha256(path, hashers)
    if actual != expected:
        raise ChecksumMismatchError(expected=expected, actual=actual)

    log_success(LOGGER, "Checksum verified")
