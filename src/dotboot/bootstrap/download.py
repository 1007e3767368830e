"""Download of booster release archives.

Release archives are named ``booster_<version>_<os>_<arch>.tar.gz`` and
published under ``https://github.com/<repo>/releases/download/v<version>/``.
"""

from __future__ import annotations

import shutil
import ssl
import subprocess
from abc import abstractmethod
from pathlib import Path
from typing import Optional, Sequence
from urllib.error import URLError
from urllib.request import Request, urlopen

from dotboot.bootstrap.platform import PlatformKey
from dotboot.core.errors import DownloadError
from dotboot.core.logging import get_logger
from dotboot.core.tools import CommandTool, Tool, select_tool

LOGGER = get_logger(__name__)

ARCHIVE_PREFIX = "booster"
ALLOWED_URL_PREFIX = "https://github.com/"


def artifact_name(version: str, platform_key: PlatformKey) -> str:
    """Release archive file name for a version and platform."""
    return f"{ARCHIVE_PREFIX}_{version}_{platform_key.os}_{platform_key.arch}.tar.gz"


def artifact_url(repo: str, version: str, platform_key: PlatformKey) -> str:
    """Download URL of the release archive.

    Args:
        repo: GitHub ``owner/name`` of the booster repository.
        version: Release version without the leading ``v``.
        platform_key: Target platform.
    """
    name = artifact_name(version, platform_key)
    return f"https://github.com/{repo}/releases/download/v{version}/{name}"


def secure_urlopen(url: str, timeout: Optional[float] = None):
    """Open an HTTPS URL with certificate verification.

    Raises:
        ValueError: If the URL is not HTTPS.
    """
    if not url.startswith("https://"):
        raise ValueError(f"Refusing non-HTTPS URL: {url}")
    context = ssl.create_default_context()
    request = Request(url, headers={"User-Agent": "dotboot"})
    return urlopen(request, timeout=timeout, context=context)  # nosec B310


class Transfer(Tool):
    """Strategy that retrieves a URL into a local file."""

    @abstractmethod
    def download(self, url: str, dest: Path) -> None:
        """Download ``url`` to ``dest``.

        Raises:
            DownloadError: If the transfer fails.
        """


class CommandTransfer(CommandTool, Transfer):
    """Transfer performed by an external command."""

    def build_command(self, url: str, dest: Path) -> list[str]:
        raise NotImplementedError

    def download(self, url: str, dest: Path) -> None:
        cmd = self.build_command(url, dest)
        LOGGER.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise DownloadError(url, str(e)) from e
        if result.returncode != 0:
            reason = result.stderr.strip() or f"{self.name} exited with {result.returncode}"
            raise DownloadError(url, reason)


class CurlTransfer(CommandTransfer):
    executable = "curl"

    def build_command(self, url: str, dest: Path) -> list[str]:
        return [self.resolve() or self.executable, "-fsSL", url, "-o", str(dest)]


class WgetTransfer(CommandTransfer):
    executable = "wget"

    def build_command(self, url: str, dest: Path) -> list[str]:
        return [self.resolve() or self.executable, "-q", url, "-O", str(dest)]


class UrllibTransfer(Transfer):
    """In-process transfer using the standard library HTTP client."""

    @property
    def name(self) -> str:
        return "urllib"

    def is_available(self) -> bool:
        return True

    def download(self, url: str, dest: Path) -> None:
        try:
            with secure_urlopen(url) as response, open(dest, "wb") as fh:
                shutil.copyfileobj(response, fh)
        except (URLError, OSError, ValueError) as e:
            raise DownloadError(url, str(e)) from e


def default_transfers() -> list[Transfer]:
    """Transfer strategies in order of preference."""
    return [CurlTransfer(), WgetTransfer(), UrllibTransfer()]


def fetch_artifact(
    url: str,
    workspace: Path,
    transfers: Optional[Sequence[Transfer]] = None,
) -> Path:
    """Download a release archive into the workspace.

    A single attempt is made with the first available transfer tool.
    Failures are not retried with the next tool.

    Args:
        url: Archive URL.
        workspace: Scoped temporary directory owning the download.
        transfers: Candidate strategies (defaults to curl, wget, urllib).

    Returns:
        Path of the downloaded archive inside the workspace.

    Raises:
        DownloadError: If the URL is not allowed or the transfer fails.
        MissingDependencyError: If no transfer tool is available.
    """
    if not url.startswith(ALLOWED_URL_PREFIX):
        raise DownloadError(url, "download URL must point to https://github.com/")

    if transfers is None:
        transfers = default_transfers()
    transfer = select_tool(transfers, "download")

    dest = workspace / url.rsplit("/", 1)[-1]
    LOGGER.debug(f"Downloading from {url}")
    transfer.download(url, dest)

    if not dest.is_file():
        raise DownloadError(url, f"{transfer.name} reported success but wrote no file")
    return dest
