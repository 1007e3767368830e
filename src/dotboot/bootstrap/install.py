"""Extraction and installation of the booster binary."""

from __future__ import annotations

import errno
import os
import shutil
import tarfile
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from dotboot.core.errors import ArchiveError, InstallError, MissingBinaryError
from dotboot.core.logging import get_logger

LOGGER = get_logger(__name__)

BINARY_NAME = "booster"
WORKSPACE_PREFIX = "dotboot-"


@contextmanager
def scoped_workspace(prefix: str = WORKSPACE_PREFIX) -> Iterator[Path]:
    """Create a temporary directory for one install attempt.

    The directory and everything left in it is removed when the block
    exits, whether it completed or raised.
    """
    workspace = Path(tempfile.mkdtemp(prefix=prefix))
    LOGGER.debug(f"Created workspace {workspace}")
    try:
        yield workspace
    finally:
        shutil.rmtree(workspace, ignore_errors=True)
        LOGGER.debug(f"Removed workspace {workspace}")


def extract_archive(archive: Path, dest: Path) -> None:
    """Extract a gzip tarball, rejecting members that escape ``dest``.

    Raises:
        ArchiveError: If the archive is unreadable or unsafe.
    """
    dest_root = dest.resolve()
    try:
        with tarfile.open(archive, "r:gz") as tar:
            members = tar.getmembers()
            for member in members:
                member_path = (dest_root / member.name).resolve()
                if not member_path.is_relative_to(dest_root):
                    raise ArchiveError(f"Path traversal detected: {member.name}")
                if member.issym() or member.islnk():
                    raise ArchiveError(f"Links are not allowed in archive: {member.name}")
            if hasattr(tarfile, "data_filter"):
                tar.extractall(path=dest_root, members=members, filter="data")  # nosec B202
            else:
                tar.extractall(path=dest_root, members=members)  # nosec B202
    except (tarfile.TarError, OSError, EOFError) as e:
        raise ArchiveError(f"Failed to extract archive {archive.name}: {e}") from e


def _move_into_place(source: Path, target: Path) -> None:
    try:
        os.replace(source, target)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        # Rename cannot cross filesystems; stage next to the target first
        staged = target.with_name(f".{target.name}.tmp")
        shutil.copy2(source, staged)
        os.replace(staged, target)


def install_artifact(
    archive: Path,
    workspace: Path,
    dest_dir: Path,
    binary_name: str = BINARY_NAME,
) -> Path:
    """Install the executable contained in a verified archive.

    The archive is extracted into the workspace, the binary is marked
    executable and renamed into ``dest_dir``, overwriting any previous
    install.

    Args:
        archive: Verified release archive.
        workspace: Scoped temporary directory owned by this attempt.
        dest_dir: Target directory, created if missing.
        binary_name: Expected name of the executable in the archive root.

    Returns:
        Path of the installed executable.

    Raises:
        ArchiveError: If extraction fails.
        MissingBinaryError: If the archive has no such executable.
        InstallError: If the binary cannot be placed in ``dest_dir``.
    """
    LOGGER.info("Extracting...")
    extract_dir = workspace / "extract"
    extract_dir.mkdir(exist_ok=True)
    extract_archive(archive, extract_dir)

    binary_path = extract_dir / binary_name
    if not binary_path.is_file():
        raise MissingBinaryError(f"Binary '{binary_name}' not found in archive")

    install_path = dest_dir / binary_name
    try:
        binary_path.chmod(0o755)
        dest_dir.mkdir(parents=True, exist_ok=True)
        _move_into_place(binary_path, install_path)
    except OSError as e:
        raise InstallError(f"Could not install {binary_name} to {install_path}: {e}") from e

    LOGGER.debug(f"Installed {binary_name} to {install_path}")
    return install_path
