"""Git operations for the dotfiles checkout."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from dotboot.core.errors import MissingDependencyError, RepositoryCloneError
from dotboot.core.logging import get_logger, log_success

LOGGER = get_logger(__name__)


def repository_url(repo: str) -> str:
    """Build the clone URL for a dotfiles repository.

    ``owner/name`` shorthands expand to a GitHub HTTPS URL. Values that
    already look like a URL or a local path are returned unchanged, except
    that a leading ``~`` is expanded since git does not do so itself.
    """
    if repo.startswith("~"):
        return os.path.expanduser(repo)
    if "://" in repo or repo.startswith(("git@", "/", ".")) or repo.endswith(".git"):
        return repo
    return f"https://github.com/{repo}.git"


def find_git() -> str:
    """Locate the git executable.

    Raises:
        MissingDependencyError: If git is not on PATH.
    """
    git = shutil.which("git")
    if git is None:
        raise MissingDependencyError("git is required but not installed")
    return git


def sync_repository(remote_url: str, local_dir: Path) -> Path:
    """Make sure ``local_dir`` holds an up to date checkout.

    A missing directory is cloned. An existing one is updated with a
    fast-forward-only pull; if that fails (local changes, diverged or
    detached HEAD) a warning is logged and the existing files are used.

    Args:
        remote_url: Repository URL to clone from.
        local_dir: Local checkout directory.

    Returns:
        The checkout directory.

    Raises:
        MissingDependencyError: If git is not installed.
        RepositoryCloneError: If the initial clone fails.
    """
    LOGGER.info("Setting up dotfiles repository...")
    git = find_git()

    if local_dir.is_dir():
        LOGGER.warning(f"Dotfiles directory already exists at {local_dir}")
        LOGGER.info("Pulling latest changes...")
        result = subprocess.run(
            [git, "-C", str(local_dir), "pull", "--ff-only"],
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            LOGGER.debug(f"git pull stderr: {result.stderr.strip()}")
            LOGGER.warning(
                "Could not pull (may have local changes), continuing with existing files"
            )
    else:
        LOGGER.info(f"Cloning {remote_url}...")
        result = subprocess.run(
            [git, "clone", remote_url, str(local_dir)],
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            detail = result.stderr.strip()
            message = f"Failed to clone dotfiles repository from {remote_url}"
            raise RepositoryCloneError(f"{message}\n{detail}" if detail else message)

    log_success(LOGGER, f"Dotfiles ready at {local_dir}")
    return local_dir
