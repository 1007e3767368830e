"""Pipeline executor sequencing the bootstrap stages."""

from __future__ import annotations

import subprocess
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from dotboot.bootstrap.checksum import Hasher, verify_checksum
from dotboot.bootstrap.download import Transfer, artifact_url, fetch_artifact
from dotboot.bootstrap.install import install_artifact, scoped_workspace
from dotboot.bootstrap.paths import CheckoutPaths
from dotboot.bootstrap.platform import PlatformKey, detect_platform
from dotboot.bootstrap.versions import get_expected_checksum
from dotboot.config.models import BootstrapConfig
from dotboot.core.errors import BootstrapError, ConfigNotFoundError
from dotboot.core.git import repository_url, sync_repository
from dotboot.core.logging import get_logger, log_success

LOGGER = get_logger(__name__)

Runner = Callable[[List[str]], int]


class Stage(str, Enum):
    """Ordered bootstrap stages."""

    DETECT_PLATFORM = "detect_platform"
    SYNC_REPOSITORY = "sync_repository"
    FETCH_ARTIFACT = "fetch_artifact"
    VERIFY_INTEGRITY = "verify_integrity"
    INSTALL_ARTIFACT = "install_artifact"
    INVOKE_ARTIFACT = "invoke_artifact"


def run_process(cmd: List[str]) -> int:
    """Run a command attached to the terminal and return its exit code.

    Raises:
        BootstrapError: If the command cannot be started.
    """
    try:
        return subprocess.run(cmd, check=False).returncode
    except OSError as e:
        raise BootstrapError(f"Failed to run {cmd[0]}: {e}") from e


class BootstrapPipeline:
    """Runs the bootstrap stages in order.

    Pipeline stages:
    1. Detect platform
    2. Sync the dotfiles repository
    3. Fetch the booster archive
    4. Verify its checksum
    5. Install the booster binary
    6. Invoke booster with the requested profile

    Any stage failure raises and stops the run. Nothing is persisted
    between runs; each invocation starts from the first stage.
    """

    def __init__(
        self,
        config: BootstrapConfig,
        transfers: Optional[Sequence[Transfer]] = None,
        hashers: Optional[Sequence[Hasher]] = None,
        platform_detector: Callable[[], PlatformKey] = detect_platform,
        runner: Runner = run_process,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Bootstrap configuration.
            transfers: Download strategies (defaults to curl, wget, urllib).
            hashers: Digest strategies (defaults to sha256sum, shasum, hashlib).
            platform_detector: Callable returning the host platform.
            runner: Callable executing the final booster command.
        """
        self._config = config
        self._transfers = transfers
        self._hashers = hashers
        self._detect = platform_detector
        self._runner = runner
        self._paths = CheckoutPaths(config.dotfiles.dir)
        self.completed: List[Stage] = []

    @property
    def paths(self) -> CheckoutPaths:
        return self._paths

    def run(self, profile: str) -> int:
        """Execute every stage for ``profile``.

        Returns:
            Exit code of the booster process.

        Raises:
            BootstrapError: If any stage fails.
        """
        self.completed = []

        platform_key = self._detect()
        LOGGER.info(f"Detected platform: {platform_key}")
        self._mark(Stage.DETECT_PLATFORM)

        sync_repository(repository_url(self._config.dotfiles.repo), self._paths.root)
        self._mark(Stage.SYNC_REPOSITORY)

        booster = self.install_booster(platform_key)

        return self.run_booster(booster, profile)

    def install_booster(self, platform_key: PlatformKey) -> Path:
        """Fetch, verify and install booster for a platform.

        Returns:
            Path of the installed binary.
        """
        booster = self._config.booster
        LOGGER.info(f"Installing booster v{booster.version} ({platform_key})...")

        expected = ""
        if not self._config.skip_checksum:
            expected = get_expected_checksum(platform_key, booster.checksums)

        url = artifact_url(booster.repo, booster.version, platform_key)

        with scoped_workspace() as workspace:
            LOGGER.info("Downloading from GitHub releases...")
            archive = fetch_artifact(url, workspace, self._transfers)
            self._mark(Stage.FETCH_ARTIFACT)

            # Nothing from the archive is extracted before this point
            verify_checksum(
                archive,
                expected,
                skip=self._config.skip_checksum,
                hashers=self._hashers,
            )
            self._mark(Stage.VERIFY_INTEGRITY)

            installed = install_artifact(archive, workspace, self._paths.bin_dir)
            self._mark(Stage.INSTALL_ARTIFACT)

        log_success(LOGGER, f"Booster installed to {installed}")
        return installed

    def run_booster(self, booster: Path, profile: str) -> int:
        """Invoke booster and return its exit code.

        Raises:
            ConfigNotFoundError: If bootstrap.yaml is missing from the checkout.
        """
        config_path = self._paths.config_path
        if not config_path.is_file():
            raise ConfigNotFoundError(config_path)

        LOGGER.info(f"Running booster with profile '{profile}'...")
        cmd = [str(booster), f"--config={config_path}", f"--profile={profile}"]
        LOGGER.debug(f"Running: {' '.join(cmd)}")
        exit_code = self._runner(cmd)
        self._mark(Stage.INVOKE_ARTIFACT)
        return exit_code

    def _mark(self, stage: Stage) -> None:
        LOGGER.debug(f"Stage complete: {stage.value}")
        self.completed.append(stage)
