"""Layout of the dotfiles checkout used by the bootstrap."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from dotboot.bootstrap.install import BINARY_NAME


@dataclass
class CheckoutPaths:
    """Paths inside the local dotfiles checkout.

    Directory structure:
        <checkout>/
            .bin/booster     - Installed booster binary
            bootstrap.yaml   - Config passed to booster
    """

    root: Path

    _BIN_DIR: ClassVar[str] = ".bin"
    _CONFIG_NAME: ClassVar[str] = "bootstrap.yaml"

    @property
    def bin_dir(self) -> Path:
        """Directory holding the installed booster binary."""
        return self.root / self._BIN_DIR

    @property
    def booster_path(self) -> Path:
        return self.bin_dir / BINARY_NAME

    @property
    def config_path(self) -> Path:
        """Bootstrap config handed to booster."""
        return self.root / self._CONFIG_NAME
