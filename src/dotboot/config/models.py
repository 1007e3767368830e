"""Configuration data models for dotboot.

The configuration is built once at startup (defaults, then the optional
settings file, then environment variables) and passed to every stage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from dotboot.bootstrap.versions import DEFAULT_BOOSTER_VERSION, PINNED_CHECKSUMS

DEFAULT_DOTFILES_REPO = "lukelukes/dotfiles"
DEFAULT_BOOSTER_REPO = "lukelukes/booster"
DEFAULT_DOTFILES_DIR_NAME = ".dotfiles"


def default_dotfiles_dir() -> Path:
    return Path.home() / DEFAULT_DOTFILES_DIR_NAME


@dataclass
class DotfilesConfig:
    """Where the dotfiles repository comes from and where it is checked out."""

    repo: str = DEFAULT_DOTFILES_REPO
    dir: Path = field(default_factory=default_dotfiles_dir)


@dataclass
class BoosterConfig:
    """Booster release to install."""

    repo: str = DEFAULT_BOOSTER_REPO
    version: str = DEFAULT_BOOSTER_VERSION
    # Keyed by "<os>_<arch>"
    checksums: Dict[str, str] = field(default_factory=lambda: dict(PINNED_CHECKSUMS))


@dataclass
class BootstrapConfig:
    """Complete dotboot configuration."""

    dotfiles: DotfilesConfig = field(default_factory=DotfilesConfig)
    booster: BoosterConfig = field(default_factory=BoosterConfig)
    skip_checksum: bool = False

    # Where values came from, for debug output
    sources: List[str] = field(default_factory=list)
