"""Booster binary management.

This package handles:
- Platform detection (OS + architecture)
- Download of release archives
- SHA-256 verification against pinned checksums
- Extraction and installation into the dotfiles checkout
"""

from dotboot.bootstrap.checksum import compute_sha256, verify_checksum
from dotboot.bootstrap.download import artifact_name, artifact_url, fetch_artifact
from dotboot.bootstrap.install import install_artifact, scoped_workspace
from dotboot.bootstrap.paths import CheckoutPaths
from dotboot.bootstrap.platform import PlatformKey, detect_platform
from dotboot.bootstrap.versions import get_expected_checksum

__all__ = [
    "artifact_name",
    "artifact_url",
    "CheckoutPaths",
    "compute_sha256",
    "detect_platform",
    "fetch_artifact",
    "get_expected_checksum",
    "install_artifact",
    "PlatformKey",
    "scoped_workspace",
    "verify_checksum",
]
