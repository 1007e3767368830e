"""Pinned booster release version and archive checksums.

Update these when releasing new versions of booster.
Generate with: sha256sum booster_*.tar.gz
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from dotboot.bootstrap.platform import PlatformKey
from dotboot.core.errors import ChecksumNotDefinedError

DEFAULT_BOOSTER_VERSION = "0.3.0"

# Keyed by "<os>_<arch>"
PINNED_CHECKSUMS: Dict[str, str] = {
    "linux_amd64": "cf886fc773cc977a615b21b30e31c954a1e1581c88b622ff7d933fe2b98ea871",
    "darwin_arm64": "eb18b3e76bf61223efe0a75a85de969f8ae76d3110995f3505cc3071aa258cb5",
}


def get_expected_checksum(
    platform_key: PlatformKey,
    checksums: Optional[Mapping[str, str]] = None,
) -> str:
    """Look up the pinned checksum for a platform.

    Args:
        platform_key: Detected platform.
        checksums: Checksum table (defaults to PINNED_CHECKSUMS).

    Returns:
        Expected SHA-256 hex digest.

    Raises:
        ChecksumNotDefinedError: If the table has no non-empty entry.
    """
    table = PINNED_CHECKSUMS if checksums is None else checksums
    expected = (table.get(platform_key.key) or "").strip()
    if not expected:
        raise ChecksumNotDefinedError(platform_key.key)
    return expected
