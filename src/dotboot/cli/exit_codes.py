"""Exit codes for the dotboot CLI.

- 0: Success (or booster's own exit code when booster ran)
- 1: Invalid usage (missing profile, bad arguments, bad settings file)
- 4: Bootstrap failure (platform, download, checksum, install, git)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_INVALID_USAGE = 1
EXIT_BOOTSTRAP_FAILURE = 4
