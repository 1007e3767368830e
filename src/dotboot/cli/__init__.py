"""Command-line entry point: ``dotboot <profile>``."""

from __future__ import annotations

from typing import Iterable, Optional

from dotboot.cli.arguments import build_parser
from dotboot.cli.runner import CLIRunner, get_version


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Run the bootstrap for the profile named in ``argv``.

    Used as the ``dotboot`` console script; the return value is the
    process exit status.
    """
    return CLIRunner().run(argv)


__all__ = ["CLIRunner", "build_parser", "get_version", "main"]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
