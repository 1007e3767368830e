"""Argument parser for the dotboot CLI."""

from __future__ import annotations

import argparse

from dotboot.bootstrap.versions import DEFAULT_BOOSTER_VERSION

DESCRIPTION = "Dotfiles Bootstrap - install booster and apply a profile."

EPILOG = f"""\
Arguments:
    profile    The bootstrap profile to use (e.g., minimal, desktop, server)

Environment Variables:
    DOTFILES_REPO     GitHub repo for dotfiles (default: lukelukes/dotfiles)
    DOTFILES_DIR      Local directory for dotfiles (default: ~/.dotfiles)
    BOOSTER_REPO      GitHub repo publishing booster releases (default: lukelukes/booster)
    BOOSTER_VERSION   Booster version to use (default: {DEFAULT_BOOSTER_VERSION})
    SKIP_CHECKSUM     Set to "1" to skip checksum validation (NOT recommended)
    DOTBOOT_CONFIG    Path to a YAML settings file (default: ~/.config/dotboot/config.yml)

Examples:
    # Basic usage
    dotboot desktop

    # With custom dotfiles repo
    DOTFILES_REPO=myuser/mydots dotboot minimal
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotboot",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "profile",
        nargs="?",
        default=None,
        help="Bootstrap profile passed to booster.",
    )

    # Global options
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show dotboot version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output.",
    )

    return parser
