"""CLI runner for dotboot."""

from __future__ import annotations

import sys
import traceback
from importlib.metadata import PackageNotFoundError, version
from typing import Callable, Iterable, List, Optional

from dotboot.cli.arguments import build_parser
from dotboot.cli.exit_codes import (
    EXIT_BOOTSTRAP_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
)
from dotboot.config.loader import ConfigError, load_config
from dotboot.config.models import BootstrapConfig
from dotboot.core.errors import BootstrapError
from dotboot.core.logging import configure_logging, get_logger, log_success
from dotboot.pipeline.executor import BootstrapPipeline

LOGGER = get_logger(__name__)

BANNER = """
╔═══════════════════════════════════════╗
║      Dotfiles Bootstrap               ║
╚═══════════════════════════════════════╝
"""

PipelineFactory = Callable[[BootstrapConfig], BootstrapPipeline]


def get_version() -> str:
    try:
        return version("dotboot")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from dotboot import __version__

        return __version__


class CLIRunner:
    """Parses arguments, builds the configuration and runs the pipeline."""

    def __init__(self, pipeline_factory: PipelineFactory = BootstrapPipeline) -> None:
        self._pipeline_factory = pipeline_factory

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:]).

        Returns:
            Exit code.
        """
        parser = build_parser()
        argv_list: List[str] = list(sys.argv[1:] if argv is None else argv)

        # Handle --help specially to return 0
        if "--help" in argv_list or "-h" in argv_list:
            parser.print_help()
            return EXIT_SUCCESS

        try:
            args = parser.parse_args(argv_list)
        except SystemExit as e:
            return EXIT_SUCCESS if e.code == 0 else EXIT_INVALID_USAGE

        if args.version:
            print(get_version())
            return EXIT_SUCCESS

        if not args.profile:
            parser.print_help(sys.stderr)
            return EXIT_INVALID_USAGE

        # Configure logging as early as possible.
        configure_logging(
            debug=args.debug,
            quiet=args.quiet,
            color=False if args.no_color else None,
        )

        try:
            config = load_config()
        except ConfigError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        if not args.quiet:
            print(BANNER, file=sys.stderr)

        pipeline = self._pipeline_factory(config)
        try:
            exit_code = pipeline.run(args.profile)
        except BootstrapError as e:
            LOGGER.error(str(e))
            if args.debug:
                traceback.print_exc()
            return EXIT_BOOTSTRAP_FAILURE

        if exit_code == EXIT_SUCCESS:
            log_success(LOGGER, "Bootstrap complete!")
        else:
            LOGGER.error(f"booster exited with status {exit_code}")
        return exit_code
