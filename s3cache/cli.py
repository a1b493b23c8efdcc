#!/usr/bin/env python3
"""Command-line interface for the S3 build cache.

The restore and save steps of a CI job both run through this entry point.
"""
from __future__ import annotations

import logging
import sys
from typing import List, Optional

from .commands import build_orchestrator, create_parser, restore_command, save_command, setup_logging
from .host.context import GitHubActionsContext
from .ui.console import ConsoleManager

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Argument list (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    # Parse arguments
    parser = create_parser()
    args = parser.parse_args(argv)

    context = GitHubActionsContext()
    verbose = args.verbose or context.is_debug()

    # Setup logging
    setup_logging(verbose)
    console_manager = ConsoleManager(verbose=verbose)
    console_manager.setup_logging(logging.getLogger("s3cache"))

    try:
        # Route to appropriate command handler
        if args.command == "restore":
            return restore_command(context, build_orchestrator)
        elif args.command == "save":
            return save_command(context, build_orchestrator)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        logger.error("Operation cancelled by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
