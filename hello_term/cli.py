#!/usr/bin/env python3
"""
Main entry point for the terminal greeter.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .config import DEFAULT_CONFIG_PATH, ConfigManager
from .errors import GreeterError
from .greeter import SystemGreeter

logger = logging.getLogger("hello_term")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="A simple greeter for your terminal")
    parser.add_argument("-c", "--config", default=str(DEFAULT_CONFIG_PATH),
                        help="Specify a path to a config file")
    parser.add_argument("-k", "--keep-going", action="store_true",
                        help="Skip rows whose data cannot be collected instead of aborting")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log commands and API calls")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def setup_logging(verbose: bool, console: Console):
    handler = RichHandler(console=console, show_path=False, show_time=verbose)
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def main(argv: Optional[List[str]] = None) -> int:
    """Command line interface"""
    args = parse_arguments(argv)
    err_console = Console(stderr=True)
    setup_logging(args.verbose, err_console)

    try:
        config = ConfigManager(args.config).load_config()
        SystemGreeter(config, keep_going=args.keep_going).run()
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted by user[/yellow]")
        return 130
    except GreeterError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", markup=True, highlight=False)
        logger.debug("Aborted", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
