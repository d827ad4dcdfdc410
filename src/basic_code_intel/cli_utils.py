"""Shared CLI utilities for basic-code-intel.

This module contains exit codes, the console singleton and logging setup
shared by the CLI commands.
"""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

# Exit codes following Unix conventions
EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1  # Lookup or transport failure
EXIT_CONFIG_ERROR: int = 2  # Configuration/usage error
EXIT_SIGINT: int = 130  # 128 + SIGINT (2) - Interrupted by Ctrl+C

LOG_LEVEL_ENV_VAR = "BASIC_CODE_INTEL_LOG_LEVEL"

# When stdout is piped, Rich strips ANSI codes
_is_tty = sys.stdout.isatty()

console = Console(force_terminal=_is_tty, no_color=not _is_tty)

logger = logging.getLogger(__name__)


def _error(message: str) -> None:
    """Display error message with red styling."""
    console.print(f"[red]Error:[/red] {message}")


def _info(message: str) -> None:
    console.print(f"[blue]Info:[/blue] {message}")


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging based on verbosity flags.

    Args:
        verbose: If True, set DEBUG level.
        quiet: If True, set ERROR level.

    Note:
        verbose takes precedence over quiet. The BASIC_CODE_INTEL_LOG_LEVEL
        env var overrides both.

    """
    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = getattr(logging, env_level)
    elif verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    # Clear any existing handlers to avoid duplicates
    logging.root.handlers.clear()

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setLevel(level)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )

    # HTTP client loggers would print request URLs and headers
    for logger_name in ("httpx", "httpcore"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)
