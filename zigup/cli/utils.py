"""
Shared utilities for CLI commands.

Provides configuration loading and consistent output/error formatting for
the zigup commands.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from zigup.config.parser import ZigupConfig, load_config

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_cli_config(args) -> ZigupConfig:
    """
    Load configuration and apply command-line overrides.

    Args:
        args: Parsed arguments with optional config and proxy fields

    Raises:
        ConfigError: If the configuration file is invalid
    """
    config_path: Optional[Path] = getattr(args, "config", None)
    config = load_config(config_path)

    proxy = getattr(args, "proxy", None)
    if proxy:
        config.proxy = proxy
    return config


# ============================================================================
# Error Formatting
# ============================================================================


def error_chain(error: BaseException) -> List[str]:
    """
    Collect messages along an exception's cause chain.

    Example:
        >>> try:
        ...     try:
        ...         raise OSError("connection refused")
        ...     except OSError as e:
        ...         raise RuntimeError("GET https://ziglang.org") from e
        ... except RuntimeError as e:
        ...     error_chain(e)
        ['GET https://ziglang.org', 'connection refused']
    """
    messages = []
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        messages.append(str(current) or type(current).__name__)
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )
    return messages


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, error: Optional[BaseException] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        error: Optional exception whose cause chain is printed below
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if error is not None:
        for cause in error_chain(error):
            print(f"  caused by: {cause}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(f"WARNING: {message}", file=sys.stderr)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to ASCII if the console cannot encode the message.
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        print(message.encode("ascii", "replace").decode("ascii"), file=file)
