"""
Install command implementation.

Installs the requested (or latest) zig release and points the wrapper
script at it. Also available as 'update'.
"""

import logging
import sys

from zigup.cli.utils import load_cli_config, print_error, print_warning, safe_print
from zigup.core.download import DownloadProgress, format_progress
from zigup.core.exceptions import ZigupError
from zigup.toolchain.manager import InstallOptions, ZigupManager

logger = logging.getLogger(__name__)


def _requested_version(args):
    """Merge the positional VERSION and --version; they must agree."""
    positional = getattr(args, "version_arg", None)
    flag = getattr(args, "version", None)
    if positional is not None and flag is not None and positional != flag:
        raise ValueError(
            f"conflicting versions requested: {positional} and {flag}"
        )
    return flag if flag is not None else positional


def _show_progress(progress: DownloadProgress):
    """Display download progress on a terminal."""
    print(f"\rDownloading: {format_progress(progress)}", end="", flush=True)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments with:
            - version / version_arg: Requested version (optional)
            - proxy: Proxy URL (optional)
            - config: Configuration file (optional)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        options = InstallOptions(version=_requested_version(args))
    except ValueError as e:
        print_error(str(e))
        return 1

    try:
        config = load_cli_config(args)
        manager = ZigupManager(config)

        plan = manager.resolve(options)
        print(f"install selected zig version {plan.version} from {plan.url} ...")

        interactive = sys.stdout.isatty() and not getattr(args, "quiet", False)
        result = manager.install(
            plan, progress_callback=_show_progress if interactive else None
        )
        if interactive:
            print()

    except ZigupError as e:
        logger.debug("Install failed", exc_info=True)
        print_error("update zig installation", e)
        return 1

    safe_print(f"zig {result.version} is available as {result.wrapper_path}")
    if not manager.wrapper_on_search_path():
        print_warning(
            f"{manager.bin_dir} is not on your PATH; add it and restart your shell"
        )
    return 0
