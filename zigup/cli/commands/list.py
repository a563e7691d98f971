"""
List command implementation.

Prints the versions in the remote index, newest release first, followed by
labels such as 'master'.
"""

import logging

from zigup.cli.utils import load_cli_config, print_error
from zigup.core.download import archive_name_from_url
from zigup.core.exceptions import ZigupError
from zigup.core.filesystem import strip_archive_suffix
from zigup.toolchain.manager import ZigupManager
from zigup.toolchain.version import parse_version, resolve_download_url, select_version

logger = logging.getLogger(__name__)


def order_versions(labels):
    """
    Order index keys: semantic versions newest first, then other labels.

    Example:
        >>> order_versions(["0.9.0", "master", "0.10.0"])
        ['0.10.0', '0.9.0', 'master']
    """
    releases = [(parse_version(label), label) for label in labels]
    semver = sorted(
        ((v, label) for v, label in releases if v is not None),
        key=lambda item: item[0],
        reverse=True,
    )
    others = [label for v, label in releases if v is None]
    return [label for _, label in semver] + others


def _is_installed(manager: ZigupManager, index, version: str, installed) -> bool:
    try:
        url = resolve_download_url(index, version, manager.platform.platform_key())
        return strip_archive_suffix(archive_name_from_url(url)) in installed
    except ZigupError:
        return False


def run(args) -> int:
    """
    Run the list command.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_cli_config(args)
        manager = ZigupManager(config)
        index = manager.fetch_index()
        installed = set(manager.installed_versions())

        try:
            latest = select_version(index)
        except ZigupError:
            latest = None

        for label in order_versions(list(index)):
            line = f"  {label}"
            if label == latest:
                line += " (latest)"
            if installed and _is_installed(manager, index, label, installed):
                line += " [installed]"
            print(line)

    except ZigupError as e:
        logger.debug("List failed", exc_info=True)
        print_error("list zig versions", e)
        return 1

    return 0
