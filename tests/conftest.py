"""
Pytest configuration and shared fixtures for zigup tests.
"""

import io
import tarfile
from pathlib import Path
from typing import Callable, Dict

import pytest

from zigup.core.environment import StaticEnvironment


def build_tar_xz(files: Dict[str, bytes], executable: tuple = ()) -> bytes:
    """
    Build a .tar.xz archive in memory.

    Args:
        files: Mapping of member path to content
        executable: Member paths that get mode 0o755
    """
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:xz") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o755 if name in executable else 0o644
            tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


@pytest.fixture
def make_archive() -> Callable[..., bytes]:
    """Factory for in-memory .tar.xz archives."""
    return build_tar_xz


@pytest.fixture
def zig_archive() -> Callable[[str], bytes]:
    """
    Factory for a zig release archive with the usual layout.

    Example:
        def test_x(zig_archive):
            data = zig_archive("zig-1.0.0")  # contains zig-1.0.0/zig
    """

    def _build(stem: str = "zig-1.0.0", binary: str = "zig") -> bytes:
        return build_tar_xz(
            {
                f"{stem}/{binary}": b"\x7fELF fake zig",
                f"{stem}/lib/std/std.zig": b"pub const x = 1;\n",
                f"{stem}/LICENSE": b"MIT\n",
            },
            executable=(f"{stem}/{binary}",),
        )

    return _build


@pytest.fixture
def env(tmp_path) -> StaticEnvironment:
    """
    Fixed x86_64-linux environment rooted in tmp_path.

    home:    tmp_path/home
    workdir: tmp_path/work
    PATH:    home/.local/bin
    """
    home = tmp_path / "home"
    workdir = tmp_path / "work"
    home.mkdir()
    workdir.mkdir()
    return StaticEnvironment(
        home=home,
        arch="x86_64",
        os_name="Linux",
        workdir=workdir,
        paths=[home / ".local" / "bin", Path("/usr/bin")],
    )


@pytest.fixture
def sample_index() -> dict:
    """Version index shaped like ziglang.org/download/index.json."""
    return {
        "master": {
            "version": "0.12.0-dev.1+abcdef",
            "date": "2023-10-01",
            "x86_64-linux": {
                "tarball": "https://ziglang.org/builds/zig-linux-x86_64-0.12.0-dev.1+abcdef.tar.xz",
                "shasum": "00",
                "size": "1",
            },
        },
        "0.9.0": {
            "date": "2021-12-20",
            "x86_64-linux": {
                "tarball": "https://ziglang.org/download/0.9.0/zig-linux-x86_64-0.9.0.tar.xz",
                "shasum": "01",
                "size": "2",
            },
        },
        "0.10.0": {
            "date": "2022-10-31",
            "docs": "https://ziglang.org/documentation/0.10.0/",
            "src": {
                "tarball": "https://ziglang.org/download/0.10.0/zig-0.10.0.tar.xz",
            },
            "x86_64-linux": {
                "tarball": "https://ziglang.org/download/0.10.0/zig-linux-x86_64-0.10.0.tar.xz",
                "shasum": "02",
                "size": "3",
            },
            "aarch64-macos": {
                "tarball": "https://ziglang.org/download/0.10.0/zig-macos-aarch64-0.10.0.tar.xz",
                "shasum": "03",
                "size": "4",
            },
        },
    }
