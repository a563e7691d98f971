"""
Tests for wrapper script writers.
"""

import os
import stat
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from zigup.core.exceptions import WrapperScriptError
from zigup.toolchain.wrapper import (
    WRAPPER_MODE,
    PosixWrapperWriter,
    WindowsWrapperWriter,
    get_wrapper_writer,
)


class TestPosixWrapperWriter:
    """Test the sh wrapper."""

    def test_render(self):
        """Test arguments are forwarded to the binary."""
        content = PosixWrapperWriter().render(Path("/home/u/.zigup/current/zig-1.0.0/zig"))

        assert content == (
            '#!/bin/sh\nexec /home/u/.zigup/current/zig-1.0.0/zig "$@"\n'
        )

    def test_render_quotes_spaces(self):
        """Test paths with spaces are quoted."""
        content = PosixWrapperWriter().render(Path("/home/a user/zig"))

        assert "exec '/home/a user/zig' \"$@\"" in content

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_write_executable(self, tmp_path):
        """Test the script is written with mode 0o755."""
        wrapper = tmp_path / "bin" / "zig"
        wrapper.parent.mkdir()

        result = PosixWrapperWriter().write(tmp_path / "zig-1.0.0" / "zig", wrapper)

        assert result == wrapper
        assert stat.S_IMODE(wrapper.stat().st_mode) == WRAPPER_MODE == 0o755
        assert os.access(wrapper, os.X_OK)
        assert str(tmp_path / "zig-1.0.0" / "zig") in wrapper.read_text()

    def test_write_replaces_existing(self, tmp_path):
        """Test an earlier wrapper is overwritten."""
        wrapper = tmp_path / "zig"
        wrapper.write_text("#!/bin/sh\nexec /old/zig \"$@\"\n")

        PosixWrapperWriter().write(tmp_path / "new" / "zig", wrapper)

        assert "/old/zig" not in wrapper.read_text()

    def test_write_failure(self, tmp_path):
        """Test OS errors become WrapperScriptError with a cause."""
        blocker = tmp_path / "bin"
        blocker.write_text("file, not a directory")

        with pytest.raises(WrapperScriptError, match="create zig wrapper script") as exc_info:
            PosixWrapperWriter().write(tmp_path / "zig", blocker / "zig")

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_not_executable(self, tmp_path):
        """Test a wrapper that cannot be executed is reported."""
        with patch("zigup.toolchain.wrapper.os.access", return_value=False):
            with pytest.raises(WrapperScriptError, match="not executable"):
                PosixWrapperWriter().write(tmp_path / "zig", tmp_path / "wrapper")


class TestWindowsWrapperWriter:
    """Test the batch wrapper."""

    def test_render(self):
        """Test arguments are forwarded to the binary."""
        content = WindowsWrapperWriter().render(Path("C:/Users/u/.zigup/current/zig/zig.exe"))

        assert content.startswith("@echo off\n")
        assert content.endswith(" %*\n")
        assert "zig.exe" in content

    def test_write_crlf(self, tmp_path):
        """Test the script uses CRLF line endings."""
        wrapper = tmp_path / "zig.cmd"

        WindowsWrapperWriter().write(tmp_path / "zig.exe", wrapper)

        data = wrapper.read_bytes()
        assert data.startswith(b"@echo off\r\n")
        assert data.endswith(b" %*\r\n")


class TestGetWrapperWriter:
    """Test writer selection."""

    @pytest.mark.parametrize(
        "os_name,cls,name",
        [
            ("linux", PosixWrapperWriter, "zig"),
            ("macos", PosixWrapperWriter, "zig"),
            ("windows", WindowsWrapperWriter, "zig.cmd"),
        ],
    )
    def test_selection(self, os_name, cls, name):
        """Test each OS gets its wrapper flavour."""
        writer = get_wrapper_writer(os_name)

        assert isinstance(writer, cls)
        assert writer.script_name == name
