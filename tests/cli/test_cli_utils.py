"""
Tests for CLI utilities.
"""

from argparse import Namespace
from unittest.mock import patch

from zigup.cli.utils import (
    error_chain,
    load_cli_config,
    print_error,
    print_warning,
    safe_print,
)


def _chained():
    try:
        try:
            raise OSError("connection refused")
        except OSError as e:
            raise RuntimeError("GET https://ziglang.org/download/index.json") from e
    except RuntimeError as e:
        return e


class TestLoadCliConfig:
    """Test load_cli_config."""

    def test_proxy_override(self, tmp_path):
        """Test --proxy overrides the file value."""
        config = tmp_path / "config.yaml"
        config.write_text("proxy: http://file:1\ntimeout: 5\n")

        result = load_cli_config(Namespace(config=config, proxy="http://cli:2"))

        assert result.proxy == "http://cli:2"
        assert result.timeout == 5

    def test_file_proxy_kept(self, tmp_path):
        """Test the file proxy applies without --proxy."""
        config = tmp_path / "config.yaml"
        config.write_text("proxy: http://file:1\n")

        assert load_cli_config(Namespace(config=config, proxy=None)).proxy == "http://file:1"

    def test_missing_attributes(self, monkeypatch, tmp_path):
        """Test a namespace without config or proxy uses defaults."""
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)

        assert load_cli_config(Namespace()).proxy is None


class TestErrorChain:
    """Test error_chain."""

    def test_explicit_cause(self):
        """Test 'raise from' causes are followed."""
        assert error_chain(_chained()) == [
            "GET https://ziglang.org/download/index.json",
            "connection refused",
        ]

    def test_implicit_context(self):
        """Test exceptions raised while handling another are followed."""
        try:
            try:
                raise KeyError("x")
            except KeyError:
                raise ValueError("bad")
        except ValueError as e:
            assert error_chain(e) == ["bad", "'x'"]

    def test_suppressed_context(self):
        """Test 'raise from None' hides the context."""
        try:
            try:
                raise KeyError("x")
            except KeyError:
                raise ValueError("bad") from None
        except ValueError as e:
            assert error_chain(e) == ["bad"]

    def test_empty_message(self):
        """Test exceptions without a message use the type name."""
        assert error_chain(TimeoutError()) == ["TimeoutError"]

    def test_cycle(self):
        """Test cyclic chains terminate."""
        a = RuntimeError("a")
        b = RuntimeError("b")
        a.__cause__ = b
        b.__cause__ = a

        assert error_chain(a) == ["a", "b"]


class TestOutput:
    """Test output helpers."""

    def test_print_error(self, capsys):
        """Test the message is followed by the cause chain."""
        print_error("update zig installation", _chained())

        assert capsys.readouterr().err.splitlines() == [
            "ERROR: update zig installation",
            "  caused by: GET https://ziglang.org/download/index.json",
            "  caused by: connection refused",
        ]

    def test_print_error_without_exception(self, capsys):
        print_error("something failed")
        assert capsys.readouterr().err == "ERROR: something failed\n"

    def test_print_warning(self, capsys):
        print_warning("careful")
        assert capsys.readouterr().err == "WARNING: careful\n"

    def test_safe_print_fallback(self, capsys):
        """Test unencodable output falls back to ASCII."""
        calls = []

        def fake_print(message, file=None):
            calls.append(message)
            if len(calls) == 1:
                raise UnicodeEncodeError("cp1252", message, 0, 1, "cannot encode")

        with patch("builtins.print", side_effect=fake_print):
            safe_print("zig → ready")

        assert calls == ["zig → ready", "zig ? ready"]
