"""Test error formatting."""

from __future__ import annotations

from pathlib import Path

from indentscope.errors import ConfigError, UsageError


class TestConfigError:
    def test_format_with_key(self) -> None:
        err = ConfigError("quotes must be single characters", Path("indentscope.toml"), "languages.js.quotes")
        assert err.format() == (
            "error: quotes must be single characters\n  --> indentscope.toml: languages.js.quotes"
        )

    def test_format_without_key(self) -> None:
        err = ConfigError("invalid TOML", Path("a.toml"))
        assert err.format() == "error: invalid TOML\n  --> a.toml"

    def test_format_without_path(self) -> None:
        err = ConfigError("'languages' must be a table", None, "languages")
        assert "--> <config>: languages" in err.format()

    def test_str_is_formatted(self) -> None:
        err = ConfigError("bad", Path("x.toml"))
        assert str(err) == err.format()


class TestUsageError:
    def test_format(self) -> None:
        err = UsageError("line 9 is out of range (1-3)")
        assert err.format() == "error: line 9 is out of range (1-3)"
        assert str(err) == "line 9 is out of range (1-3)"
