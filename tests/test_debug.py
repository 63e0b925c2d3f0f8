"""Tests for the --debug dumps."""

from __future__ import annotations

import io

from indentscope.debug import dump_scope, dump_tokens
from indentscope.scope import create_scoped_line_tokens
from indentscope.tokens import StandardTokenType

O = StandardTokenType.OTHER
S = StandardTokenType.STRING


class TestDumpTokens:
    def test_rows(self, make_line) -> None:
        out = io.StringIO()
        dump_tokens(3, make_line(("x = ", O, "js"), ('"{"', S, "js")), file=out)
        lines = out.getvalue().splitlines()
        assert lines[0] == "Line 3 (2 tokens)"
        assert "STRING" in lines[2]
        assert "'\"{\"'" in lines[2]

    def test_defaults_to_current_stderr(self, make_line, capsys) -> None:
        dump_tokens(1, make_line(("abc", O, "js")))
        assert "Line 1 (1 tokens)" in capsys.readouterr().err


class TestDumpScope:
    def test_defaults_to_current_stderr(self, make_line, capsys) -> None:
        line = make_line(("<b>", O, "tpl"), ("f()", O, "js"))
        dump_scope(create_scoped_line_tokens(line, 4))
        err = capsys.readouterr().err
        assert "Scope js [3:6] tokens 1..1 starts_at_zero=False" in err
        assert "'f()'" in err
