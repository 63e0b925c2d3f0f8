"""--debug token and scope dumps to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from indentscope.scope import ScopedLineTokens
from indentscope.tokens import LineTokens


def dump_tokens(line_number: int, tokens: LineTokens, *, file: TextIO | None = None) -> None:
    """Print one row per token: offsets, type, language and text."""
    f = file or sys.stderr
    f.write(f"Line {line_number} ({tokens.count} tokens)\n")
    for index in tokens:
        start = tokens.get_start_offset(index)
        end = tokens.get_end_offset(index)
        token_type = tokens.get_standard_token_type(index).name
        language_id = tokens.get_language_id(index)
        text = tokens.get_token_text(index)
        f.write(f"  [{start:>3}:{end:<3}] {token_type:<7} {language_id:<12} {text!r}\n")


def dump_scope(scope: ScopedLineTokens, *, file: TextIO | None = None) -> None:
    """Print the language and span of a resolved scope."""
    # Looked up per call so a redirected sys.stderr is honoured
    f = file or sys.stderr
    f.write(
        f"Scope {scope.language_id} [{scope.first_char_offset}:{scope.last_char_offset}]"
        f" tokens {scope.first_token_index}..{scope.last_token_index - 1}"
        f" starts_at_zero={scope.starts_at_offset_zero}\n"
    )
    f.write(f"  {scope.get_line_content()!r}\n")
