"""Text model: line access and on-demand tokenization."""

from __future__ import annotations

import re
from typing import Protocol

from indentscope.languages import LanguageConfigurationRegistry
from indentscope.lexer import LineState, initial_state, tokenize_line
from indentscope.tokens import LineTokens

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class TokenizedModel(Protocol):
    def force_tokenization(self, line_number: int) -> None: ...

    def get_line_tokens(self, line_number: int) -> LineTokens: ...

    def get_line_max_column(self, line_number: int) -> int: ...


class TextModel:
    """A document split into lines, tokenized lazily from the top.

    Line numbers are 1-based. The lexer state at the end of each tokenized
    line is kept so later lines can resume from it.
    """

    def __init__(self, source: str, language_id: str, registry: LanguageConfigurationRegistry) -> None:
        self._lines = _LINE_BREAK.split(source)
        self._language_id = language_id
        self._registry = registry
        self._tokens: list[LineTokens] = []
        self._end_states: list[LineState] = []

    @property
    def language_id(self) -> str:
        return self._language_id

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def _check_line(self, line_number: int) -> None:
        if not 1 <= line_number <= len(self._lines):
            raise ValueError(f"line {line_number} is out of range (1-{len(self._lines)})")

    def get_line_content(self, line_number: int) -> str:
        self._check_line(line_number)
        return self._lines[line_number - 1]

    def get_line_max_column(self, line_number: int) -> int:
        """Return the 1-based column just past the end of the line."""
        return len(self.get_line_content(line_number)) + 1

    def force_tokenization(self, line_number: int) -> None:
        """Tokenize every line up to and including *line_number*."""
        self._check_line(line_number)
        while len(self._tokens) < line_number:
            index = len(self._tokens)
            state = self._end_states[-1] if self._end_states else initial_state(self._language_id)
            tokens, end_state = tokenize_line(self._lines[index], state, self._registry)
            self._tokens.append(tokens)
            self._end_states.append(end_state)

    def get_line_tokens(self, line_number: int) -> LineTokens:
        self.force_tokenization(line_number)
        return self._tokens[line_number - 1]
