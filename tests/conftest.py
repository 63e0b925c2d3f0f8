"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from indentscope.languages import BracketPair, LanguageConfigurationRegistry, default_registry
from indentscope.model import TextModel
from indentscope.tokens import LineTokens, StandardTokenType, Token


def build_line(*parts: tuple[str, StandardTokenType, str]) -> LineTokens:
    """Build LineTokens from (text, type, language_id) runs."""
    tokens: list[Token] = []
    text = ""
    for part_text, token_type, language_id in parts:
        tokens.append(Token(len(text), token_type, language_id))
        text += part_text
    return LineTokens(text, tokens)


class FakeModel:
    """Hand-built token lines, recording which lines were force-tokenized."""

    def __init__(self, lines: list[LineTokens]) -> None:
        self.lines = lines
        self.forced: list[int] = []

    def force_tokenization(self, line_number: int) -> None:
        self.forced.append(line_number)

    def get_line_tokens(self, line_number: int) -> LineTokens:
        return self.lines[line_number - 1]

    def get_line_max_column(self, line_number: int) -> int:
        return len(self.lines[line_number - 1].get_line_content()) + 1


class FakeBrackets:
    """Bracket lookup backed by a plain dict."""

    def __init__(self, pairs: dict[str, tuple[BracketPair, ...]]) -> None:
        self.pairs = pairs

    def get_bracket_pairs(self, language_id: str) -> tuple[BracketPair, ...] | None:
        return self.pairs.get(language_id)


@pytest.fixture
def brackets():
    """Bracket configuration for a host language 'tpl' and an embedded 'js'."""
    curly = BracketPair.of("{", "}")
    square = BracketPair.of("[", "]")
    round_ = BracketPair.of("(", ")")
    return FakeBrackets(
        {
            "js": (curly, square, round_),
            "tpl": (BracketPair.of("<", ">"), curly),
        }
    )


@pytest.fixture
def fake_model():
    """Return a helper that wraps LineTokens in a FakeModel."""

    def _make(*lines: LineTokens) -> FakeModel:
        return FakeModel(list(lines))

    return _make


@pytest.fixture
def registry() -> LanguageConfigurationRegistry:
    return default_registry()


@pytest.fixture
def text_model(registry):
    """Return a helper that builds a TextModel over the built-in registry."""

    def _make(source: str, language_id: str = "javascript") -> TextModel:
        return TextModel(source, language_id, registry)

    return _make


def types_of(tokens: LineTokens) -> list[tuple[str, StandardTokenType, str]]:
    """Return (text, type, language) for each token of a line."""
    return [
        (tokens.get_token_text(i), tokens.get_standard_token_type(i), tokens.get_language_id(i))
        for i in tokens
    ]


@pytest.fixture
def token_runs():
    return types_of


@pytest.fixture
def make_line():
    """Return a helper that builds LineTokens from (text, type, language_id) runs."""
    return build_line
