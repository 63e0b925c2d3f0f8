"""Bracket stripping for string, comment, and regex tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING

from indentscope.strings import replace_leading_whitespace
from indentscope.tokens import LineTokens, is_literal_like

if TYPE_CHECKING:
    from indentscope.languages import BracketPairProvider
    from indentscope.model import TokenizedModel


class IndentationLineProcessor:
    """Produce line text that indentation regexes can safely match against.

    Brackets configured for the line's language are removed from every
    string, comment and regex token; all other tokens are kept verbatim.
    """

    def __init__(self, model: TokenizedModel, registry: BracketPairProvider) -> None:
        self._model = model
        self._registry = registry

    def sanitize_line(self, line_number: int, new_indentation: str | None = None) -> str:
        """Sanitize a whole line of the model.

        When *new_indentation* is given it replaces the leading whitespace
        of the sanitized text.
        """
        tokens = self._model.get_line_tokens(line_number)
        line = self.sanitize(tokens)
        if new_indentation is not None:
            line = replace_leading_whitespace(line, new_indentation)
        return line

    def sanitize(self, tokens: LineTokens) -> str:
        """Sanitize a token stream, using the language of its first token."""
        brackets = self._registry.get_bracket_pairs(tokens.get_language_id(0))
        if brackets is None:
            return tokens.get_line_content()

        # Opening spellings are removed before closing ones
        opens = [s for pair in brackets for s in pair.open]
        closes = [s for pair in brackets for s in pair.close]
        removals = [s for s in opens + closes if s]

        parts: list[str] = []
        for index in tokens:
            text = tokens.get_token_text(index)
            if is_literal_like(tokens.get_standard_token_type(index)):
                for bracket in removals:
                    text = text.replace(bracket, "")
            parts.append(text)
        return "".join(parts)
