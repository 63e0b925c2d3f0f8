"""Scope-aware text around a caret or selection, for indentation decisions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from indentscope.sanitizer import IndentationLineProcessor
from indentscope.scope import ScopedLineTokens, create_scoped_line_tokens
from indentscope.tokens import Range

if TYPE_CHECKING:
    from indentscope.languages import BracketPairProvider
    from indentscope.model import TokenizedModel


@dataclass(frozen=True, slots=True)
class IndentationContext:
    """Sanitized text surrounding a range, clipped to its language scope."""

    before: str
    after: str
    previous_line: str


class IndentationContextProcessor:
    """Extract the sanitized text before, after and above a range.

    All text is restricted to the embedded-language scope found at the
    start of the range. Text from the previous line is only used when that
    scope continues across the line break.
    """

    def __init__(self, model: TokenizedModel, registry: BracketPairProvider) -> None:
        self._model = model
        self._line_processor = IndentationLineProcessor(model, registry)

    def extract_context(self, range: Range) -> IndentationContext:
        start_line = range.start.line
        self._model.force_tokenization(start_line)
        line_tokens = self._model.get_line_tokens(start_line)
        scope = create_scoped_line_tokens(line_tokens, range.start.column - 1)
        return IndentationContext(
            before=self._text_before_range(range, scope),
            after=self._text_after_range(range, scope),
            previous_line=self._previous_line_text(range, scope),
        )

    def _text_before_range(self, range: Range, scope: ScopedLineTokens) -> str:
        line_tokens = self._model.get_line_tokens(range.start.line)
        caret = scope.offset_within_scope(range.start.column - 1)
        return self._line_processor.sanitize(scope.slice_line(line_tokens, 0, caret))

    def _text_after_range(self, range: Range, scope: ScopedLineTokens) -> str:
        if range.is_empty:
            line_tokens = self._model.get_line_tokens(range.start.line)
            caret = scope.offset_within_scope(range.start.column - 1)
            return self._line_processor.sanitize(scope.slice_line(line_tokens, caret))

        self._model.force_tokenization(range.end.line)
        line_tokens = self._model.get_line_tokens(range.end.line)
        # The start scope's span is applied to the end line; only its end clips
        start = min(range.end.column - 1, scope.last_char_offset)
        return self._line_processor.sanitize(line_tokens.slice_and_inflate(start, scope.last_char_offset))

    def _previous_line_text(self, range: Range, scope: ScopedLineTokens) -> str:
        previous_line = range.start.line - 1
        if previous_line < 1:
            return ""
        # A scope opened mid-line cannot be a continuation of the line above
        if not scope.starts_at_offset_zero:
            return ""
        previous_scope = self._scope_at_end_of_line(previous_line)
        if previous_scope.language_id != scope.language_id:
            return ""
        line_tokens = self._model.get_line_tokens(previous_line)
        return self._line_processor.sanitize(previous_scope.slice_line(line_tokens))

    def _scope_at_end_of_line(self, line_number: int) -> ScopedLineTokens:
        self._model.force_tokenization(line_number)
        line_tokens = self._model.get_line_tokens(line_number)
        end_offset = self._model.get_line_max_column(line_number) - 1
        return create_scoped_line_tokens(line_tokens, end_offset)
