"""Embedded-language scopes within a tokenized line."""

from __future__ import annotations

from dataclasses import dataclass

from indentscope.tokens import LineTokens


@dataclass(frozen=True, slots=True)
class ScopedLineTokens:
    """The contiguous run of tokens on a line that share one language id.

    Character offsets are 0-based into the full line; the span is
    ``[first_char_offset, last_char_offset)``. Token indices follow the same
    half-open convention.
    """

    line_tokens: LineTokens
    language_id: str
    first_token_index: int
    last_token_index: int
    first_char_offset: int
    last_char_offset: int

    @property
    def length(self) -> int:
        return self.last_char_offset - self.first_char_offset

    @property
    def starts_at_offset_zero(self) -> bool:
        """True when the scope opens at the first column of its line."""
        return self.first_char_offset == 0

    def get_line_content(self) -> str:
        text = self.line_tokens.get_line_content()
        return text[self.first_char_offset : self.last_char_offset]

    def offset_within_scope(self, line_offset: int) -> int:
        """Convert a 0-based line offset to an offset relative to the scope, clamped."""
        return min(max(line_offset - self.first_char_offset, 0), self.length)

    def slice_line(self, line_tokens: LineTokens, start: int = 0, end: int | None = None) -> LineTokens:
        """Slice *line_tokens* using this scope's character span.

        *start* and *end* are relative to the scope and clamped to it;
        *end* defaults to the end of the scope. The tokens may come from a
        different line than the one the scope was resolved on.
        """
        if end is None:
            end = self.length
        start = min(max(start, 0), self.length)
        end = min(max(end, start), self.length)
        return line_tokens.slice_and_inflate(self.first_char_offset + start, self.first_char_offset + end)


def create_scoped_line_tokens(line_tokens: LineTokens, offset: int) -> ScopedLineTokens:
    """Resolve the language scope that contains the 0-based *offset*.

    The scope grows left and right from the token at *offset* for as long
    as neighbouring tokens carry the same language id.
    """
    token_index = line_tokens.find_token_index_at_offset(offset)
    language_id = line_tokens.get_language_id(token_index)

    last = token_index
    while last + 1 < line_tokens.count and line_tokens.get_language_id(last + 1) == language_id:
        last += 1

    first = token_index
    while first > 0 and line_tokens.get_language_id(first - 1) == language_id:
        first -= 1

    return ScopedLineTokens(
        line_tokens=line_tokens,
        language_id=language_id,
        first_token_index=first,
        last_token_index=last + 1,
        first_char_offset=line_tokens.get_start_offset(first),
        last_char_offset=line_tokens.get_end_offset(last),
    )
