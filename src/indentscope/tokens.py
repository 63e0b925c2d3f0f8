"""Token types, line token streams, and document coordinates."""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto


class StandardTokenType(Enum):
    OTHER = auto()
    COMMENT = auto()
    STRING = auto()
    REGEX = auto()


# Token types whose text is data rather than syntax
_LITERAL_LIKE = frozenset({StandardTokenType.STRING, StandardTokenType.COMMENT, StandardTokenType.REGEX})


def is_literal_like(token_type: StandardTokenType) -> bool:
    """Return True if brackets inside a token of this type should be ignored."""
    return token_type in _LITERAL_LIKE


@dataclass(frozen=True, slots=True)
class Token:
    """A classified run of a line, starting at a 0-based character offset."""

    start: int
    type: StandardTokenType
    language_id: str


class LineTokens:
    """The tokens of a single line.

    Tokens are contiguous: each one ends where the next one starts and the
    last one ends at the end of the line. There is always at least one
    token, so an empty line still carries a language id.
    """

    __slots__ = ("_text", "_tokens", "_starts")

    def __init__(self, text: str, tokens: list[Token] | tuple[Token, ...]) -> None:
        if not tokens:
            raise ValueError("a line needs at least one token")
        if tokens[0].start != 0:
            raise ValueError(f"first token must start at offset 0, not {tokens[0].start}")
        self._text = text
        self._tokens = tuple(tokens)
        self._starts = [t.start for t in self._tokens]

    @classmethod
    def single(
        cls,
        text: str,
        language_id: str,
        token_type: StandardTokenType = StandardTokenType.OTHER,
    ) -> LineTokens:
        """Build a line made of one token covering all of *text*."""
        return cls(text, [Token(0, token_type, language_id)])

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[int]:
        return iter(range(len(self._tokens)))

    def __repr__(self) -> str:
        return f"LineTokens({self._text!r}, {list(self._tokens)!r})"

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    def get_line_content(self) -> str:
        return self._text

    def get_start_offset(self, index: int) -> int:
        return self._tokens[index].start

    def get_end_offset(self, index: int) -> int:
        if index + 1 < len(self._tokens):
            return self._tokens[index + 1].start
        return len(self._text)

    def get_standard_token_type(self, index: int) -> StandardTokenType:
        return self._tokens[index].type

    def get_language_id(self, index: int) -> str:
        return self._tokens[index].language_id

    def get_token_text(self, index: int) -> str:
        return self._text[self.get_start_offset(index) : self.get_end_offset(index)]

    # ------------------------------------------------------------------
    # Lookup and slicing
    # ------------------------------------------------------------------

    def find_token_index_at_offset(self, offset: int) -> int:
        """Return the index of the token containing *offset*.

        A token boundary belongs to the token that starts there. Offsets
        past the end of the line resolve to the last token, offsets before
        the start to the first one.
        """
        return max(0, bisect.bisect_right(self._starts, offset) - 1)

    def slice_and_inflate(self, start: int, end: int) -> LineTokens:
        """Return the tokens covering ``text[start:end]``, re-based to offset 0.

        Offsets are clamped to the line. Token types and language ids are
        preserved. An empty slice keeps a single zero-width token carrying
        the language found at *start*.
        """
        length = len(self._text)
        start = min(max(start, 0), length)
        end = min(max(end, start), length)

        first = self.find_token_index_at_offset(start)
        sliced: list[Token] = []
        for index in range(first, len(self._tokens)):
            token = self._tokens[index]
            if sliced and token.start >= end:
                break
            new_start = max(token.start, start) - start
            if sliced and new_start == sliced[-1].start:
                sliced[-1] = Token(new_start, token.type, token.language_id)
            else:
                sliced.append(Token(new_start, token.type, token.language_id))
        return LineTokens(self._text[start:end], sliced)


@dataclass(frozen=True, slots=True)
class Position:
    """Document position, 1-based line and column."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Range:
    """Document range from start to end position (end exclusive)."""

    start: Position
    end: Position

    @classmethod
    def caret(cls, line: int, column: int) -> Range:
        """Build a collapsed range at a single position."""
        pos = Position(line, column)
        return cls(pos, pos)

    @classmethod
    def between(cls, start_line: int, start_column: int, end_line: int, end_column: int) -> Range:
        return cls(Position(start_line, start_column), Position(end_line, end_column))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end
