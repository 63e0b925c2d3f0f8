"""Reference line tokenizer with embedded-language regions.

Tokenizes one line at a time, carrying a LineState from each line to the
next so block comments and embedded regions can span lines.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from indentscope.languages import Grammar
from indentscope.tokens import LineTokens, StandardTokenType, Token

if TYPE_CHECKING:
    from indentscope.languages import LanguageConfigurationRegistry

# Characters after which a "/" starts a regex literal rather than a division
_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%<>~^")


@dataclass(frozen=True, slots=True)
class _Region:
    language_id: str
    close: str


@dataclass(frozen=True, slots=True)
class LineState:
    """Lexer state at a line boundary."""

    language_id: str
    regions: tuple[_Region, ...] = ()
    block_comment_end: str | None = None

    @property
    def current_language(self) -> str:
        return self.regions[-1].language_id if self.regions else self.language_id

    @property
    def current_close(self) -> str | None:
        return self.regions[-1].close if self.regions else None


def initial_state(language_id: str) -> LineState:
    return LineState(language_id)


class LineLexer:
    """Tokenize a single line of text given the state of the line above."""

    def __init__(self, text: str, state: LineState, registry: LanguageConfigurationRegistry) -> None:
        self._text = text
        self._state = state
        self._registry = registry
        self._pos = 0
        self._tokens: list[Token] = []
        self._last_significant = ""

    def tokenize(self) -> tuple[LineTokens, LineState]:
        """Tokenize the full line and return its tokens and the end-of-line state."""
        while self._pos < len(self._text):
            if self._state.block_comment_end is not None:
                self._lex_block_comment_body(self._state.block_comment_end)
            else:
                self._lex_next()

        if not self._tokens:
            if self._state.block_comment_end is not None:
                token_type = StandardTokenType.COMMENT
            else:
                token_type = StandardTokenType.OTHER
            self._emit(0, token_type, self._state.current_language)
        return LineTokens(self._text, self._tokens), self._state

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _grammar(self) -> Grammar:
        return self._registry.get_grammar(self._state.current_language)

    def _at(self, s: str) -> bool:
        return bool(s) and self._text.startswith(s, self._pos)

    def _emit(self, start: int, token_type: StandardTokenType, language_id: str) -> None:
        # Adjacent runs of the same kind collapse into one token
        if self._tokens:
            last = self._tokens[-1]
            if last.type == token_type and last.language_id == language_id:
                return
            if last.start == start:
                # Zero-width token: drop it in favour of the new one
                self._tokens.pop()
                self._emit(start, token_type, language_id)
                return
        self._tokens.append(Token(start, token_type, language_id))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_next(self) -> None:
        grammar = self._grammar
        language_id = self._state.current_language

        close = self._state.current_close
        if close is not None and self._at(close):
            self._leave_region(close)
            return

        for embedded in grammar.embedded:
            if self._at(embedded.open):
                self._enter_region(embedded.open, embedded.close, embedded.language_id)
                return

        for prefix in grammar.line_comments:
            if self._at(prefix):
                self._lex_line_comment(prefix, language_id)
                return

        for open_delim, close_delim in grammar.block_comments:
            if self._at(open_delim):
                start = self._pos
                self._pos += len(open_delim)
                self._emit(start, StandardTokenType.COMMENT, language_id)
                self._state = replace(self._state, block_comment_end=close_delim)
                self._lex_block_comment_body(close_delim)
                return

        ch = self._text[self._pos]

        if ch in grammar.quotes:
            self._lex_string(ch, language_id)
            return

        if ch == "/" and grammar.regex_literals and self._regex_allowed():
            if self._lex_regex(language_id):
                return

        self._emit(self._pos, StandardTokenType.OTHER, language_id)
        self._pos += 1
        if not ch.isspace():
            self._last_significant = ch

    # ------------------------------------------------------------------
    # Embedded regions
    # ------------------------------------------------------------------

    def _enter_region(self, open_delim: str, close_delim: str, language_id: str) -> None:
        self._emit(self._pos, StandardTokenType.OTHER, self._state.current_language)
        self._pos += len(open_delim)
        self._state = replace(self._state, regions=self._state.regions + (_Region(language_id, close_delim),))
        self._last_significant = ""

    def _leave_region(self, close_delim: str) -> None:
        self._state = replace(self._state, regions=self._state.regions[:-1])
        self._emit(self._pos, StandardTokenType.OTHER, self._state.current_language)
        self._pos += len(close_delim)
        self._last_significant = ""

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _lex_line_comment(self, prefix: str, language_id: str) -> None:
        self._emit(self._pos, StandardTokenType.COMMENT, language_id)
        # A line comment still ends at the close of its embedded region
        close = self._state.current_close
        stop = self._text.find(close, self._pos + len(prefix)) if close else -1
        self._pos = stop if stop != -1 else len(self._text)

    def _lex_block_comment_body(self, close_delim: str) -> None:
        language_id = self._state.current_language
        self._emit(self._pos, StandardTokenType.COMMENT, language_id)
        end = self._text.find(close_delim, self._pos)
        region_close = self._state.current_close
        region_end = self._text.find(region_close, self._pos) if region_close else -1
        if region_end != -1 and (end == -1 or region_end < end):
            self._pos = region_end
            self._state = replace(self._state, block_comment_end=None)
            return
        if end == -1:
            self._pos = len(self._text)
            return
        self._pos = end + len(close_delim)
        self._state = replace(self._state, block_comment_end=None)
        self._last_significant = ""

    # ------------------------------------------------------------------
    # Strings and regex literals
    # ------------------------------------------------------------------

    def _lex_string(self, quote: str, language_id: str) -> None:
        self._emit(self._pos, StandardTokenType.STRING, language_id)
        self._pos += 1
        close = self._state.current_close
        while self._pos < len(self._text):
            if close is not None and self._at(close):
                return
            ch = self._text[self._pos]
            if ch == "\\":
                self._pos += 2
                continue
            self._pos += 1
            if ch == quote:
                break
        self._pos = min(self._pos, len(self._text))
        self._last_significant = quote

    def _regex_allowed(self) -> bool:
        return self._last_significant == "" or self._last_significant in _REGEX_PRECEDERS

    def _lex_regex(self, language_id: str) -> bool:
        """Lex a /.../flags literal. Returns False if it is not closed on this line."""
        pos = self._pos + 1
        in_class = False
        while pos < len(self._text):
            ch = self._text[pos]
            if ch == "\\":
                pos += 2
                continue
            if ch == "[":
                in_class = True
            elif ch == "]":
                in_class = False
            elif ch == "/" and not in_class:
                break
            pos += 1
        else:
            return False
        if pos == self._pos + 1:
            # "//" is not an empty regex
            return False
        pos += 1
        while pos < len(self._text) and self._text[pos].isalpha():
            pos += 1
        self._emit(self._pos, StandardTokenType.REGEX, language_id)
        self._pos = pos
        self._last_significant = "/"
        return True


def tokenize_line(
    text: str, state: LineState, registry: LanguageConfigurationRegistry
) -> tuple[LineTokens, LineState]:
    """Convenience function: tokenize one line from the given state."""
    return LineLexer(text, state, registry).tokenize()
