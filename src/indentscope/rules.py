"""Indentation rule evaluation over sanitized lines."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from indentscope.sanitizer import IndentationLineProcessor

if TYPE_CHECKING:
    from indentscope.languages import BracketPairProvider, LanguageConfigurationRegistry
    from indentscope.model import TokenizedModel


class IndentRulesEvaluator(Protocol):
    def should_increase(self, text: str) -> bool: ...

    def should_decrease(self, text: str) -> bool: ...

    def should_ignore(self, text: str) -> bool: ...

    def should_indent_next_line(self, text: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class IndentationRules:
    """Regex-based answers to the four indentation questions.

    A missing pattern never matches. Patterns are applied with
    ``re.search``, so they may match anywhere in the line unless anchored.
    """

    increase: re.Pattern[str] | None = None
    decrease: re.Pattern[str] | None = None
    indent_next_line: re.Pattern[str] | None = None
    unindented_line: re.Pattern[str] | None = None

    @classmethod
    def from_patterns(
        cls,
        increase: str | None = None,
        decrease: str | None = None,
        indent_next_line: str | None = None,
        unindented_line: str | None = None,
    ) -> IndentationRules:
        """Compile pattern strings. Raises re.error on an invalid pattern."""

        def c(pattern: str | None) -> re.Pattern[str] | None:
            return re.compile(pattern) if pattern is not None else None

        return cls(c(increase), c(decrease), c(indent_next_line), c(unindented_line))

    def should_increase(self, text: str) -> bool:
        """Return True if the line after *text* should be indented one more level."""
        return _matches(self.increase, text)

    def should_decrease(self, text: str) -> bool:
        """Return True if *text* itself should be outdented one level."""
        return _matches(self.decrease, text)

    def should_ignore(self, text: str) -> bool:
        """Return True if *text* should keep its indentation whatever the other rules say."""
        return _matches(self.unindented_line, text)

    def should_indent_next_line(self, text: str) -> bool:
        """Return True if only the next line (not the ones after it) should be indented."""
        return _matches(self.indent_next_line, text)


def _matches(pattern: re.Pattern[str] | None, text: str) -> bool:
    return pattern is not None and pattern.search(text) is not None


class ProcessedIndentRules:
    """Runs indentation rules against sanitized lines of a model.

    Each predicate first strips brackets found inside strings, comments
    and regex literals, optionally swaps in *new_indentation*, and then
    asks the wrapped evaluator.
    """

    def __init__(
        self,
        model: TokenizedModel,
        indent_rules: IndentRulesEvaluator,
        registry: BracketPairProvider,
    ) -> None:
        self._indent_rules = indent_rules
        self._line_processor = IndentationLineProcessor(model, registry)

    def should_increase(self, line_number: int, new_indentation: str | None = None) -> bool:
        line = self._line_processor.sanitize_line(line_number, new_indentation)
        return self._indent_rules.should_increase(line)

    def should_decrease(self, line_number: int, new_indentation: str | None = None) -> bool:
        line = self._line_processor.sanitize_line(line_number, new_indentation)
        return self._indent_rules.should_decrease(line)

    def should_ignore(self, line_number: int, new_indentation: str | None = None) -> bool:
        line = self._line_processor.sanitize_line(line_number, new_indentation)
        return self._indent_rules.should_ignore(line)

    def should_indent_next_line(self, line_number: int, new_indentation: str | None = None) -> bool:
        line = self._line_processor.sanitize_line(line_number, new_indentation)
        return self._indent_rules.should_indent_next_line(line)


@dataclass(frozen=True, slots=True)
class LineDecisions:
    """The sanitized text of a line and the four rule answers for it."""

    text: str
    increase: bool
    decrease: bool
    ignore: bool
    indent_next_line: bool


def evaluate_model_line(
    model: TokenizedModel,
    line_number: int,
    registry: LanguageConfigurationRegistry,
    new_indentation: str | None = None,
) -> LineDecisions:
    """Answer all four questions for a line, using the rules of its first token's language."""
    model.force_tokenization(line_number)
    language_id = model.get_line_tokens(line_number).get_language_id(0)
    indent_rules = registry.get_indentation_rules(language_id) or IndentationRules()
    processed = ProcessedIndentRules(model, indent_rules, registry)
    text = IndentationLineProcessor(model, registry).sanitize_line(line_number, new_indentation)
    return LineDecisions(
        text=text,
        increase=processed.should_increase(line_number, new_indentation),
        decrease=processed.should_decrease(line_number, new_indentation),
        ignore=processed.should_ignore(line_number, new_indentation),
        indent_next_line=processed.should_indent_next_line(line_number, new_indentation),
    )
