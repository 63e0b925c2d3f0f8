"""Language configuration: bracket pairs, lexical grammar, and indentation rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Protocol

from indentscope.rules import IndentationRules


@dataclass(frozen=True, slots=True)
class BracketPair:
    """An open/close bracket pair. Either side may have several spellings."""

    open: tuple[str, ...]
    close: tuple[str, ...]

    @classmethod
    def of(cls, open: str | tuple[str, ...] | list[str], close: str | tuple[str, ...] | list[str]) -> BracketPair:
        """Build a pair from single strings or sequences of spellings."""
        opens = (open,) if isinstance(open, str) else tuple(open)
        closes = (close,) if isinstance(close, str) else tuple(close)
        return cls(opens, closes)


@dataclass(frozen=True, slots=True)
class EmbeddedLanguage:
    """A region of another language opened and closed by literal delimiters."""

    open: str
    close: str
    language_id: str


@dataclass(frozen=True, slots=True)
class Grammar:
    """Lexical rules used by the reference tokenizer."""

    line_comments: tuple[str, ...] = ()
    block_comments: tuple[tuple[str, str], ...] = ()
    quotes: tuple[str, ...] = ()
    regex_literals: bool = False
    embedded: tuple[EmbeddedLanguage, ...] = ()


EMPTY_GRAMMAR = Grammar()


@dataclass(frozen=True, slots=True)
class LanguageConfiguration:
    """Everything the registry knows about one language id.

    ``brackets`` is None when the language has no bracket configuration,
    which turns line sanitization into a pass-through.
    """

    language_id: str
    brackets: tuple[BracketPair, ...] | None = None
    grammar: Grammar = EMPTY_GRAMMAR
    indentation_rules: IndentationRules | None = None
    extensions: tuple[str, ...] = ()


class BracketPairProvider(Protocol):
    def get_bracket_pairs(self, language_id: str) -> tuple[BracketPair, ...] | None: ...


@dataclass
class LanguageConfigurationRegistry:
    """Maps language ids to their configuration."""

    _languages: dict[str, LanguageConfiguration] = field(default_factory=dict)

    def register(self, config: LanguageConfiguration) -> None:
        """Add or replace the configuration for ``config.language_id``."""
        self._languages[config.language_id] = config

    def get(self, language_id: str) -> LanguageConfiguration | None:
        return self._languages.get(language_id)

    def __contains__(self, language_id: object) -> bool:
        return language_id in self._languages

    def language_ids(self) -> list[str]:
        return sorted(self._languages)

    def get_bracket_pairs(self, language_id: str) -> tuple[BracketPair, ...] | None:
        config = self._languages.get(language_id)
        if config is None or not config.brackets:
            return None
        return config.brackets

    def get_indentation_rules(self, language_id: str) -> IndentationRules | None:
        config = self._languages.get(language_id)
        return config.indentation_rules if config is not None else None

    def get_grammar(self, language_id: str) -> Grammar:
        config = self._languages.get(language_id)
        return config.grammar if config is not None else EMPTY_GRAMMAR

    def language_for_path(self, path: str | PurePath) -> str | None:
        """Return the language id registered for the file's suffix, if any."""
        suffix = PurePath(path).suffix.lower()
        if not suffix:
            return None
        for language_id in sorted(self._languages):
            if suffix in self._languages[language_id].extensions:
                return language_id
        return None


def default_registry() -> LanguageConfigurationRegistry:
    """Return a new registry holding the built-in languages."""
    from indentscope.builtins import BUILTIN_LANGUAGES

    registry = LanguageConfigurationRegistry()
    for config in BUILTIN_LANGUAGES.values():
        registry.register(config)
    return registry
