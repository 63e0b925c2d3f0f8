"""TOML configuration: discovery, loading, and language registry overrides."""

from __future__ import annotations

import dataclasses
import re
import tomllib
from pathlib import Path
from typing import Any

from indentscope.errors import ConfigError
from indentscope.languages import (
    BracketPair,
    EmbeddedLanguage,
    Grammar,
    LanguageConfiguration,
    LanguageConfigurationRegistry,
    default_registry,
)
from indentscope.rules import IndentationRules

CONFIG_FILENAME = "indentscope.toml"

_RULE_KEYS = ("increase", "decrease", "indent_next_line", "unindented_line")


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML: {exc}", path) from None


def build_registry(config: dict[str, Any], path: Path | None = None) -> LanguageConfigurationRegistry:
    """Return the built-in registry with the ``[languages.*]`` tables applied.

    A table for a known language only overrides the keys it sets.
    """
    registry = default_registry()
    languages = config.get("languages", {})
    if not isinstance(languages, dict):
        raise ConfigError("'languages' must be a table", path, "languages")

    for language_id, table in languages.items():
        key = f"languages.{language_id}"
        if not isinstance(table, dict):
            raise ConfigError(f"'{key}' must be a table", path, key)
        base = registry.get(language_id) or LanguageConfiguration(language_id)
        registry.register(_apply_table(base, table, path, key))

    # Embedded regions may name languages defined later in the file
    for language_id in languages:
        for embedded in registry.get_grammar(language_id).embedded:
            if embedded.language_id not in registry:
                raise ConfigError(
                    f"unknown embedded language '{embedded.language_id}'",
                    path,
                    f"languages.{language_id}.embedded",
                )
    return registry


def _apply_table(
    base: LanguageConfiguration, table: dict[str, Any], path: Path | None, key: str
) -> LanguageConfiguration:
    changes: dict[str, Any] = {}
    grammar_changes: dict[str, Any] = {}

    if "brackets" in table:
        changes["brackets"] = _parse_brackets(table["brackets"], path, f"{key}.brackets")

    if "extensions" in table:
        exts = _string_list(table["extensions"], path, f"{key}.extensions")
        changes["extensions"] = tuple(e if e.startswith(".") else f".{e}" for e in (x.lower() for x in exts))

    if "line_comments" in table:
        grammar_changes["line_comments"] = tuple(
            _string_list(table["line_comments"], path, f"{key}.line_comments")
        )

    if "block_comments" in table:
        pairs = []
        for item in _list(table["block_comments"], path, f"{key}.block_comments"):
            if not (isinstance(item, list) and len(item) == 2 and all(isinstance(s, str) and s for s in item)):
                raise ConfigError("block comments must be [open, close] string pairs", path, f"{key}.block_comments")
            pairs.append((item[0], item[1]))
        grammar_changes["block_comments"] = tuple(pairs)

    if "quotes" in table:
        quotes = _string_list(table["quotes"], path, f"{key}.quotes")
        if any(len(q) != 1 for q in quotes):
            raise ConfigError("quotes must be single characters", path, f"{key}.quotes")
        grammar_changes["quotes"] = tuple(quotes)

    if "regex_literals" in table:
        if not isinstance(table["regex_literals"], bool):
            raise ConfigError("'regex_literals' must be a boolean", path, f"{key}.regex_literals")
        grammar_changes["regex_literals"] = table["regex_literals"]

    if "embedded" in table:
        regions = []
        for item in _list(table["embedded"], path, f"{key}.embedded"):
            if not isinstance(item, dict) or not all(
                isinstance(item.get(k), str) and item.get(k) for k in ("open", "close", "language")
            ):
                raise ConfigError(
                    "embedded regions need non-empty 'open', 'close' and 'language'", path, f"{key}.embedded"
                )
            regions.append(EmbeddedLanguage(item["open"], item["close"], item["language"]))
        grammar_changes["embedded"] = tuple(regions)

    if "indentation" in table:
        changes["indentation_rules"] = _parse_rules(table["indentation"], path, f"{key}.indentation")

    unknown = set(table) - {
        "brackets",
        "extensions",
        "line_comments",
        "block_comments",
        "quotes",
        "regex_literals",
        "embedded",
        "indentation",
    }
    if unknown:
        raise ConfigError(f"unknown key '{sorted(unknown)[0]}'", path, key)

    if grammar_changes:
        changes["grammar"] = dataclasses.replace(base.grammar, **grammar_changes)
    return dataclasses.replace(base, **changes)


def _parse_brackets(value: Any, path: Path | None, key: str) -> tuple[BracketPair, ...] | None:
    pairs = []
    for item in _list(value, path, key):
        if not (isinstance(item, list) and len(item) == 2):
            raise ConfigError("brackets must be [open, close] pairs", path, key)
        sides = []
        for side in item:
            spellings = [side] if isinstance(side, str) else side
            if not (
                isinstance(spellings, list)
                and spellings
                and all(isinstance(s, str) and s for s in spellings)
            ):
                raise ConfigError("bracket sides must be non-empty strings or lists of them", path, key)
            sides.append(tuple(spellings))
        pairs.append(BracketPair(sides[0], sides[1]))
    # An empty list switches sanitization off for the language
    return tuple(pairs) or None


def _parse_rules(value: Any, path: Path | None, key: str) -> IndentationRules:
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a table", path, key)
    unknown = set(value) - set(_RULE_KEYS)
    if unknown:
        raise ConfigError(f"unknown indentation rule '{sorted(unknown)[0]}'", path, key)
    patterns: dict[str, str] = {}
    for name in _RULE_KEYS:
        if name in value:
            if not isinstance(value[name], str):
                raise ConfigError(f"'{name}' must be a string", path, f"{key}.{name}")
            patterns[name] = value[name]
    try:
        return IndentationRules.from_patterns(**patterns)
    except re.error as exc:
        raise ConfigError(f"invalid pattern: {exc}", path, key) from None


def _list(value: Any, path: Path | None, key: str) -> list[Any]:
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be an array", path, key)
    return value


def _string_list(value: Any, path: Path | None, key: str) -> list[str]:
    items = _list(value, path, key)
    if not all(isinstance(s, str) and s for s in items):
        raise ConfigError(f"'{key}' must hold non-empty strings", path, key)
    return items
