"""Indentation-evaluation preprocessing for tokenized, multi-language documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from indentscope.languages import LanguageConfigurationRegistry
    from indentscope.rules import LineDecisions

__version__ = "0.1.0"


def evaluate_line(
    source: str,
    line_number: int,
    language_id: str = "plaintext",
    registry: LanguageConfigurationRegistry | None = None,
    new_indentation: str | None = None,
) -> LineDecisions:
    """Sanitize one line of *source* and run its language's indentation rules."""
    from indentscope.languages import default_registry
    from indentscope.model import TextModel
    from indentscope.rules import evaluate_model_line

    if registry is None:
        registry = default_registry()
    model = TextModel(source, language_id, registry)
    return evaluate_model_line(model, line_number, registry, new_indentation)
