"""Minimal LSP server for indentscope — context and line-evaluation commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from lsprotocol.types import Position, TextDocumentSyncKind
from pygls.lsp.server import LanguageServer

from indentscope.config import CONFIG_FILENAME, build_registry, load_config
from indentscope.context import IndentationContextProcessor
from indentscope.errors import UsageError
from indentscope.languages import LanguageConfigurationRegistry
from indentscope.model import TextModel
from indentscope.rules import evaluate_model_line
from indentscope.tokens import Range

CONTEXT_COMMAND = "indentscope.context"
PROCESS_LINE_COMMAND = "indentscope.processLine"

server = LanguageServer("indentscope-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _registry(ls: LanguageServer) -> LanguageConfigurationRegistry:
    """Build the registry from indentscope.toml at the workspace root, if any."""
    root = ls.workspace.root_path
    base = Path(root) if root else Path(".")
    return build_registry(load_config(None, base), base / CONFIG_FILENAME)


def _model(ls: LanguageServer, uri: str) -> tuple[TextModel, LanguageConfigurationRegistry]:
    registry = _registry(ls)
    doc = ls.workspace.get_text_document(uri)
    language_id = doc.language_id
    if language_id not in registry:
        language_id = registry.language_for_path(uri.rsplit("/", 1)[-1]) or "plaintext"
    return TextModel(doc.source, language_id, registry), registry


def _check_line(model: TextModel, line: int) -> None:
    if not 0 <= line < model.line_count:
        raise UsageError(f"line {line} is out of range (0-{model.line_count - 1})")


def _column(ls: LanguageServer, uri: str, line: int, character: int) -> int:
    """Convert an LSP character offset (UTF-16 units) to a 1-based code-point column."""
    doc = ls.workspace.get_text_document(uri)
    position = doc.position_codec.position_from_client_units(doc.lines, Position(line=line, character=character))
    return position.character + 1


def _context(
    ls: LanguageServer,
    uri: str,
    line: int,
    character: int,
    end_line: int | None = None,
    end_character: int | None = None,
) -> dict[str, str]:
    """Return the sanitized context around a 0-based LSP position or range."""
    model, registry = _model(ls, uri)
    _check_line(model, line)
    if end_line is None or end_character is None:
        range = Range.caret(line + 1, _column(ls, uri, line, character))
    else:
        _check_line(model, end_line)
        range = Range.between(
            line + 1,
            _column(ls, uri, line, character),
            end_line + 1,
            _column(ls, uri, end_line, end_character),
        )
    context = IndentationContextProcessor(model, registry).extract_context(range)
    return {
        "before": context.before,
        "after": context.after,
        "previousLine": context.previous_line,
    }


def _process_line(
    ls: LanguageServer, uri: str, line: int, indentation: str | None = None
) -> dict[str, Any]:
    """Return the sanitized text and rule decisions for a 0-based line."""
    model, registry = _model(ls, uri)
    _check_line(model, line)
    decisions = evaluate_model_line(model, line + 1, registry, indentation)
    return {
        "text": decisions.text,
        "increase": decisions.increase,
        "decrease": decisions.decrease,
        "ignore": decisions.ignore,
        "indentNextLine": decisions.indent_next_line,
    }


@server.command(CONTEXT_COMMAND)
def context_command(ls: LanguageServer, *args: Any) -> dict[str, str]:
    if len(args) not in (3, 5):
        raise UsageError(f"{CONTEXT_COMMAND} expects uri, line, character[, end line, end character]")
    return _context(ls, *args)


@server.command(PROCESS_LINE_COMMAND)
def process_line_command(ls: LanguageServer, *args: Any) -> dict[str, Any]:
    if len(args) not in (2, 3):
        raise UsageError(f"{PROCESS_LINE_COMMAND} expects uri, line[, indentation]")
    return _process_line(ls, *args)


def main() -> None:
    server.start_io()
