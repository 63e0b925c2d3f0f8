"""Command-line interface for indentscope."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path

from indentscope.config import build_registry, load_config
from indentscope.errors import ConfigError, UsageError
from indentscope.languages import LanguageConfigurationRegistry


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    registry: LanguageConfigurationRegistry
    language_id: str
    line: int
    column: int | None
    end_line: int | None
    end_column: int | None
    indentation: str | None
    json: bool
    debug: bool


@dataclass(frozen=True, slots=True)
class Report:
    """Everything the CLI prints for one line."""

    line: int
    text: str
    sanitized: str
    increase: bool
    decrease: bool
    ignore: bool
    indent_next_line: bool
    before: str
    after: str
    previous_line: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="indentscope",
        description="Show sanitized indentation input and rule decisions for a line",
    )
    p.add_argument("input", help="Input source file")
    p.add_argument("-l", "--line", type=int, required=True, help="1-based line number")
    p.add_argument(
        "-c",
        "--column",
        type=int,
        default=None,
        help="1-based caret column (default: end of line)",
    )
    p.add_argument("--end-line", type=int, default=None, help="Selection end line")
    p.add_argument("--end-column", type=int, default=None, help="Selection end column")
    p.add_argument(
        "--indent",
        default=None,
        metavar="STR",
        help=r"Replacement indentation for the line (\t for a tab)",
    )
    p.add_argument(
        "--language",
        default=None,
        metavar="ID",
        help="Language id (default: from the file extension)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover indentscope.toml)",
    )
    p.add_argument("--json", action="store_true", help="Print the report as JSON")
    p.add_argument("--debug", action="store_true", help="Dump tokens and scope to stderr")
    return p


def parse_indent_arg(s: str) -> str:
    """Decode an --indent value. Only spaces, tabs and the \\t escape are allowed."""
    value = s.replace("\\t", "\t")
    if any(ch not in " \t" for ch in value):
        raise argparse.ArgumentTypeError(f"invalid indentation (expected spaces or tabs): {s!r}")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: built-in languages < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    registry = build_registry(config, config_path or input_dir / "indentscope.toml")

    if args.language is not None:
        if args.language not in registry:
            raise UsageError(f"unknown language '{args.language}'")
        language_id = args.language
    else:
        language_id = registry.language_for_path(input_file) or "plaintext"

    indentation = parse_indent_arg(args.indent) if args.indent is not None else None

    return CliOptions(
        input_file=input_file,
        registry=registry,
        language_id=language_id,
        line=args.line,
        column=args.column,
        end_line=args.end_line,
        end_column=args.end_column,
        indentation=indentation,
        json=args.json,
        debug=args.debug,
    )


def build_report(options: CliOptions) -> Report:
    """Tokenize the input file and evaluate the requested line and range."""
    from indentscope.context import IndentationContextProcessor
    from indentscope.debug import dump_scope, dump_tokens
    from indentscope.model import TextModel
    from indentscope.rules import evaluate_model_line
    from indentscope.scope import create_scoped_line_tokens
    from indentscope.tokens import Range

    source = options.input_file.read_text(encoding="utf-8")
    model = TextModel(source, options.language_id, options.registry)

    line = options.line
    end_line = options.end_line if options.end_line is not None else line
    for n in (line, end_line):
        if not 1 <= n <= model.line_count:
            raise UsageError(f"line {n} is out of range (1-{model.line_count})")
    if end_line < line:
        raise UsageError("selection end is before its start")

    column = options.column if options.column is not None else model.get_line_max_column(line)
    if options.end_line is None and options.end_column is None:
        range = Range.caret(line, column)
    else:
        end_column = options.end_column
        if end_column is None:
            end_column = model.get_line_max_column(end_line)
        if end_line == line and end_column < column:
            raise UsageError("selection end is before its start")
        range = Range.between(line, column, end_line, end_column)

    decisions = evaluate_model_line(model, line, options.registry, options.indentation)
    context = IndentationContextProcessor(model, options.registry).extract_context(range)

    if options.debug:
        tokens = model.get_line_tokens(line)
        dump_tokens(line, tokens)
        dump_scope(create_scoped_line_tokens(tokens, column - 1))

    return Report(
        line=line,
        text=model.get_line_content(line),
        sanitized=decisions.text,
        increase=decisions.increase,
        decrease=decisions.decrease,
        ignore=decisions.ignore,
        indent_next_line=decisions.indent_next_line,
        before=context.before,
        after=context.after,
        previous_line=context.previous_line,
    )


def format_report(report: Report, as_json: bool = False) -> str:
    """Render a report as aligned text or as a JSON object."""
    fields = {
        "line": report.line,
        "text": report.text,
        "sanitized": report.sanitized,
        "increase": report.increase,
        "decrease": report.decrease,
        "ignore": report.ignore,
        "indent_next_line": report.indent_next_line,
        "before": report.before,
        "after": report.after,
        "previous_line": report.previous_line,
    }
    if as_json:
        return json.dumps(fields, indent=2) + "\n"
    width = max(len(name) for name in fields) + 2
    return "".join(f"{name + ':':<{width}}{json.dumps(value)}\n" for name, value in fields.items())


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
        report = build_report(options)
    except ConfigError as exc:
        print(exc.format(), file=sys.stderr)
        return 1
    except (argparse.ArgumentTypeError, UsageError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"error: cannot read {args.input}: {exc.strerror}", file=sys.stderr)
        return 2

    sys.stdout.write(format_report(report, as_json=options.json))
    return 0
