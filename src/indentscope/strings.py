"""Leading-whitespace helpers for line text."""

from __future__ import annotations


def get_leading_whitespace(line: str) -> str:
    """Return the run of spaces and tabs at the start of *line*."""
    end = 0
    while end < len(line) and line[end] in " \t":
        end += 1
    return line[:end]


def replace_leading_whitespace(line: str, indentation: str) -> str:
    """Swap the leading whitespace of *line* for *indentation*.

    The whole run is replaced, whatever mix of spaces and tabs it holds.
    """
    current = get_leading_whitespace(line)
    return indentation + line[len(current) :]
