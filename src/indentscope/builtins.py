"""Built-in language table: brackets, grammar, and indentation rules."""

from __future__ import annotations

from indentscope.languages import BracketPair, EmbeddedLanguage, Grammar, LanguageConfiguration
from indentscope.rules import IndentationRules

_ROUND = BracketPair.of("(", ")")
_SQUARE = BracketPair.of("[", "]")
_CURLY = BracketPair.of("{", "}")

_C_STYLE_RULES = IndentationRules.from_patterns(
    increase=r"""^((?!//).)*(\{[^}"'`]*|\([^)"'`]*|\[[^\]"'`]*)$""",
    decrease=r"^((?!.*?/\*).*\*/)?\s*[}\]].*$",
    indent_next_line=r"^((.*=>\s*)|((.*[^\w]+|\s*)(if|while|for)\s*\(.*\)\s*))$",
    unindented_line=r"^(\t|[ ])*[ ]\*[^/]*\*/\s*$|^(\t|[ ])*[ ]\*/\s*$|^(\t|[ ])*\*([ ]([^*]|\*(?!/))*)?$",
)

_C_STYLE_GRAMMAR = Grammar(
    line_comments=("//",),
    block_comments=(("/*", "*/"),),
    quotes=('"', "'", "`"),
    regex_literals=True,
)

# Void elements never take a closing tag, so they never open a block
_HTML_VOID = "area|base|br|col|embed|hr|img|input|link|meta|param|source|track|wbr"


def _make_builtins() -> dict[str, LanguageConfiguration]:
    defs: dict[str, LanguageConfiguration] = {}

    def d(
        language_id: str,
        brackets: tuple[BracketPair, ...] | None = None,
        grammar: Grammar = Grammar(),
        rules: IndentationRules | None = None,
        extensions: tuple[str, ...] = (),
    ) -> None:
        defs[language_id] = LanguageConfiguration(language_id, brackets, grammar, rules, extensions)

    d("plaintext", extensions=(".txt",))

    d(
        "javascript",
        (_CURLY, _SQUARE, _ROUND),
        _C_STYLE_GRAMMAR,
        _C_STYLE_RULES,
        (".js", ".mjs", ".cjs", ".jsx"),
    )
    d(
        "typescript",
        (_CURLY, _SQUARE, _ROUND),
        _C_STYLE_GRAMMAR,
        _C_STYLE_RULES,
        (".ts", ".mts", ".cts", ".tsx"),
    )

    d(
        "css",
        (_CURLY, _SQUARE, _ROUND),
        Grammar(block_comments=(("/*", "*/"),), quotes=('"', "'")),
        IndentationRules.from_patterns(
            increase=r"(^.*\{[^}]*$)",
            decrease=r"^\s*\}",
        ),
        (".css",),
    )

    d(
        "python",
        (_CURLY, _SQUARE, _ROUND),
        Grammar(line_comments=("#",), quotes=('"', "'")),
        IndentationRules.from_patterns(
            increase=(
                r"^\s*((async\s+)?(class|def|elif|else|except|finally|for|if|try|while|with|match|case)\b.*:"
                r"|.*[(\[{])\s*(#.*)?$"
            ),
            decrease=r"^\s*((elif|else|except|finally)\b.*:|[)\]}])",
        ),
        (".py", ".pyi"),
    )

    d(
        "html",
        (
            BracketPair.of("<!--", "-->"),
            BracketPair.of("<", ">"),
            _CURLY,
            _ROUND,
        ),
        Grammar(
            block_comments=(("<!--", "-->"),),
            embedded=(
                EmbeddedLanguage("<script>", "</script>", "javascript"),
                EmbeddedLanguage("<style>", "</style>", "css"),
            ),
        ),
        IndentationRules.from_patterns(
            increase=(
                rf"(?i)<(?!\?|(?:{_HTML_VOID})\b|[^>]*/>)([-_.A-Za-z0-9]+)(?=\s|>)\b[^>]*>(?!.*</\1>)"
                r"|<!--(?!.*-->)"
                r"""|\{[^}"']*$"""
            ),
            decrease=r"(?i)^\s*(</(?!html)[-_.A-Za-z0-9]+\b[^>]*>|-->|\})",
        ),
        (".html", ".htm"),
    )

    return defs


BUILTIN_LANGUAGES: dict[str, LanguageConfiguration] = _make_builtins()
