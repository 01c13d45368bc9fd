"""Python import grammar."""

import re

from . import (
    Grammar,
    GuardSyntax,
    ImportShape,
    QuoteStyle,
    RelativeSyntax,
    aliased,
    keyword_claim,
)

IDENT = r"[^\W\d]\w*"
DOTTED = rf"{IDENT}(?:\s*\.\s*{IDENT})*"

# "os.path", ".", "..models", ". config"
FROM_MODULE = rf"(?P<module>\.+(?:\s*(?!import\b){DOTTED})?|(?!import\b){DOTTED})"

_FROM = rf"^from(?:\s+|(?=\.)){FROM_MODULE}\s*\bimport\b\s*"

SHAPES = (
    ImportShape(
        kind="from-group",
        pattern=re.compile(_FROM + r"\((?P<symbols>.*)\)$", re.DOTALL),
        trailing_separator=True,
    ),
    ImportShape(
        kind="from-wildcard",
        pattern=re.compile(_FROM + r"(?P<wildcard>\*)$"),
    ),
    ImportShape(
        kind="from",
        pattern=re.compile(_FROM + r"(?P<symbols>[^()*]+)$", re.DOTALL),
    ),
    ImportShape(
        kind="import",
        pattern=re.compile(r"^import\s+(?P<modules>.+)$", re.DOTALL),
    ),
)

GRAMMARS = (
    Grammar(
        language="python",
        extensions=(".py", ".pyi"),
        aliases=("py", "python3"),
        import_keywords=("import", "from"),
        claim_pattern=keyword_claim(("import", "from")),
        shapes=SHAPES,
        module_separator=".",
        alias_keyword="as",
        relative=RelativeSyntax(markers=((".", 1),)),
        line_comment=("#",),
        quotes=(
            QuoteStyle('"""', multiline=True),
            QuoteStyle("'''", multiline=True),
            QuoteStyle('"'),
            QuoteStyle("'"),
        ),
        brackets=(("(", ")"), ("[", "]"), ("{", "}")),
        line_continuation="\\",
        statement_separator=";",
        symbol_item=re.compile(rf"^{aliased(IDENT, 'as')}$"),
        module_item=re.compile(
            rf"^(?P<module>{DOTTED})(?:\s+as\s+(?P<alias>{IDENT}))?$", re.DOTALL
        ),
        guard=GuardSyntax(
            open_pattern=re.compile(r"^try\s*:(?P<body>.*)$", re.DOTALL),
            arm_pattern=re.compile(r"^except\b\*?[^:]*:(?P<body>.*)$", re.DOTALL),
            close_pattern=re.compile(r"^(?:else|finally)\s*:(?P<body>.*)$", re.DOTALL),
        ),
        # Single-line compound statements: "if TYPE_CHECKING: import x", "def f(): import x"
        compound_body=re.compile(
            r"^(?:(?:if|elif|else|while|for|with|try|except|finally|class|async\s+(?:with|for))\b[^:]*"
            r"|(?:async\s+)?def\b.*?\)\s*(?:->[^:]*)?)"
            r":\s*(?P<body>(?:import|from)\b.*)$",
            re.DOTALL,
        ),
    ),
)
