"""JavaScript and TypeScript import grammar.

Covers ES module imports and re-exports, CommonJS require() and dynamic
import(). TypeScript shares the same table; only the language id and
extensions differ.
"""

import dataclasses
import re

from . import Grammar, ImportShape, QuoteStyle, RelativeSyntax

IDENT = r"[\w$]+"

# Module specifier in quotes. Template literals with ${...} never match,
# so dynamic specifiers surface as malformed imports.
SPECIFIER = r"""(?P<q>["'`])(?P<module>(?:(?!(?P=q)|\$\{).)+)(?P=q)"""

TYPE = r"(?:type\s+)?"

_FROM = rf"\s*from\s*{SPECIFIER}$"


def _shape(kind: str, pattern: str, **kwargs) -> ImportShape:
    return ImportShape(kind=kind, pattern=re.compile(pattern, re.DOTALL), **kwargs)


DESTRUCTURED_SYMBOL = re.compile(
    rf"^(?P<name>{IDENT})(?:\s*:\s*(?P<alias>{IDENT}))?(?:\s*=.*)?$", re.DOTALL
)

SHAPES = (
    _shape("side-effect", rf"^import\s*{SPECIFIER}$"),
    _shape(
        "import-equals",
        rf"^import\s+{TYPE}(?P<alias>{IDENT})\s*=\s*require\s*\(\s*{SPECIFIER}\s*\)$",
    ),
    _shape(
        "namespace",
        rf"^import\s+{TYPE}(?:(?P<default>{IDENT})\s*,\s*)?\*\s*as\s+(?P<alias>{IDENT}){_FROM}",
    ),
    _shape(
        "default",
        rf"^import\s+(?:type\s+(?={IDENT}\s*(?:,|from\b)))?(?P<default>{IDENT})"
        rf"\s*(?:,\s*\{{(?P<symbols>[^{{}}]*)\}})?{_FROM}",
        trailing_separator=True,
    ),
    _shape(
        "named",
        rf"^import\s+{TYPE}\{{(?P<symbols>[^{{}}]*)\}}{_FROM}",
        trailing_separator=True,
    ),
    _shape(
        "export-namespace",
        rf"^export\s+{TYPE}\*\s*as\s+(?P<alias>{IDENT}){_FROM}",
    ),
    _shape("export-wildcard", rf"^export\s+{TYPE}(?P<wildcard>\*){_FROM}"),
    _shape(
        "export-named",
        rf"^export\s+{TYPE}\{{(?P<symbols>[^{{}}]*)\}}{_FROM}",
        trailing_separator=True,
    ),
    _shape(
        "require-binding",
        rf"^(?:const|let|var)\s+(?P<alias>{IDENT})\s*=\s*require\s*\(\s*{SPECIFIER}\s*\)$",
    ),
    _shape(
        "require-destructured",
        rf"^(?:const|let|var)\s*\{{(?P<symbols>[^{{}}]*)\}}\s*=\s*"
        rf"require\s*\(\s*{SPECIFIER}\s*\)$",
        symbol_item=DESTRUCTURED_SYMBOL,
        trailing_separator=True,
    ),
    # require() embedded in a larger expression: app.use(require("cors")())
    _shape("require", rf"\brequire\s*\(\s*{SPECIFIER}\s*\)", repeat=True),
    _shape("dynamic-import", rf"\bimport\s*\(\s*{SPECIFIER}\s*\)", repeat=True),
)

JAVASCRIPT = Grammar(
    language="javascript",
    extensions=(".js", ".jsx", ".mjs", ".cjs"),
    aliases=("js", "node"),
    import_keywords=("import", "export", "require"),
    claim_pattern=re.compile(
        # "import x = Foo.Bar" is a TypeScript namespace alias, not a module import
        rf"^import\b(?!\s*[.(])(?!\s+{IDENT}\s*=(?!\s*require\b))"
        r"|^export\b[^;]*?\bfrom\s*[\"'`]"
        r"|\brequire\s*\("
        r"|\bimport\s*\(",
        re.DOTALL,
    ),
    shapes=SHAPES,
    module_separator="/",
    alias_keyword="as",
    relative=RelativeSyntax(markers=(("../", 1), ("./", 0)), base_depth=1, separator="/"),
    line_comment=("//",),
    block_comment=("/*", "*/"),
    quotes=(
        QuoteStyle("`", multiline=True),
        QuoteStyle('"'),
        QuoteStyle("'"),
    ),
    brackets=(("(", ")"), ("{", "}"), ("[", "]")),
    # Only import-shaped statements may span lines; function bodies stay split
    group_opener=re.compile(
        rf"^(?:import|export)(?:\s+type)?\s*$"
        rf"|^import\s+{TYPE}{IDENT}\s*,\s*$"
        rf"|^(?:const|let|var)\s*$"
        rf"|\b(?:require|import)\s*$"
    ),
    statement_separator=";",
    symbol_item=re.compile(
        rf"^(?:type\s+)?(?P<name>{IDENT})(?:\s+as\s+(?P<alias>{IDENT}))?$"
    ),
    default_symbol="default",
)

TYPESCRIPT = dataclasses.replace(
    JAVASCRIPT,
    language="typescript",
    extensions=(".ts", ".tsx", ".mts", ".cts"),
    aliases=("ts",),
)

GRAMMARS = (JAVASCRIPT, TYPESCRIPT)
