"""Rust import grammar.

``use a::b::C`` imports the symbol ``C`` from module ``a::b``; a bare
``use serde`` or ``extern crate serde`` imports the crate itself. Nested
use-groups are flattened: ``use a::{b::{C, D}}`` yields symbols ``b::C`` and
``b::D`` from ``a``.
"""

import re

from . import Grammar, ImportShape, QuoteStyle, RelativeSyntax

IDENT = r"[^\W\d]\w*"
PATH = rf"(?:::)?{IDENT}(?:\s*::\s*{IDENT})*"
VISIBILITY = r"(?:pub(?:\s*\([^)]*\))?\s+)?"
ALIAS = rf"(?:\s+as\s+(?P<alias>{IDENT}))?"

_USE = rf"^{VISIBILITY}use\s+(?P<module>{PATH})\s*::\s*"

GRAMMARS = (
    Grammar(
        language="rust",
        extensions=(".rs",),
        aliases=("rs",),
        import_keywords=("use", "extern crate"),
        claim_pattern=re.compile(rf"^{VISIBILITY}(?:use|extern\s+crate)\b"),
        shapes=(
            ImportShape(
                kind="use-group",
                pattern=re.compile(_USE + r"\{(?P<symbols>.*)\}$", re.DOTALL),
                trailing_separator=True,
            ),
            ImportShape(
                kind="use-glob",
                pattern=re.compile(_USE + r"(?P<wildcard>\*)$"),
            ),
            ImportShape(
                kind="use-item",
                pattern=re.compile(_USE + rf"(?P<symbols>{IDENT}(?:\s+as\s+{IDENT})?)$"),
            ),
            ImportShape(
                kind="use-crate",
                pattern=re.compile(rf"^{VISIBILITY}use\s+(?P<module>(?:::)?{IDENT}){ALIAS}$"),
            ),
            ImportShape(
                kind="extern-crate",
                pattern=re.compile(
                    rf"^{VISIBILITY}extern\s+crate\s+(?P<module>{IDENT}){ALIAS}$"
                ),
            ),
        ),
        module_separator="::",
        alias_keyword="as",
        relative=RelativeSyntax(
            markers=(("super::", 1), ("self::", 0)), base_depth=1, separator="::"
        ),
        line_comment=("//",),
        block_comment=("/*", "*/"),
        quotes=(QuoteStyle('"', multiline=True),),
        brackets=(("{", "}"),),
        # Only use-declarations may span lines; fn and mod bodies stay split
        group_opener=re.compile(rf"^{VISIBILITY}use\b"),
        statement_separator=";",
        # One-line blocks: "mod tests { use super::*; }"
        compound_body=re.compile(
            rf"^(?:[^{{}};]*\{{\s*)+(?P<body>{VISIBILITY}(?:use|extern\s+crate)\b.*)$",
            re.DOTALL,
        ),
        symbol_item=re.compile(
            rf"^(?P<name>{PATH}(?:\s*::\s*\*)?|\*)(?:\s+as\s+(?P<alias>{IDENT}))?$"
        ),
        nested_symbol_group=re.compile(
            rf"^(?P<prefix>{PATH})\s*::\s*\{{(?P<symbols>.*)\}}$", re.DOTALL
        ),
    ),
)
