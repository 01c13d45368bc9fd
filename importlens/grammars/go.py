"""Go import grammar.

A dot import (``import . "math"``) brings every exported name into scope
and is reported as a wildcard. A blank import keeps ``_`` as its alias.
"""

import re

from . import Grammar, ImportShape, QuoteStyle, RelativeSyntax, keyword_claim

IMPORT_SPEC = re.compile(
    r"^(?:(?P<wildcard>\.)|(?P<alias>[^\W\d]\w*))?\s*"
    r"(?P<q>[\"`])(?P<module>(?:(?!(?P=q)).)+)(?P=q)$"
)

GRAMMARS = (
    Grammar(
        language="go",
        extensions=(".go",),
        aliases=("golang",),
        import_keywords=("import",),
        claim_pattern=keyword_claim(("import",)),
        shapes=(
            ImportShape(
                kind="import-group",
                pattern=re.compile(r"^import\s*\((?P<modules>.*)\)$", re.DOTALL),
                item_separators=("\n", ";"),
                skip_empty_items=True,
            ),
            ImportShape(
                kind="import",
                pattern=re.compile(r"^import\s+(?P<modules>[^(\s].*)$", re.DOTALL),
            ),
        ),
        module_separator="/",
        alias_keyword=None,
        relative=RelativeSyntax(markers=(("../", 1), ("./", 0)), base_depth=1, separator="/"),
        line_comment=("//",),
        block_comment=("/*", "*/"),
        quotes=(
            QuoteStyle("`", multiline=True, escapes=False),
            QuoteStyle('"'),
            QuoteStyle("'"),
        ),
        brackets=(("(", ")"),),
        statement_separator=";",
        module_item=IMPORT_SPEC,
    ),
)
