"""Import normalizer.

Turns classifier clauses into ImportRecord objects. This is the only place
records are created.
"""

import re

from ..config import PARENT_SENTINEL
from ..grammars import Grammar, RelativeSyntax
from ..models import ConditionalBranch, ImportedSymbol, ImportRecord, LineSpan
from .classifier import AliasedModuleImport, FromImport, ImportMatch, SimpleImport


class EmptyModuleError(ValueError):
    """A clause named no module at all once relative markers were removed."""


def squash(path: str, separator: str) -> str:
    """Strip whitespace around separators: ``"a . b"`` -> ``"a.b"``."""
    path = path.strip()
    if not separator:
        return path
    return re.sub(rf"\s*{re.escape(separator)}\s*", separator, path)


def resolve_relative(path: str, relative: RelativeSyntax | None) -> tuple[str, int]:
    """Consume leading relative markers; return (remaining path, depth).

    >>> resolve_relative("..models", RelativeSyntax(markers=((".", 1),)))
    ('models', 2)
    """
    if relative is None:
        return path, 0

    markers = sorted(relative.markers, key=lambda marker: len(marker[0]), reverse=True)
    sep = relative.separator
    depth = 0
    consumed = False

    while path:
        for token, weight in markers:
            if path.startswith(token):
                path = path[len(token):]
            elif sep and token.endswith(sep) and path == token[: -len(sep)]:
                path = ""
            else:
                continue
            depth += weight
            consumed = True
            break
        else:
            break

    if consumed:
        depth += relative.base_depth
    return path.strip(), depth


def _module(raw: str, grammar: Grammar) -> tuple[str, int]:
    path, depth = resolve_relative(squash(raw, grammar.module_separator), grammar.relative)
    if not path:
        if depth == 0:
            raise EmptyModuleError(f"empty module name in {raw!r}")
        path = PARENT_SENTINEL * depth
    return path, depth


def normalize(
    match: ImportMatch,
    line_span: LineSpan,
    grammar: Grammar,
    branch: ConditionalBranch = ConditionalBranch.NONE,
    guard_id: int | None = None,
) -> tuple[ImportRecord, ...]:
    """Build one record per clause of a classified statement."""
    if branch is ConditionalBranch.NONE:
        guard_id = None

    records = []
    for clause in match.clauses:
        if not isinstance(clause, (SimpleImport, AliasedModuleImport, FromImport)):
            raise TypeError(f"Unknown import clause: {type(clause).__name__}")

        module, depth = _module(clause.module, grammar)
        symbols: tuple[ImportedSymbol, ...] = ()
        alias = None
        wildcard = False

        if isinstance(clause, FromImport):
            wildcard = clause.wildcard
            if not wildcard:
                symbols = tuple(
                    ImportedSymbol(squash(s.name, grammar.module_separator), s.alias)
                    for s in clause.symbols
                )
        elif isinstance(clause, AliasedModuleImport):
            alias = clause.alias

        records.append(
            ImportRecord(
                source_module=module,
                line_span=line_span,
                imported_symbols=symbols,
                module_alias=alias,
                relative_depth=depth,
                is_wildcard=wildcard,
                conditional_branch=branch,
                guard_id=guard_id,
            )
        )
    return tuple(records)
