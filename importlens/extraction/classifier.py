"""Statement classifier.

Matches one logical statement against the grammar's import shapes. The
result is exactly one of NotAnImport, MalformedImport or ImportMatch; an
ImportMatch carries one clause per module the statement names.

The algorithm is shared by every language. Grammars only vary the
patterns, separators and item patterns it consults.
"""

from dataclasses import dataclass

from ..grammars import Grammar, ImportShape
from ..models import ImportedSymbol

_PAIRS = {"(": ")", "[": "]", "{": "}"}
_QUOTES = "\"'`"
_PREVIEW_LENGTH = 60


@dataclass(frozen=True)
class NotAnImport:
    """Statement does not claim to be an import."""


@dataclass(frozen=True)
class MalformedImport:
    """Statement claims to be an import but its structure is invalid."""

    reason: str


@dataclass(frozen=True)
class SimpleImport:
    """Whole module imported under its own name: ``import os``."""

    module: str


@dataclass(frozen=True)
class AliasedModuleImport:
    """Whole module bound to an alias: ``import numpy as np``."""

    module: str
    alias: str


@dataclass(frozen=True)
class FromImport:
    """Named members (or every member) imported from a module."""

    module: str
    symbols: tuple[ImportedSymbol, ...] = ()
    wildcard: bool = False


Clause = SimpleImport | AliasedModuleImport | FromImport


@dataclass(frozen=True)
class ImportMatch:
    """A statement matched by the shape named ``shape``."""

    shape: str
    clauses: tuple[Clause, ...]


Classification = NotAnImport | MalformedImport | ImportMatch


class _InvalidItem(ValueError):
    """An item inside a module or symbol list failed validation."""


def preview(text: str) -> str:
    """Single-line, length-capped rendering of a statement for messages."""
    flat = " ".join(text.split())
    if len(flat) > _PREVIEW_LENGTH:
        flat = flat[: _PREVIEW_LENGTH - 3] + "..."
    return flat


def split_items(text: str, separators: tuple[str, ...]) -> list[str]:
    """Split on separators outside brackets and quotes; items are stripped."""
    items: list[str] = []
    current: list[str] = []
    depth = 0
    quote = None
    i = 0

    while i < len(text):
        ch = text[i]
        if quote is not None:
            current.append(ch)
            if ch == "\\" and i + 1 < len(text):
                current.append(text[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
            current.append(ch)
        elif ch in _PAIRS:
            depth += 1
            current.append(ch)
        elif ch in _PAIRS.values():
            depth = max(depth - 1, 0)
            current.append(ch)
        elif depth == 0 and any(text.startswith(sep, i) for sep in separators):
            sep = next(s for s in separators if text.startswith(s, i))
            items.append("".join(current).strip())
            current = []
            i += len(sep)
            continue
        else:
            current.append(ch)
        i += 1

    items.append("".join(current).strip())
    return items


def _list_items(text: str, shape: ImportShape) -> list[str]:
    items = split_items(text, shape.item_separators)
    if shape.skip_empty_items:
        items = [item for item in items if item]
    elif shape.trailing_separator and len(items) > 1 and items[-1] == "":
        items.pop()

    if not items or items == [""]:
        raise _InvalidItem("empty import list")
    if "" in items:
        raise _InvalidItem("empty item in import list")
    return items


def _module_clause(item: str, shape: ImportShape, grammar: Grammar) -> Clause:
    pattern = shape.module_item or grammar.module_item
    match = pattern.match(item) if pattern is not None else None
    if match is None:
        raise _InvalidItem(f"invalid module clause {preview(item)!r}")

    groups = match.groupdict()
    if groups.get("wildcard"):
        return FromImport(module=groups["module"], wildcard=True)
    if groups.get("alias"):
        return AliasedModuleImport(module=groups["module"], alias=groups["alias"])
    return SimpleImport(module=groups["module"])


def _symbols(text: str, shape: ImportShape, grammar: Grammar) -> list[ImportedSymbol]:
    """Parse a symbol list, flattening nested groups onto their prefix."""
    pattern = shape.symbol_item or grammar.symbol_item
    nested = grammar.nested_symbol_group
    symbols: list[ImportedSymbol] = []
    # Explicit work stack of (prefix, pending items), consumed front to back
    work = [("", _list_items(text, shape))]

    while work:
        prefix, items = work[-1]
        if not items:
            work.pop()
            continue
        item = items.pop(0)

        group = nested.match(item) if nested is not None else None
        if group is not None:
            inner_prefix = _join(prefix, group["prefix"], grammar.module_separator)
            work.append((inner_prefix, _list_items(group["symbols"], shape)))
            continue

        match = pattern.match(item) if pattern is not None else None
        if match is None:
            raise _InvalidItem(f"invalid imported name {preview(item)!r}")
        name = _join(prefix, match["name"], grammar.module_separator)
        symbols.append(ImportedSymbol(name, match.groupdict().get("alias")))

    return symbols


def _join(prefix: str, name: str, separator: str) -> str:
    return f"{prefix}{separator}{name}" if prefix else name


def _clauses(groups: dict, shape: ImportShape, grammar: Grammar) -> tuple[Clause, ...]:
    if groups.get("modules") is not None:
        return tuple(
            _module_clause(item, shape, grammar)
            for item in _list_items(groups["modules"], shape)
        )

    module = groups["module"]
    clauses: list[Clause] = []
    symbols: list[ImportedSymbol] = []
    if groups.get("default"):
        symbols.append(ImportedSymbol(grammar.default_symbol, groups["default"]))
    if groups.get("symbols") is not None:
        symbols.extend(_symbols(groups["symbols"], shape, grammar))

    wildcard = groups.get("wildcard") is not None
    if symbols or wildcard:
        clauses.append(FromImport(module=module, symbols=tuple(symbols), wildcard=wildcard))
    if groups.get("alias"):
        clauses.append(AliasedModuleImport(module=module, alias=groups["alias"]))
    if not clauses:
        clauses.append(SimpleImport(module=module))
    return tuple(clauses)


def classify(text: str, grammar: Grammar) -> Classification:
    """Classify one logical statement against the grammar's shapes.

    Shapes are tried in table order and the first one whose items all
    validate wins. A repeating shape contributes one set of clauses per
    occurrence in the statement. If a shape matched but its items did not
    validate, the first such failure becomes the MalformedImport reason.
    """
    if not grammar.claim_pattern.search(text):
        return NotAnImport()

    first_failure: str | None = None
    for shape in grammar.shapes:
        if shape.repeat:
            matches = list(shape.pattern.finditer(text))
        else:
            match = shape.pattern.match(text)
            matches = [match] if match is not None else []
        if not matches:
            continue
        try:
            clauses = tuple(
                clause for match in matches for clause in _clauses(match.groupdict(), shape, grammar)
            )
            return ImportMatch(shape=shape.kind, clauses=clauses)
        except _InvalidItem as e:
            if first_failure is None:
                first_failure = f"{shape.kind}: {e}"

    if first_failure is not None:
        return MalformedImport(first_failure)
    return MalformedImport(f"unrecognized {grammar.language} import: {preview(text)!r}")
