"""Language grammar table for import extraction.

This module defines the Grammar descriptor and the GrammarRegistry that
discovers per-language grammar modules.

CRITICAL ARCHITECTURE PRINCIPLE:
Grammars are DATA. A grammar module only declares tokens and compiled
patterns; the joiner, classifier and normalizer are shared by every
language. Adding a language means adding one module to this package that
exposes a GRAMMARS tuple, never new control flow in the engine.

Named groups understood by the engine in shape patterns:
    module    - module path as written (string quotes already excluded)
    modules   - list of module clauses, split with the shape's separators
    symbols   - list of symbol clauses, split with the shape's separators
    default   - default-export binding (becomes Grammar.default_symbol)
    alias     - alias bound to the whole module
    wildcard  - present when every member is imported unqualified
"""

import importlib
import re
from dataclasses import dataclass
from functools import cache
from pathlib import Path

from ..exceptions import UnsupportedLanguageError


@dataclass(frozen=True)
class QuoteStyle:
    """A string literal delimiter."""

    token: str
    multiline: bool = False
    escapes: bool = True


@dataclass(frozen=True)
class RelativeSyntax:
    """Relative-import markers and how they count toward depth.

    Markers are consumed greedily from the start of a module path, longest
    first. A marker also matches when the remaining path equals the marker
    without its trailing separator ("super" for "super::", ".." for "../").
    Depth is the sum of the consumed weights plus base_depth.
    """

    markers: tuple[tuple[str, int], ...]
    base_depth: int = 0
    separator: str = ""


@dataclass(frozen=True)
class ImportShape:
    """One syntactic import form, tried in table order."""

    kind: str
    pattern: re.Pattern
    item_separators: tuple[str, ...] = (",",)
    module_item: re.Pattern | None = None
    symbol_item: re.Pattern | None = None
    skip_empty_items: bool = False
    trailing_separator: bool = False
    # Searched anywhere in the statement; every occurrence adds its clauses
    repeat: bool = False


@dataclass(frozen=True)
class GuardSyntax:
    """Try-then-fallback construct used to tolerate a missing import.

    Each pattern carries a ``body`` group holding any statement written on
    the same line after the keyword. Arms are scoped by indentation.
    """

    open_pattern: re.Pattern
    arm_pattern: re.Pattern
    close_pattern: re.Pattern


@dataclass(frozen=True)
class Grammar:
    """Declarative description of one language's import syntax."""

    language: str
    extensions: tuple[str, ...]
    import_keywords: tuple[str, ...]
    claim_pattern: re.Pattern
    shapes: tuple[ImportShape, ...]
    aliases: tuple[str, ...] = ()
    module_separator: str = "."
    alias_keyword: str | None = "as"
    relative: RelativeSyntax | None = None
    line_comment: tuple[str, ...] = ()
    block_comment: tuple[str, str] | None = None
    quotes: tuple[QuoteStyle, ...] = ()
    brackets: tuple[tuple[str, str], ...] = ()
    group_opener: re.Pattern | None = None
    line_continuation: str | None = None
    statement_separator: str | None = None
    symbol_item: re.Pattern | None = None
    module_item: re.Pattern | None = None
    nested_symbol_group: re.Pattern | None = None
    default_symbol: str = "default"
    guard: GuardSyntax | None = None
    compound_body: re.Pattern | None = None


def keyword_claim(keywords: tuple[str, ...]) -> re.Pattern:
    """Build the default claim pattern: statement starts with an import keyword."""
    alternatives = "|".join(re.escape(k) for k in keywords)
    return re.compile(rf"^(?:{alternatives})\b")


def aliased(name: str, alias_keyword: str, alias: str = r"[^\W\d]\w*") -> str:
    """Regex fragment for ``name [<alias_keyword> alias]`` with named groups."""
    return rf"(?P<name>{name})(?:\s+{re.escape(alias_keyword)}\s+(?P<alias>{alias}))?"


class GrammarRegistry:
    """Registry for dynamic discovery of grammar modules.

    Design:
    - One module per language family (python.py, javascript.py, ...)
    - Each module exposes GRAMMARS, a tuple of Grammar entries
    - No hardcoded mapping - pure discovery pattern
    """

    def __init__(self):
        self.grammars: dict[str, Grammar] = {}
        self.aliases: dict[str, str] = {}
        self.extensions: dict[str, str] = {}
        self._discover()

    def _discover(self):
        """Import every grammar module in this package and register its entries."""
        grammar_dir = Path(__file__).parent

        for file_path in sorted(grammar_dir.glob("*.py")):
            if file_path.name.startswith("_"):
                continue

            module = importlib.import_module(f".{file_path.stem}", package=__name__)
            for grammar in getattr(module, "GRAMMARS", ()):
                self.register(grammar)

    def register(self, grammar: Grammar):
        """Register a grammar under its language id, aliases and extensions."""
        self.grammars[grammar.language] = grammar
        for alias in grammar.aliases:
            self.aliases[alias] = grammar.language
        for ext in grammar.extensions:
            self.extensions[ext] = grammar.language

    def get(self, language_id: str) -> Grammar:
        """Look up a grammar by language id or alias (case-insensitive)."""
        key = language_id.strip().lower()
        key = self.aliases.get(key, key)
        grammar = self.grammars.get(key)
        if grammar is None:
            raise UnsupportedLanguageError(language_id, sorted(self.grammars))
        return grammar

    def language_for_extension(self, ext: str) -> str | None:
        """Map a file extension to a language id."""
        normalized = ext.lower() if ext.startswith(".") else f".{ext.lower()}"
        return self.extensions.get(normalized)


@cache
def get_registry() -> GrammarRegistry:
    """Return the process-wide registry, built on first use."""
    return GrammarRegistry()


def get_grammar(language_id: str) -> Grammar:
    """Return the grammar for a language id; raises UnsupportedLanguageError."""
    return get_registry().get(language_id)


def supported_languages() -> list[str]:
    """Sorted list of registered language ids."""
    return sorted(get_registry().grammars)


def language_for_extension(ext: str) -> str | None:
    """Language id for a file extension (".py" or "py"), or None."""
    return get_registry().language_for_extension(ext)


def is_extension_supported(ext: str) -> bool:
    """True if some grammar claims the extension."""
    return language_for_extension(ext) is not None


__all__ = [
    "Grammar",
    "GrammarRegistry",
    "GuardSyntax",
    "ImportShape",
    "QuoteStyle",
    "RelativeSyntax",
    "aliased",
    "get_grammar",
    "get_registry",
    "is_extension_supported",
    "keyword_claim",
    "language_for_extension",
    "supported_languages",
]
