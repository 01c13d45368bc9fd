"""Data contracts for import extraction.

Records and diagnostics are immutable once created. Both serialize to plain
dicts so callers can hand them to JSON writers without knowing the types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple


class ConditionalBranch(Enum):
    """Role of an import inside a try-then-fallback guard."""

    NONE = "none"
    PRIMARY = "primary"
    FALLBACK = "fallback"


class DiagnosticKind(Enum):
    """Recoverable problems found while scanning a file."""

    UNTERMINATED_GROUP = "unterminated_group"
    MALFORMED_IMPORT = "malformed_import"


class LineSpan(NamedTuple):
    """1-indexed inclusive physical line range of a logical statement."""

    start: int
    end: int


class ImportedSymbol(NamedTuple):
    """A named member pulled out of a module, with its local alias."""

    name: str
    alias: str | None = None


@dataclass(frozen=True)
class ImportRecord:
    """One normalized import, as written in the source file.

    ``guard_id`` links sibling branches of the same guard construct; it is
    None whenever ``conditional_branch`` is NONE.
    """

    source_module: str
    line_span: LineSpan
    imported_symbols: tuple[ImportedSymbol, ...] = ()
    module_alias: str | None = None
    relative_depth: int = 0
    is_wildcard: bool = False
    conditional_branch: ConditionalBranch = ConditionalBranch.NONE
    guard_id: int | None = None

    def __post_init__(self):
        if not self.source_module:
            raise ValueError("source_module must not be empty")
        if self.relative_depth < 0:
            raise ValueError(f"relative_depth must be >= 0, got {self.relative_depth}")

    @property
    def is_relative(self) -> bool:
        """True if the import climbs from the current package."""
        return self.relative_depth > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "source_module": self.source_module,
            "imported_symbols": [[s.name, s.alias] for s in self.imported_symbols],
            "module_alias": self.module_alias,
            "relative_depth": self.relative_depth,
            "is_wildcard": self.is_wildcard,
            "conditional_branch": self.conditional_branch.value,
            "guard_id": self.guard_id,
            "line_span": [self.line_span.start, self.line_span.end],
        }


@dataclass(frozen=True)
class Diagnostic:
    """A statement the engine skipped, and why."""

    kind: DiagnosticKind
    line_span: LineSpan
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "kind": self.kind.value,
            "line_span": [self.line_span.start, self.line_span.end],
            "message": self.message,
        }


class ExtractionResult(NamedTuple):
    """Everything extracted from one file: records first, then diagnostics."""

    records: tuple[ImportRecord, ...]
    diagnostics: tuple[Diagnostic, ...]
