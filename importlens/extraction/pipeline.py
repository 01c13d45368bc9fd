"""Extraction pipeline: source text in, import records and diagnostics out.

Stages per logical statement:
    joiner -> guard tracker -> classifier -> (held by tracker) -> normalizer

Nothing here raises for malformed source. Broken statements become
diagnostics and scanning continues with the rest of the file.
"""

from ..config import SOURCE_ENCODING
from ..exceptions import UnsupportedLanguageError
from ..grammars import Grammar, get_grammar, get_registry, language_for_extension
from ..models import (
    ConditionalBranch,
    Diagnostic,
    DiagnosticKind,
    ExtractionResult,
    ImportRecord,
    LineSpan,
)
from ..utils.logging import logger
from .classifier import ImportMatch, MalformedImport, NotAnImport, classify
from .guards import GuardTracker
from .joiner import LogicalStatement, iter_logical_statements
from .normalizer import EmptyModuleError, normalize


def _decode(source: str | bytes) -> str:
    if isinstance(source, bytes):
        return source.decode(SOURCE_ENCODING, errors="replace")
    return source


def _statement_text(statement: LogicalStatement, tracker: GuardTracker, grammar: Grammar) -> str:
    """Text to classify: guard and compound headers are peeled off."""
    body = tracker.observe(statement)
    if body is not None:
        return body
    if grammar.compound_body is not None:
        match = grammar.compound_body.match(statement.text)
        if match is not None:
            return match["body"].strip()
    return statement.text


class _Extraction:
    """State for one extract() call. Never shared between files."""

    def __init__(self, grammar: Grammar):
        self.grammar = grammar
        self.tracker = GuardTracker(grammar)
        self.records: list[ImportRecord] = []
        self.diagnostics: list[Diagnostic] = []

    def run(self, text: str) -> ExtractionResult:
        for item in iter_logical_statements(text, self.grammar):
            if isinstance(item, Diagnostic):
                self.diagnostics.append(item)
                continue
            self._statement(item)
            self._release(self.tracker.drain())

        self._release(self.tracker.drain(final=True))
        return ExtractionResult(records=tuple(self.records), diagnostics=tuple(self.diagnostics))

    def _statement(self, statement: LogicalStatement):
        text = _statement_text(statement, self.tracker, self.grammar)
        if not text:
            return

        result = classify(text, self.grammar)
        if isinstance(result, NotAnImport):
            return
        if isinstance(result, MalformedImport):
            self._malformed(statement.line_span, result.reason)
        elif isinstance(result, ImportMatch):
            self.tracker.hold((result, statement.line_span))
        else:
            raise TypeError(f"Unknown classification: {type(result).__name__}")

    def _release(self, released: list[tuple[tuple[ImportMatch, LineSpan], ConditionalBranch, int | None]]):
        for (match, span), branch, guard_id in released:
            try:
                self.records.extend(normalize(match, span, self.grammar, branch, guard_id))
            except EmptyModuleError as e:
                self._malformed(span, str(e))

    def _malformed(self, span: LineSpan, reason: str):
        self.diagnostics.append(
            Diagnostic(kind=DiagnosticKind.MALFORMED_IMPORT, line_span=span, message=reason)
        )


def extract(source: str | bytes, language_id: str) -> ExtractionResult:
    """Extract every import declared in one file's source text.

    Args:
        source: File contents; bytes are decoded as UTF-8 with replacement
        language_id: Grammar to use ("python", "javascript", "ts", ...)

    Returns:
        ExtractionResult(records, diagnostics), records in source order

    Raises:
        UnsupportedLanguageError: No grammar is registered for language_id
    """
    grammar = get_grammar(language_id)
    result = _Extraction(grammar).run(_decode(source))

    for diagnostic in result.diagnostics:
        logger.trace(
            "{kind} at lines {start}-{end}: {reason}",
            kind=diagnostic.kind.value,
            start=diagnostic.line_span.start,
            end=diagnostic.line_span.end,
            reason=diagnostic.message,
        )
    logger.debug(
        "Extracted {records} import(s), {diagnostics} diagnostic(s) from {language} source",
        records=len(result.records),
        diagnostics=len(result.diagnostics),
        language=grammar.language,
    )
    return result


def extract_file_imports(source: str | bytes, extension: str) -> ExtractionResult:
    """Extract imports choosing the grammar from a file extension (".py", "rs")."""
    language = language_for_extension(extension)
    if language is None:
        raise UnsupportedLanguageError(extension, sorted(get_registry().extensions))
    return extract(source, language)


def extract_module_names(source: str | bytes, language_id: str) -> list[str]:
    """Unique source modules in first-seen order.

    Relative modules appear without their markers ("config" for
    ``from .config import X``), or as the parent sentinel when the import
    names no module.
    """
    names: list[str] = []
    seen: set[str] = set()
    for record in extract(source, language_id).records:
        if record.source_module not in seen:
            seen.add(record.source_module)
            names.append(record.source_module)
    return names
