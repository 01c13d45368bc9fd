"""Line/statement joiner.

Rebuilds logical statements from physical lines before classification:

- comments are stripped (line and block comments from the grammar)
- string literals are kept verbatim, so quoted module paths survive
- bracketed groups and backslash continuations are merged across lines
- the grammar's statement separator splits statements sharing a line

Each logical statement keeps its physical line span. An unterminated group
or multi-line string at end of input yields an UNTERMINATED_GROUP diagnostic;
the statement is discarded and scanning restarts on the line after the
unclosed bracket or quote.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

from ..config import TAB_WIDTH
from ..grammars import Grammar, QuoteStyle
from ..models import Diagnostic, DiagnosticKind, LineSpan

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class LogicalStatement:
    """One statement after joining, with comments removed."""

    text: str
    line_span: LineSpan
    indent: int


def split_lines(text: str) -> list[str]:
    """Split on any line ending, dropping a leading BOM and a final empty line."""
    if text.startswith("\ufeff"):
        text = text[1:]
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def _indent_width(line: str) -> int:
    expanded = line.expandtabs(TAB_WIDTH)
    return len(expanded) - len(expanded.lstrip())


class _LineScanner:
    """Character-level state machine over consecutive physical lines.

    States: code, inside a string (self.quote), inside a block comment.
    Bracket depth is an explicit stack of (closer, opener, line) entries.
    """

    def __init__(self, grammar: Grammar):
        self.grammar = grammar
        self.openers = {open_: close for open_, close in grammar.brackets}
        self.closers = {close for _, close in grammar.brackets}
        self.stack: list[tuple[str, str, int]] = []
        self.quote: QuoteStyle | None = None
        self.quote_line = 0
        self.string_continues = False
        self.in_block_comment = False
        self.buffer: list[str] = []
        self.start_line: int | None = None
        self.indent = 0
        self._line_indent = 0

    @property
    def is_open(self) -> bool:
        """True while a bracket group or multi-line string is unterminated."""
        return bool(self.stack) or self.quote is not None

    @property
    def open_line(self) -> int:
        """Line of the outermost unclosed bracket, else of the open string."""
        if self.stack:
            return self.stack[0][2]
        return self.quote_line

    def feed(self, line: str, number: int) -> list[LogicalStatement]:
        """Consume one physical line; return the statements it completed."""
        grammar = self.grammar
        completed: list[LogicalStatement] = []
        self._line_indent = _indent_width(line)
        self.string_continues = False
        continued = False
        i = 0
        n = len(line)

        while i < n:
            if self.quote is not None:
                i = self._scan_string(line, i)
                continue

            if self.in_block_comment:
                end = line.find(grammar.block_comment[1], i)
                if end == -1:
                    break
                self.in_block_comment = False
                self.buffer.append(" ")
                i = end + len(grammar.block_comment[1])
                continue

            if any(line.startswith(token, i) for token in grammar.line_comment):
                break

            if grammar.block_comment and line.startswith(grammar.block_comment[0], i):
                self.in_block_comment = True
                i += len(grammar.block_comment[0])
                continue

            quote = self._quote_at(line, i)
            if quote is not None:
                self._begin(number)
                self.quote = quote
                self.quote_line = number
                self.buffer.append(quote.token)
                i += len(quote.token)
                continue

            separator = grammar.statement_separator
            if separator and not self.stack and line.startswith(separator, i):
                statement = self._emit(number)
                if statement is not None:
                    completed.append(statement)
                i += len(separator)
                continue

            continuation = grammar.line_continuation
            if (
                continuation
                and line.startswith(continuation, i)
                and not line[i + len(continuation):].strip()
            ):
                continued = True
                break

            ch = line[i]
            if ch in self.openers:
                if self.stack or grammar.group_opener is None or grammar.group_opener.search(
                    "".join(self.buffer).strip()
                ):
                    self.stack.append((self.openers[ch], ch, number))
            elif ch in self.closers and any(closer == ch for closer, _, _ in self.stack):
                while self.stack:
                    closer, _, _ = self.stack.pop()
                    if closer == ch:
                        break

            if not ch.isspace():
                self._begin(number)
            self.buffer.append(ch)
            i += 1

        if self.quote is not None and not self.quote.multiline and not self.string_continues:
            # Single-line strings only carry over after a trailing backslash
            self.quote = None

        if self.is_open or continued:
            self.buffer.append("\n")
        else:
            statement = self._emit(number)
            if statement is not None:
                completed.append(statement)
        return completed

    def _scan_string(self, line: str, i: int) -> int:
        quote = self.quote
        if quote.escapes and line[i] == "\\":
            if i + 1 == len(line):
                self.string_continues = True
            self.buffer.append(line[i:i + 2])
            return i + 2
        if line.startswith(quote.token, i):
            self.buffer.append(quote.token)
            self.quote = None
            return i + len(quote.token)
        self.buffer.append(line[i])
        return i + 1

    def _quote_at(self, line: str, i: int) -> QuoteStyle | None:
        for quote in self.grammar.quotes:
            if line.startswith(quote.token, i):
                return quote
        return None

    def _begin(self, number: int):
        if self.start_line is None:
            self.start_line = number
            self.indent = self._line_indent

    def _emit(self, number: int) -> LogicalStatement | None:
        text = "".join(self.buffer).strip()
        start = self.start_line
        self.buffer = []
        self.start_line = None
        if not text or start is None:
            return None
        return LogicalStatement(text=text, line_span=LineSpan(start, number), indent=self.indent)

    def finish(self, last_line: int) -> LogicalStatement | None:
        """Emit whatever a trailing continuation left in the buffer."""
        return self._emit(last_line)

    def unterminated(self, last_line: int) -> Diagnostic:
        """Diagnostic for the group or string still open at end of input."""
        if self.stack:
            opener = self.stack[0][1]
            message = f"'{opener}' opened on line {self.open_line} is never closed"
        else:
            message = f"string literal {self.quote.token} opened on line {self.open_line} is never closed"
        return Diagnostic(
            kind=DiagnosticKind.UNTERMINATED_GROUP,
            line_span=LineSpan(self.start_line, last_line),
            message=message,
        )


def iter_logical_statements(
    text: str, grammar: Grammar
) -> Iterator[LogicalStatement | Diagnostic]:
    """Lazily yield logical statements and joiner diagnostics in source order."""
    lines = split_lines(text)
    position = 0

    while position < len(lines):
        scanner = _LineScanner(grammar)
        for index in range(position, len(lines)):
            yield from scanner.feed(lines[index], index + 1)

        if not scanner.is_open:
            statement = scanner.finish(len(lines))
            if statement is not None:
                yield statement
            return

        yield scanner.unterminated(len(lines))
        # Resume after the line holding the unclosed bracket or quote
        position = max(scanner.start_line, scanner.open_line)
