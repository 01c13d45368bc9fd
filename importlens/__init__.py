"""importlens - import declaration extraction for source files.

Reads one file's source text and reports every import it declares as
structured ImportRecord objects, plus diagnostics for statements it had to
skip. Languages: Python, JavaScript, TypeScript, Go and Rust.

    from importlens import extract
    result = extract("from typing import Optional\n", "python")
    result.records[0].imported_symbols  # (ImportedSymbol('Optional', None),)
"""

from .exceptions import ImportLensError, UnsupportedLanguageError
from .extraction import extract, extract_file_imports, extract_module_names
from .grammars import (
    get_grammar,
    is_extension_supported,
    language_for_extension,
    supported_languages,
)
from .models import (
    ConditionalBranch,
    Diagnostic,
    DiagnosticKind,
    ExtractionResult,
    ImportedSymbol,
    ImportRecord,
    LineSpan,
)
from .utils.logging import logger

__version__ = "1.0.0"

# Library: stay silent until the application calls configure_logging()
logger.disable("importlens")

__all__ = [
    "ConditionalBranch",
    "Diagnostic",
    "DiagnosticKind",
    "ExtractionResult",
    "ImportLensError",
    "ImportRecord",
    "ImportedSymbol",
    "LineSpan",
    "UnsupportedLanguageError",
    "extract",
    "extract_file_imports",
    "extract_module_names",
    "get_grammar",
    "is_extension_supported",
    "language_for_extension",
    "supported_languages",
]
