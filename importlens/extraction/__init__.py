"""Import extraction engine.

The pipeline runs four stages per file, all driven by one Grammar:

    joiner      - physical lines -> logical statements (comments stripped)
    guards      - try/fallback arm tracking (PRIMARY / FALLBACK tagging)
    classifier  - statement -> NotAnImport | MalformedImport | ImportMatch
    normalizer  - ImportMatch -> ImportRecord (the only place records are built)
"""

from .pipeline import extract, extract_file_imports, extract_module_names

__all__ = [
    "extract",
    "extract_file_imports",
    "extract_module_names",
]
