"""
Python extraction tests against real source files.

The standard library ast module is the reference: every Import/ImportFrom
node must come back as records with the same module, names and lines.
"""

import ast

import pytest

from importlens import ConditionalBranch, ImportedSymbol, LineSpan, extract, extract_module_names


def ast_imports(code: str):
    """Reference (module, depth, symbols, alias, start, end) tuples from ast."""
    expected = []
    for node in ast.walk(ast.parse(code)):
        if isinstance(node, ast.Import):
            for name in node.names:
                expected.append((name.name, 0, (), name.asname, node.lineno, node.end_lineno))
        elif isinstance(node, ast.ImportFrom):
            module = node.module or "." * node.level
            symbols = tuple((a.name, a.asname) for a in node.names if a.name != "*")
            expected.append((module, node.level, symbols, None, node.lineno, node.end_lineno))
    return sorted(expected, key=lambda item: (item[4], item[0]))


def engine_imports(code: str):
    records = extract(code, "python").records
    return sorted(
        (
            (
                r.source_module,
                r.relative_depth,
                tuple(tuple(s) for s in r.imported_symbols),
                r.module_alias,
                r.line_span.start,
                r.line_span.end,
            )
            for r in records
        ),
        key=lambda item: (item[4], item[0]),
    )


class TestSamplePython:
    """Tests for the sample-python.py fixture."""

    def test_matches_ast(self, sample_python):
        """Test every import in the sample agrees with the ast module."""
        assert engine_imports(sample_python) == ast_imports(sample_python)

    def test_no_diagnostics(self, sample_python):
        """Test the sample is well-formed."""
        assert extract(sample_python, "python").diagnostics == ()

    def test_module_names(self, sample_python):
        """Test module names follow first-seen order."""
        assert extract_module_names(sample_python, "python") == [
            "os",
            "sys",
            "pathlib",
            "requests",
            "flask",
            "sqlalchemy",
            "sqlalchemy.orm",
            ".",
            "config",
            "models",
            "numpy",
            "pandas",
            "typing",
            "mymodule",
            "ujson",
            "json",
        ]

    def test_multiline_group(self, sample_python):
        """Test the parenthesized mymodule import keeps its full span."""
        record = next(
            r for r in extract(sample_python, "python").records if r.source_module == "mymodule"
        )

        assert record.line_span == LineSpan(27, 32)
        assert [s.name for s in record.imported_symbols] == [
            "ClassA",
            "ClassB",
            "function_a",
            "function_b",
        ]

    def test_relative_models(self, sample_python):
        """Test the depth-2 relative import."""
        record = next(
            r for r in extract(sample_python, "python").records if r.source_module == "models"
        )

        assert record.relative_depth == 2
        assert record.imported_symbols == (ImportedSymbol("User"), ImportedSymbol("Post"))

    def test_guarded_json(self, sample_python):
        """Test the ujson/json fallback pair is tagged."""
        records = extract(sample_python, "python").records
        branches = {
            r.source_module: r.conditional_branch
            for r in records
            if r.conditional_branch is not ConditionalBranch.NONE
        }

        assert branches == {
            "ujson": ConditionalBranch.PRIMARY,
            "json": ConditionalBranch.FALLBACK,
        }


class TestAstAgreement:
    """Tests for assorted Python forms checked against ast."""

    @pytest.mark.parametrize(
        "code",
        [
            "import os, sys\n",
            "import os.path as osp\n",
            "import a . b\n",
            "from . import a, b as c\n",
            "from ... import x\n",
            "from .pkg.mod import (\n    x as y,\n    z,\n)\n",
            "from m import \\\n    a, \\\n    b\n",
            "import a; import b\n",
            "from __future__ import annotations\n",
            "def f():\n    from collections import OrderedDict\n",
            "class A:\n    import json\n",
            "if True:\n    import a\nelse:\n    import b\n",
            "with ctx():\n    import a\n",
            "if TYPE_CHECKING: import typing_extensions\n",
            "from.models import X\n",
            "from..pkg import (a, b)\n",
            "def f(): import os\n",
            "class A: from json import loads\n",
            "async def f(): import asyncio\n",
            "def f(x: int) -> None: import os\n",
            "s = 'see \\\nimport os; x = 1'\nimport real\n",
        ],
    )
    def test_forms(self, code):
        """Test the engine and ast agree on common import forms."""
        assert engine_imports(code) == ast_imports(code)

    def test_wildcard(self):
        """Test star imports are reported as wildcards with no symbols."""
        (record,) = extract("from os.path import *\n", "python").records

        assert record.is_wildcard is True
        assert record.imported_symbols == ()

    def test_imports_in_strings_ignored(self):
        """Test import text inside string literals is not extracted."""
        code = 's = "import fake"\nt = """\nfrom fake import x\n"""\nimport real\n'

        assert engine_imports(code) == ast_imports(code)
