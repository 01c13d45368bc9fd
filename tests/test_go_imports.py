"""
Go extraction tests - import blocks, aliases, dot and blank imports.
"""

from importlens import LineSpan, extract, extract_module_names


class TestSampleGo:
    """Tests for the sample-go.go fixture."""

    def test_module_names(self, sample_go):
        """Test every import path across all blocks, in order."""
        assert extract_module_names(sample_go, "go") == [
            "fmt",
            "net/http",
            "os",
            "encoding/json",
            "io",
            "context",
            "github.com/sirupsen/logrus",
            "math",
            "github.com/lib/pq",
            "github.com/gin-gonic/gin",
            "github.com/spf13/cobra",
            "github.com/gorilla/mux",
        ]

    def test_block_records_share_span(self, sample_go):
        """Test specs in one block carry the block's span."""
        records = extract(sample_go, "go").records

        assert [r.line_span for r in records[:3]] == [LineSpan(4, 8)] * 3

    def test_aliases(self, sample_go):
        """Test named, blank and dot imports."""
        records = {r.source_module: r for r in extract(sample_go, "go").records}

        assert records["github.com/sirupsen/logrus"].module_alias == "log"
        assert records["github.com/lib/pq"].module_alias == "_"
        assert records["github.com/gorilla/mux"].module_alias == "mux"
        assert records["math"].is_wildcard is True
        assert records["math"].module_alias is None
        assert records["fmt"].module_alias is None

    def test_function_bodies_ignored(self, sample_go):
        """Test code after the imports yields nothing extra."""
        result = extract(sample_go, "go")

        assert len(result.records) == 12
        assert result.diagnostics == ()


class TestGoForms:
    """Tests for individual Go forms."""

    def test_single_line_block(self):
        """Test a block written on one line with semicolons."""
        code = 'import ("fmt"; "os")\n'

        assert extract_module_names(code, "go") == ["fmt", "os"]

    def test_raw_string_path(self):
        """Test backquoted import paths."""
        assert extract_module_names("import `fmt`\n", "go") == ["fmt"]

    def test_local_relative_path(self):
        """Test ./ and ../ import paths count as relative."""
        first, second = extract('import (\n\t"./local"\n\t"../shared/util"\n)\n', "go").records

        assert (first.source_module, first.relative_depth) == ("local", 1)
        assert (second.source_module, second.relative_depth) == ("shared/util", 2)

    def test_commented_spec_skipped(self):
        """Test commented-out specs inside a block are dropped."""
        code = 'import (\n\t"fmt"\n\t// "unused"\n\t/* "gone" */\n)\n'

        assert extract_module_names(code, "go") == ["fmt"]

    def test_unterminated_block(self):
        """Test an import block missing its parenthesis is diagnosed."""
        result = extract('package main\n\nimport (\n\t"fmt"\n', "go")

        assert result.records == ()
        assert result.diagnostics[0].line_span == LineSpan(3, 4)
