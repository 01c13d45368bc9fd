"""
Logging tests - library silence by default, opt-in sinks, Pino NDJSON format.
"""

import json

import pytest

from importlens import extract
from importlens.utils.logging import configure_logging, reset_logging


@pytest.fixture
def configured():
    """Call configure_logging() and always undo it."""
    handler_ids = []

    def _configure(**kwargs):
        handler_ids.extend(configure_logging(**kwargs))
        return handler_ids

    yield _configure
    reset_logging(handler_ids)


def ndjson(text: str):
    return [json.loads(line) for line in text.splitlines() if line.strip()]


class TestLibrarySilence:
    """Tests that importing importlens does not produce output."""

    def test_disabled_by_default(self, captured_logs):
        """Test no importlens records reach sinks until enabled."""
        extract("import os\n", "python")

        assert captured_logs == []

    def test_reset_disables_again(self, captured_logs):
        """Test reset_logging() silences the package again."""
        reset_logging(configure_logging(level="DEBUG"))

        extract("import os\n", "python")

        assert captured_logs == []


class TestConfigureLogging:
    """Tests for opt-in sinks."""

    def test_json_sink(self, configured, capsys):
        """Test JSON mode writes Pino-compatible lines to stdout."""
        configured(level="DEBUG", json_mode=True)

        extract("import os\nimport sys\n", "python")

        entries = ndjson(capsys.readouterr().out)
        summary = next(e for e in entries if e["msg"].startswith("Extracted"))
        assert summary["level"] == 20
        assert summary["records"] == 2
        assert summary["language"] == "python"
        assert isinstance(summary["time"], int)
        assert "pid" in summary

    def test_trace_diagnostics(self, configured, capsys):
        """Test each diagnostic is logged at TRACE."""
        configured(level="TRACE", json_mode=True)

        extract("import os as\n", "python")

        entries = ndjson(capsys.readouterr().out)
        trace = [e for e in entries if e["level"] == 10]
        assert len(trace) == 1
        assert trace[0]["msg"].startswith("malformed_import at lines 1-1")

    def test_level_filters(self, configured, capsys):
        """Test records below the configured level are dropped."""
        configured(level="INFO", json_mode=True)

        extract("import os\n", "python")

        assert capsys.readouterr().out == ""

    def test_human_sink_to_stderr(self, configured, capsys):
        """Test the default human format goes to stderr."""
        configured(level="DEBUG", json_mode=False)

        extract("import os\n", "python")

        captured = capsys.readouterr()
        assert "Extracted 1 import(s)" in captured.err
        assert captured.out == ""

    def test_file_sink(self, configured, tmp_path):
        """Test the log file captures DEBUG as NDJSON regardless of console level."""
        log_file = tmp_path / "importlens.log"
        configured(level="ERROR", log_file=str(log_file))

        extract("import os\n", "python")

        entries = ndjson(log_file.read_text(encoding="utf-8"))
        assert any(e["msg"].startswith("Extracted") for e in entries)

    def test_environment_defaults(self, configured, capsys, monkeypatch):
        """Test IMPORTLENS_LOG_* variables drive the defaults."""
        monkeypatch.setenv("IMPORTLENS_LOG_LEVEL", "debug")
        monkeypatch.setenv("IMPORTLENS_LOG_JSON", "1")
        monkeypatch.delenv("IMPORTLENS_LOG_FILE", raising=False)

        handler_ids = configured()

        extract("import os\n", "python")

        assert len(handler_ids) == 1
        assert ndjson(capsys.readouterr().out)
