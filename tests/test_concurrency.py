"""
Concurrency tests - extract() keeps no shared mutable state between calls.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from importlens import extract, supported_languages

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SAMPLES = [
    ("sample-python.py", "python"),
    ("sample-javascript.js", "javascript"),
    ("sample-typescript.ts", "typescript"),
    ("sample-go.go", "go"),
    ("sample-rust.rs", "rust"),
]


class TestParallelExtraction:
    """Tests for running many extractions at once."""

    def test_threads_match_sequential(self):
        """Test parallel results equal sequential results for every sample."""
        supported_languages()
        sources = [
            ((FIXTURES_DIR / name).read_text(encoding="utf-8"), language)
            for name, language in SAMPLES
        ] * 8
        expected = [extract(source, language) for source, language in sources]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda item: extract(*item), sources))

        assert results == expected

    def test_guard_ids_restart_per_call(self):
        """Test guard numbering is per file, not per process."""
        code = "try:\n    import a\nexcept ImportError:\n    import b\n"

        first = extract(code, "python").records
        second = extract(code, "python").records

        assert [r.guard_id for r in first] == [r.guard_id for r in second] == [0, 0]
