"""
Unit tests for core.rules

Form path table and filename pattern loading.
"""
import json

import pytest

from edgar_doc_resolver.core.rules import (
    DEFAULT_FORM_PATHS,
    compile_patterns,
    default_filename_patterns,
    load_filename_patterns,
    normalize_form_paths,
)


class TestFormPaths:
    """Test the deterministic form path table."""

    def test_ownership_forms(self):
        for form_type in ("3", "4", "5", "4/A"):
            assert DEFAULT_FORM_PATHS[form_type] == "xslF345X05/ownership.xml"

    def test_other_fixed_path_families(self):
        for form_type in ("SCHEDULE 13D", "SC 13G", "D", "C", "C-AR", "144", "EFFECT", "1-A", "QUALIF"):
            assert form_type in DEFAULT_FORM_PATHS

    def test_periodic_reports_not_mapped(self):
        for form_type in ("10-K", "10-Q", "8-K", "S-1"):
            assert form_type not in DEFAULT_FORM_PATHS

    def test_normalize_form_paths(self):
        assert normalize_form_paths({" sc 13d ": "/a/b.xml"}) == {"SC 13D": "a/b.xml"}


class TestFilenamePatterns:
    """Test pattern compilation and loading."""

    def test_defaults_compile(self):
        patterns = default_filename_patterns()
        assert "10-K" in patterns
        assert patterns["10-K"][0].search("AAPL-10K_2024.HTM")

    def test_10k_pattern_skips_amendment_names(self):
        pattern = default_filename_patterns()["10-K"][0]
        assert pattern.search("d10k.htm")
        assert not pattern.search("d10ka.htm")

    def test_compile_normalizes_keys(self):
        patterns = compile_patterns({"def 14a": ["proxy"]})
        assert "DEF 14A" in patterns

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "patterns.json"
        path.write_text(json.dumps({"10-q": ["q[1-3]", "10q"]}))

        patterns = load_filename_patterns(path)

        assert list(patterns) == ["10-Q"]
        assert [p.pattern for p in patterns["10-Q"]] == ["q[1-3]", "10q"]

    def test_load_rejects_non_object(self, tmp_path):
        path = tmp_path / "patterns.json"
        path.write_text("[]")
        with pytest.raises(ValueError):
            load_filename_patterns(path)

    def test_load_rejects_non_string_patterns(self, tmp_path):
        path = tmp_path / "patterns.json"
        path.write_text(json.dumps({"10-K": [1, 2]}))
        with pytest.raises(ValueError):
            load_filename_patterns(path)
