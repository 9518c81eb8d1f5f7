"""Tests for report layout helpers."""

import math

from code_insights.report import (
    Severity,
    format_mapping,
    format_score,
    histogram_table,
    js_round,
    padcenter,
    padleft,
    padright,
    percent,
    severity,
)


class TestRounding:
    """Test score rounding and formatting."""

    def test_half_up(self):
        assert js_round(2.5) == 3
        assert js_round(-2.5) == -2
        assert js_round(170.4) == 170

    def test_format_score(self):
        assert format_score(49.6) == "50"
        assert format_score(-math.inf) == "-Infinity"
        assert format_score(math.inf) == "Infinity"


class TestPadding:
    """Test padding helpers."""

    def test_padleft_padright(self):
        assert padleft(7, 4) == "   7"
        assert padright("ab", 4) == "ab  "
        assert padleft("toolong", 3) == "toolong"

    def test_padcenter_favours_left(self):
        assert padcenter(0, 6) == "   0  "
        assert padcenter("50", 6) == "  50  "
        assert padcenter("171", 6) == "  171 "

    def test_percent(self):
        assert percent(1, 4) == "  ( 25.00%)"
        assert percent(3, 0) == "  (  0.00%)"


class TestSeverity:
    """Test maintainability buckets."""

    def test_buckets(self):
        assert severity(171) is Severity.HEALTHY
        assert severity(140.5) is Severity.HEALTHY
        assert severity(140) is Severity.CAUTION
        assert severity(100.1) is Severity.CAUTION
        assert severity(100) is Severity.FLAGGED
        assert severity(-math.inf) is Severity.FLAGGED


class TestHistogramTable:
    """Test bucket tables."""

    def test_numeric_labels_sort_numerically(self):
        rows = histogram_table({"100": 1, "20": 3, "3": 12})
        assert rows == [
            "         3 | 12",
            "        20 |  3",
            "       100 |  1",
        ]

    def test_ranged(self):
        rows = histogram_table({"0": 2, "10": 1}, ranged=True)
        assert rows == ["      0-10 | 2", "        10 | 1"]

    def test_text_labels(self):
        rows = histogram_table({"react": 2, "lodash": 1})
        assert rows[0].strip().startswith("lodash")

    def test_empty(self):
        assert histogram_table({}) == []


class TestFormatMapping:
    """Test nested metric dumps."""

    def test_nested(self):
        lines = format_mapping(
            {"sloc": {"logical": 3}, "items": ["a"], "empty": [], "x": 1.5, "n": None}
        )
        assert lines == [
            "sloc:",
            "  logical: 3",
            "items:",
            "  - a",
            "empty: (empty)",
            "x: 1.5",
            "n: null",
        ]

    def test_floats(self):
        assert format_mapping({"a": 2.0, "b": math.inf}) == ["a: 2", "b: Infinity"]
