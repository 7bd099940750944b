"""Tests for width estimation and greedy line breaking."""

import pytest

from formquill.engine.line_breaker import LineBreaker, wrap_text
from formquill.engine.text_metrics import (
    ApproximateWidthEstimator,
    ReportLabWidthEstimator,
    WidthEstimator,
    estimate_width,
)


class TestEstimateWidth:
    def test_half_of_font_size_per_character(self):
        assert estimate_width("abcd", 10) == 20.0

    def test_empty_text(self):
        assert estimate_width("", 12) == 0.0

    def test_approximate_estimator_matches_function(self):
        estimator = ApproximateWidthEstimator()
        assert estimator("hello world", 11) == estimate_width("hello world", 11)

    def test_reportlab_estimator_measures_real_glyphs(self):
        estimator = ReportLabWidthEstimator()
        assert estimator("iiii", 10, "Helvetica") < estimator("MMMM", 10, "Helvetica")


class TestWrapText:
    """Test cases for wrap_text."""

    SAMPLE = "The quick brown fox jumps over the lazy dog and keeps running far away"

    def test_empty_input_yields_no_lines(self):
        assert wrap_text("", 100, 10) == []

    def test_whitespace_only_input_yields_no_lines(self):
        assert wrap_text("   \n\t ", 100, 10) == []

    def test_short_text_is_one_line(self):
        assert wrap_text("Hello world", 500, 10) == ["Hello world"]

    @pytest.mark.parametrize("max_width", [60, 100, 150, 300])
    def test_lines_reconstruct_words(self, max_width):
        """Joining the lines with spaces gives back the words in order."""
        lines = wrap_text(self.SAMPLE, max_width, 10)
        assert " ".join(lines).split() == self.SAMPLE.split()

    @pytest.mark.parametrize("max_width", [60, 100, 150, 300])
    def test_multi_word_lines_fit(self, max_width):
        for line in wrap_text(self.SAMPLE, max_width, 10):
            if len(line.split()) > 1:
                assert estimate_width(line, 10) <= max_width

    def test_long_word_sits_alone(self):
        """A word wider than the line is never split."""
        lines = wrap_text("a supercalifragilistic b", 40, 10)
        assert lines == ["a", "supercalifragilistic", "b"]

    def test_collapses_whitespace_runs(self):
        assert wrap_text("one   two\nthree", 500, 10) == ["one two three"]

    def test_custom_estimator_is_used(self):
        class Wide(WidthEstimator):
            def width(self, text, font_size, font_name=None):
                return len(text) * font_size

        assert wrap_text("ab cd", 30, 10, Wide()) == ["ab", "cd"]
        assert wrap_text("ab cd", 30, 10) == ["ab cd"]

    def test_line_breaker_passes_font_name(self):
        seen = []

        class Recording(WidthEstimator):
            def width(self, text, font_size, font_name=None):
                seen.append(font_name)
                return 0.0

        LineBreaker(Recording(), font_name="Courier").break_text("a b", 100, 10)
        assert seen and set(seen) == {"Courier"}
