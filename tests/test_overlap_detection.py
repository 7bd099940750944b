"""Tests for overlap diagnostics."""

from formquill.engine.layout_context import DrawnElement
from formquill.engine.layout_validator import LayoutValidator, OverlapDiagnostic, detect_overlaps


class TestDetectOverlaps:
    def test_overlapping_pair_is_reported(self):
        elements = [
            DrawnElement(0, 0, 0, 100, 20, "title"),
            DrawnElement(0, 50, 10, 100, 20, "field:name"),
        ]
        assert detect_overlaps(elements) == [OverlapDiagnostic(0, "title", "field:name")]

    def test_touching_elements_are_not_reported(self):
        elements = [
            DrawnElement(0, 0, 0, 100, 20, "a"),
            DrawnElement(0, 0, 20, 100, 20, "b"),
        ]
        assert detect_overlaps(elements) == []

    def test_elements_on_different_pages_do_not_overlap(self):
        elements = [
            DrawnElement(0, 0, 0, 100, 20, "a"),
            DrawnElement(1, 0, 0, 100, 20, "b"),
        ]
        assert detect_overlaps(elements) == []

    def test_each_pair_reported_once(self):
        elements = [DrawnElement(0, 0, 0, 10, 10, label) for label in ("a", "b", "c")]
        diagnostics = detect_overlaps(elements)
        assert [(d.first, d.second) for d in diagnostics] == [("a", "b"), ("a", "c"), ("b", "c")]

    def test_empty_input(self):
        assert detect_overlaps([]) == []


class TestLayoutValidator:
    def test_overlaps_become_warnings(self):
        elements = [DrawnElement(0, 0, 0, 10, 10, "a"), DrawnElement(0, 5, 5, 10, 10, "b")]
        validator = LayoutValidator(elements, page_count=1)
        is_valid, errors, warnings = validator.validate()
        assert is_valid
        assert errors == []
        assert warnings == ["page 0: 'a' overlaps 'b'"]
        assert validator.get_summary() == {"elements": 2, "errors": 0, "warnings": 1, "overlaps": 1}

    def test_element_outside_page_range_is_an_error(self):
        validator = LayoutValidator([DrawnElement(3, 0, 0, 1, 1, "stray")], page_count=2)
        is_valid, errors, _ = validator.validate()
        assert not is_valid
        assert "stray" in errors[0]
