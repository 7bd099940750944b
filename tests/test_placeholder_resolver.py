"""Tests for template variable resolution."""

from datetime import date
from types import SimpleNamespace

from formquill.engine.placeholder_resolver import (
    PlaceholderResolver,
    format_date,
    has_page_variables,
    resolve_page_variables,
    resolve_static_variables,
)


FORM = SimpleNamespace(title="Intake", version="3.1", author="Dana")


class TestPlaceholderResolver:
    def test_known_keys_are_replaced(self):
        resolver = PlaceholderResolver({"name": "Ada"})
        assert resolver.resolve_text("Hi {{ name }}!") == "Hi Ada!"

    def test_unknown_keys_are_kept(self):
        resolver = PlaceholderResolver({"name": "Ada"})
        assert resolver.resolve_text("{{page}} / {{name}}") == "{{page}} / Ada"

    def test_text_without_placeholders_is_untouched(self):
        assert PlaceholderResolver().resolve_text("plain") == "plain"


class TestStaticVariables:
    def test_format_date(self):
        assert format_date(date(2024, 3, 5)) == "3/5/2024"

    def test_static_substitution(self):
        text = "{{title}} v{{version}} by {{author}} on {{date}}"
        resolved = resolve_static_variables(text, FORM, date(2024, 12, 31))
        assert resolved == "Intake v3.1 by Dana on 12/31/2024"

    def test_page_variables_survive_static_pass(self):
        resolved = resolve_static_variables("Page {{page}} of {{pages}}", FORM)
        assert resolved == "Page {{page}} of {{pages}}"

    def test_missing_metadata_becomes_empty(self):
        form = SimpleNamespace(title="T", version=None, author=None)
        assert resolve_static_variables("[{{version}}]", form) == "[]"


class TestPageVariables:
    def test_page_substitution(self):
        assert resolve_page_variables("Page {{page}} of {{pages}}", 2, 5) == "Page 2 of 5"

    def test_empty_text(self):
        assert resolve_page_variables("", 1, 1) == ""

    def test_has_page_variables(self):
        assert has_page_variables("{{pages}} total")
        assert not has_page_variables("{{title}}")
        assert not has_page_variables(None)
