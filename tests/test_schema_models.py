"""Tests for schema ingestion."""

import pytest

from formquill.exceptions import SchemaError
from formquill.models import ContentElement, CoverPage, FooterConfig, NormalizedFormField, ParsedFormSchema


class TestParsedFormSchema:
    def test_nested_form_keys(self, basic_schema):
        assert basic_schema.form.title == "Employee Intake"
        assert basic_schema.form.version == "2.0"
        assert basic_schema.form.pages == 2
        assert len(basic_schema.fields) == 6
        assert basic_schema.cover_page is None
        assert basic_schema.footer is None
        assert not basic_schema.has_content

    def test_top_level_form_keys(self):
        schema = ParsedFormSchema.from_dict({"title": "Flat", "pages": 3, "footer": {"left": "x"}})
        assert schema.form.title == "Flat"
        assert schema.form.pages == 3
        assert schema.footer.left == "x"

    def test_content_and_cover(self, content_schema):
        assert content_schema.has_content
        assert content_schema.has_cover_page
        assert content_schema.cover_page.document_number == "SC-042"
        assert content_schema.cover_page.revision_history[0].description == "Initial"
        assert content_schema.footer.separator.enabled is True

    def test_schema_key_is_alias_for_content(self):
        schema = ParsedFormSchema.from_dict({"form": {"title": "T"}, "schema": [{"type": "paragraph", "text": "x"}]})
        assert schema.content[0].text == "x"

    def test_non_mapping_is_rejected(self):
        with pytest.raises(SchemaError):
            ParsedFormSchema.from_dict(["not", "a", "mapping"])

    def test_invalid_page_count(self):
        with pytest.raises(SchemaError):
            ParsedFormSchema.from_dict({"form": {"title": "T", "pages": "many"}})

    def test_page_count_at_least_one(self):
        assert ParsedFormSchema.from_dict({"form": {"title": "T", "pages": 0}}).form.pages == 1


class TestNormalizedFormField:
    def test_camel_case_keys(self):
        field = NormalizedFormField.from_dict({
            "name": "bio", "type": "TextArea", "fontSize": 9, "maxLength": 200,
            "position": {"x": 10, "y": 20}, "page": 3, "tooltip": "About you",
        })
        assert field.type == "textarea"
        assert field.font_size == 9
        assert field.max_length == 200
        assert field.multiline is True
        assert field.position.mode == "absolute"
        assert field.extra == {"tooltip": "About you"}

    def test_fallback_name(self):
        assert NormalizedFormField.from_dict({"type": "checkbox"}, index=4).name == "checkbox_5"

    def test_invalid_definition(self):
        with pytest.raises(SchemaError):
            NormalizedFormField.from_dict("text")

    def test_invalid_page(self):
        with pytest.raises(SchemaError):
            NormalizedFormField.from_dict({"name": "a", "type": "text", "page": "two"})

    def test_option_mappings(self):
        field = NormalizedFormField.from_dict({"name": "c", "type": "radio", "options": [{"label": "Yes", "value": "y"}, "No"]})
        assert [(o.label, o.value) for o in field.options] == [("Yes", "y"), ("No", "No")]


class TestCoverAndFooterModels:
    def test_cover_true_gives_empty_cover(self):
        assert CoverPage.from_dict(True) == CoverPage()
        assert CoverPage.from_dict(False) is None

    def test_metadata_rows_in_display_order(self):
        cover = CoverPage(organization="ACME", status="Draft", approved_by="Lee")
        rows = cover.metadata_rows(version="2.0", author="Dana")
        assert rows == [
            ("Organization", "ACME"), ("Status", "Draft"), ("Version", "2.0"),
            ("Author", "Dana"), ("Approved By", "Lee"),
        ]

    def test_legal_lines(self):
        cover = CoverPage(copyright="(c)", distribution_statement="Internal")
        assert cover.legal_lines() == ["(c)", "Internal"]

    def test_footer_flags(self):
        footer = FooterConfig.from_dict({"showPageNumbers": True, "showDate": 1, "socialLinks": {"twitter": "https://t"}})
        assert footer.show_page_numbers and footer.show_date
        assert footer.social_links.x == "https://t"
        assert FooterConfig.from_dict(None) is None

    def test_content_element_defaults(self):
        spacer = ContentElement.from_dict({"type": "spacer"})
        assert spacer.height == 12.0
        assert ContentElement.from_dict({"text": "x"}).type == "paragraph"
