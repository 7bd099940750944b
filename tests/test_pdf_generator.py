"""End-to-end tests for the PDF backend."""

import io

import pytest
from pypdf import PdfReader
from reportlab.pdfgen.canvas import Canvas

from formquill.exceptions import CompilationError, RenderingError
from formquill.models import ParsedFormSchema
from formquill.renderers.pdf import generate_pdf
from formquill.renderers.pdf import generator as pdf_generator


pytestmark = pytest.mark.integration


def read(result):
    return PdfReader(io.BytesIO(result.bytes))


class TestGeneratePdf:
    def test_page_count_without_cover(self, basic_schema, options):
        result = generate_pdf(basic_schema, options)
        assert result.page_count == 2
        assert len(read(result).pages) == 2

    def test_page_count_with_cover(self, content_schema, options):
        result = generate_pdf(content_schema, options)
        assert result.page_count == 2
        assert len(read(result).pages) == 2

    def test_acroform_fields(self, basic_schema, options):
        result = generate_pdf(basic_schema, options)
        fields = read(result).get_fields()
        for name in ("full_name", "notes", "agree", "shift", "department", "signature_date"):
            assert name in fields
        assert result.field_count == 6

    def test_unknown_field_types_are_not_counted(self, options):
        schema = ParsedFormSchema.from_dict({
            "form": {"title": "T", "pages": 1},
            "fields": [
                {"name": "a", "type": "text", "position": {"x": 50, "y": -30}},
                {"name": "b", "type": "hologram"},
            ],
        })
        assert generate_pdf(schema, options).field_count == 1

    def test_header_numbers_exclude_cover(self, content_schema, options):
        reader = read(generate_pdf(content_schema, options))
        cover_text = reader.pages[0].extract_text()
        content_text = reader.pages[1].extract_text()
        assert "Safety Checklist" in cover_text
        assert "Page 1 of 1" not in cover_text
        assert "Page 1 of 1" in content_text

    def test_page_numbers_per_page(self, basic_schema, options):
        reader = read(generate_pdf(basic_schema, options))
        assert "Page 1 of 2" in reader.pages[0].extract_text()
        assert "Page 2 of 2" in reader.pages[1].extract_text()

    def test_legacy_footer_shows_version(self, basic_schema, options):
        text = read(generate_pdf(basic_schema, options)).pages[0].extract_text()
        assert "Version 2.0" in text

    def test_metadata(self, basic_schema, options):
        metadata = read(generate_pdf(basic_schema, options)).metadata
        assert metadata.title == "Employee Intake"
        assert metadata.author == "HR Team"
        assert metadata.creator == "formquill"
        assert metadata.producer.startswith("formquill")

    def test_overlaps_are_reported_not_fatal(self, options):
        schema = ParsedFormSchema.from_dict({
            "form": {"title": "T", "pages": 2},
            "fields": [
                {"name": "a", "type": "text", "page": 2, "position": {"x": 100, "y": 400}},
                {"name": "b", "type": "text", "page": 2, "position": {"x": 150, "y": 405}},
            ],
        })
        result = generate_pdf(schema, options)
        assert any({d.first, d.second} == {"field:a", "field:b"} for d in result.overlaps)
        assert all(d.page == 1 for d in result.overlaps if "field:a" in (d.first, d.second))

    def test_fields_past_last_page_clamp(self, options):
        schema = ParsedFormSchema.from_dict({
            "form": {"title": "T", "pages": 2},
            "fields": [{"name": "late", "type": "text", "page": 99, "position": {"x": 100, "y": 400}}],
        })
        result = generate_pdf(schema, options)
        field = next(e for e in result.drawn_elements if e.label == "field:late")
        assert field.page == 1

    def test_cover_images_and_social_icons(self, content_schema_dict, options, png_factory):
        png_factory("logo.png", size=(300, 100))
        png_factory("cover.png", size=(200, 300))
        png_factory("icons/github.png", size=(16, 16))
        cover = content_schema_dict["form"]["coverPage"]
        cover["logo"] = "logo.png"
        cover["coverImage"] = "cover.png"
        result = generate_pdf(ParsedFormSchema.from_dict(content_schema_dict), options)
        assert len(read(result).pages) == 2
        assert any(e.label == "cover:logo" for e in result.drawn_elements)
        assert not any(e.label == "cover:image" for e in result.drawn_elements)

    def test_missing_logo_is_skipped(self, content_schema_dict, options, caplog):
        content_schema_dict["form"]["coverPage"]["logo"] = "absent.png"
        result = generate_pdf(ParsedFormSchema.from_dict(content_schema_dict), options)
        assert result.page_count == 2
        assert "Logo skipped" in caplog.text

    def test_long_content_adds_pages(self, options):
        schema = ParsedFormSchema.from_dict({
            "form": {"title": "Long", "pages": 1},
            "content": [{"type": "paragraph", "text": " ".join(["lorem"] * 2500)}],
        })
        result = generate_pdf(schema, options)
        assert result.page_count > 1
        assert len(read(result).pages) == result.page_count


class TestPdfErrors:
    def test_canvas_failure_raises_rendering_error(self, basic_schema, options, monkeypatch):
        def broken_canvas(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(pdf_generator, "Canvas", broken_canvas)
        with pytest.raises(RenderingError):
            generate_pdf(basic_schema, options)

    def test_save_failure_raises_compilation_error(self, basic_schema, options, monkeypatch):
        def broken_save(self):
            raise ValueError("cannot serialise")

        monkeypatch.setattr(Canvas, "save", broken_save)
        with pytest.raises(CompilationError) as excinfo:
            generate_pdf(basic_schema, options)
        assert isinstance(excinfo.value.__cause__, ValueError)
