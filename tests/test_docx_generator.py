"""Tests for the DOCX backend and its package writer."""

import io
import zipfile
import xml.etree.ElementTree as ET

import pytest

from formquill.layout.footer import ResolvedFooter, ResolvedFooterSeparator
from formquill.models import ParsedFormSchema
from formquill.renderers.docx import generate_docx
from formquill.renderers.docx.generator import build_footer, template_runs
from formquill.styles import resolve_stylesheet


pytestmark = pytest.mark.integration

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
NS = {"w": W_NS}


def open_package(result):
    return zipfile.ZipFile(io.BytesIO(result.to_bytes()))


def xml_part(package, name):
    return ET.fromstring(package.read(name))


def all_text(root):
    return "".join(node.text or "" for node in root.iter(f"{{{W_NS}}}t"))


class TestTemplateRuns:
    def test_page_variables_become_fields(self):
        runs = template_runs("Page {{page}} of {{pages}}", "Helvetica", 18, "333333")
        assert [run.text for run in runs] == ["Page ", "1", " of ", "1"]
        assert [run.field_code for run in runs] == [None, "PAGE", None, "SECTIONPAGES"]

    def test_plain_text_is_one_run(self):
        runs = template_runs("Confidential", "Helvetica", 18, "333333")
        assert len(runs) == 1
        assert runs[0].field_code is None

    def test_empty_text_has_no_runs(self):
        assert template_runs("", "Helvetica", 18, "333333") == []


class TestBuildFooter:
    def test_disabled_footer_is_omitted(self):
        assert build_footer(ResolvedFooter(enabled=False), resolve_stylesheet()) is None

    def test_separator_becomes_top_border(self):
        footer = ResolvedFooter(
            enabled=True, left="Left", right="Right", separator=ResolvedFooterSeparator(enabled=True),
        )
        story = build_footer(footer, resolve_stylesheet())
        assert story.blocks[0].border_top is not None


class TestGenerateDocx:
    def test_package_parts(self, basic_schema, options):
        names = set(open_package(generate_docx(basic_schema, options)).namelist())
        for name in (
            "[Content_Types].xml",
            "_rels/.rels",
            "word/document.xml",
            "word/styles.xml",
            "word/settings.xml",
            "docProps/core.xml",
            "docProps/app.xml",
            "word/header1.xml",
            "word/footer1.xml",
        ):
            assert name in names

    def test_single_section_without_cover(self, basic_schema, options):
        result = generate_docx(basic_schema, options)
        assert len(result.sections) == 1
        document = xml_part(open_package(result), "word/document.xml")
        assert len(document.findall(".//w:sectPr", NS)) == 1
        assert document.find(".//w:pgNumType", NS) is None

    def test_cover_section_restarts_numbering(self, content_schema, options):
        result = generate_docx(content_schema, options)
        assert len(result.sections) == 2
        package = open_package(result)
        document = xml_part(package, "word/document.xml")
        sections = document.findall(".//w:sectPr", NS)
        assert len(sections) == 2
        assert sections[0].find("w:headerReference", NS) is None
        number_type = sections[1].find("w:pgNumType", NS)
        assert number_type.get(f"{{{W_NS}}}start") == "1"
        assert "word/header2.xml" in package.namelist()
        assert "word/header1.xml" not in package.namelist()

    def test_header_uses_page_fields(self, basic_schema, options):
        header = open_package(generate_docx(basic_schema, options)).read("word/header1.xml").decode("utf-8")
        assert " PAGE " in header
        assert " SECTIONPAGES " in header
        assert "Employee Intake" in header

    def test_footer_separator_and_social_links(self, content_schema, options):
        package = open_package(generate_docx(content_schema, options))
        footer = xml_part(package, "word/footer2.xml")
        assert footer.find(".//w:pBdr/w:top", NS) is not None
        assert len(footer.findall(".//w:hyperlink", NS)) == 2
        rels = package.read("word/_rels/footer2.xml.rels").decode("utf-8")
        assert "https://github.com/acme" in rels
        assert 'TargetMode="External"' in rels
        assert "Safety Checklist" in all_text(footer)

    def test_legacy_footer_shows_version(self, basic_schema, options):
        footer = xml_part(open_package(generate_docx(basic_schema, options)), "word/footer1.xml")
        assert "Version 2.0" in all_text(footer)

    def test_content_blocks_and_field_labels(self, content_schema, options):
        document = xml_part(open_package(generate_docx(content_schema, options)), "word/document.xml")
        text = all_text(document)
        assert "Before you start" in text
        assert "Extinguishers charged" in text
        assert "Dock" in text
        assert "Passed" in text
        assert "Inspector" not in text
        assert document.find(".//w:tbl", NS) is not None

    def test_title_without_content(self, basic_schema, options):
        document = xml_part(open_package(generate_docx(basic_schema, options)), "word/document.xml")
        text = all_text(document)
        assert "Employee Intake" in text
        assert "Full name" in text

    def test_cover_metadata(self, content_schema, options):
        text = all_text(xml_part(open_package(generate_docx(content_schema, options)), "word/document.xml"))
        assert "ACME Corp" in text
        assert "SC-042" in text
        assert "Quarterly inspection" in text

    def test_counts(self, basic_schema, content_schema, options):
        basic = generate_docx(basic_schema, options)
        assert basic.field_count == 6
        assert basic.page_count == 2
        assert generate_docx(content_schema, options).page_count == 2

    def test_core_properties(self, basic_schema, options):
        core = open_package(generate_docx(basic_schema, options)).read("docProps/core.xml").decode("utf-8")
        assert "Employee Intake" in core
        assert "HR Team" in core

    def test_social_icon_is_embedded(self, content_schema, options, png_factory):
        png_factory("icons/github.png", size=(16, 16))
        package = open_package(generate_docx(content_schema, options))
        assert any(name.startswith("word/media/") for name in package.namelist())

    def test_to_bytes_is_repeatable(self, content_schema, options):
        result = generate_docx(content_schema, options)
        first = zipfile.ZipFile(io.BytesIO(result.to_bytes())).namelist()
        second = zipfile.ZipFile(io.BytesIO(result.to_bytes())).namelist()
        assert first == second

    def test_from_mapping_with_unknown_content(self, options):
        schema = ParsedFormSchema.from_dict({
            "form": {"title": "Odd", "pages": 1},
            "content": [{"type": "carousel"}, {"type": "paragraph", "text": "Still here"}],
        })
        text = all_text(xml_part(open_package(generate_docx(schema, options)), "word/document.xml"))
        assert "Still here" in text
