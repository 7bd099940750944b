"""Tests for footer configuration resolution."""

from datetime import date

from formquill.layout.footer import PAGE_NUMBER_TEMPLATE, ResolvedFooter, resolve_footer_config
from formquill.models import FooterConfig, FormMetadata


TODAY = date(2024, 3, 5)


def footer(**data):
    return FooterConfig.from_dict(data)


class TestLegacyFooter:
    def test_no_footer_with_version_shows_version(self):
        form = FormMetadata(title="T", version="2.0")
        resolved = resolve_footer_config(None, form)
        assert resolved.enabled is True
        assert resolved.center == "Version 2.0"
        assert resolved.left == ""
        assert resolved.right == ""

    def test_no_footer_without_version_is_disabled(self):
        resolved = resolve_footer_config(None, FormMetadata(title="T"))
        assert resolved == ResolvedFooter(enabled=False)


class TestExplicitFooter:
    form = FormMetadata(title="Intake", version="1.2", author="Dana")

    def test_explicit_disable_wins(self):
        resolved = resolve_footer_config(footer(enabled=False, left="x", showPageNumbers=True), self.form)
        assert resolved.enabled is False
        assert not resolved.has_text
        assert resolved.social_links == {}

    def test_slots_are_resolved(self):
        resolved = resolve_footer_config(footer(left="{{title}}", right="by {{author}}"), self.form, TODAY)
        assert resolved.left == "Intake"
        assert resolved.right == "by Dana"
        assert resolved.enabled

    def test_text_fills_empty_center(self):
        assert resolve_footer_config(footer(text="Confidential"), self.form).center == "Confidential"
        assert resolve_footer_config(footer(text="A", center="B"), self.form).center == "B"

    def test_copyright_fills_empty_left(self):
        assert resolve_footer_config(footer(copyright="(c) ACME"), self.form).left == "(c) ACME"

    def test_page_numbers_fill_right_and_stay_unresolved(self):
        resolved = resolve_footer_config(footer(showPageNumbers=True), self.form)
        assert resolved.right == PAGE_NUMBER_TEMPLATE

    def test_show_version_appends_to_center(self):
        assert resolve_footer_config(footer(showVersion=True), self.form).center == "Version 1.2"
        resolved = resolve_footer_config(footer(center="Draft", showVersion=True), self.form)
        assert resolved.center == "Draft - Version 1.2"

    def test_show_date_prefers_left(self):
        resolved = resolve_footer_config(footer(showDate=True), self.form, TODAY)
        assert resolved.left == "3/5/2024"

    def test_show_date_falls_back_to_right(self):
        resolved = resolve_footer_config(footer(copyright="(c)", showDate=True), self.form, TODAY)
        assert resolved.left == "(c)"
        assert resolved.right == "3/5/2024"

    def test_show_date_appends_to_center_when_sides_taken(self):
        resolved = resolve_footer_config(
            footer(copyright="(c)", showPageNumbers=True, center="Draft", showDate=True), self.form, TODAY,
        )
        assert resolved.center == "Draft | 3/5/2024"

    def test_empty_footer_is_disabled(self):
        assert resolve_footer_config(footer(), self.form).enabled is False

    def test_resolution_is_deterministic(self):
        config = footer(left="{{date}}", showVersion=True, socialLinks={"github": "https://g"})
        assert resolve_footer_config(config, self.form, TODAY) == resolve_footer_config(config, self.form, TODAY)


class TestSocialLinksAndSeparator:
    form = FormMetadata(title="T")

    def test_social_links_alone_enable_footer(self):
        resolved = resolve_footer_config(footer(socialLinks={"github": "https://github.com/x"}), self.form)
        assert resolved.enabled
        assert not resolved.has_text

    def test_social_links_follow_platform_order(self):
        config = footer(socialLinks={"website": "https://w", "youtube": "https://y", "twitter": "https://t"})
        resolved = resolve_footer_config(config, self.form)
        assert list(resolved.social_links) == ["youtube", "x", "website"]

    def test_separator_defaults(self):
        separator = resolve_footer_config(footer(left="x"), self.form).separator
        assert (separator.enabled, separator.color, separator.thickness) == (False, "#cccccc", 0.5)

    def test_separator_overrides(self):
        config = footer(left="x", separator={"enabled": True, "color": "#ff0000", "thickness": 2})
        separator = resolve_footer_config(config, self.form).separator
        assert (separator.enabled, separator.color, separator.thickness) == (True, "#ff0000", 2.0)

    def test_separator_boolean_shorthand(self):
        assert resolve_footer_config(footer(left="x", separator=True), self.form).separator.enabled
