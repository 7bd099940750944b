"""Tests for field widget placement."""

import logging

import pytest

from formquill.engine.field_layout import field_size, place_fields
from formquill.engine.layout_context import initialize_layout
from formquill.layout.pagination_manager import PageMapping
from formquill.models import NormalizedFormField
from formquill.styles import default_stylesheet


def make(**data):
    data.setdefault("name", data.get("type", "f"))
    return NormalizedFormField.from_dict(data)


@pytest.fixture
def ctx():
    context = initialize_layout(None, default_stylesheet(), 2)
    context.content_baseline = 700
    return context


def widgets(ctx, name=None):
    return [
        p for p in ctx.placements
        if p.kind == "field_widget" and (name is None or p.payload["name"] == name)
    ]


class TestFieldSize:
    def test_defaults(self):
        assert field_size(make(type="text")) == (200.0, 20.0)
        assert field_size(make(type="textarea")) == (300.0, 60.0)
        assert field_size(make(type="signature")) == (200.0, 40.0)

    def test_explicit_size(self):
        assert field_size(make(type="text", width=120, height=30)) == (120.0, 30.0)

    def test_square_buttons(self):
        assert field_size(make(type="checkbox", width=18)) == (18.0, 18.0)


class TestPlaceFields:
    def test_relative_field_uses_baseline(self, ctx):
        placed = place_fields(ctx, [make(type="text", x=50, y=-50)], PageMapping(2))
        assert placed[0].field.position.y == 650
        assert widgets(ctx)[0].rect.y == 650

    def test_absolute_field_keeps_coordinates(self, ctx):
        placed = place_fields(ctx, [make(type="text", page=2, x=80, y=400)], PageMapping(2))
        assert placed[0].page == 1
        assert widgets(ctx)[0].rect.y == 400

    def test_page_past_the_end_clamps(self, ctx):
        placed = place_fields(ctx, [make(type="text", page=99, x=80, y=400)], PageMapping(2))
        assert placed[0].page == 1

    def test_unknown_type_is_skipped(self, ctx, caplog):
        with caplog.at_level(logging.WARNING):
            placed = place_fields(ctx, [make(type="slider"), make(type="text", y=-10)], PageMapping(2))
        assert [p.field.type for p in placed] == ["text"]
        assert "slider" in caplog.text

    def test_required_label(self, ctx):
        place_fields(ctx, [make(type="text", label="Name", required=True, y=-40)], PageMapping(2))
        labels = [p.payload["text"] for p in ctx.placements if p.role == "field_label"]
        assert labels == ["Name *"]

    def test_skip_labels_omits_text_labels_only(self, ctx):
        fields = [make(type="text", label="Name", y=-40), make(type="checkbox", label="Agree", y=-80)]
        place_fields(ctx, fields, PageMapping(2), skip_labels=True)
        labels = [p.payload["text"] for p in ctx.placements if p.role == "field_label"]
        assert labels == ["Agree"]

    def test_radio_options_stack_downwards(self, ctx):
        field = make(type="radio", name="shift", label="Shift", options=["Day", "Night"], default="Night", y=-40)
        place_fields(ctx, [field], PageMapping(2))
        radios = widgets(ctx, "shift")
        assert [p.payload["value"] for p in radios] == ["Day", "Night"]
        assert [p.payload["selected"] for p in radios] == [False, True]
        assert radios[1].rect.y < radios[0].rect.y

    def test_dropdown_defaults_to_first_option(self, ctx):
        field = make(type="dropdown", name="dept", options=[{"label": "Sales", "value": "s"}], x=300, y=-40)
        place_fields(ctx, [field], PageMapping(2))
        widget = widgets(ctx, "dept")[0]
        assert widget.payload["widget"] == "choice"
        assert widget.payload["options"] == ["Sales"]
        assert widget.payload["value"] == "Sales"

    def test_signature_with_date(self, ctx):
        field = make(type="signature", name="sig", includeDate=True, y=-80)
        placed = place_fields(ctx, [field], PageMapping(2))
        names = [p.payload["name"] for p in widgets(ctx)]
        assert names == ["sig", "sig_date"]
        assert placed[0].rect.width > 200

    def test_signature_date_defaults_on(self, ctx):
        place_fields(ctx, [make(type="signature", name="sig", y=-80)], PageMapping(2))
        assert [p.payload["name"] for p in widgets(ctx)] == ["sig", "sig_date"]

    def test_signature_without_date(self, ctx):
        place_fields(ctx, [make(type="signature", name="sig", includeDate=False, y=-80)], PageMapping(2))
        assert [p.payload["name"] for p in widgets(ctx)] == ["sig"]

    def test_checkbox_checked_state(self, ctx):
        place_fields(ctx, [make(type="checkbox", name="ok", default="yes", y=-20)], PageMapping(2))
        assert widgets(ctx, "ok")[0].payload["checked"] is True
