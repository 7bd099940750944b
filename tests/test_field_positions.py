"""Tests for baseline-relative field position resolution."""

from formquill.engine.field_positions import adjust_field_position, resolve_field_positions
from formquill.models import NormalizedFormField
from formquill.models.fields import FieldPosition


def make_field(page, x=50.0, y=-50.0):
    return NormalizedFormField.from_dict({"name": f"f{page}", "type": "text", "page": page, "x": x, "y": y})


class TestPositionMode:
    def test_first_page_fields_are_relative(self):
        assert make_field(1).position.mode == "relative"

    def test_later_page_fields_are_absolute(self):
        assert make_field(2).position.mode == "absolute"


class TestAdjustFieldPosition:
    def test_relative_offset_is_added_to_baseline(self):
        adjusted = adjust_field_position(make_field(1, y=-50), 700)
        assert adjusted.position.y == 650
        assert adjusted.position.x == 50
        assert adjusted.position.mode == "absolute"

    def test_absolute_fields_are_unchanged(self):
        field = make_field(2, y=400)
        assert adjust_field_position(field, 700) is field
        assert field.position.y == 400

    def test_input_is_not_mutated(self):
        field = make_field(1, y=-50)
        adjust_field_position(field, 700)
        assert field.position.y == -50
        assert field.position.is_relative

    def test_adjustment_is_applied_once(self):
        once = adjust_field_position(make_field(1, y=-50), 700)
        twice = adjust_field_position(once, 700)
        assert twice.position.y == 650

    def test_resolve_field_positions(self):
        fields = [make_field(1, y=-10), make_field(2, y=300)]
        resolved = resolve_field_positions(fields, 500)
        assert [field.position.y for field in resolved] == [490, 300]


class TestDirectConstruction:
    def test_first_page_field_resolves_against_baseline(self):
        field = NormalizedFormField(name="a", type="text", page=1, position=FieldPosition(x=50, y=-50))
        assert field.position.mode == "relative"
        assert adjust_field_position(field, 700).position.y == 650

    def test_later_page_default_position_is_untouched(self):
        field = NormalizedFormField(name="b", type="text", page=2)
        assert field.position.mode == "absolute"
        adjusted = adjust_field_position(field, 700)
        assert adjusted is field
        assert adjusted.position.y == 0

    def test_explicit_mode_is_kept(self):
        field = NormalizedFormField(
            name="c", type="text", page=1, position=FieldPosition(x=10, y=300, mode="absolute")
        )
        assert adjust_field_position(field, 700).position.y == 300


class TestIncludeDate:
    def test_signature_includes_date_by_default(self):
        field = NormalizedFormField.from_dict({"name": "sig", "type": "signature"})
        assert field.include_date is True
        assert NormalizedFormField(name="sig", type="signature").include_date is True

    def test_date_can_be_disabled(self):
        field = NormalizedFormField.from_dict({"name": "sig", "type": "signature", "includeDate": False})
        assert field.include_date is False
