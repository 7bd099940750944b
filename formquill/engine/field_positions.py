"""Resolution of baseline-relative field coordinates."""

from __future__ import annotations

from typing import Iterable, List

from ..models.fields import FieldPosition, NormalizedFormField


def adjust_field_position(field: NormalizedFormField, baseline: float) -> NormalizedFormField:
    """Return ``field`` with an absolute position.

    Relative positions (first logical page) are offset from the content
    baseline: ``y = baseline + y``. Absolute positions are returned unchanged.
    The input field is never modified.
    """
    if not field.position.is_relative:
        return field
    position = field.position
    return field.with_position(FieldPosition(x=position.x, y=baseline + position.y, mode="absolute"))


def resolve_field_positions(fields: Iterable[NormalizedFormField], baseline: float) -> List[NormalizedFormField]:
    return [adjust_field_position(field, baseline) for field in fields]
