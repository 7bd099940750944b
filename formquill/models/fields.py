"""Form field model.

Field coordinates come in two flavours. Fields on the first logical page are
authored relative to the end of the static content (the content baseline),
which is only known after layout; fields on later pages carry absolute page
coordinates. The flavour is decided once from the page when a field is
created, unless the caller tags the position explicitly, and is carried on
``FieldPosition`` so no later stage has to reinterpret the number.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal, Mapping, Optional

from ..exceptions import SchemaError
from .base import as_float, as_optional_float, as_text, pick


PositionMode = Literal["relative", "absolute"]

FIELD_TYPES = ("text", "textarea", "checkbox", "radio", "dropdown", "signature")


@dataclass(slots=True, frozen=True)
class FieldPosition:
    x: float
    y: float
    mode: Optional[PositionMode] = None

    @property
    def is_relative(self) -> bool:
        return self.mode == "relative"


@dataclass(slots=True, frozen=True)
class FieldOption:
    label: str
    value: str

    @classmethod
    def from_value(cls, value: Any) -> "FieldOption":
        if isinstance(value, Mapping):
            option_value = as_text(pick(value, "value", "label"))
            return cls(label=as_text(pick(value, "label", "value")), value=option_value)
        return cls(label=as_text(value), value=as_text(value))


@dataclass(slots=True)
class NormalizedFormField:
    name: str
    type: str
    label: str = ""
    page: int = 1
    position: FieldPosition = field(default_factory=lambda: FieldPosition(0.0, 0.0))
    width: Optional[float] = None
    height: Optional[float] = None
    options: List[FieldOption] = field(default_factory=list)
    default: Any = None
    required: bool = False
    font_size: Optional[float] = None
    multiline: bool = False
    max_length: Optional[int] = None
    include_date: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.position.mode is None:
            mode: PositionMode = "relative" if self.page == 1 else "absolute"
            self.position = replace(self.position, mode=mode)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int = 0) -> "NormalizedFormField":
        """Build a field from a schema mapping.

        Args:
            data: Field mapping as authored in the schema
            index: Position of the field in the schema, used for a fallback name

        Returns:
            Normalized field with a tagged position
        """
        if not isinstance(data, Mapping):
            raise SchemaError("Field definition must be a mapping", f"got {type(data).__name__}")

        field_type = as_text(data.get("type")).strip().lower()
        name = as_text(pick(data, "name", "id")) or f"{field_type or 'field'}_{index + 1}"

        try:
            page = int(data.get("page", 1) or 1)
        except (TypeError, ValueError) as e:
            raise SchemaError(f"Invalid page for field '{name}'", str(data.get("page"))) from e

        position_data = data.get("position") or {}
        x = as_float(pick(position_data, "x", default=data.get("x")))
        y = as_float(pick(position_data, "y", default=data.get("y")))

        max_length = pick(data, "max_length", "maxLength")
        known = {
            "name", "id", "type", "label", "page", "position", "x", "y", "width", "height",
            "options", "default", "value", "required", "fontSize", "font_size", "multiline",
            "maxLength", "max_length", "includeDate", "include_date",
        }
        return cls(
            name=name,
            type=field_type,
            label=as_text(data.get("label")),
            page=page,
            position=FieldPosition(x=x, y=y),
            width=as_optional_float(data.get("width")),
            height=as_optional_float(data.get("height")),
            options=[FieldOption.from_value(option) for option in (data.get("options") or [])],
            default=pick(data, "default", "value"),
            required=bool(data.get("required", False)),
            font_size=as_optional_float(pick(data, "font_size", "fontSize")),
            multiline=bool(data.get("multiline", field_type == "textarea")),
            max_length=int(max_length) if max_length is not None else None,
            include_date=bool(pick(data, "include_date", "includeDate", default=True)),
            extra={key: value for key, value in data.items() if key not in known},
        )

    def with_position(self, position: FieldPosition) -> "NormalizedFormField":
        return replace(self, position=position)

    @property
    def display_label(self) -> str:
        if self.label and self.required:
            return f"{self.label} *"
        return self.label

    @property
    def is_checked(self) -> bool:
        if isinstance(self.default, str):
            return self.default.strip().lower() in {"true", "yes", "on", "1", "checked"}
        return bool(self.default)
