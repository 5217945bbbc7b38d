from __future__ import annotations

import json
from typing import Self, override

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import ConfigurationError
from .base import (
    TransformationResult,
    ValueTransformation,
    error_if_collection,
    value_to_text,
)


class ValueMap(BaseModel):
    """One lookup entry: ``from_value`` becomes ``to_value``.

    ``imported_field_name`` scopes the entry to a source field.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    imported_field_name: str | None = None
    from_value: str | None = None
    to_value: str | None = None


def _camel_keys(raw: dict[str, object]) -> dict[str, object]:
    return {key[:1].lower() + key[1:]: value for key, value in raw.items()}


class MapTransformation(ValueTransformation):
    """Replace the value using a lookup list.

    When ``field_name`` is set only entries for that field apply; otherwise
    every entry applies and the first match wins. A value without a match
    passes through unchanged.
    """

    type_id = "Core.MapTransformation"
    display_name = "Map"
    short_name = "Map"
    description = "Replace the value with the mapped value from a lookup list."

    def __init__(
        self,
        field_name: str | None = None,
        value_mappings: list[ValueMap] | None = None,
    ) -> None:
        super().__init__()
        self.field_name = field_name
        self.value_mappings: list[ValueMap] = list(value_mappings or [])

    @property
    @override
    def is_empty(self) -> bool:
        return not self.value_mappings

    def applicable_mappings(self) -> list[ValueMap]:
        if not self.field_name:
            return self.value_mappings
        return [m for m in self.value_mappings if m.imported_field_name == self.field_name]

    @override
    async def _transform(self, result: TransformationResult) -> TransformationResult:
        checked = error_if_collection(result)
        if checked.was_failure:
            return checked
        value = result.current_value
        text = None if value is None else value_to_text(value)
        for mapping in self.applicable_mappings():
            if mapping.from_value == text:
                return result.with_value(mapping.to_value, value_type=str)
        return result

    @override
    def to_detail_string(self) -> str:
        if not self.value_mappings and not self.field_name:
            return ""
        return json.dumps(
            {
                "fieldName": self.field_name,
                "valueMappings": [
                    m.model_dump(by_alias=True) for m in self.value_mappings
                ],
            }
        )

    @override
    def from_detail_string(self, detail: str | None) -> None:
        if not detail or not detail.strip():
            self.field_name, self.value_mappings = None, []
            return
        try:
            parsed = _camel_keys(json.loads(detail))
            raw_mappings = parsed.get("valueMappings") or []
            mappings = [ValueMap.model_validate(_camel_keys(m)) for m in raw_mappings]
        except (json.JSONDecodeError, AttributeError, TypeError, ValidationError) as e:
            raise ConfigurationError(f"Invalid map detail: {detail}") from e
        field_name = parsed.get("fieldName")
        self.field_name = None if field_name is None else str(field_name)
        self.value_mappings = mappings

    @override
    def clone(self) -> Self:
        return type(self)(
            self.field_name, [m.model_copy() for m in self.value_mappings]
        )
