from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import Self, override

from ..constants import Defaults, Messages
from .base import TransformationResult, ValueTransformation, value_to_text
from .field_transformation import FieldTransformation
from .interpolate import interpolate_result
from .placeholders import substitute_placeholders


class CombineFieldsTransformation(ValueTransformation):
    """Combine several source fields of the current row through a format.

    With no source fields configured the current value (a list or JSON array)
    is combined instead, like ``InterpolateTransformation``.
    """

    type_id = "Core.CombineFieldsTransformation"
    display_name = "Combine Fields"
    short_name = "Combine"
    description = (
        "Combine the values of other fields of the same row using ${0}, ${1}, ... "
        "placeholders."
    )

    def __init__(
        self,
        format_string: str | None = Defaults.INTERPOLATE_FORMAT,
        source_field_transforms: Iterable[FieldTransformation] | None = None,
    ) -> None:
        super().__init__()
        self.format_string = format_string
        self.source_field_transforms: list[FieldTransformation] = list(
            source_field_transforms or ()
        )

    @override
    async def _transform(self, result: TransformationResult) -> TransformationResult:
        if not self.source_field_transforms:
            return result.with_value(
                interpolate_result(self.format_string, result), value_type=str
            )
        record = result.record
        if record is None:
            return result.with_error(Messages.NO_RECORD)
        resolved = await asyncio.gather(
            *(field.apply(record) for field in self.source_field_transforms)
        )
        for field, field_result in zip(self.source_field_transforms, resolved, strict=True):
            if field_result.was_failure:
                return result.with_error(
                    Messages.COMBINE_FIELD_FAILED.format(
                        field=field.field_name, detail=field_result.error_message
                    )
                )
        if not self.format_string or not self.format_string.strip():
            return result.with_value("", value_type=str)
        values = [
            None if r.current_value is None else value_to_text(r.current_value)
            for r in resolved
        ]
        return result.with_value(
            substitute_placeholders(self.format_string, values), value_type=str
        )

    @override
    def to_detail_string(self) -> str:
        return self.format_string or ""

    @override
    def from_detail_string(self, detail: str | None) -> None:
        self.format_string = detail

    @property
    @override
    def is_empty(self) -> bool:
        return not self.format_string and not self.source_field_transforms

    @override
    def clone(self) -> Self:
        return type(self)(
            self.format_string, (ft.clone() for ft in self.source_field_transforms)
        )

    @override
    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        payload["sourceFieldTransforms"] = [
            ft.to_dict() for ft in self.source_field_transforms
        ]
        return payload

    @classmethod
    @override
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        instance = super().from_dict(payload)
        raw_fields = payload.get(
            "sourceFieldTransforms", payload.get("SourceFieldTransforms")
        ) or []
        instance.source_field_transforms = [
            FieldTransformation.from_dict(item) for item in raw_fields
        ]
        return instance
