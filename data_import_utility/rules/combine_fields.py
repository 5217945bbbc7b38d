from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, override

from ..constants import Messages
from ..transformations.base import TransformationResult, value_to_text
from ..transformations.interpolate import interpolate_result
from .base import MappingRule, RuleType

if TYPE_CHECKING:
    from ..transformations.base import Row
    from ..transformations.field_transformation import FieldTransformation


class CombineFieldsRule(MappingRule):
    """Combine several source fields into one value through a format string.

    The rule detail holds the format, e.g. ``"${0}-${1}"``. Each source field
    runs its own value transformations first; a field that is absent from the
    row contributes an empty value.
    """

    type_id = "Core.CombineFieldsRule"
    rule_type = RuleType.COMBINE_FIELDS_RULE
    display_name = "Combine Fields"
    short_name = "Combine"
    description = (
        "Combine the values of the source fields into the output field using "
        "the format string in the rule detail."
    )

    @property
    @override
    def is_empty(self) -> bool:
        return not any(
            ft.field_name and ft.field_name.strip()
            for ft in self.source_field_transformations
        )

    @override
    async def apply(
        self, row: Row | None, *, target_field_type: type | None = None
    ) -> TransformationResult:
        if row is None:
            return TransformationResult.failure(
                None, target_field_type, Messages.NO_RECORD
            )
        fields = self.source_field_transformations
        resolved = await asyncio.gather(
            *(self._resolve_field(field, row) for field in fields)
        )
        for field, field_result in zip(fields, resolved, strict=True):
            if field_result.was_failure:
                return TransformationResult.failure(
                    field_result.original_value,
                    target_field_type,
                    Messages.COMBINE_FIELD_FAILED.format(
                        field=field.field_name, detail=field_result.error_message
                    ),
                    record=row,
                )
        originals = [r.original_value for r in resolved]
        values = [
            None if r.current_value is None else value_to_text(r.current_value)
            for r in resolved
        ]
        combined = TransformationResult.success(
            originals,
            values,
            original_value_type=list,
            current_value_type=list,
            record=row,
            target_field_type=target_field_type,
        )
        return await self.apply_result(combined)

    @staticmethod
    async def _resolve_field(
        field: FieldTransformation, row: Row
    ) -> TransformationResult:
        if not field.has_field(row):
            return TransformationResult.from_value(None, record=row)
        return await field.apply(row)

    @override
    async def apply_result(self, result: TransformationResult) -> TransformationResult:
        if result.was_failure:
            return result
        return result.with_value(
            interpolate_result(self.rule_detail, result),
            value_type=str,
            applied=self.short_name,
        )
