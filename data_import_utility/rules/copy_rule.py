from __future__ import annotations

from typing import TYPE_CHECKING, override

from ..constants import Messages
from ..transformations.base import TransformationResult, error_if_collection
from ..transformations.field_transformation import FieldTransformation
from .base import MappingRule, RuleType

if TYPE_CHECKING:
    from ..transformations.base import Row, ValueTransformation


class CopyRule(MappingRule):
    """Copy one source field, after its value transformations, to the output."""

    type_id = "Core.CopyRule"
    rule_type = RuleType.COPY_RULE
    display_name = "Copy"
    short_name = "Copy"
    description = "Copy the value of the source field to the output field."
    max_source_fields = 1

    @classmethod
    def for_field(
        cls, field_name: str, *transformations: ValueTransformation
    ) -> CopyRule:
        return cls(source_field_transformations=[FieldTransformation(field_name, transformations)])

    @property
    def field_transformation(self) -> FieldTransformation | None:
        fields = self.source_field_transformations
        return fields[0] if fields else None

    @property
    @override
    def is_empty(self) -> bool:
        field = self.field_transformation
        return field is None or not field.field_name

    @override
    async def apply(
        self, row: Row | None, *, target_field_type: type | None = None
    ) -> TransformationResult:
        field = self.field_transformation
        if field is None:
            return TransformationResult.failure(
                None, target_field_type, Messages.NO_SOURCE_FIELD, record=row
            )
        resolved = await field.apply(row, target_field_type=target_field_type)
        return await self.apply_result(resolved)

    @override
    async def apply_result(self, result: TransformationResult) -> TransformationResult:
        if result.was_failure:
            return result
        return error_if_collection(result)
