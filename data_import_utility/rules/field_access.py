from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Self, override

from ..constants import Messages
from ..serialization import get_field
from ..transformations.base import TransformationResult
from .base import MappingRule, RuleType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..transformations.field_transformation import FieldTransformation


class FieldAccessRule(MappingRule):
    """Reads one field of the row behind the incoming result, untransformed."""

    type_id = "Core.FieldAccessRule"
    rule_type = RuleType.FIELD_ACCESS_RULE
    display_name = "Field Access"
    short_name = "Field"
    description = "Read the raw value of a field from the current data row."
    max_source_fields = 0

    def __init__(
        self,
        field_name: str | None = None,
        rule_detail: str | None = None,
        source_field_transformations: Iterable[FieldTransformation] | None = None,
    ) -> None:
        super().__init__(rule_detail, source_field_transformations)
        self.field_name = field_name

    @property
    @override
    def is_empty(self) -> bool:
        return not self.field_name

    @override
    async def apply_result(self, result: TransformationResult) -> TransformationResult:
        record = result.record
        if record is None or self.field_name is None or self.field_name not in record:
            return TransformationResult.failure(
                None,
                result.target_field_type,
                Messages.FIELD_NOT_IN_ROW.format(field=self.field_name),
                record=record,
            )
        value = record[self.field_name]
        return TransformationResult.success(
            value, value, record=record, target_field_type=result.target_field_type
        )

    @override
    def clone(self) -> Self:
        return type(self)(self.field_name, self.rule_detail)

    @override
    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "fieldName": self.field_name}

    @classmethod
    @override
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        field_name = get_field(payload, "fieldName")
        detail = get_field(payload, "ruleDetail")
        return cls(
            None if field_name is None else str(field_name),
            None if detail is None else str(detail),
        )

    @override
    def __repr__(self) -> str:
        return f"FieldAccessRule({self.field_name!r})"
