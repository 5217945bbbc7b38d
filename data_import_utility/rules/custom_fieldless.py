from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Self, override

from ..serialization import from_dict, get_field
from ..transformations.base import TransformationResult, ValueTransformation
from ..transformations.pipeline import TransformationPipeline
from .base import MappingRule, RuleType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..transformations.field_transformation import FieldTransformation


class CustomFieldlessRule(MappingRule):
    """Starts from the rule detail and runs it through value transformations.

    No source field is read, but the row stays available to transformations
    that need it (e.g. a conditional with field operands).
    """

    type_id = "Core.CustomFieldlessRule"
    rule_type = RuleType.CUSTOM_FIELDLESS_RULE
    display_name = "Custom Fieldless"
    short_name = "Custom"
    description = (
        "Output a value built from the rule detail and its value transformations."
    )
    max_source_fields = 0

    def __init__(
        self,
        rule_detail: str | None = None,
        source_field_transformations: Iterable[FieldTransformation] | None = None,
        value_transformations: Iterable[ValueTransformation] | None = None,
    ) -> None:
        super().__init__(rule_detail, source_field_transformations)
        self.pipeline = TransformationPipeline(value_transformations)

    @property
    def value_transformations(self) -> list[ValueTransformation]:
        return self.pipeline.transformations

    @property
    @override
    def is_empty(self) -> bool:
        return not self.rule_detail and not self.value_transformations

    @override
    async def apply_result(self, result: TransformationResult) -> TransformationResult:
        start = TransformationResult.success(
            self.rule_detail,
            self.rule_detail,
            record=result.record,
            target_field_type=result.target_field_type,
        )
        return await self.pipeline.execute(start)

    @override
    def clone(self) -> Self:
        return type(self)(
            self.rule_detail,
            value_transformations=[t.clone() for t in self.value_transformations],
        )

    @override
    def to_dict(self) -> dict[str, object]:
        return {
            **super().to_dict(),
            "valueTransformations": [t.to_dict() for t in self.value_transformations],
        }

    @classmethod
    @override
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        detail = get_field(payload, "ruleDetail")
        raw_transformations = get_field(payload, "valueTransformations") or []
        return cls(
            None if detail is None else str(detail),
            value_transformations=[
                from_dict(item, ValueTransformation) for item in raw_transformations
            ],
        )
