from __future__ import annotations

from collections.abc import Mapping
import copy
from typing import TYPE_CHECKING, Self, override

from ..serialization import get_field
from ..transformations.base import TransformationResult
from .base import MappingRule, RuleType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..transformations.field_transformation import FieldTransformation


class StaticValueRule(MappingRule):
    """Returns a fixed value, keeping its type.

    Mostly used as a comparison operand, e.g. the limit of a range check.
    """

    type_id = "Core.StaticValueRule"
    rule_type = RuleType.STATIC_VALUE_RULE
    display_name = "Static Value"
    short_name = "Static"
    description = "Output a fixed value."
    max_source_fields = 0

    def __init__(
        self,
        value: object = None,
        rule_detail: str | None = None,
        source_field_transformations: Iterable[FieldTransformation] | None = None,
    ) -> None:
        super().__init__(rule_detail, source_field_transformations)
        self.value = value

    @property
    @override
    def is_empty(self) -> bool:
        return self.value is None

    @override
    async def apply_result(self, result: TransformationResult) -> TransformationResult:
        return TransformationResult.success(
            self.value,
            self.value,
            record=result.record,
            target_field_type=result.target_field_type,
        )

    @override
    def clone(self) -> Self:
        return type(self)(copy.deepcopy(self.value), self.rule_detail)

    @override
    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "value": self.value}

    @classmethod
    @override
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        detail = get_field(payload, "ruleDetail")
        return cls(
            get_field(payload, "value"), None if detail is None else str(detail)
        )

    @override
    def __repr__(self) -> str:
        return f"StaticValueRule({self.value!r})"
