from __future__ import annotations

from typing import override

from ..transformations.base import TransformationResult
from .base import MappingRule, RuleType


class ConstantValueRule(MappingRule):
    type_id = "Core.ConstantValueRule"
    rule_type = RuleType.CONSTANT_VALUE_RULE
    display_name = "Constant Value"
    short_name = "Constant"
    description = "Output the value in the rule detail for every record."
    max_source_fields = 0

    @property
    @override
    def is_empty(self) -> bool:
        return not self.rule_detail or not self.rule_detail.strip()

    @override
    async def apply_result(self, result: TransformationResult) -> TransformationResult:
        return TransformationResult.success(
            self.rule_detail,
            self.rule_detail,
            original_value_type=str,
            current_value_type=str,
            applied_transformations=(self.short_name,),
            record=result.record,
            target_field_type=result.target_field_type,
        )
