from __future__ import annotations

from typing import override

from ..transformations.base import TransformationResult
from .base import MappingRule, RuleType


class IgnoreRule(MappingRule):
    type_id = "Core.IgnoreRule"
    rule_type = RuleType.IGNORE_RULE
    display_name = "Ignore"
    short_name = "Ignore"
    description = "Do not output this field to the destination."
    max_source_fields = 0

    @property
    @override
    def is_empty(self) -> bool:
        return False

    @override
    async def apply_result(self, result: TransformationResult) -> TransformationResult:
        return TransformationResult.success(
            result.original_value,
            None,
            record=result.record,
            target_field_type=result.target_field_type,
        )
