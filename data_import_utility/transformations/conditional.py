"""If/else transformation driven by a comparison operation.

The comparison is evaluated against the incoming result; the true or false
mapping rule then produces the new current value. The original value of the
incoming result is kept.
"""

from __future__ import annotations

from collections.abc import Mapping
import json
from typing import Self, override

from ..comparisons.base import ComparisonOperation
from ..constants import Messages
from ..exceptions import ConfigurationError, MissingOperandError, OperandEvaluationError
from ..rules.base import MappingRule
from ..serialization import get_field, optional_from_dict
from .base import TransformationResult, ValueTransformation

_COMPONENT_KEYS = ("comparisonOperation", "trueMappingRule", "falseMappingRule")


class ConditionalTransformation(ValueTransformation):
    type_id = "Core.ConditionalTransformation"
    display_name = "Conditional"
    short_name = "If"
    description = (
        "Evaluate a comparison and apply the true or the false mapping rule."
    )

    def __init__(
        self,
        comparison_operation: ComparisonOperation | None = None,
        true_mapping_rule: MappingRule | None = None,
        false_mapping_rule: MappingRule | None = None,
    ) -> None:
        super().__init__()
        self.comparison_operation = comparison_operation
        self.true_mapping_rule = true_mapping_rule
        self.false_mapping_rule = false_mapping_rule

    def _components(self) -> tuple[ComparisonOperation, MappingRule, MappingRule]:
        comparison = self.comparison_operation
        true_rule = self.true_mapping_rule
        false_rule = self.false_mapping_rule
        if comparison is None or true_rule is None or false_rule is None:
            raise MissingOperandError(Messages.CONDITIONAL_MISSING_COMPONENT)
        return comparison, true_rule, false_rule

    @override
    async def _transform(self, result: TransformationResult) -> TransformationResult:
        comparison, true_rule, false_rule = self._components()
        try:
            matched = await comparison.evaluate(result)
        except OperandEvaluationError as e:
            return result.with_error(str(e))
        chosen = await (true_rule if matched else false_rule).evaluate(result)
        if chosen.was_failure:
            return result.with_error(chosen.error_message or Messages.OPERATION_FAILED)
        return result.with_value(
            chosen.current_value, value_type=chosen.current_value_type
        )

    def _components_dict(self) -> dict[str, object]:
        components = (
            self.comparison_operation,
            self.true_mapping_rule,
            self.false_mapping_rule,
        )
        return {
            key: None if component is None else component.to_dict()
            for key, component in zip(_COMPONENT_KEYS, components, strict=True)
        }

    def _load_components(self, payload: Mapping[str, object]) -> None:
        self.comparison_operation = optional_from_dict(
            get_field(payload, "comparisonOperation"), ComparisonOperation
        )
        self.true_mapping_rule = optional_from_dict(
            get_field(payload, "trueMappingRule"), MappingRule
        )
        self.false_mapping_rule = optional_from_dict(
            get_field(payload, "falseMappingRule"), MappingRule
        )

    @override
    def to_detail_string(self) -> str:
        if self.is_empty:
            return ""
        return json.dumps(self._components_dict())

    @override
    def from_detail_string(self, detail: str | None) -> None:
        if not detail or not detail.strip():
            self.comparison_operation = None
            self.true_mapping_rule = None
            self.false_mapping_rule = None
            return
        try:
            payload = json.loads(detail)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid conditional detail: {e}") from e
        if not isinstance(payload, Mapping):
            raise ConfigurationError("Conditional detail must be a JSON object.")
        self._load_components(payload)

    @property
    @override
    def is_empty(self) -> bool:
        return (
            self.comparison_operation is None
            and self.true_mapping_rule is None
            and self.false_mapping_rule is None
        )

    @override
    def clone(self) -> Self:
        return type(self)(
            None if self.comparison_operation is None else self.comparison_operation.clone(),
            None if self.true_mapping_rule is None else self.true_mapping_rule.clone(),
            None if self.false_mapping_rule is None else self.false_mapping_rule.clone(),
        )

    @override
    def to_dict(self) -> dict[str, object]:
        return {"typeId": self.type_id, **self._components_dict()}

    @classmethod
    @override
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        instance = cls()
        if any(get_field(payload, key) is not None for key in _COMPONENT_KEYS):
            instance._load_components(payload)
        else:
            detail = get_field(payload, "transformationDetail")
            instance.from_detail_string(None if detail is None else str(detail))
        return instance
