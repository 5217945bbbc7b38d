"""Equality and set-membership comparisons."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Self, override

from ..rules.base import MappingRule
from ..serialization import from_dict, get_field
from .base import ComparisonOperation
from .typed import values_equal

if TYPE_CHECKING:
    from ..transformations.base import TransformationResult


class EqualsOperation(ComparisonOperation):
    type_id = "Core.Equals"
    display_name = "Equals"
    short_name = "="
    description = "True when the left operand equals the right operand."
    required_operands = ("left_operand", "right_operand")

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        left, right = await self._operand_values(context, "left_operand", "right_operand")
        return values_equal(left, right)


class NotEqualOperation(EqualsOperation):
    type_id = "Core.NotEqual"
    display_name = "Not Equal"
    short_name = "!="
    description = "True when the left operand differs from the right operand."
    negate = True


class InOperation(ComparisonOperation):
    """True when the left operand equals any of the configured values."""

    type_id = "Core.In"
    display_name = "In"
    short_name = "In"
    description = "True when the left operand equals one of the listed values."

    def __init__(
        self,
        left_operand: MappingRule | None = None,
        right_operand: MappingRule | None = None,
        low_limit: MappingRule | None = None,
        high_limit: MappingRule | None = None,
        values: Iterable[MappingRule] | None = None,
    ) -> None:
        super().__init__(left_operand, right_operand, low_limit, high_limit)
        self.values: list[MappingRule] = list(values or ())

    @override
    def configure_operands(
        self,
        left: MappingRule | None,
        right: MappingRule | None = None,
        secondary: MappingRule | None = None,
    ) -> Self:
        super().configure_operands(left, right, secondary)
        if right is not None and not self.values:
            self.values = [right]
        return self

    def configure_values(self, values: Iterable[MappingRule]) -> Self:
        self.values = list(values)
        return self

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        left = await self._operand_value("left_operand", context)
        candidates = await asyncio.gather(
            *(self._rule_value(rule, "Values", context) for rule in self.values)
        )
        return any(values_equal(left, candidate) for candidate in candidates)

    @override
    def clone(self) -> Self:
        copy = super().clone()
        copy.values = [rule.clone() for rule in self.values]
        return copy

    @override
    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        payload["values"] = [rule.to_dict() for rule in self.values]
        return payload

    @classmethod
    @override
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        instance = super().from_dict(payload)
        instance.values = [
            from_dict(item, MappingRule) for item in get_field(payload, "values") or []
        ]
        return instance


class NotInOperation(InOperation):
    type_id = "Core.NotIn"
    display_name = "Not In"
    short_name = "Not In"
    description = "True when the left operand equals none of the listed values."
    negate = True
