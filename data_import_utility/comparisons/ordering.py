"""Ordering and range comparisons."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, override

from .base import ComparisonOperation
from .typed import compare_values, is_between

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..transformations.base import TransformationResult


class OrderingOperation(ComparisonOperation):
    """Compare two operands; a null on either side is never ordered."""

    required_operands = ("left_operand", "right_operand")
    accepts: ClassVar[Callable[[int], bool]]

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        left, right = await self._operand_values(context, "left_operand", "right_operand")
        if left is None or right is None:
            return False
        return type(self).accepts(compare_values(left, right))


class GreaterThanOperation(OrderingOperation):
    type_id = "Core.GreaterThan"
    display_name = "Greater Than"
    short_name = ">"
    description = "True when the left operand is greater than the right operand."
    accepts = staticmethod(lambda order: order > 0)


class GreaterThanOrEqualOperation(OrderingOperation):
    type_id = "Core.GreaterThanOrEqual"
    display_name = "Greater Than Or Equal"
    short_name = ">="
    description = "True when the left operand is greater than or equal to the right operand."
    accepts = staticmethod(lambda order: order >= 0)


class LessThanOperation(OrderingOperation):
    type_id = "Core.LessThan"
    display_name = "Less Than"
    short_name = "<"
    description = "True when the left operand is less than the right operand."
    accepts = staticmethod(lambda order: order < 0)


class LessThanOrEqualOperation(OrderingOperation):
    type_id = "Core.LessThanOrEqual"
    display_name = "Less Than Or Equal"
    short_name = "<="
    description = "True when the left operand is less than or equal to the right operand."
    accepts = staticmethod(lambda order: order <= 0)


class BetweenOperation(ComparisonOperation):
    """Inclusive range check against the low and high limits."""

    type_id = "Core.Between"
    display_name = "Between"
    short_name = "Between"
    description = "True when the left operand lies within the low and high limits, inclusive."
    required_operands = ("left_operand", "low_limit", "high_limit")

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        value, low, high = await self._operand_values(
            context, "left_operand", "low_limit", "high_limit"
        )
        return is_between(value, low, high)


class NotBetweenOperation(BetweenOperation):
    type_id = "Core.NotBetween"
    display_name = "Not Between"
    short_name = "Not Between"
    description = "True when the left operand lies outside the low and high limits."
    negate = True
