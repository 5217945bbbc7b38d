"""Text comparisons: containment, affixes and regular expressions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, override

from ..constants import Messages
from ..exceptions import OperandEvaluationError
from ..transformations.base import value_to_text
from .base import ComparisonOperation
from .typed import as_items

if TYPE_CHECKING:
    from ..transformations.base import TransformationResult


class ContainsOperation(ComparisonOperation):
    """Membership for list values, ordinal substring search otherwise."""

    type_id = "Core.Contains"
    display_name = "Contains"
    short_name = "Contains"
    description = "True when the left operand contains the right operand."
    required_operands = ("left_operand", "right_operand")

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        left, right = await self._operand_values(context, "left_operand", "right_operand")
        if left is None or right is None:
            return False
        needle = value_to_text(right)
        items = as_items(left)
        if items is not None:
            return any(value_to_text(item) == needle for item in items)
        return needle in value_to_text(left)


class NotContainsOperation(ContainsOperation):
    type_id = "Core.NotContains"
    display_name = "Not Contains"
    short_name = "Not Contains"
    description = "True when the left operand does not contain the right operand."
    negate = True


class StartsWithOperation(ComparisonOperation):
    type_id = "Core.StartsWith"
    display_name = "Starts With"
    short_name = "Starts With"
    description = "True when the left operand starts with the right operand."
    required_operands = ("left_operand", "right_operand")

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        left, right = await self._operand_values(context, "left_operand", "right_operand")
        if left is None:
            return False
        return value_to_text(left).startswith(value_to_text(right))


class EndsWithOperation(ComparisonOperation):
    type_id = "Core.EndsWith"
    display_name = "Ends With"
    short_name = "Ends With"
    description = "True when the left operand ends with the right operand."
    required_operands = ("left_operand", "right_operand")

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        left, right = await self._operand_values(context, "left_operand", "right_operand")
        if left is None:
            return False
        return value_to_text(left).endswith(value_to_text(right))


class RegexMatchOperation(ComparisonOperation):
    """Search the left operand for the pattern held by the right operand.

    An invalid pattern raises ``OperandEvaluationError``.
    """

    type_id = "Core.RegexMatch"
    display_name = "Regex Match"
    short_name = "Regex"
    description = "True when the left operand matches the regular expression in the right operand."
    required_operands = ("left_operand", "right_operand")

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        left, pattern = await self._operand_values(context, "left_operand", "right_operand")
        if left is None or pattern is None or not str(pattern):
            return False
        try:
            compiled = re.compile(str(pattern))
        except re.error as e:
            raise OperandEvaluationError(Messages.INVALID_REGEX.format(detail=e)) from e
        return compiled.search(value_to_text(left)) is not None
