"""Single-operand checks for null, blank and boolean values."""

from __future__ import annotations

from typing import TYPE_CHECKING, override

from .base import ComparisonOperation
from .typed import is_truthy

if TYPE_CHECKING:
    from ..transformations.base import TransformationResult


class IsNullOperation(ComparisonOperation):
    type_id = "Core.IsNull"
    display_name = "Is Null"
    short_name = "Is Null"
    description = "True when the left operand has no value."

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        return await self._operand_value("left_operand", context) is None


class IsNotNullOperation(IsNullOperation):
    type_id = "Core.IsNotNull"
    display_name = "Is Not Null"
    short_name = "Not Null"
    description = "True when the left operand has a value."
    negate = True


class IsNullOrEmptyOperation(ComparisonOperation):
    type_id = "Core.IsNullOrEmpty"
    display_name = "Is Null Or Empty"
    short_name = "Null/Empty"
    description = "True when the left operand has no value or is an empty string."

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        value = await self._operand_value("left_operand", context)
        return value is None or str(value) == ""


class IsNotNullOrEmptyOperation(IsNullOrEmptyOperation):
    type_id = "Core.IsNotNullOrEmpty"
    display_name = "Is Not Null Or Empty"
    short_name = "Not Null/Empty"
    description = "True when the left operand is a non-empty value."
    negate = True


class IsNullOrWhiteSpaceOperation(ComparisonOperation):
    type_id = "Core.IsNullOrWhiteSpace"
    display_name = "Is Null Or White Space"
    short_name = "Null/Blank"
    description = "True when the left operand has no value or only whitespace."

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        value = await self._operand_value("left_operand", context)
        return value is None or not str(value).strip()


class IsNotNullOrWhiteSpaceOperation(IsNullOrWhiteSpaceOperation):
    type_id = "Core.IsNotNullOrWhiteSpace"
    display_name = "Is Not Null Or White Space"
    short_name = "Not Null/Blank"
    description = "True when the left operand holds non-whitespace text."
    negate = True


class IsTrueOperation(ComparisonOperation):
    type_id = "Core.IsTrue"
    display_name = "Is True"
    short_name = "Is True"
    description = "True when the left operand is boolean true or a non-zero number."

    @override
    async def _evaluate(self, context: TransformationResult) -> bool:
        return is_truthy(await self._operand_value("left_operand", context))


class IsFalseOperation(IsTrueOperation):
    type_id = "Core.IsFalse"
    display_name = "Is False"
    short_name = "Is False"
    description = "True whenever Is True would be false."
    negate = True
