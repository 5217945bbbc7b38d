from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_EVEN, Decimal, getcontext, localcontext
from typing import Self, override

from ..constants import Limits, Messages
from ..serialization import get_field
from .base import (
    TransformationResult,
    ValueTransformation,
    result_value_as_list,
    value_to_text,
)
from .formula import FormulaError, evaluate_formula
from .placeholders import fill_unresolved_placeholders, substitute_placeholders


def clamp_decimal_places(places: int) -> int:
    return min(max(places, Limits.CALCULATE_MIN_PLACES), Limits.CALCULATE_MAX_PLACES)


def format_decimal(value: Decimal, places: int) -> str:
    """Format ``value`` with fixed places, or in general form for ``-1``."""
    if places < 0:
        return f"{value.normalize():f}"
    with localcontext() as context:
        context.prec = max(getcontext().prec, value.adjusted() + places + 2)
        rounded = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return f"{rounded:f}"


class CalculateTransformation(ValueTransformation):
    """Evaluate an arithmetic formula over the current value(s).

    ``${0}``, ``${1}``, ... refer to the current value, or to the elements of
    a collection value. Unresolved placeholders count as ``0``. The result is
    rounded to ``decimal_places`` (``-1`` for no rounding, at most 15).

    Example:
        >>> t = CalculateTransformation("${0} + 1.01", decimal_places=0)
        >>> (await t.apply(TransformationResult.from_value("5493.39"))).current_value
        '5494'
    """

    type_id = "Core.CalculateTransformation"
    display_name = "Calculate"
    short_name = "Calc"
    description = "Perform a calculation using the current value(s)."

    def __init__(self, formula: str | None = None, decimal_places: int = -1) -> None:
        super().__init__()
        self.formula = formula
        self.decimal_places = decimal_places

    @override
    async def _transform(self, result: TransformationResult) -> TransformationResult:
        if not self.formula or not self.formula.strip():
            return result.with_value("", value_type=str)
        values: list[str | None] = []
        if value_to_text(result.current_value).strip():
            values = result_value_as_list(result)
        expression = substitute_placeholders(self.formula, values)
        expression = fill_unresolved_placeholders(expression)
        places = clamp_decimal_places(self.decimal_places)
        try:
            value = evaluate_formula(expression)
            text = format_decimal(value, places)
        except (FormulaError, ArithmeticError):
            return result.with_error(Messages.INVALID_CALCULATION)
        return result.with_value(text, value_type=Decimal)

    @override
    def to_detail_string(self) -> str:
        return self.formula or ""

    @override
    def from_detail_string(self, detail: str | None) -> None:
        self.formula = detail or None

    @override
    def clone(self) -> Self:
        return type(self)(self.formula, self.decimal_places)

    @override
    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "decimalPlaces": self.decimal_places}

    @classmethod
    @override
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        instance = super().from_dict(payload)
        places = get_field(payload, "decimalPlaces", -1)
        instance.decimal_places = -1 if places is None else int(places)
        return instance
