from __future__ import annotations

from typing import Self, override

from ..constants import Defaults
from .base import (
    TransformationResult,
    ValueTransformation,
    result_value_as_list,
)
from .placeholders import substitute_placeholders


def interpolate_result(template: str | None, result: TransformationResult) -> str:
    """Fill ``template`` with the values held by ``result``.

    A blank template yields an empty string. A null current value leaves the
    template untouched.
    """
    if not template or not template.strip():
        return ""
    if result.current_value is None:
        return template
    return substitute_placeholders(template, result_value_as_list(result))


class InterpolateTransformation(ValueTransformation):
    type_id = "Core.InterpolateTransformation"
    display_name = "Interpolate"
    short_name = "Interpolate"
    description = (
        "Insert the current value(s) into a pattern using ${0}, ${1}, ... placeholders."
    )

    def __init__(self, pattern: str | None = Defaults.INTERPOLATE_FORMAT) -> None:
        super().__init__()
        self.pattern = pattern

    @override
    async def _transform(self, result: TransformationResult) -> TransformationResult:
        return result.with_value(interpolate_result(self.pattern, result), value_type=str)

    @override
    def to_detail_string(self) -> str:
        return self.pattern or ""

    @override
    def from_detail_string(self, detail: str | None) -> None:
        self.pattern = detail

    @override
    def clone(self) -> Self:
        return type(self)(self.pattern)
