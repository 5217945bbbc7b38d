from __future__ import annotations

import json
import re
from typing import Self, override

from ..constants import Messages
from .base import (
    TransformationResult,
    ValueTransformation,
    error_if_collection,
    value_to_text,
)


class RegexMatchTransformation(ValueTransformation):
    """Extract the matches of a regular expression from the value.

    One match gives the matched text; several matches give a JSON array of
    the matched texts; no match gives an empty string.
    """

    type_id = "Core.RegexMatchTransformation"
    display_name = "Regex Match"
    short_name = "Regex"
    description = "Extract the text matching a regular expression."

    def __init__(self, pattern: str | None = None) -> None:
        super().__init__()
        self.pattern = pattern

    @override
    async def _transform(self, result: TransformationResult) -> TransformationResult:
        checked = error_if_collection(result)
        if checked.was_failure:
            return checked
        if not self.pattern:
            return result
        text = value_to_text(result.current_value)
        if not text:
            return result.with_value("", value_type=str)
        try:
            compiled = re.compile(self.pattern)
        except re.error as e:
            return result.with_error(Messages.INVALID_REGEX.format(detail=e))
        matches = [match.group(0) for match in compiled.finditer(text)]
        if not matches:
            return result.with_value("", value_type=str)
        if len(matches) == 1:
            return result.with_value(matches[0], value_type=str)
        return result.with_value(json.dumps(matches), value_type=str)

    @override
    def to_detail_string(self) -> str:
        return self.pattern or ""

    @override
    def from_detail_string(self, detail: str | None) -> None:
        self.pattern = detail or None

    @override
    def clone(self) -> Self:
        return type(self)(self.pattern)
