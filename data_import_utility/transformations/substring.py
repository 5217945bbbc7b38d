from __future__ import annotations

import json
from typing import Self, override

from ..constants import Limits
from ..exceptions import ConfigurationError
from .base import (
    TransformationResult,
    ValueTransformation,
    error_if_collection,
    value_to_text,
)


def substring_bounds(length: int, start_index: int, max_length: int | None) -> tuple[int, int]:
    """Resolve ``(start, count)`` for a string of ``length`` characters.

    A negative start counts from the end. A negative ``max_length`` takes the
    remainder after the start, minus that many characters. ``None`` means no
    limit. Both results are clamped into the string, so any input yields a
    valid slice.
    """
    start = length + start_index if start_index < 0 else start_index
    start = min(max(start, 0), length)
    remaining = length - start
    if max_length is None:
        count = remaining
    elif max_length < 0:
        count = remaining + max_length
    else:
        count = max_length
    count = min(max(count, 0), remaining)
    return start, count


class SubstringTransformation(ValueTransformation):
    type_id = "Core.SubstringTransformation"
    display_name = "Substring"
    short_name = "Substring"
    description = "Take part of the value, starting at an index for a maximum length."

    def __init__(self, start_index: int = 0, max_length: int | None = None) -> None:
        super().__init__()
        self.start_index = start_index
        self.max_length = max_length

    @property
    @override
    def is_empty(self) -> bool:
        return self.start_index == 0 and self.max_length is None

    @override
    async def _transform(self, result: TransformationResult) -> TransformationResult:
        checked = error_if_collection(result)
        if checked.was_failure:
            return checked
        text = value_to_text(result.current_value)
        if not text.strip():
            return result.with_value("", value_type=str)
        start, count = substring_bounds(len(text), self.start_index, self.max_length)
        return result.with_value(text[start : start + count], value_type=str)

    @override
    def to_detail_string(self) -> str:
        return json.dumps({"StartIndex": self.start_index, "MaxLength": self.max_length})

    @override
    def from_detail_string(self, detail: str | None) -> None:
        if not detail or not detail.strip():
            self.start_index, self.max_length = 0, None
            return
        try:
            parsed = json.loads(detail)
            start_index = parsed.get("StartIndex", parsed.get("startIndex", 0))
            max_length = parsed.get("MaxLength", parsed.get("maxLength"))
            self.start_index = int(start_index or 0)
            self.max_length = None if max_length is None else int(max_length)
            if self.max_length is not None and self.max_length >= Limits.UNBOUNDED_LENGTH:
                self.max_length = None
        except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid substring detail: {detail}") from e

    @override
    def clone(self) -> Self:
        return type(self)(self.start_index, self.max_length)
