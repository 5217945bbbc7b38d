"""Base types for value transformations.

This module defines the unit of data flowing through the engine,
``TransformationResult``, and the abstract base every value transformation
derives from.

A result is never mutated in place. Each step receives a result and returns a
new one built with ``with_value`` or ``with_error``. Once a result has failed,
both helpers hand back the failed instance untouched, so an error travels
through the rest of a chain as an inert pass-through.

Example:
    Implementing a simple transformation:

    >>> class UppercaseTransformation(ValueTransformation):
    ...     type_id = "Example.Uppercase"
    ...     display_name = "Uppercase"
    ...     short_name = "Upper"
    ...     description = "Uppercases the current value."
    ...
    ...     async def _transform(self, result):
    ...         return result.with_value(value_to_text(result.current_value).upper())
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, replace
import json
from typing import Any, ClassVar, Self

from ..constants import Messages

type Row = Mapping[str, object]


def _type_of(value: object) -> type | None:
    return None if value is None else type(value)


def _error_text(message: str | None) -> str:
    return message if message and message.strip() else Messages.OPERATION_FAILED


@dataclass(frozen=True, slots=True)
class TransformationResult:
    """Result of applying a rule or transformation step.

    Attributes:
        original_value: The untouched input captured at pipeline entry
        original_value_type: Type of the original value
        current_value: Value after the most recently applied step
        current_value_type: Type of the current value
        error_message: Set exactly when a step failed
        applied_transformations: Short names of the steps applied so far
        record: Source row the value came from, if any
        target_field_type: Expected output type of the mapped field, if known
    """

    original_value: object = None
    original_value_type: type | None = None
    current_value: object = None
    current_value_type: type | None = None
    error_message: str | None = None
    applied_transformations: tuple[str, ...] = ()
    record: Row | None = None
    target_field_type: type | None = None

    @property
    def was_failure(self) -> bool:
        """Whether a step failed (error message is not blank)."""
        return bool(self.error_message and self.error_message.strip())

    @classmethod
    def success(
        cls,
        original_value: object,
        current_value: object,
        *,
        original_value_type: type | None = None,
        current_value_type: type | None = None,
        applied_transformations: tuple[str, ...] = (),
        record: Row | None = None,
        target_field_type: type | None = None,
    ) -> TransformationResult:
        return cls(
            original_value=original_value,
            original_value_type=original_value_type or _type_of(original_value),
            current_value=current_value,
            current_value_type=current_value_type or _type_of(current_value),
            applied_transformations=applied_transformations,
            record=record,
            target_field_type=target_field_type,
        )

    @classmethod
    def failure(
        cls,
        original_value: object,
        target_type: type | None,
        error_message: str,
        *,
        original_value_type: type | None = None,
        applied_transformations: tuple[str, ...] = (),
        record: Row | None = None,
    ) -> TransformationResult:
        return cls(
            original_value=original_value,
            original_value_type=original_value_type or _type_of(original_value),
            current_value=None,
            current_value_type=None,
            error_message=_error_text(error_message),
            applied_transformations=applied_transformations,
            record=record,
            target_field_type=target_type,
        )

    @classmethod
    def from_value(
        cls,
        value: object,
        *,
        record: Row | None = None,
        target_field_type: type | None = None,
    ) -> TransformationResult:
        """Create the entry result of a pipeline from a raw value."""
        return cls.success(
            value, value, record=record, target_field_type=target_field_type
        )

    def with_value(
        self,
        value: object,
        *,
        value_type: type | None = None,
        applied: str | None = None,
    ) -> TransformationResult:
        """Return a new result carrying ``value`` as the current value.

        A failed result is returned unchanged.
        """
        if self.was_failure:
            return self
        applied_transformations = self.applied_transformations
        if applied:
            applied_transformations = (*applied_transformations, applied)
        return replace(
            self,
            current_value=value,
            current_value_type=value_type or _type_of(value),
            applied_transformations=applied_transformations,
        )

    def with_error(self, message: str) -> TransformationResult:
        """Return a failed copy of this result.

        A result that already failed keeps its first error message.
        """
        if self.was_failure:
            return self
        return replace(
            self,
            current_value=None,
            current_value_type=None,
            error_message=_error_text(message),
        )


def value_to_text(value: object) -> str:
    """Render a value as text, treating ``None`` as empty."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return json.dumps([None if v is None else str(v) for v in value])
    return str(value)


def parse_json_array(value: object) -> list[Any] | None:
    """Return the parsed list if ``value`` is a string holding a JSON array."""
    if not isinstance(value, str) or not value.strip().startswith("["):
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, list) else None


def is_collection(value: object) -> bool:
    if isinstance(value, (list, tuple)):
        return True
    return parse_json_array(value) is not None


def error_if_collection(
    result: TransformationResult, message: str = Messages.INVALID_FOR_COLLECTIONS
) -> TransformationResult:
    """Fail ``result`` if its current value is a collection."""
    if result.current_value is None or not is_collection(result.current_value):
        return result
    return result.with_error(message)


def result_value_as_list(result: TransformationResult) -> list[str | None]:
    """Return the current value as a list of strings.

    Lists and JSON array strings are expanded element by element; any other
    value becomes a single-element list.
    """
    value = result.current_value
    items: list[Any] | None
    if isinstance(value, (list, tuple)):
        items = list(value)
    else:
        items = parse_json_array(value)
    if items is None:
        return [None if value is None else str(value)]
    return [None if item is None else str(item) for item in items]


def original_value_display(result: TransformationResult | None) -> str:
    if result is None or result.original_value is None:
        return "<null>"
    text = str(result.original_value)
    return text if text.strip() else "<blank>"


def current_value_display(result: TransformationResult | None) -> str:
    if result is not None and result.was_failure:
        return "#ERROR"
    if result is None or result.current_value is None:
        return "<null>"
    text = value_to_text(result.current_value)
    return text if text.strip() else "<blank>"


class ValueTransformation(ABC):
    """Base class for a chainable single-value transformation.

    Subclasses provide ``_transform`` and the detail-string pair used at
    serialization boundaries. ``apply`` takes care of the failure
    pass-through and records the step on the result.
    """

    type_id: ClassVar[str] = ""
    display_name: ClassVar[str] = ""
    short_name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    async def apply(self, result: TransformationResult) -> TransformationResult:
        if result.was_failure:
            return result
        try:
            transformed = await self._transform(result)
        except (ValueError, TypeError, ArithmeticError) as e:
            return result.with_error(f"{Messages.OPERATION_FAILED} {e}")
        if transformed.was_failure or not self.short_name:
            return transformed
        return replace(
            transformed,
            applied_transformations=(
                *transformed.applied_transformations,
                self.short_name,
            ),
        )

    @abstractmethod
    async def _transform(self, result: TransformationResult) -> TransformationResult: ...

    @abstractmethod
    def to_detail_string(self) -> str: ...

    @abstractmethod
    def from_detail_string(self, detail: str | None) -> None: ...

    @property
    def is_empty(self) -> bool:
        return not self.to_detail_string()

    def clone(self) -> Self:
        copy = type(self)()
        copy.from_detail_string(self.to_detail_string())
        return copy

    def to_dict(self) -> dict[str, object]:
        return {
            "typeId": self.type_id,
            "transformationDetail": self.to_detail_string(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        instance = cls()
        detail = payload.get("transformationDetail", payload.get("TransformationDetail"))
        instance.from_detail_string(None if detail is None else str(detail))
        return instance

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((self.type_id, self.to_detail_string()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_detail_string()!r})"
