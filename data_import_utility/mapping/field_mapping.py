"""Target field mappings.

A ``FieldMapping`` names one output field, its expected type and the rule
that produces its value. Applying a mapping runs the rule, converts the value
to the field type and checks the required flag.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from ..comparisons.typed import is_truthy, parse_datetime, parse_number
from ..constants import Messages
from ..rules.base import MappingRule
from ..rules.ignore import IgnoreRule
from ..serialization import get_field, optional_from_dict
from ..transformations.base import TransformationResult, value_to_text

if TYPE_CHECKING:
    from ..transformations.base import Row

FIELD_TYPES: dict[str, type] = {
    "object": object,
    "str": str,
    "int": int,
    "float": float,
    "Decimal": Decimal,
    "bool": bool,
    "datetime": datetime,
}

_BOOL_TEXT = {"true": True, "false": False, "yes": True, "no": False}


def field_type_name(field_type: type) -> str:
    for name, candidate in FIELD_TYPES.items():
        if candidate is field_type:
            return name
    return field_type.__name__


def resolve_field_type(name: str | None) -> type:
    if not name:
        return object
    try:
        return FIELD_TYPES[name]
    except KeyError as e:
        raise ValueError(f"Unsupported field type '{name}'") from e


def _convert(value: object, field_type: type) -> object:
    if field_type is str:
        return value_to_text(value)
    if field_type is bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _BOOL_TEXT:
            return _BOOL_TEXT[text]
        if parse_number(value) is None:
            raise ValueError(value)
        return is_truthy(value)
    if field_type in (int, float, Decimal):
        number = parse_number(value)
        if number is None:
            raise ValueError(value)
        if field_type is int:
            if number != number.to_integral_value():
                raise ValueError(value)
            return int(number)
        return float(number) if field_type is float else number
    if field_type is datetime:
        moment = parse_datetime(value)
        if moment is None:
            raise ValueError(value)
        return moment.to_pydatetime()
    return value


def coerce_to_type(
    result: TransformationResult, field_type: type | None
) -> TransformationResult:
    """Convert the current value of ``result`` to ``field_type``.

    ``None`` and ``object`` targets leave the value alone. A value that cannot
    be converted fails the result.
    """
    value = result.current_value
    if result.was_failure or value is None or field_type in (None, object):
        return result
    if isinstance(value, field_type) and not (
        field_type is int and isinstance(value, bool)
    ):
        return result
    try:
        converted = _convert(value, field_type)
    except (ValueError, TypeError, ArithmeticError):
        return result.with_error(
            Messages.CONVERSION_FAILED.format(
                value=value_to_text(value), type_name=field_type_name(field_type)
            )
        )
    return result.with_value(converted, value_type=field_type)


class FieldMapping:
    def __init__(
        self,
        field_name: str,
        field_type: type = object,
        mapping_rule: MappingRule | None = None,
        *,
        required: bool = False,
    ) -> None:
        super().__init__()
        self.field_name = field_name
        self.field_type = field_type
        self.mapping_rule = mapping_rule
        self.required = required

    @property
    def ignore_mapping(self) -> bool:
        rule = self.mapping_rule
        return rule is None or isinstance(rule, IgnoreRule) or rule.is_empty

    @property
    def source_field_names(self) -> list[str]:
        if self.mapping_rule is None:
            return []
        return self.mapping_rule.source_field_names

    async def apply(self, row: Row | None) -> TransformationResult:
        """Produce this field's value for ``row``."""
        if self.mapping_rule is None:
            result = TransformationResult.from_value(
                None, record=row, target_field_type=self.field_type
            )
        else:
            result = await self.mapping_rule.apply(
                row, target_field_type=self.field_type
            )
        return self.validate(coerce_to_type(result, self.field_type))

    async def apply_table(self, rows: Iterable[Row]) -> list[TransformationResult]:
        return list(await asyncio.gather(*(self.apply(row) for row in rows)))

    def validate(self, result: TransformationResult) -> TransformationResult:
        if self.required and not result.was_failure and result.current_value is None:
            return result.with_error(Messages.FIELD_REQUIRED)
        return result

    def clone(self) -> FieldMapping:
        return FieldMapping(
            self.field_name,
            self.field_type,
            None if self.mapping_rule is None else self.mapping_rule.clone(),
            required=self.required,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "fieldName": self.field_name,
            "fieldType": field_type_name(self.field_type),
            "mappingRule": None if self.mapping_rule is None else self.mapping_rule.to_dict(),
            "required": self.required,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> FieldMapping:
        field_name = get_field(payload, "fieldName")
        if not field_name:
            raise ValueError("A field mapping requires a fieldName")
        return cls(
            str(field_name),
            resolve_field_type(get_field(payload, "fieldType")),
            optional_from_dict(get_field(payload, "mappingRule"), MappingRule),
            required=bool(get_field(payload, "required", False)),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldMapping):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self.field_name)

    def __repr__(self) -> str:
        return f"FieldMapping({self.field_name!r}, rule={self.mapping_rule!r})"
