"""A source field paired with its ordered value-transformation chain."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Self

from ..constants import Messages
from ..serialization import from_dict, get_field
from .base import TransformationResult, ValueTransformation
from .pipeline import TransformationPipeline

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .base import Row


class FieldTransformation:
    def __init__(
        self,
        field_name: str | None = None,
        transformations: Iterable[ValueTransformation] | None = None,
    ) -> None:
        super().__init__()
        self.field_name = field_name
        self.pipeline = TransformationPipeline(transformations)

    @property
    def value_transformations(self) -> list[ValueTransformation]:
        return self.pipeline.transformations

    def add_transformation(self, transformation: ValueTransformation) -> Self:
        self.pipeline.add_transformation(transformation)
        return self

    def has_field(self, row: Row | None) -> bool:
        return row is not None and self.field_name is not None and self.field_name in row

    async def apply(
        self, row: Row | None, *, target_field_type: type | None = None
    ) -> TransformationResult:
        """Read the field from ``row`` and run the chain over its value.

        A row without the field yields a failed result.
        """
        field_name = self.field_name
        if row is None or field_name is None or field_name not in row:
            return TransformationResult.failure(
                None,
                target_field_type,
                Messages.FIELD_NOT_IN_TABLE.format(field=self.field_name),
                record=row,
            )
        entry = TransformationResult.from_value(
            row[field_name], record=row, target_field_type=target_field_type
        )
        return await self.pipeline.execute(entry)

    async def apply_value(
        self, value: object, *, record: Row | None = None
    ) -> TransformationResult:
        """Run the chain over a value supplied directly instead of a row field."""
        return await self.pipeline.execute(
            TransformationResult.from_value(value, record=record)
        )

    def clone(self) -> FieldTransformation:
        return FieldTransformation(
            self.field_name, (t.clone() for t in self.value_transformations)
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "fieldName": self.field_name,
            "valueTransformations": [t.to_dict() for t in self.value_transformations],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> FieldTransformation:
        field_name = get_field(payload, "fieldName")
        if field_name is None and isinstance(field := get_field(payload, "field"), Mapping):
            field_name = get_field(field, "fieldName")
        raw_transformations = get_field(payload, "valueTransformations") or []
        return cls(
            None if field_name is None else str(field_name),
            (from_dict(item, ValueTransformation) for item in raw_transformations),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldTransformation):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self.field_name)

    def __repr__(self) -> str:
        return f"FieldTransformation({self.field_name!r}, {self.pipeline!r})"
