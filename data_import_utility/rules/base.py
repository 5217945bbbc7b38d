"""Base class for mapping rules.

A mapping rule produces the output value of one target field. Rules that
read source data hold ``FieldTransformation`` entries (a source field plus
its value-transformation chain); the row overload ``apply`` resolves those
fields and then reduces to the result overload ``apply_result``, which holds
the rule's own combination logic.

Rules are long-lived configuration objects: they keep no evaluation state
between rows, so the same rule may be applied to many rows concurrently.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import IntEnum
from typing import TYPE_CHECKING, ClassVar, Self

from ..exceptions import MaxSourceFieldsExceededError
from ..serialization import get_field
from ..transformations.base import TransformationResult
from ..transformations.field_transformation import FieldTransformation

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..transformations.base import Row


class RuleType(IntEnum):
    """Rule kinds in presentation order."""

    IGNORE_RULE = 0
    COPY_RULE = 1
    CONSTANT_VALUE_RULE = 2
    COMBINE_FIELDS_RULE = 3
    CUSTOM_FIELDLESS_RULE = 4
    FIELD_ACCESS_RULE = 5
    STATIC_VALUE_RULE = 6


class MappingRule(ABC):
    type_id: ClassVar[str] = ""
    rule_type: ClassVar[RuleType]
    display_name: ClassVar[str] = ""
    short_name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    max_source_fields: ClassVar[int | None] = None

    def __init__(
        self,
        rule_detail: str | None = None,
        source_field_transformations: Iterable[FieldTransformation] | None = None,
    ) -> None:
        super().__init__()
        self.rule_detail = rule_detail
        self._source_field_transformations: list[FieldTransformation] = []
        for field_transformation in source_field_transformations or ():
            self.add_field_transformation(field_transformation)

    @property
    def source_field_transformations(self) -> tuple[FieldTransformation, ...]:
        return tuple(self._source_field_transformations)

    @property
    def source_field_names(self) -> list[str]:
        return [
            ft.field_name
            for ft in self._source_field_transformations
            if ft.field_name is not None
        ]

    def add_field_transformation(self, field_transformation: FieldTransformation) -> Self:
        """Append a source field transformation.

        Raises:
            MaxSourceFieldsExceededError: If the rule already holds as many
                field transformations as it accepts.
        """
        limit = self.max_source_fields
        if limit is not None and len(self._source_field_transformations) >= limit:
            raise MaxSourceFieldsExceededError(
                f"{type(self).__name__} accepts at most {limit} source field(s)."
            )
        self._source_field_transformations.append(field_transformation)
        return self

    def replace_field_transformations(
        self, field_transformations: Iterable[FieldTransformation]
    ) -> Self:
        incoming = list(field_transformations)
        self._source_field_transformations = []
        for field_transformation in incoming:
            self.add_field_transformation(field_transformation)
        return self

    @property
    def is_empty(self) -> bool:
        return not self.rule_detail and not self._source_field_transformations

    async def apply(
        self, row: Row | None, *, target_field_type: type | None = None
    ) -> TransformationResult:
        """Evaluate the rule against a source row."""
        entry = TransformationResult.from_value(
            None, record=row, target_field_type=target_field_type
        )
        return await self.apply_result(entry)

    @abstractmethod
    async def apply_result(self, result: TransformationResult) -> TransformationResult:
        """Apply the rule's own logic to an already resolved result."""

    async def apply_value(self, value: object) -> TransformationResult:
        """Evaluate the rule against a single value with no row behind it."""
        return await self.apply_result(TransformationResult.from_value(value))

    async def evaluate(self, context: TransformationResult) -> TransformationResult:
        """Evaluate the rule in the context of a prior result.

        Rules with source fields read them from the context's row; other
        rules work on the context result itself.
        """
        if self._source_field_transformations and context.record is not None:
            return await self.apply(
                context.record, target_field_type=context.target_field_type
            )
        return await self.apply_result(context)

    def clone(self) -> Self:
        return type(self)(
            rule_detail=self.rule_detail,
            source_field_transformations=[
                ft.clone() for ft in self._source_field_transformations
            ],
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "typeId": self.type_id,
            "ruleDetail": self.rule_detail,
            "sourceFieldTransformations": [
                ft.to_dict() for ft in self._source_field_transformations
            ],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        rule_detail = get_field(payload, "ruleDetail")
        raw_fields = get_field(payload, "sourceFieldTransformations") or []
        return cls(
            rule_detail=None if rule_detail is None else str(rule_detail),
            source_field_transformations=[
                FieldTransformation.from_dict(item) for item in raw_fields
            ],
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((self.type_id, self.rule_detail))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(rule_detail={self.rule_detail!r}, "
            f"fields={self.source_field_names})"
        )
