"""Base class for comparison operations.

A comparison operation is a boolean predicate whose operands are mapping
rules. Operands are evaluated in the context of the incoming result (so field
operands read the same row) before the comparison runs.

Evaluation never falls back to a default boolean: a missing operand raises
``MissingOperandError`` and an operand that evaluates to a failed result
raises ``OperandEvaluationError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar, Self

from ..constants import Messages
from ..exceptions import MissingOperandError, OperandEvaluationError
from ..rules.base import MappingRule
from ..serialization import get_field, optional_from_dict

if TYPE_CHECKING:
    from ..transformations.base import TransformationResult

OPERAND_NAMES: dict[str, str] = {
    "left_operand": "LeftOperand",
    "right_operand": "RightOperand",
    "low_limit": "LowLimit",
    "high_limit": "HighLimit",
}


class ComparisonOperation(ABC):
    type_id: ClassVar[str] = ""
    display_name: ClassVar[str] = ""
    short_name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    required_operands: ClassVar[tuple[str, ...]] = ("left_operand",)
    negate: ClassVar[bool] = False

    def __init__(
        self,
        left_operand: MappingRule | None = None,
        right_operand: MappingRule | None = None,
        low_limit: MappingRule | None = None,
        high_limit: MappingRule | None = None,
    ) -> None:
        super().__init__()
        self.left_operand = left_operand
        self.right_operand = right_operand
        self.low_limit = low_limit
        self.high_limit = high_limit

    def configure_operands(
        self,
        left: MappingRule | None,
        right: MappingRule | None = None,
        secondary: MappingRule | None = None,
    ) -> Self:
        """Set the operands in one call.

        ``right`` doubles as the low limit and ``secondary`` as the high limit
        of range checks.
        """
        if left is None:
            raise MissingOperandError(
                Messages.OPERAND_MISSING.format(
                    operand="LeftOperand", operation=self.display_name
                )
            )
        self.left_operand = left
        self.right_operand = right
        self.low_limit = right
        self.high_limit = secondary
        return self

    async def evaluate(self, context: TransformationResult) -> bool:
        """Evaluate the predicate in the context of ``context``."""
        for name in self.required_operands:
            self._require(name)
        outcome = await self._evaluate(context)
        return not outcome if self.negate else outcome

    @abstractmethod
    async def _evaluate(self, context: TransformationResult) -> bool: ...

    def _require(self, name: str) -> MappingRule:
        operand = getattr(self, name)
        if operand is None:
            raise MissingOperandError(
                Messages.OPERAND_MISSING.format(
                    operand=OPERAND_NAMES.get(name, name), operation=self.display_name
                )
            )
        return operand

    async def _operand_value(self, name: str, context: TransformationResult) -> object:
        return await self._rule_value(
            self._require(name), OPERAND_NAMES.get(name, name), context
        )

    async def _rule_value(
        self, rule: MappingRule, label: str, context: TransformationResult
    ) -> object:
        result = await rule.evaluate(context)
        if result.was_failure:
            raise OperandEvaluationError(
                Messages.OPERAND_FAILED.format(
                    operand=label,
                    operation=self.display_name,
                    detail=result.error_message,
                )
            )
        return result.current_value

    async def _operand_values(
        self, context: TransformationResult, *names: str
    ) -> list[object]:
        return list(
            await asyncio.gather(*(self._operand_value(n, context) for n in names))
        )

    def clone(self) -> Self:
        return type(self)(
            *(
                None if operand is None else operand.clone()
                for operand in (
                    self.left_operand,
                    self.right_operand,
                    self.low_limit,
                    self.high_limit,
                )
            )
        )

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"typeId": self.type_id}
        for name in OPERAND_NAMES:
            operand: MappingRule | None = getattr(self, name)
            key = OPERAND_NAMES[name][:1].lower() + OPERAND_NAMES[name][1:]
            payload[key] = None if operand is None else operand.to_dict()
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> Self:
        return cls(
            optional_from_dict(get_field(payload, "leftOperand"), MappingRule),
            optional_from_dict(get_field(payload, "rightOperand"), MappingRule),
            optional_from_dict(get_field(payload, "lowLimit"), MappingRule),
            optional_from_dict(get_field(payload, "highLimit"), MappingRule),
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self.type_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(left={self.left_operand!r}, right={self.right_operand!r})"
