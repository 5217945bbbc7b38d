"""Comparison operations used by conditional transformations."""

from .base import ComparisonOperation
from .equality import EqualsOperation, InOperation, NotEqualOperation, NotInOperation
from .nullity import (
    IsFalseOperation,
    IsNotNullOperation,
    IsNotNullOrEmptyOperation,
    IsNotNullOrWhiteSpaceOperation,
    IsNullOperation,
    IsNullOrEmptyOperation,
    IsNullOrWhiteSpaceOperation,
    IsTrueOperation,
)
from .ordering import (
    BetweenOperation,
    GreaterThanOperation,
    GreaterThanOrEqualOperation,
    LessThanOperation,
    LessThanOrEqualOperation,
    NotBetweenOperation,
)
from .text import (
    ContainsOperation,
    EndsWithOperation,
    NotContainsOperation,
    RegexMatchOperation,
    StartsWithOperation,
)

COMPARISON_OPERATIONS: tuple[type[ComparisonOperation], ...] = (
    EqualsOperation,
    NotEqualOperation,
    GreaterThanOperation,
    GreaterThanOrEqualOperation,
    LessThanOperation,
    LessThanOrEqualOperation,
    BetweenOperation,
    NotBetweenOperation,
    ContainsOperation,
    NotContainsOperation,
    StartsWithOperation,
    EndsWithOperation,
    RegexMatchOperation,
    InOperation,
    NotInOperation,
    IsNullOperation,
    IsNotNullOperation,
    IsNullOrEmptyOperation,
    IsNotNullOrEmptyOperation,
    IsNullOrWhiteSpaceOperation,
    IsNotNullOrWhiteSpaceOperation,
    IsTrueOperation,
    IsFalseOperation,
)

__all__ = [
    "COMPARISON_OPERATIONS",
    "BetweenOperation",
    "ComparisonOperation",
    "ContainsOperation",
    "EndsWithOperation",
    "EqualsOperation",
    "GreaterThanOperation",
    "GreaterThanOrEqualOperation",
    "InOperation",
    "IsFalseOperation",
    "IsNotNullOperation",
    "IsNotNullOrEmptyOperation",
    "IsNotNullOrWhiteSpaceOperation",
    "IsNullOperation",
    "IsNullOrEmptyOperation",
    "IsNullOrWhiteSpaceOperation",
    "IsTrueOperation",
    "LessThanOperation",
    "LessThanOrEqualOperation",
    "NotBetweenOperation",
    "NotContainsOperation",
    "NotEqualOperation",
    "NotInOperation",
    "RegexMatchOperation",
    "StartsWithOperation",
]
