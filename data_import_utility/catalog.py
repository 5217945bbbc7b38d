"""Registration of the built-in rules, transformations and comparisons."""

from __future__ import annotations

from .comparisons import COMPARISON_OPERATIONS
from .registry import TypeRegistry, get_registry
from .rules import (
    CombineFieldsRule,
    ConstantValueRule,
    CopyRule,
    CustomFieldlessRule,
    FieldAccessRule,
    IgnoreRule,
    StaticValueRule,
)
from .transformations import (
    CalculateTransformation,
    CombineFieldsTransformation,
    ConditionalTransformation,
    InterpolateTransformation,
    MapTransformation,
    RegexMatchTransformation,
    SubstringTransformation,
)

MAPPING_RULES = (
    IgnoreRule,
    CopyRule,
    ConstantValueRule,
    CombineFieldsRule,
    CustomFieldlessRule,
    FieldAccessRule,
    StaticValueRule,
)

VALUE_TRANSFORMATIONS = (
    SubstringTransformation,
    RegexMatchTransformation,
    InterpolateTransformation,
    MapTransformation,
    CalculateTransformation,
    CombineFieldsTransformation,
    ConditionalTransformation,
)

BUILTIN_TYPES: tuple[type, ...] = (
    *MAPPING_RULES,
    *VALUE_TRANSFORMATIONS,
    *COMPARISON_OPERATIONS,
)


def register_builtin_types(registry: TypeRegistry) -> TypeRegistry:
    for cls in BUILTIN_TYPES:
        registry.register(cls)
    return registry


register_builtin_types(get_registry())
