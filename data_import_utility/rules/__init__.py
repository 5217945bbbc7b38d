"""Mapping rules.

Each rule produces the value of one output field from a source row.
"""

from .base import MappingRule, RuleType
from .combine_fields import CombineFieldsRule
from .constant_value import ConstantValueRule
from .copy_rule import CopyRule
from .custom_fieldless import CustomFieldlessRule
from .field_access import FieldAccessRule
from .ignore import IgnoreRule
from .static_value import StaticValueRule

__all__ = [
    "CombineFieldsRule",
    "ConstantValueRule",
    "CopyRule",
    "CustomFieldlessRule",
    "FieldAccessRule",
    "IgnoreRule",
    "MappingRule",
    "RuleType",
    "StaticValueRule",
]
