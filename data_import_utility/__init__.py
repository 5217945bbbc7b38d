"""Data import utility.

A rule-based engine that maps the rows of imported tables onto target
fields. Each target field is produced by a mapping rule; rules read source
fields through chains of value transformations, and conditional
transformations branch on comparison operations.
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("data-import-utility")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from .transformations import (  # noqa: I001
    TransformationResult,
    ValueTransformation,
    FieldTransformation,
)
from .rules import MappingRule, RuleType
from .comparisons import ComparisonOperation
from .mapping import FieldMapping, apply_all_row, apply_all_table
from .catalog import register_builtin_types
from .registry import get_registry, register_type, resolve_type
from .serialization import dumps, from_dict, loads, to_dict

__all__ = [
    "__version__",
    "ComparisonOperation",
    "FieldMapping",
    "FieldTransformation",
    "MappingRule",
    "RuleType",
    "TransformationResult",
    "ValueTransformation",
    "apply_all_row",
    "apply_all_table",
    "dumps",
    "from_dict",
    "get_registry",
    "loads",
    "register_builtin_types",
    "register_type",
    "resolve_type",
    "to_dict",
]
