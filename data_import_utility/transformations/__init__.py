"""Value transformations.

``conditional`` depends on rules and comparisons, which in turn build on the
modules above it, so it is imported last.
"""

from .base import (
    Row,
    TransformationResult,
    ValueTransformation,
    current_value_display,
    original_value_display,
    value_to_text,
)
from .calculate import CalculateTransformation
from .combine_fields import CombineFieldsTransformation
from .field_transformation import FieldTransformation
from .interpolate import InterpolateTransformation
from .pipeline import TransformationPipeline
from .regex_match import RegexMatchTransformation
from .substring import SubstringTransformation
from .value_map import MapTransformation, ValueMap

from .conditional import ConditionalTransformation  # noqa: I001

__all__ = [
    "CalculateTransformation",
    "CombineFieldsTransformation",
    "ConditionalTransformation",
    "FieldTransformation",
    "InterpolateTransformation",
    "MapTransformation",
    "RegexMatchTransformation",
    "Row",
    "SubstringTransformation",
    "TransformationPipeline",
    "TransformationResult",
    "ValueMap",
    "ValueTransformation",
    "current_value_display",
    "original_value_display",
    "value_to_text",
]
