"""Field mappings and table-level application."""

from .definition import (
    ImportedRecordFieldDescriptor,
    ImportTableDefinition,
    MappingDefinition,
    match_column,
)
from .field_mapping import FieldMapping, coerce_to_type
from .store import load_mapping_definition, save_mapping_definition
from .table import (
    CancellationToken,
    apply_all_row,
    apply_all_table,
    results_to_frame,
    rows_from_frame,
    sweep_table,
)

__all__ = [
    "CancellationToken",
    "FieldMapping",
    "ImportTableDefinition",
    "ImportedRecordFieldDescriptor",
    "MappingDefinition",
    "apply_all_row",
    "apply_all_table",
    "coerce_to_type",
    "load_mapping_definition",
    "match_column",
    "results_to_frame",
    "rows_from_frame",
    "save_mapping_definition",
    "sweep_table",
]
