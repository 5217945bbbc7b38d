"""Table definitions and the mapping document persisted between sessions."""

from __future__ import annotations

from collections.abc import Iterable
import re
from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from rapidfuzz import fuzz

from ..constants import Defaults
from ..rules.copy_rule import CopyRule
from .field_mapping import FieldMapping

VALUE_SET_SIZE = 20

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def _dtype_name(dtype: Any) -> str:
    if pd.api.types.is_bool_dtype(dtype):
        return "bool"
    if pd.api.types.is_integer_dtype(dtype):
        return "int"
    if pd.api.types.is_float_dtype(dtype):
        return "float"
    if pd.api.types.is_datetime64_any_dtype(dtype):
        return "datetime"
    if pd.api.types.is_string_dtype(dtype):
        return "str"
    return "object"


def normalize_name(text: str) -> str:
    return _NON_ALNUM.sub("", text.upper())


def match_column(
    target: str, columns: Iterable[str], min_confidence: float = Defaults.MIN_CONFIDENCE
) -> str | None:
    """Find the source column that best matches ``target``.

    An exact case-insensitive match wins outright; otherwise the most similar
    column at or above ``min_confidence`` is returned.
    """
    candidates = list(columns)
    for column in candidates:
        if column.casefold() == target.casefold():
            return column
    normalized_target = normalize_name(target)
    best: tuple[float, str] | None = None
    for column in candidates:
        score_raw = fuzz.token_set_ratio(column.upper(), target.upper())
        score_norm = fuzz.ratio(normalize_name(column), normalized_target)
        score = max(score_raw, score_norm) / 100
        if best is None or score > best[0]:
            best = (score, column)
    if best is None or best[0] < min_confidence:
        return None
    return best[1]


class ImportedRecordFieldDescriptor(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    field_name: str
    for_table_name: str | None = None
    field_type_string: str = "object"
    value_set: list[Any] = Field(default_factory=list, exclude=True)


class ImportTableDefinition(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, arbitrary_types_allowed=True
    )

    table_name: str
    field_descriptors: list[ImportedRecordFieldDescriptor] = Field(default_factory=list)
    field_mappings: list[FieldMapping] = Field(default_factory=list)

    @field_validator("field_mappings", mode="before")
    @classmethod
    def _load_field_mappings(cls, value: Any) -> Any:
        if value is None:
            return []
        return [
            FieldMapping.from_dict(item) if isinstance(item, dict) else item
            for item in value
        ]

    @field_serializer("field_mappings")
    def _dump_field_mappings(self, value: list[FieldMapping]) -> list[dict[str, object]]:
        return [mapping.to_dict() for mapping in value]

    @property
    def field_names(self) -> list[str]:
        return [descriptor.field_name for descriptor in self.field_descriptors]

    def refresh_field_descriptors(
        self,
        frame: pd.DataFrame,
        target_mappings: Iterable[FieldMapping] | None = None,
        *,
        overwrite_existing: bool = False,
        auto_match: bool = False,
        min_confidence: float = Defaults.MIN_CONFIDENCE,
    ) -> ImportTableDefinition:
        """Describe the columns of ``frame`` and line up the target mappings.

        Existing descriptors are kept unless ``overwrite_existing`` is set.
        Existing mappings whose source fields are all still present survive;
        the rest are replaced by fresh copies of ``target_mappings``. With
        ``auto_match``, unconfigured mappings get a copy rule for the source
        column that best matches their field name.
        """
        if overwrite_existing or not self.field_descriptors:
            self.field_descriptors = [
                ImportedRecordFieldDescriptor(
                    field_name=str(column),
                    for_table_name=self.table_name,
                    field_type_string=_dtype_name(frame[column].dtype),
                    value_set=frame[column].dropna().unique()[:VALUE_SET_SIZE].tolist(),
                )
                for column in frame.columns
            ]
        columns = [str(column) for column in frame.columns]
        if target_mappings is not None:
            self.field_mappings = self._merge_valid_mappings(
                [mapping.clone() for mapping in target_mappings], columns
            )
        if auto_match:
            self._match_fields(columns, min_confidence)
        return self

    def _merge_valid_mappings(
        self, target_mappings: list[FieldMapping], columns: list[str]
    ) -> list[FieldMapping]:
        available = set(columns)
        existing = {
            mapping.field_name: mapping
            for mapping in self.field_mappings
            if all(name in available for name in mapping.source_field_names)
        }
        return [
            existing.get(mapping.field_name, mapping) for mapping in target_mappings
        ]

    def _match_fields(self, columns: list[str], min_confidence: float) -> None:
        for mapping in self.field_mappings:
            if mapping.mapping_rule is not None and not mapping.mapping_rule.is_empty:
                continue
            if column := match_column(mapping.field_name, columns, min_confidence):
                mapping.mapping_rule = CopyRule.for_field(column)


class MappingDefinition(BaseModel):
    """The file-level mapping document: one definition per source table."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    version: int = 1
    tables: list[ImportTableDefinition] = Field(default_factory=list)

    def get_table(self, table_name: str | None = None) -> ImportTableDefinition:
        if not self.tables:
            raise KeyError("The mapping definition holds no tables")
        if table_name is None:
            return self.tables[0]
        for table in self.tables:
            if table.table_name == table_name:
                return table
        raise KeyError(f"No table definition named '{table_name}'")
