import json
from pathlib import Path

from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..infrastructure.io.exceptions import DataParseError, DataSourceNotFoundError
from .definition import MappingDefinition


class MappingDefinitionLoadError(DataParseError):
    pass


class MappingDefinitionSaveError(DataParseError):
    pass


def load_mapping_definition(path: str | Path) -> MappingDefinition:
    file_path = Path(path)
    if not file_path.exists():
        raise DataSourceNotFoundError(f"Mapping definition not found: {file_path}")
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise MappingDefinitionLoadError(f"Invalid JSON in {file_path}: {exc}") from exc
    except OSError as exc:
        raise MappingDefinitionLoadError(
            f"Failed to read mapping definition: {exc}"
        ) from exc
    try:
        return MappingDefinition.model_validate(data)
    except (ValidationError, ConfigurationError, ValueError) as exc:
        raise MappingDefinitionLoadError(
            f"Failed to load mapping definition: {exc}"
        ) from exc


def save_mapping_definition(definition: MappingDefinition, path: str | Path) -> None:
    file_path = Path(path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = definition.model_dump(by_alias=True)
        with file_path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
    except (OSError, TypeError) as exc:
        raise MappingDefinitionSaveError(
            f"Failed to save mapping definition: {exc}"
        ) from exc
