from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults


@dataclass(frozen=True, slots=True)
class EngineConfig:
    max_concurrent_rows: int = Defaults.MAX_CONCURRENT_ROWS
    min_confidence: float = Defaults.MIN_CONFIDENCE
    csv_encoding: str = Defaults.CSV_ENCODING
    strict_na_handling: bool = True
    normalize_headers: bool = True

    def __post_init__(self) -> None:
        if self.max_concurrent_rows < 1:
            raise ValueError(
                f"max_concurrent_rows must be positive, got {self.max_concurrent_rows}"
            )
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError(
                f"min_confidence must be between 0.0 and 1.0, got {self.min_confidence}"
            )
        if not self.csv_encoding.strip():
            raise ValueError("csv_encoding must not be blank")

    @classmethod
    def from_env(cls) -> EngineConfig:
        return cls(
            max_concurrent_rows=int(
                os.getenv("DIU_MAX_CONCURRENT_ROWS", str(Defaults.MAX_CONCURRENT_ROWS))
            ),
            min_confidence=float(
                os.getenv("DIU_MIN_CONFIDENCE", str(Defaults.MIN_CONFIDENCE))
            ),
            csv_encoding=os.getenv("DIU_CSV_ENCODING", Defaults.CSV_ENCODING),
        )


class ConfigLoader:
    @staticmethod
    def load(config_file: Path | None = None) -> EngineConfig:
        config = EngineConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except (OSError, ValueError, tomllib.TOMLDecodeError) as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: EngineConfig) -> EngineConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        engine = _get_table(data, "engine")
        io_section = _get_table(data, "io")
        max_concurrent_rows = base_config.max_concurrent_rows
        if (value := engine.get("max_concurrent_rows")) is not None:
            max_concurrent_rows = _coerce_int(value, key="engine.max_concurrent_rows")
        min_confidence = base_config.min_confidence
        if (value := engine.get("min_confidence")) is not None:
            min_confidence = _coerce_float(value, key="engine.min_confidence")
        csv_encoding = base_config.csv_encoding
        if value := io_section.get("csv_encoding"):
            csv_encoding = str(value)
        strict_na_handling = base_config.strict_na_handling
        if (value := io_section.get("strict_na_handling")) is not None:
            strict_na_handling = _coerce_bool(value, key="io.strict_na_handling")
        normalize_headers = base_config.normalize_headers
        if (value := io_section.get("normalize_headers")) is not None:
            normalize_headers = _coerce_bool(value, key="io.normalize_headers")
        return EngineConfig(
            max_concurrent_rows=max_concurrent_rows,
            min_confidence=min_confidence,
            csv_encoding=csv_encoding,
            strict_na_handling=strict_na_handling,
            normalize_headers=normalize_headers,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_float(value: object, *, key: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be numeric, got bool")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value)
    raise ValueError(f"{key} must be numeric or string, got {type(value).__name__}")


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ValueError(f"{key} must be a boolean, got {value!r}")
