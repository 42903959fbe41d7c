from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import (
    ALL_CHANGE_BITS,
    ALL_VALIDATION_BITS,
    DEFAULT_CHANGE,
    DEFAULT_VALIDATION,
    Defaults,
    OutputFormats,
)

CONFIG_FILE_NAME = "afas_update.toml"
_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


@dataclass(frozen=True, slots=True)
class UpdateConfig:
    schema_dir: Path | None = None
    output_format: str = Defaults.OUTPUT_FORMAT
    pretty: bool = False
    indent: int | None = None
    change_behavior: int = int(DEFAULT_CHANGE)
    validation_behavior: int = int(DEFAULT_VALIDATION)

    def __post_init__(self) -> None:
        if self.output_format not in OutputFormats.ALL:
            raise ValueError(
                f"output_format must be one of {', '.join(OutputFormats.ALL)}, "
                f"got {self.output_format!r}"
            )
        if self.indent is not None and self.indent < 1:
            raise ValueError(f"indent must be positive, got {self.indent}")
        if not 0 <= self.change_behavior <= ALL_CHANGE_BITS:
            raise ValueError(
                f"change_behavior must be between 0 and {ALL_CHANGE_BITS}, "
                f"got {self.change_behavior}"
            )
        if not 0 <= self.validation_behavior <= ALL_VALIDATION_BITS:
            raise ValueError(
                f"validation_behavior must be between 0 and {ALL_VALIDATION_BITS}, "
                f"got {self.validation_behavior}"
            )

    @classmethod
    def from_env(cls) -> UpdateConfig:
        raw_schema_dir = os.getenv("AFAS_SCHEMA_DIR")
        schema_dir = Path(raw_schema_dir.strip()) if raw_schema_dir else None
        raw_indent = os.getenv("AFAS_INDENT")
        return cls(
            schema_dir=schema_dir,
            output_format=os.getenv("AFAS_OUTPUT_FORMAT", Defaults.OUTPUT_FORMAT)
            .strip()
            .lower(),
            pretty=_coerce_bool(os.getenv("AFAS_PRETTY", "0"), key="AFAS_PRETTY"),
            indent=int(raw_indent) if raw_indent else None,
            change_behavior=int(
                os.getenv("AFAS_CHANGE_BEHAVIOR", str(int(DEFAULT_CHANGE)))
            ),
            validation_behavior=int(
                os.getenv("AFAS_VALIDATION_BEHAVIOR", str(int(DEFAULT_VALIDATION)))
            ),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> UpdateConfig:
        config = UpdateConfig.from_env()
        if config_file is None:
            config_file = Path(CONFIG_FILE_NAME)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: UpdateConfig) -> UpdateConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        paths = _get_table(data, "paths")
        output = _get_table(data, "output")
        behavior = _get_table(data, "behavior")
        schema_dir = base_config.schema_dir
        if value := paths.get("schema_dir"):
            schema_dir = Path(str(value))
            if not schema_dir.is_absolute():
                schema_dir = config_file.parent / schema_dir
        output_format = base_config.output_format
        if (value := output.get("format")) is not None:
            output_format = str(value).strip().lower()
        pretty = base_config.pretty
        if (value := output.get("pretty")) is not None:
            pretty = _coerce_bool(value, key="output.pretty")
        indent = base_config.indent
        if (value := output.get("indent")) is not None:
            indent = _coerce_int(value, key="output.indent")
        change_behavior = base_config.change_behavior
        if (value := behavior.get("change")) is not None:
            change_behavior = _coerce_int(value, key="behavior.change")
        validation_behavior = base_config.validation_behavior
        if (value := behavior.get("validation")) is not None:
            validation_behavior = _coerce_int(value, key="behavior.validation")
        return UpdateConfig(
            schema_dir=schema_dir,
            output_format=output_format,
            pretty=pretty,
            indent=indent,
            change_behavior=change_behavior,
            validation_behavior=validation_behavior,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")


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
