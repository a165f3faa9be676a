"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from json_type_router.envelope_unwrapping import (
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_TARGET_PATTERN,
    DEFAULT_TIMEZONE,
    UnwrapSettings,
)
from json_type_router.extraction import DEFAULT_MAX_DEPTH, TransferType
from json_type_router.schema_catalog import (
    SchemaLoadError,
    TypeTag,
    load_catalog,
    read_catalog_source,
)

from .runtime_settings import (
    ClassificationSettings,
    Configuration,
    ExtractionSettings,
    LoggingSettings,
    SchemaSourceConfig,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
YAML_SUFFIXES = (".yaml", ".yml")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    catalog = _parse_catalog_section(parsed.get("catalog"), path.parent)
    classification = _parse_classification_section(parsed.get("classification"))
    extraction = _parse_extraction_section(parsed.get("extraction"), path.parent)
    unwrapping = _parse_unwrapping_section(parsed.get("unwrapping"))
    logging_settings = _parse_logging_section(parsed.get("logging"))

    return Configuration(
        path=path,
        catalog=catalog,
        classification=classification,
        extraction=extraction,
        unwrapping=unwrapping,
        logging=logging_settings,
    )


def is_yaml_source(source: SchemaSourceConfig) -> bool:
    """Return True when the schema source was read from a YAML file."""
    return source.source_path is not None and source.source_path.suffix.lower() in YAML_SUFFIXES


def _parse_catalog_section(value: Any, base_path: Path) -> SchemaSourceConfig | None:
    if value is None:
        return None
    source = _load_source_definition(value, base_path, "catalog")
    try:
        load_catalog(read_catalog_source(source.text, yaml_format=is_yaml_source(source)))
    except SchemaLoadError as exc:
        raise ConfigurationError(f"catalog: {exc}") from exc
    return source


def _parse_classification_section(value: Any) -> ClassificationSettings:
    section = _optional_mapping(value, "classification")
    return ClassificationSettings(
        allow_set_scheme=_optional_bool(
            section.get("allow_set_scheme"), "classification.allow_set_scheme", default=True
        )
    )


def _parse_extraction_section(value: Any, base_path: Path) -> ExtractionSettings | None:
    if value is None:
        return None
    section = _require_mapping(value, "extraction")
    if "schema" not in section:
        raise ConfigurationError("extraction.schema is required.")
    schema = _load_source_definition(section["schema"], base_path, "extraction.schema")

    tag_label = _require_non_empty_string(section.get("type", "user"), "extraction.type")
    try:
        tag = TypeTag.from_label(tag_label)
    except ValueError as exc:
        raise ConfigurationError(f"extraction.type: {exc}") from exc
    if tag is TypeTag.UNKNOWN:
        raise ConfigurationError("extraction.type must not be 'unknown'.")

    try:
        load_catalog([(tag, schema.text)])
    except SchemaLoadError as exc:
        raise ConfigurationError(f"extraction.schema: {exc}") from exc

    transfer_raw = _require_non_empty_string(
        section.get("transfer_type", TransferType.OBJECT.value), "extraction.transfer_type"
    )
    try:
        transfer_type = TransferType.parse(transfer_raw)
    except ValueError as exc:
        raise ConfigurationError(f"extraction.transfer_type: {exc}") from exc

    max_depth = _require_positive_int(
        section.get("max_depth", DEFAULT_MAX_DEPTH), "extraction.max_depth"
    )
    return ExtractionSettings(
        schema=schema, tag=tag, transfer_type=transfer_type, max_depth=max_depth
    )


def _parse_unwrapping_section(value: Any) -> UnwrapSettings:
    section = _optional_mapping(value, "unwrapping")
    allow_set_attribute = _optional_bool(
        section.get("allow_set_attribute"), "unwrapping.allow_set_attribute", default=True
    )
    datetime_format = _require_non_empty_string(
        section.get("datetime_format", DEFAULT_DATETIME_FORMAT), "unwrapping.datetime_format"
    )
    timezone = _require_non_empty_string(
        section.get("timezone", DEFAULT_TIMEZONE), "unwrapping.timezone"
    )
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"unwrapping.timezone '{timezone}' is not a known zone.") from exc
    target_pattern = _require_non_empty_string(
        section.get("target_pattern", DEFAULT_TARGET_PATTERN), "unwrapping.target_pattern"
    )
    try:
        re.compile(target_pattern)
    except re.error as exc:
        raise ConfigurationError(f"unwrapping.target_pattern is invalid: {exc}") from exc
    return UnwrapSettings(
        allow_set_attribute=allow_set_attribute,
        datetime_format=datetime_format,
        timezone=timezone,
        target_pattern=target_pattern,
    )


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", "INFO"), "logging.level").upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"logging.level must be one of {', '.join(_LOG_LEVELS)}.")
    return LoggingSettings(level=level)


def _load_source_definition(definition: Any, base_path: Path, label: str) -> SchemaSourceConfig:
    if isinstance(definition, str):
        return _non_empty_source(definition, None, label)
    mapping = _require_mapping(definition, label)
    inline = mapping.get("inline")
    path_value = mapping.get("path")
    if inline and path_value:
        raise ConfigurationError(f"{label} must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError(f"{label}.inline must be a string.")
        return _non_empty_source(inline, None, label)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError(f"{label}.path must be a string.")
        source_path = _resolve_path(base_path, path_value)
        if not source_path.exists():
            raise ConfigurationError(f"{label} file not found: {source_path}")
        return _non_empty_source(source_path.read_text(encoding="utf-8"), source_path, label)
    raise ConfigurationError(f"{label} requires either inline or path.")


def _non_empty_source(text: str, source_path: Path | None, label: str) -> SchemaSourceConfig:
    if not text.strip():
        raise ConfigurationError(f"{label} text cannot be empty.")
    return SchemaSourceConfig(text=text, source_path=source_path)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_bool(value: Any, field_name: str, *, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
