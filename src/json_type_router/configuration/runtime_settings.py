"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from json_type_router.envelope_unwrapping import UnwrapSettings
from json_type_router.extraction import DEFAULT_MAX_DEPTH, TransferType
from json_type_router.schema_catalog import TypeTag


@dataclass(frozen=True)
class SchemaSourceConfig:
    """Normalized schema text and where it came from."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class ClassificationSettings:
    """Classification behaviour."""

    allow_set_scheme: bool = True


@dataclass(frozen=True)
class ExtractionSettings:
    """Target schema and emission mode for sub-document extraction."""

    schema: SchemaSourceConfig
    tag: TypeTag = TypeTag.USER
    transfer_type: TransferType = TransferType.OBJECT
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class LoggingSettings:
    """Log output configuration."""

    level: str = "INFO"


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    catalog: SchemaSourceConfig | None
    classification: ClassificationSettings
    extraction: ExtractionSettings | None
    unwrapping: UnwrapSettings
    logging: LoggingSettings
