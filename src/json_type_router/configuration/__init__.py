"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, is_yaml_source, load_configuration
from .runtime_settings import (
    ClassificationSettings,
    Configuration,
    ExtractionSettings,
    LoggingSettings,
    SchemaSourceConfig,
)

__all__ = [
    "ClassificationSettings",
    "Configuration",
    "ExtractionSettings",
    "LoggingSettings",
    "SchemaSourceConfig",
    "ConfigurationError",
    "is_yaml_source",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
