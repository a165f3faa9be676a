"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for json-type-router.
# Replace every <REQUIRED> placeholder before running the command that needs it.
# Sections marked optional fall back to the defaults shown in the comments.

catalog:
  # Schema source for `classify`: a JSON (or .yaml) list of
  # {"type": "<type label>", "schema": {...}} entries, evaluated top to bottom.
  # Provide either inline schema source text or a schema source path.
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"

classification:
  # Attach scheme.type and scheme.json attributes to classified documents.
  allow_set_scheme: true

extraction:
  # Schema describing the sub-documents `extract` looks for.
  schema:
    path: "<REQUIRED>"
    # inline: "<OPTIONAL>"
  # Type label attached to extracted documents.
  type: "user"
  # object: one emitted document per match; array: one document holding all matches.
  transfer_type: "object"
  max_depth: 256

unwrapping:
  allow_set_attribute: true
  datetime_format: "%Y-%m-%dT%H:%M:%S"
  timezone: "Asia/Tokyo"
  # target_pattern: "<OPTIONAL>"

logging:
  level: "INFO"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
