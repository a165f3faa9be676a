"""Schema catalog loading, compilation and reloading."""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from json_type_router.schema_validation.validator_adapter import (
    SchemaCompileError,
    SchemaValidatorAdapter,
)

from .catalog_models import Catalog, CompiledCatalog, SchemaDocument, TypeTag

LOGGER = logging.getLogger(__name__)

_URI_PREFIX = "urn:json-type-router"
_SCHEMA_KEYS = ("schema", "scheme")
_YAML_SUFFIXES = (".yaml", ".yml")


class SchemaLoadError(Exception):
    """Raised when a schema source cannot be turned into a catalog."""


class NoCatalogLoaded(Exception):
    """Raised when classification is attempted without a compiled catalog."""


def load_catalog(entries: Sequence[tuple[TypeTag, str]]) -> Catalog:
    """Parse ordered ``(tag, schema text)`` pairs into a catalog."""
    documents: list[SchemaDocument] = []
    seen_tags: set[TypeTag] = set()
    for position, (tag, text) in enumerate(entries):
        if tag is TypeTag.UNKNOWN:
            raise SchemaLoadError(f"Entry {position}: the unknown type cannot carry a schema.")
        if tag in seen_tags:
            raise SchemaLoadError(f"Entry {position}: duplicate schema for {tag.label}.")
        seen_tags.add(tag)
        documents.append(_parse_schema_document(tag, text, position))
    return Catalog(entries=tuple(documents))


def read_catalog_source(text: str, *, yaml_format: bool = False) -> list[tuple[TypeTag, str]]:
    """Read a schema source listing ``{"type": ..., "schema": ...}`` entries.

    The source is JSON unless ``yaml_format`` is set.
    """
    try:
        parsed = yaml.safe_load(text) if yaml_format else json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SchemaLoadError(f"Failed to parse schema source: {exc}") from exc

    if not isinstance(parsed, Sequence) or isinstance(parsed, str):
        raise SchemaLoadError("Schema source root must be a list of entries.")

    entries: list[tuple[TypeTag, str]] = []
    for position, item in enumerate(parsed):
        if not isinstance(item, Mapping):
            raise SchemaLoadError(f"Entry {position}: must be a mapping.")
        label = item.get("type")
        if not isinstance(label, str):
            raise SchemaLoadError(f"Entry {position}: 'type' must be a string.")
        try:
            tag = TypeTag.from_label(label)
        except ValueError as exc:
            raise SchemaLoadError(f"Entry {position}: {exc}") from exc
        entries.append((tag, _schema_text(item, position)))
    return entries


def load_catalog_file(path: Path | str) -> Catalog:
    """Load a catalog from a schema source file."""
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SchemaLoadError(f"Schema source not found: {source}") from exc
    except OSError as exc:
        raise SchemaLoadError(f"Failed to read schema source {source}: {exc}") from exc
    yaml_format = source.suffix.lower() in _YAML_SUFFIXES
    catalog = load_catalog(read_catalog_source(text, yaml_format=yaml_format))
    LOGGER.info("Loaded %d schemas from %s", len(catalog), source)
    return catalog


def compile_all(
    catalog: Catalog, adapter: SchemaValidatorAdapter | None = None
) -> CompiledCatalog:
    """Compile every catalog entry, skipping and reporting the ones that fail."""
    resolved_adapter = adapter or SchemaValidatorAdapter()
    compiled = []
    failures = []
    for document in catalog.entries:
        try:
            compiled.append(resolved_adapter.compile(document))
        except SchemaCompileError as exc:
            LOGGER.warning("Skipping schema %s: %s", document.tag.label, exc.cause)
            failures.append(exc)
    return CompiledCatalog(entries=tuple(compiled), failures=tuple(failures))


class CatalogReference:
    """Holder for the catalog currently used by classification calls.

    Readers take the reference once per call; ``swap`` publishes a fully
    compiled replacement without touching the catalog readers already hold.
    """

    def __init__(self, catalog: CompiledCatalog | None = None) -> None:
        self._catalog = catalog
        self._lock = threading.Lock()

    def current(self) -> CompiledCatalog:
        catalog = self._catalog
        if catalog is None:
            raise NoCatalogLoaded("No schema catalog has been loaded.")
        return catalog

    def swap(self, catalog: CompiledCatalog) -> CompiledCatalog | None:
        """Install ``catalog`` and return the previous one."""
        with self._lock:
            previous = self._catalog
            self._catalog = catalog
        LOGGER.info("Schema catalog replaced (%d entries)", len(catalog.entries))
        return previous


def _schema_text(item: Mapping[str, Any], position: int) -> str:
    present = [key for key in _SCHEMA_KEYS if key in item]
    if len(present) != 1:
        raise SchemaLoadError(
            f"Entry {position}: exactly one of 'schema' or 'scheme' is required."
        )
    value = item[present[0]]
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _parse_schema_document(tag: TypeTag, text: str, position: int) -> SchemaDocument:
    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Entry {position}: invalid {tag.label} schema: {exc}") from exc
    if not isinstance(root, (Mapping, bool)):
        raise SchemaLoadError(
            f"Entry {position}: {tag.label} schema must be a JSON object or boolean."
        )
    return SchemaDocument(tag=tag, uri=_schema_uri(tag, root), text=text, root=root)


def _schema_uri(tag: TypeTag, root: Any) -> str:
    if isinstance(root, Mapping):
        declared = root.get("$id")
        if isinstance(declared, str) and declared.strip():
            return declared.strip()
    canonical = json.dumps(root, sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"{_URI_PREFIX}:{tag.label}:{digest}"
