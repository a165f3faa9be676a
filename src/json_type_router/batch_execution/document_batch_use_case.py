"""Batch use cases: classify, extract and unwrap document files."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from json_type_router.classification import classify_and_disambiguate
from json_type_router.configuration import (
    Configuration,
    ConfigurationError,
    ExtractionSettings,
    is_yaml_source,
    load_configuration,
)
from json_type_router.envelope_unwrapping import EnvelopeError, unwrap_envelope
from json_type_router.extraction import MaxDepthExceeded, bundle_matches, extract_matches
from json_type_router.routing import (
    EXTRACTION_NONE_DESTINATION,
    EXTRACTION_ORIGINAL_DESTINATION,
    EXTRACTION_SUCCESS_DESTINATION,
    failure_decision,
    inherit_attributes,
    route_classification,
)
from json_type_router.schema_catalog import (
    CompiledCatalog,
    SchemaLoadError,
    compile_all,
    load_catalog,
    read_catalog_source,
)
from json_type_router.schema_validation import (
    CompiledSchema,
    SchemaCompileError,
    SchemaEvaluationError,
    SchemaValidatorAdapter,
)

from .batch_contracts import BatchOutcome, BatchRequest, DocumentOutcome

LOGGER = logging.getLogger(__name__)

FILENAME_ATTRIBUTE = "filename"


class BatchExecutionError(Exception):
    """Raised when a batch cannot be started."""


class DocumentUnparseable(Exception):
    """Raised when a source file does not hold one JSON document."""


def execute_classification_batch(
    request: BatchRequest, *, configuration: Configuration | None = None
) -> BatchOutcome:
    """Classify every document file against the configured catalog."""
    configuration = configuration or _load_configuration(request.config_path)
    adapter = SchemaValidatorAdapter()
    catalog = _compile_catalog(configuration, adapter)
    allow_set_scheme = configuration.classification.allow_set_scheme

    def classify_one(source: str, document: Any) -> list[DocumentOutcome]:
        result = classify_and_disambiguate(
            document, catalog, include_schema=allow_set_scheme, adapter=adapter
        )
        decision = route_classification(result, allow_set_scheme=allow_set_scheme)
        return [
            DocumentOutcome(
                source=source,
                destination=decision.destination,
                attributes={**_base_attributes(source), **decision.attributes},
                tag=decision.tag,
                label=decision.label,
            )
        ]

    return _run_batch("classification", request.document_paths, classify_one)


def execute_extraction_batch(
    request: BatchRequest, *, configuration: Configuration | None = None
) -> BatchOutcome:
    """Pull every sub-document matching the extraction schema out of each file."""
    configuration = configuration or _load_configuration(request.config_path)
    settings = configuration.extraction
    if settings is None:
        raise BatchExecutionError("Configuration section 'extraction' is required for extract.")
    adapter = SchemaValidatorAdapter()
    target = _compile_extraction_schema(settings, adapter)

    def extract_one(source: str, document: Any) -> list[DocumentOutcome]:
        matches = extract_matches(
            document, target, adapter=adapter, max_depth=settings.max_depth
        )
        parent_attributes = _base_attributes(source)
        LOGGER.info("Found %d %s documents in %s", len(matches), settings.tag.label, source)
        if not matches:
            return [
                DocumentOutcome(
                    source=source,
                    destination=EXTRACTION_NONE_DESTINATION,
                    attributes=parent_attributes,
                )
            ]
        outcomes = [
            DocumentOutcome(
                source=source,
                destination=EXTRACTION_SUCCESS_DESTINATION,
                attributes=inherit_attributes(parent_attributes, {}, settings.tag),
                tag=settings.tag,
                label=settings.tag.label,
                document=emitted,
                has_document=True,
            )
            for emitted in bundle_matches(matches, settings.transfer_type)
        ]
        outcomes.append(
            DocumentOutcome(
                source=source,
                destination=EXTRACTION_ORIGINAL_DESTINATION,
                attributes=parent_attributes,
            )
        )
        return outcomes

    return _run_batch("extraction", request.document_paths, extract_one)


def execute_unwrap_batch(
    request: BatchRequest, *, configuration: Configuration | None = None
) -> BatchOutcome:
    """Unwrap every captured envelope file into its response content."""
    configuration = configuration or _load_configuration(request.config_path)
    settings = configuration.unwrapping

    def unwrap_one(source: str, document: Any) -> list[DocumentOutcome]:
        outcome = unwrap_envelope(document, settings)
        attributes = dict(outcome.attributes)
        if settings.allow_set_attribute:
            attributes = {**_base_attributes(source), **attributes}
        return [
            DocumentOutcome(
                source=source,
                destination=outcome.destination.value,
                attributes=attributes,
                document=outcome.content,
                has_document=True,
            )
        ]

    return _run_batch("unwrap", request.document_paths, unwrap_one)


def read_document(path: Path | str) -> Any:
    """Read and parse one JSON document file."""
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentUnparseable(f"Failed to read {source}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentUnparseable(f"Failed to parse {source}: {exc}") from exc
    except RecursionError as exc:
        raise DocumentUnparseable(f"Failed to parse {source}: nesting is too deep") from exc


def _run_batch(
    name: str,
    document_paths: tuple[str, ...],
    process: Callable[[str, Any], list[DocumentOutcome]],
) -> BatchOutcome:
    outcomes: list[DocumentOutcome] = []
    for source in document_paths:
        try:
            document = read_document(source)
            outcomes.extend(process(source, document))
        except (
            DocumentUnparseable,
            EnvelopeError,
            MaxDepthExceeded,
            SchemaEvaluationError,
        ) as exc:
            LOGGER.error("%s: %s", type(exc).__name__, exc)
            decision = failure_decision(str(exc))
            outcomes.append(
                DocumentOutcome(
                    source=source,
                    destination=decision.destination,
                    attributes={**_base_attributes(source), **decision.attributes},
                )
            )
    batch = BatchOutcome(outcomes=tuple(outcomes))
    LOGGER.info(
        "Finished %s batch of %d files: %s", name, len(document_paths), batch.destination_counts()
    )
    return batch


def _load_configuration(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except (ConfigurationError, OSError) as exc:
        raise BatchExecutionError(str(exc)) from exc


def _compile_catalog(
    configuration: Configuration, adapter: SchemaValidatorAdapter
) -> CompiledCatalog:
    source = configuration.catalog
    if source is None:
        raise BatchExecutionError("Configuration section 'catalog' is required for classify.")
    try:
        catalog = load_catalog(read_catalog_source(source.text, yaml_format=is_yaml_source(source)))
    except SchemaLoadError as exc:
        raise BatchExecutionError(str(exc)) from exc
    return compile_all(catalog, adapter)


def _compile_extraction_schema(
    settings: ExtractionSettings, adapter: SchemaValidatorAdapter
) -> CompiledSchema:
    try:
        (schema,) = load_catalog([(settings.tag, settings.schema.text)]).entries
        return adapter.compile(schema)
    except (SchemaLoadError, SchemaCompileError) as exc:
        raise BatchExecutionError(str(exc)) from exc


def _base_attributes(source: str) -> dict[str, str]:
    return {FILENAME_ATTRIBUTE: Path(source).name}
