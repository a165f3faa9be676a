"""First-match-wins document classification."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from json_type_router.schema_catalog.catalog_loader import NoCatalogLoaded
from json_type_router.schema_catalog.catalog_models import (
    CompiledCatalog,
    SchemaDocument,
    TypeTag,
)
from json_type_router.schema_validation.validator_adapter import (
    CompiledSchema,
    SchemaEvaluationError,
    SchemaValidatorAdapter,
)

from .disambiguator import disambiguate

LOGGER = logging.getLogger(__name__)

SCHEME_JSON_ATTRIBUTE = "scheme.json"
SCHEME_TYPE_ATTRIBUTE = "scheme.type"


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying and disambiguating one document."""

    tag: TypeTag
    label: str
    attributes: dict[str, str] = field(default_factory=dict)
    schema: SchemaDocument | None = None

    @property
    def is_unknown(self) -> bool:
        return self.tag is TypeTag.UNKNOWN


def match_entry(
    document: Any,
    catalog: CompiledCatalog | None,
    adapter: SchemaValidatorAdapter | None = None,
) -> CompiledSchema | None:
    """Return the first catalog entry whose schema accepts ``document``."""
    if catalog is None:
        raise NoCatalogLoaded("Classification requires a compiled schema catalog.")
    resolved_adapter = adapter or SchemaValidatorAdapter()
    for entry in catalog.entries:
        try:
            if resolved_adapter.matches(entry, document):
                return entry
        except SchemaEvaluationError as exc:
            LOGGER.error("%s: %s: %s", type(exc.cause).__name__, entry.schema.tag.name, exc.cause)
    return None


def classify(
    document: Any,
    catalog: CompiledCatalog | None,
    adapter: SchemaValidatorAdapter | None = None,
) -> TypeTag:
    """Return the tag of the first accepting schema, or UNKNOWN."""
    entry = match_entry(document, catalog, adapter)
    if entry is None:
        return TypeTag.UNKNOWN
    return entry.schema.tag


def classify_and_disambiguate(
    document: Any,
    catalog: CompiledCatalog | None,
    *,
    include_schema: bool = True,
    adapter: SchemaValidatorAdapter | None = None,
) -> ClassificationResult:
    """Classify ``document`` and refine its tag with structural probes.

    When ``include_schema`` is set and a schema matched, the result carries
    ``scheme.json`` (the compact schema text) and ``scheme.type`` (the label)
    attributes for downstream stages. A document downgraded to UNKNOWN by
    disambiguation carries no attributes, like one no schema accepted.
    """
    entry = match_entry(document, catalog, adapter)
    if entry is None:
        return ClassificationResult(tag=TypeTag.UNKNOWN, label=TypeTag.UNKNOWN.label)

    tag, label = disambiguate(document, entry.schema.tag)
    if tag is TypeTag.UNKNOWN:
        return ClassificationResult(tag=tag, label=label)
    attributes: dict[str, str] = {}
    if include_schema:
        attributes[SCHEME_JSON_ATTRIBUTE] = _compact_schema_text(entry.schema)
        attributes[SCHEME_TYPE_ATTRIBUTE] = label
    LOGGER.debug("Classified document as %s (%s)", tag.name, label)
    return ClassificationResult(tag=tag, label=label, attributes=attributes, schema=entry.schema)


def _compact_schema_text(schema: SchemaDocument) -> str:
    return json.dumps(schema.root, ensure_ascii=False, separators=(",", ":"))
