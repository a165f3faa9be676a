"""JSON schema validator adapter."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jsonschema import validators
from jsonschema.exceptions import SchemaError as JsonSchemaDefinitionError
from jsonschema.protocols import Validator
from jsonschema.validators import Draft202012Validator
from referencing.exceptions import Unresolvable

if TYPE_CHECKING:
    from json_type_router.schema_catalog.catalog_models import SchemaDocument, TypeTag

LOGGER = logging.getLogger(__name__)


class SchemaCompileError(Exception):
    """Raised when one schema cannot be turned into a validator."""

    def __init__(self, tag: TypeTag, cause: Exception | str) -> None:
        self.tag = tag
        self.cause = cause
        super().__init__(f"Schema for {tag.name} ({tag.label}) cannot be compiled: {cause}")


class SchemaEvaluationError(Exception):
    """Raised when a compiled schema fails while evaluating a document."""

    def __init__(self, tag: TypeTag, cause: Exception) -> None:
        self.tag = tag
        self.cause = cause
        super().__init__(f"Schema for {tag.name} ({tag.label}) failed during evaluation: {cause}")


@dataclass(frozen=True)
class CompiledSchema:
    """Validator-ready form of one schema document."""

    schema: SchemaDocument
    validator: Validator

    @property
    def uri(self) -> str:
        return self.schema.uri


class SchemaValidatorAdapter:
    """Compile schema documents once and evaluate documents against them.

    Compiled validators are cached by schema URI, so compiling the same
    schema document twice returns the same object. Compilation is expected
    to finish before concurrent ``matches`` calls begin.
    """

    def __init__(self, default_validator: type[Validator] = Draft202012Validator) -> None:
        self._default_validator = default_validator
        self._compiled: dict[str, CompiledSchema] = {}

    def compile(self, schema: SchemaDocument) -> CompiledSchema:
        """Return the cached or freshly compiled validator for ``schema``."""
        cached = self._compiled.get(schema.uri)
        if cached is not None and cached.schema == schema:
            return cached

        root = schema.root
        if not isinstance(root, (Mapping, bool)):
            raise SchemaCompileError(schema.tag, "schema root must be an object or a boolean")

        validator_cls = self._validator_class(root)
        try:
            validator_cls.check_schema(root)
        except JsonSchemaDefinitionError as exc:
            raise SchemaCompileError(schema.tag, exc.message) from exc

        compiled = CompiledSchema(schema=schema, validator=validator_cls(root))
        self._compiled[schema.uri] = compiled
        LOGGER.debug("Compiled schema %s with %s", schema.uri, validator_cls.__name__)
        return compiled

    def matches(self, compiled: CompiledSchema, document: Any) -> bool:
        """Return True when ``document`` satisfies the compiled schema."""
        try:
            return compiled.validator.is_valid(document)
        except (JsonSchemaDefinitionError, Unresolvable) as exc:
            raise SchemaEvaluationError(compiled.schema.tag, exc) from exc

    def _validator_class(self, root: Mapping[str, Any] | bool) -> type[Validator]:
        if isinstance(root, bool):
            return self._default_validator
        return validators.validator_for(root, default=self._default_validator)

