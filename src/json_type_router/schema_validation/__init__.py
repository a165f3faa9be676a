"""Schema validation exports."""

from .validator_adapter import (
    CompiledSchema,
    SchemaCompileError,
    SchemaEvaluationError,
    SchemaValidatorAdapter,
)

__all__ = [
    "CompiledSchema",
    "SchemaCompileError",
    "SchemaEvaluationError",
    "SchemaValidatorAdapter",
]
