"""Batch execution domain exports."""

from .batch_contracts import BatchOutcome, BatchRequest, DocumentOutcome
from .document_batch_use_case import (
    BatchExecutionError,
    DocumentUnparseable,
    execute_classification_batch,
    execute_extraction_batch,
    execute_unwrap_batch,
    read_document,
)

__all__ = [
    "BatchOutcome",
    "BatchRequest",
    "DocumentOutcome",
    "BatchExecutionError",
    "DocumentUnparseable",
    "execute_classification_batch",
    "execute_extraction_batch",
    "execute_unwrap_batch",
    "read_document",
]
