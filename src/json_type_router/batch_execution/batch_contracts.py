"""Batch execution entities."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from json_type_router.routing import FAILURE_DESTINATION
from json_type_router.schema_catalog import TypeTag


@dataclass(frozen=True)
class BatchRequest:
    """Input contract for processing one batch of document files."""

    config_path: str
    document_paths: tuple[str, ...]


@dataclass(frozen=True)
class DocumentOutcome:
    """One routed result produced while processing a source file.

    ``document`` is only meaningful when ``has_document`` is set; a routed
    result may carry no payload (for example the ``original`` marker).
    """

    source: str
    destination: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    tag: TypeTag | None = None
    label: str | None = None
    document: Any = None
    has_document: bool = False


@dataclass(frozen=True)
class BatchOutcome:
    """Output contract for one completed batch."""

    outcomes: tuple[DocumentOutcome, ...]

    @property
    def failures(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.destination == FAILURE_DESTINATION)

    def destination_counts(self) -> dict[str, int]:
        """Return how many results went to each destination."""
        return dict(Counter(outcome.destination for outcome in self.outcomes))
