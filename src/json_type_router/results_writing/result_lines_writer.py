"""JSON-lines rendering of batch outcomes."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from typing import Any, TextIO

from json_type_router.batch_execution import BatchOutcome, DocumentOutcome


def outcome_record(outcome: DocumentOutcome) -> dict[str, Any]:
    """Return the serializable record for one routed result."""
    record: dict[str, Any] = {"source": outcome.source, "destination": outcome.destination}
    if outcome.tag is not None:
        record["type"] = outcome.tag.name
        record["label"] = outcome.label
    record["attributes"] = dict(outcome.attributes)
    if outcome.has_document:
        record["document"] = outcome.document
    return record


def render_result_lines(outcomes: Iterable[DocumentOutcome]) -> Iterator[str]:
    """Yield one compact JSON line per outcome, in batch order."""
    for outcome in outcomes:
        yield json.dumps(outcome_record(outcome), ensure_ascii=False, separators=(",", ":"))


def write_result_lines(batch: BatchOutcome, stream: TextIO) -> int:
    """Write ``batch`` to ``stream`` and return the number of lines written."""
    count = 0
    for line in render_result_lines(batch.outcomes):
        stream.write(line + "\n")
        count += 1
    return count
