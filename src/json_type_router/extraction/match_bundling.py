"""Packaging of extracted sub-documents into emitted documents."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any


class TransferType(str, Enum):
    """How extracted matches are emitted downstream."""

    OBJECT = "object"
    ARRAY = "array"

    @classmethod
    def parse(cls, value: str) -> TransferType:
        normalized = value.strip().lower()
        for transfer_type in cls:
            if transfer_type.value == normalized:
                return transfer_type
        raise ValueError(f"Unsupported transfer type: {value!r} (expected object or array)")


def bundle_matches(matches: Sequence[Any], transfer_type: TransferType) -> list[Any]:
    """Return the documents to emit for ``matches``.

    ``OBJECT`` emits one document per match; ``ARRAY`` emits a single
    document holding every match in discovery order. No matches emit
    nothing in either mode.
    """
    if not matches:
        return []
    if transfer_type is TransferType.ARRAY:
        return [list(matches)]
    return list(matches)
