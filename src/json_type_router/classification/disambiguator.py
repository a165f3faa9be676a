"""Structural refinement for tags whose schema covers several wire variants."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from json_type_router.schema_catalog.catalog_models import TypeTag

LOGGER = logging.getLogger(__name__)

# Probe order matters: a document carrying several wrappers takes the first.
PROFILE_VARIANTS: tuple[tuple[str, str], ...] = (
    ("data", "profile-graphql:variable"),
    ("user", "profile-api-info:id"),
    ("graphql", "profile-web-info:username"),
)

PROFILE_VARIANT_LABELS = frozenset(label for _, label in PROFILE_VARIANTS)


def disambiguate(document: Any, tag: TypeTag) -> tuple[TypeTag, str]:
    """Return the refined ``(tag, label)`` for an already classified document."""
    if tag is not TypeTag.PROFILE:
        return tag, tag.label

    if isinstance(document, Mapping):
        for field_name, label in PROFILE_VARIANTS:
            if isinstance(document.get(field_name), Mapping):
                LOGGER.debug("Profile document resolved through '%s' as %s", field_name, label)
                return tag, label

    LOGGER.debug("Unknown profile shape, downgrading to %s", TypeTag.UNKNOWN.label)
    return TypeTag.UNKNOWN, TypeTag.UNKNOWN.label
