"""Destination names and routing decisions for classified documents."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from json_type_router.classification.classifier import (
    SCHEME_TYPE_ATTRIBUTE,
    ClassificationResult,
)
from json_type_router.schema_catalog.catalog_models import TypeTag

FAILURE_DESTINATION = "failure"

EXTRACTION_SUCCESS_DESTINATION = "success"
EXTRACTION_NONE_DESTINATION = "none"
EXTRACTION_ORIGINAL_DESTINATION = "original"

DESTINATION_BY_TAG: Mapping[TypeTag, str] = MappingProxyType(
    {
        TypeTag.DIRECT: "direct",
        TypeTag.EXPLORE: "explore",
        TypeTag.EXPLORE_CLIP: "explore.clip",
        TypeTag.EXPLORE_CLIP_MEDIA: "explore.clip.media",
        TypeTag.EXPLORE_FILL_MEDIA: "explore.fill.media",
        TypeTag.EXPLORE_LAYOUT: "explore.layout",
        TypeTag.EXPLORE_SECTION: "explore.section",
        TypeTag.FRIENDSHIP: "friendship",
        TypeTag.FRIENDSHIP_SHOW_MANY: "friendship.show.many",
        TypeTag.INBOX: "inbox",
        TypeTag.PENDING: "pending",
        TypeTag.PENDINGS: "pendings",
        TypeTag.PROFILE: "profile",
        TypeTag.STORY_FEED: "story.feed",
        TypeTag.STORY_FEED_TRAY: "story.feed.tray",
        TypeTag.STORY_FEED_TRAY_REEL: "story.feed.tray.reel",
        TypeTag.STORY_FEED_TRAY_REELS: "story.feed.tray.reels",
        TypeTag.STORY_ITEM: "story.item",
        TypeTag.STORY_HIGHLIGHT: "story.highlight",
        TypeTag.STORY_HIGHLIGHTS: "story.highlights",
        TypeTag.STORY_PROFILE: "story.profile",
        TypeTag.STORY_PROFILE_EDGE: "story.profile.edge",
        TypeTag.STORY_REEL: "story.reel",
        TypeTag.UNKNOWN: "unknown",
        TypeTag.USER: "user",
    }
)


@dataclass(frozen=True)
class RoutingDecision:
    """Where one document goes and which attributes travel with it."""

    destination: str
    tag: TypeTag | None
    label: str | None
    attributes: Mapping[str, str] = field(default_factory=dict)


def destination_for(tag: TypeTag) -> str:
    """Return the destination name for ``tag``."""
    return DESTINATION_BY_TAG[tag]


def route_classification(
    result: ClassificationResult, *, allow_set_scheme: bool = True
) -> RoutingDecision:
    """Turn a classification result into a routing decision."""
    attributes = dict(result.attributes) if allow_set_scheme else {}
    return RoutingDecision(
        destination=destination_for(result.tag),
        tag=result.tag,
        label=result.label,
        attributes=attributes,
    )


def failure_decision(reason: str) -> RoutingDecision:
    """Routing decision for a document that could not be processed."""
    return RoutingDecision(
        destination=FAILURE_DESTINATION,
        tag=None,
        label=None,
        attributes={"failure.reason": reason},
    )


def inherit_attributes(
    parent: Mapping[str, str], own: Mapping[str, str], tag: TypeTag
) -> dict[str, str]:
    """Attributes for a document derived from ``parent``.

    Keys the derived document already carries win over inherited ones, and
    ``scheme.type`` always names the derived document's own type.
    """
    attributes = dict(own)
    for key, value in parent.items():
        attributes.setdefault(key, value)
    attributes[SCHEME_TYPE_ATTRIBUTE] = tag.label
    return attributes
