"""Schema catalog entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from json_type_router.schema_validation.validator_adapter import (
    CompiledSchema,
    SchemaCompileError,
)


class TypeTag(str, Enum):
    """Semantic categories a document can be classified into."""

    DIRECT = "direct"
    EXPLORE = "explore:grid"
    EXPLORE_CLIP = "explore:clip"
    EXPLORE_CLIP_MEDIA = "explore:clip-media"
    EXPLORE_FILL_MEDIA = "explore:fill-media"
    EXPLORE_LAYOUT = "explore:layout"
    EXPLORE_SECTION = "explore:section"
    FRIENDSHIP = "friendship:single"
    FRIENDSHIP_SHOW_MANY = "friendship:many"
    INBOX = "inbox"
    PENDING = "pending:single"
    PENDINGS = "pending:container"
    PROFILE = "profile"
    STORY_FEED = "story:feed"
    STORY_FEED_TRAY = "story:feed-tray"
    STORY_FEED_TRAY_REEL = "story:feed-tray-reel"
    STORY_FEED_TRAY_REELS = "story:feed-tray-reel-container"
    STORY_ITEM = "story:item"
    STORY_HIGHLIGHT = "story:highlight"
    STORY_HIGHLIGHTS = "story:highlight:container"
    STORY_PROFILE = "story:profile"
    STORY_PROFILE_EDGE = "story:profile-edge"
    STORY_REEL = "story:reel"
    UNKNOWN = "unknown"
    USER = "user"

    @property
    def label(self) -> str:
        """Stable string written into output attributes."""
        return self.value

    @classmethod
    def from_label(cls, value: str) -> TypeTag:
        """Resolve a label (``explore:clip``) or member name (``EXPLORE_CLIP``)."""
        normalized = value.strip()
        for tag in cls:
            if normalized == tag.value or normalized.upper() == tag.name:
                return tag
        raise ValueError(f"Unknown type tag: {value!r}")


@dataclass(frozen=True)
class SchemaDocument:
    """Parsed schema definition bound to one type tag.

    ``uri`` identifies the schema for compilation caching; ``root`` is the
    parsed JSON and must not be mutated.
    """

    tag: TypeTag
    uri: str
    text: str
    root: Any


@dataclass(frozen=True)
class Catalog:
    """Ordered registry of schema documents.

    Entry order is the classification precedence: the first entry whose
    schema accepts a document wins.
    """

    entries: tuple[SchemaDocument, ...]

    @property
    def tags(self) -> tuple[TypeTag, ...]:
        return tuple(entry.tag for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class CompiledCatalog:
    """Catalog whose usable entries are compiled, in catalog order."""

    entries: tuple[CompiledSchema, ...]
    failures: tuple[SchemaCompileError, ...] = ()

    @property
    def tags(self) -> tuple[TypeTag, ...]:
        return tuple(entry.schema.tag for entry in self.entries)
