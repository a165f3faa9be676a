"""Extraction exports."""

from .match_bundling import TransferType, bundle_matches
from .recursive_extractor import (
    DEFAULT_MAX_DEPTH,
    MaxDepthExceeded,
    extract,
    extract_matches,
    is_container,
    iter_children,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MaxDepthExceeded",
    "TransferType",
    "bundle_matches",
    "extract",
    "extract_matches",
    "is_container",
    "iter_children",
]
