"""Classification exports."""

from .classifier import (
    SCHEME_JSON_ATTRIBUTE,
    SCHEME_TYPE_ATTRIBUTE,
    ClassificationResult,
    classify,
    classify_and_disambiguate,
    match_entry,
)
from .disambiguator import PROFILE_VARIANT_LABELS, PROFILE_VARIANTS, disambiguate

__all__ = [
    "ClassificationResult",
    "PROFILE_VARIANTS",
    "PROFILE_VARIANT_LABELS",
    "SCHEME_JSON_ATTRIBUTE",
    "SCHEME_TYPE_ATTRIBUTE",
    "classify",
    "classify_and_disambiguate",
    "disambiguate",
    "match_entry",
]
