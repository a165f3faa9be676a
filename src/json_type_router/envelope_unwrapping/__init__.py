"""Envelope unwrapping exports."""

from .envelope_unwrapper import (
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_TARGET_PATTERN,
    DEFAULT_TIMEZONE,
    EnvelopeError,
    UnwrapDestination,
    UnwrapOutcome,
    UnwrapSettings,
    normalize_unix_timestamp,
    unwrap_envelope,
)

__all__ = [
    "DEFAULT_DATETIME_FORMAT",
    "DEFAULT_TARGET_PATTERN",
    "DEFAULT_TIMEZONE",
    "EnvelopeError",
    "UnwrapDestination",
    "UnwrapOutcome",
    "UnwrapSettings",
    "normalize_unix_timestamp",
    "unwrap_envelope",
]
