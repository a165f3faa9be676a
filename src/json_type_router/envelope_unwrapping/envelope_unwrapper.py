"""Unwrapping of captured request/response envelopes."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

LOGGER = logging.getLogger(__name__)

DEFAULT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
DEFAULT_TIMEZONE = "Asia/Tokyo"
DEFAULT_TARGET_PATTERN = (
    r"(?:https://)?(?:[a-zA-Z]+(?:[a-zA-Z0-9\-.]*[a-zA-Z0-9])\.)?instagram\.com/?(?:[^\n]*)?"
)
_UNAUTHORIZED_PATTERN = re.compile(r"<Response\s+\[401\]>")


class EnvelopeError(Exception):
    """Raised when an envelope lacks the fields needed to unwrap it."""


class UnwrapDestination(str, Enum):
    """Destinations for unwrapped envelopes."""

    SUCCESS = "success"
    CHECKPOINT = "checkpoint"
    UNAUTHORIZED = "unauthorized"
    UNPARSED = "unparsed"
    INVALID = "invalid"


@dataclass(frozen=True)
class UnwrapSettings:
    """Options applied while unwrapping envelopes."""

    allow_set_attribute: bool = True
    datetime_format: str = DEFAULT_DATETIME_FORMAT
    timezone: str = DEFAULT_TIMEZONE
    target_pattern: str = DEFAULT_TARGET_PATTERN


@dataclass(frozen=True)
class UnwrapOutcome:
    """Unwrapped response content with its destination and attributes."""

    destination: UnwrapDestination
    content: Any
    attributes: dict[str, str] = field(default_factory=dict)


def normalize_unix_timestamp(
    unixtime: float,
    datetime_format: str = DEFAULT_DATETIME_FORMAT,
    timezone: str = DEFAULT_TIMEZONE,
) -> str:
    """Format whole seconds of ``unixtime`` as local time in ``timezone``."""
    try:
        zone = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise EnvelopeError(f"Unknown timezone: {timezone}") from exc
    try:
        moment = datetime.fromtimestamp(int(unixtime), tz=zone)
    except (OverflowError, OSError, ValueError) as exc:
        raise EnvelopeError(f"Timestamp {unixtime!r} is out of range: {exc}") from exc
    return moment.strftime(datetime_format)


def unwrap_envelope(envelope: Any, settings: UnwrapSettings | None = None) -> UnwrapOutcome:
    """Unwrap one envelope into its response content.

    Raises:
      EnvelopeError: If the envelope is not an object or misses a field the
        destination depends on.
    """
    resolved = settings or UnwrapSettings()
    root = _require_mapping(envelope, "envelope")
    response = _require_mapping(root.get("response"), "response")
    if "content" not in response:
        raise EnvelopeError("Envelope field 'response.content' is required.")
    content = response["content"]
    target = _as_text(_require_field(root, "target"))

    if not re.fullmatch(resolved.target_pattern, target):
        LOGGER.debug("Envelope target %s is not a supported url", target)
        return UnwrapOutcome(destination=UnwrapDestination.INVALID, content=content)

    attributes: dict[str, str] = {}
    destination = _resolve_destination(target, response, content, attributes)

    request = _require_mapping(root.get("request"), "request")
    unixtime = _require_field(root, "unixtime")
    attributes.update(
        {
            "url": target,
            "browser": _as_text(_require_field(root, "browser")),
            "unixtime": _as_text(unixtime),
            "request": _as_json(request),
            "request.body": _as_json(_require_field(request, "body", "request")),
            "request.query": _as_json(_require_field(request, "query", "request")),
            "request.cookies": _as_json(_require_field(request, "cookies", "request")),
            "request.headers": _as_json(_require_field(request, "headers", "request")),
            "response": _as_json(response),
            "response.cookies": _as_json(_require_field(response, "cookies", "response")),
            "response.headers": _as_json(_require_field(response, "headers", "response")),
            "datetime": normalize_unix_timestamp(
                _as_number(unixtime), resolved.datetime_format, resolved.timezone
            ),
        }
    )
    if not resolved.allow_set_attribute:
        attributes = {}
    return UnwrapOutcome(destination=destination, content=content, attributes=attributes)


def _resolve_destination(
    target: str, response: Mapping[str, Any], content: Any, attributes: dict[str, str]
) -> UnwrapDestination:
    status = _as_text(_require_field(response, "status", "response"))
    if _UNAUTHORIZED_PATTERN.fullmatch(status):
        LOGGER.debug("Request %s is unauthorized", target)
        return UnwrapDestination.UNAUTHORIZED

    parsed = content
    if isinstance(content, str):
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError:
            LOGGER.debug("Failed to parse response content from %s", target)
            return UnwrapDestination.UNPARSED

    if isinstance(parsed, Mapping) and "checkpoint_url" in parsed:
        attributes["checkpoint.url"] = _as_text(parsed["checkpoint_url"])
        attributes["checkpoint.lock"] = _as_text(parsed.get("lock"))
        LOGGER.debug("Request %s is checkpointed", target)
        return UnwrapDestination.CHECKPOINT
    return UnwrapDestination.SUCCESS


def _require_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise EnvelopeError(f"Envelope field '{name}' must be an object.")
    return value


def _require_field(section: Mapping[str, Any], key: str, prefix: str | None = None) -> Any:
    if key not in section:
        name = key if prefix is None else f"{prefix}.{key}"
        raise EnvelopeError(f"Envelope field '{name}' is required.")
    return section[key]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return _as_json(value)


def _as_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        raise EnvelopeError("Envelope field 'unixtime' must be numeric.")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise EnvelopeError("Envelope field 'unixtime' must be numeric.") from exc
