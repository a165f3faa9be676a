"""Routing exports."""

from .destinations import (
    DESTINATION_BY_TAG,
    EXTRACTION_NONE_DESTINATION,
    EXTRACTION_ORIGINAL_DESTINATION,
    EXTRACTION_SUCCESS_DESTINATION,
    FAILURE_DESTINATION,
    RoutingDecision,
    destination_for,
    failure_decision,
    inherit_attributes,
    route_classification,
)

__all__ = [
    "DESTINATION_BY_TAG",
    "EXTRACTION_NONE_DESTINATION",
    "EXTRACTION_ORIGINAL_DESTINATION",
    "EXTRACTION_SUCCESS_DESTINATION",
    "FAILURE_DESTINATION",
    "RoutingDecision",
    "destination_for",
    "failure_decision",
    "inherit_attributes",
    "route_classification",
]
