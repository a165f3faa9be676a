"""Routing decision tests."""

from __future__ import annotations

import pytest
from json_type_router.classification import ClassificationResult
from json_type_router.routing import (
    DESTINATION_BY_TAG,
    FAILURE_DESTINATION,
    destination_for,
    failure_decision,
    inherit_attributes,
    route_classification,
)
from json_type_router.schema_catalog import TypeTag


def test_every_tag_has_a_destination() -> None:
    assert set(DESTINATION_BY_TAG) == set(TypeTag)
    assert len(set(DESTINATION_BY_TAG.values())) == len(TypeTag)
    assert FAILURE_DESTINATION not in DESTINATION_BY_TAG.values()


@pytest.mark.parametrize(
    ("tag", "destination"),
    [
        (TypeTag.EXPLORE_CLIP, "explore.clip"),
        (TypeTag.STORY_FEED_TRAY_REELS, "story.feed.tray.reels"),
        (TypeTag.UNKNOWN, "unknown"),
        (TypeTag.USER, "user"),
    ],
)
def test_destination_for_tag(tag: TypeTag, destination: str) -> None:
    assert destination_for(tag) == destination


def test_route_classification_keeps_label_and_attributes() -> None:
    result = ClassificationResult(
        tag=TypeTag.PROFILE,
        label="profile-api-info:id",
        attributes={"scheme.json": "{}", "scheme.type": "profile-api-info:id"},
    )

    decision = route_classification(result)

    assert decision.destination == "profile"
    assert decision.tag is TypeTag.PROFILE
    assert decision.label == "profile-api-info:id"
    assert decision.attributes == result.attributes


def test_route_classification_can_drop_scheme_attributes() -> None:
    result = ClassificationResult(
        tag=TypeTag.USER, label="user", attributes={"scheme.type": "user"}
    )

    decision = route_classification(result, allow_set_scheme=False)

    assert decision.destination == "user"
    assert decision.attributes == {}


def test_downgraded_profile_routes_to_unknown() -> None:
    result = ClassificationResult(tag=TypeTag.UNKNOWN, label="unknown")

    assert route_classification(result).destination == "unknown"


def test_failure_decision_carries_reason() -> None:
    decision = failure_decision("Failed to parse response.json")

    assert decision.destination == FAILURE_DESTINATION
    assert decision.tag is None
    assert decision.attributes == {"failure.reason": "Failed to parse response.json"}


def test_inherited_attributes_prefer_own_values_and_name_own_type() -> None:
    parent = {"filename": "a.json", "scheme.type": "profile", "trace": "parent"}
    own = {"trace": "child"}

    attributes = inherit_attributes(parent, own, TypeTag.USER)

    assert attributes == {"trace": "child", "filename": "a.json", "scheme.type": "user"}
