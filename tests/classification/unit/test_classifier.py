"""Classifier tests."""

from __future__ import annotations

import json
import logging

import pytest
from json_type_router.classification import (
    SCHEME_JSON_ATTRIBUTE,
    SCHEME_TYPE_ATTRIBUTE,
    classify,
    classify_and_disambiguate,
    match_entry,
)
from json_type_router.schema_catalog import (
    CompiledCatalog,
    NoCatalogLoaded,
    TypeTag,
    compile_all,
    load_catalog,
)

_HAS_USERNAME = {"type": "object", "required": ["username"]}
_HAS_PK = {"type": "object", "required": ["pk"]}
_LOOSE_PROFILE = {
    "type": "object",
    "anyOf": [
        {"properties": {"data": {"type": "object"}}},
        {"properties": {"user": {"type": "object"}}},
        {"properties": {"graphql": {"type": "object"}}},
    ],
}


def _catalog(*entries: tuple[TypeTag, object]) -> CompiledCatalog:
    return compile_all(load_catalog([(tag, json.dumps(root)) for tag, root in entries]))


def test_single_accepting_schema_decides_the_tag() -> None:
    catalog = _catalog(
        (TypeTag.INBOX, {"type": "object", "required": ["inbox"]}),
        (TypeTag.USER, _HAS_USERNAME),
    )

    assert classify({"username": "bob"}, catalog) is TypeTag.USER
    assert classify({"inbox": {"threads": []}}, catalog) is TypeTag.INBOX


def test_classification_is_repeatable() -> None:
    catalog = _catalog((TypeTag.USER, _HAS_USERNAME), (TypeTag.PENDING, _HAS_PK))
    document = {"pk": 1}

    results = {classify(document, catalog) for _ in range(25)}

    assert results == {TypeTag.PENDING}


def test_earlier_entry_wins_when_schemas_overlap() -> None:
    document = {"username": "bob", "pk": 1}

    user_first = _catalog((TypeTag.USER, _HAS_USERNAME), (TypeTag.PENDING, _HAS_PK))
    pending_first = _catalog((TypeTag.PENDING, _HAS_PK), (TypeTag.USER, _HAS_USERNAME))

    assert classify(document, user_first) is TypeTag.USER
    assert classify(document, pending_first) is TypeTag.PENDING


def test_document_matching_nothing_is_unknown() -> None:
    catalog = _catalog((TypeTag.USER, _HAS_USERNAME))

    assert classify({"status": "ok"}, catalog) is TypeTag.UNKNOWN
    assert classify([], catalog) is TypeTag.UNKNOWN
    assert classify("plain text", catalog) is TypeTag.UNKNOWN


def test_empty_catalog_classifies_everything_as_unknown() -> None:
    assert classify({"username": "bob"}, CompiledCatalog(entries=())) is TypeTag.UNKNOWN


def test_missing_catalog_is_an_error_not_unknown() -> None:
    with pytest.raises(NoCatalogLoaded):
        classify({"username": "bob"}, None)
    with pytest.raises(NoCatalogLoaded):
        classify_and_disambiguate({"username": "bob"}, None)


def test_failed_compilation_entries_are_skipped() -> None:
    catalog = _catalog(
        (TypeTag.INBOX, {"type": "no-such-type"}),
        (TypeTag.USER, _HAS_USERNAME),
    )

    assert classify({"username": "bob"}, catalog) is TypeTag.USER
    assert [failure.tag for failure in catalog.failures] == [TypeTag.INBOX]


def test_entry_failing_at_evaluation_is_logged_and_skipped(
    caplog: pytest.LogCaptureFixture,
) -> None:
    catalog = _catalog(
        (TypeTag.INBOX, {"$ref": "urn:example:missing-schema"}),
        (TypeTag.USER, _HAS_USERNAME),
    )

    with caplog.at_level(logging.ERROR):
        tag = classify({"username": "bob"}, catalog)

    assert tag is TypeTag.USER
    assert "INBOX" in caplog.text


def test_match_entry_exposes_the_winning_schema() -> None:
    catalog = _catalog((TypeTag.USER, _HAS_USERNAME))

    entry = match_entry({"username": "bob"}, catalog)

    assert entry is not None
    assert entry.schema.tag is TypeTag.USER
    assert match_entry({"pk": 1}, catalog) is None


def test_classify_and_disambiguate_attaches_scheme_attributes() -> None:
    catalog = _catalog((TypeTag.USER, _HAS_USERNAME))

    result = classify_and_disambiguate({"username": "bob"}, catalog)

    assert result.tag is TypeTag.USER
    assert result.label == "user"
    assert list(result.attributes) == [SCHEME_JSON_ATTRIBUTE, SCHEME_TYPE_ATTRIBUTE]
    assert json.loads(result.attributes[SCHEME_JSON_ATTRIBUTE]) == _HAS_USERNAME
    assert result.attributes[SCHEME_TYPE_ATTRIBUTE] == "user"
    assert result.schema is not None and result.schema.tag is TypeTag.USER


def test_classify_and_disambiguate_can_omit_scheme_attributes() -> None:
    catalog = _catalog((TypeTag.USER, _HAS_USERNAME))

    result = classify_and_disambiguate({"username": "bob"}, catalog, include_schema=False)

    assert result.tag is TypeTag.USER
    assert result.attributes == {}


def test_unmatched_document_has_unknown_result_without_attributes() -> None:
    catalog = _catalog((TypeTag.USER, _HAS_USERNAME))

    result = classify_and_disambiguate({"status": "ok"}, catalog)

    assert result.is_unknown
    assert result.label == "unknown"
    assert result.attributes == {}
    assert result.schema is None


@pytest.mark.parametrize(
    ("document", "tag", "label"),
    [
        ({"user": {"username": "bob"}}, TypeTag.PROFILE, "profile-api-info:id"),
        ({"data": {"user": {"username": "bob"}}}, TypeTag.PROFILE, "profile-graphql:variable"),
        ({"graphql": {"user": {"username": "bob"}}}, TypeTag.PROFILE, "profile-web-info:username"),
    ],
)
def test_profile_variants_are_labelled_after_classification(
    document: dict[str, object], tag: TypeTag, label: str
) -> None:
    catalog = _catalog((TypeTag.PROFILE, _LOOSE_PROFILE))

    assert classify(document, catalog) is TypeTag.PROFILE
    result = classify_and_disambiguate(document, catalog)

    assert result.tag is tag
    assert result.label == label
    assert result.attributes[SCHEME_TYPE_ATTRIBUTE] == label


def test_profile_downgraded_to_unknown_carries_no_scheme_attributes() -> None:
    catalog = _catalog((TypeTag.PROFILE, _LOOSE_PROFILE))

    result = classify_and_disambiguate({"other": {}}, catalog)

    assert result.is_unknown
    assert result.label == "unknown"
    assert result.attributes == {}
    assert result.schema is None
