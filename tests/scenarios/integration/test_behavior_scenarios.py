"""Scenario-style integration tests for core routing behaviors."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any

from click.testing import CliRunner
from json_type_router.classification import classify, classify_and_disambiguate
from json_type_router.cli import cli
from json_type_router.extraction import extract_matches
from json_type_router.schema_catalog import (
    CatalogReference,
    CompiledCatalog,
    TypeTag,
    compile_all,
    load_catalog,
    load_catalog_file,
)

SAMPLES = Path(__file__).resolve().parents[3] / "samples"


def _catalog(*entries: tuple[TypeTag, dict[str, Any]]) -> CompiledCatalog:
    return compile_all(load_catalog([(tag, json.dumps(root)) for tag, root in entries]))


def test_given_overlapping_schemas_when_order_is_swapped_then_winner_changes() -> None:
    document = {"taken_at": 1, "media_type": 1, "user": {"username": "carol"}}
    story = (TypeTag.STORY_ITEM, {"type": "object", "required": ["taken_at"]})
    profile = (TypeTag.PROFILE, {"type": "object", "required": ["user"]})

    assert classify(document, _catalog(story, profile)) is TypeTag.STORY_ITEM
    assert classify(document, _catalog(profile, story)) is TypeTag.PROFILE


def test_given_sample_catalog_when_profile_variants_arrive_then_each_gets_its_label() -> None:
    catalog = compile_all(load_catalog_file(SAMPLES / "schemes.json"))

    api = classify_and_disambiguate({"user": {"pk": 1, "username": "bob"}}, catalog)
    graphql = classify_and_disambiguate({"data": {"user": {"username": "bob"}}}, catalog)
    web = classify_and_disambiguate({"graphql": {"user": {"username": "bob"}}}, catalog)

    assert (api.tag, api.label) == (TypeTag.PROFILE, "profile-api-info:id")
    assert (graphql.tag, graphql.label) == (TypeTag.PROFILE, "profile-graphql:variable")
    assert (web.tag, web.label) == (TypeTag.PROFILE, "profile-web-info:username")


def test_given_loose_profile_schema_when_no_wrapper_present_then_document_is_unknown() -> None:
    catalog = _catalog((TypeTag.PROFILE, {"type": "object"}))

    result = classify_and_disambiguate({"other": {}}, catalog)

    assert result.tag is TypeTag.UNKNOWN
    assert result.label == "unknown"


def test_given_catalog_reload_when_classifying_then_new_catalog_applies() -> None:
    reference = CatalogReference(_catalog((TypeTag.USER, {"required": ["username"]})))
    document = {"username": "bob", "pk": 1}
    assert classify(document, reference.current()) is TypeTag.USER

    reference.swap(_catalog((TypeTag.PENDING, {"required": ["pk"]})))

    assert classify(document, reference.current()) is TypeTag.PENDING


def test_given_nested_users_when_extracting_then_all_are_found_in_document_order() -> None:
    schema = load_catalog(
        [(TypeTag.USER, json.dumps({"type": "object", "required": ["username"]}))]
    ).entries[0]
    root = {
        "a": {"b": {"user": {"username": "x"}}},
        "items": [{"username": "a"}, {"username": "b", "friend": {"username": "c"}}],
    }

    matches = extract_matches(root, schema)

    assert [match["username"] for match in matches] == ["x", "a", "b", "c"]


def test_given_sample_documents_when_classifying_via_cli_then_lines_follow_input_order() -> None:
    runner = CliRunner()
    documents = [
        str(SAMPLES / "documents" / name) for name in ("unmatched.json", "profile-api.json")
    ]

    result = runner.invoke(cli, ["classify", "--config", str(SAMPLES / "config.yaml"), *documents])

    assert result.exit_code == 0
    records = [json.loads(line) for line in result.stdout.splitlines()]
    assert [record["destination"] for record in records] == ["unknown", "profile"]
    assert records[1]["attributes"]["filename"] == "profile-api.json"


def test_given_module_invocation_when_requesting_help_then_commands_are_listed() -> None:
    project_root = Path(__file__).resolve().parents[3]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(project_root / "src"), env.get("PYTHONPATH")])
    )

    result = subprocess.run(
        [sys.executable, "-m", "json_type_router", "--help"],
        cwd=project_root,
        env=env,
        check=False,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    for command in ("generate-config", "classify", "extract", "unwrap"):
        assert command in result.stdout
