"""CLI smoke tests."""

from click.testing import CliRunner
from json_type_router.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("generate-config", "classify", "extract", "unwrap"):
        assert command in result.output
    assert "--log-level" in result.output


def test_classify_help_lists_config_option() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["classify", "--help"])

    assert result.exit_code == 0
    assert "--config" in result.output
    assert "DOCUMENT_PATHS" in result.output
