"""Tests for the config commands."""

import json
from pathlib import Path

from click.testing import CliRunner

from ddsreg.cli.cli import cli
from ddsreg.core.config_store import DdsregConfig, FakeConfigStore
from ddsreg.core.context import DdsregContext


def test_config_show_defaults() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "show"], obj=DdsregContext.for_test())

    assert result.exit_code == 0
    assert "reference_paths = " in result.output
    assert "output_format = text" in result.output


def test_config_show_json() -> None:
    runner = CliRunner()
    store = FakeConfigStore(config=DdsregConfig(reference_paths=(Path("/docs/a.md"),)))

    result = runner.invoke(
        cli, ["config", "show", "--json"], obj=DdsregContext.for_test(config_store=store)
    )

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["exists"] is True
    assert data["reference_paths"] == ["/docs/a.md"]
    assert data["output_format"] == "text"


def test_config_set_saves() -> None:
    runner = CliRunner()
    store = FakeConfigStore()

    result = runner.invoke(
        cli,
        ["config", "set", "output_format", "json"],
        obj=DdsregContext.for_test(config_store=store),
    )

    assert result.exit_code == 0
    assert store.saved == [DdsregConfig(output_format="json")]


def test_config_set_invalid_value_exits_2() -> None:
    runner = CliRunner()
    store = FakeConfigStore()

    result = runner.invoke(
        cli,
        ["config", "set", "output_format", "xml"],
        obj=DdsregContext.for_test(config_store=store),
    )

    assert result.exit_code == 2
    assert store.saved == []


def test_config_unknown_key_exits_2() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "get", "colour"], obj=DdsregContext.for_test())

    assert result.exit_code == 2
    assert "Unknown config key" in result.output


def test_config_get() -> None:
    runner = CliRunner()
    store = FakeConfigStore(config=DdsregConfig(reference_paths=(Path("/a.md"), Path("/b.md"))))

    result = runner.invoke(
        cli, ["config", "get", "reference_paths"], obj=DdsregContext.for_test(config_store=store)
    )

    assert result.exit_code == 0
    assert result.output.strip() == "/a.md,/b.md"
