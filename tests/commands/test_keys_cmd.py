"""Tests for the keys and sources commands."""

import json

from click.testing import CliRunner

from ddsreg.cli.cli import cli
from ddsreg.core.context import DdsregContext
from ddsreg.core.identifier_registry import IdentifierRegistry
from ddsreg.core.reference_parser import parse_reference

SERVER_DOC = """```reg
[HKEY_CLASSES_ROOT\\CLSID\\{11111111-2222-3333-4444-555555555555}\\InprocServer32]
@="C:\\\\widget.dll"
"ThreadingModel"="Apartment"
```
"""


def test_keys_prints_reg_style_blocks() -> None:
    runner = CliRunner()
    registry = IdentifierRegistry.from_documents([parse_reference(SERVER_DOC, "server.md")])

    result = runner.invoke(
        cli,
        ["keys", "HKCR\\CLSID\\{11111111-2222-3333-4444-555555555555}"],
        obj=DdsregContext.for_test(registry=registry),
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "[HKEY_CLASSES_ROOT\\CLSID\\{11111111-2222-3333-4444-555555555555}\\InprocServer32]",
        "@=C:\\widget.dll",
        '"ThreadingModel"=Apartment',
    ]


def test_keys_unknown_prefix_exits_1() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["keys", "HKCR\\Nothing.Here"], obj=DdsregContext.for_test())

    assert result.exit_code == 1
    assert "No registry values under" in result.output


def test_keys_json() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["keys", "--json", "HKCR\\MSDDS.Diagram"], obj=DdsregContext.for_test()
    )

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["count"] == 2
    assert data["values"][1]["path"] == "HKEY_CLASSES_ROOT\\MSDDS.Diagram\\CurVer"
    assert data["values"][1]["value_data"] == "MSDDS.Diagram.080"


def test_sources_lists_documents() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["sources"], obj=DdsregContext.for_test())

    assert result.exit_code == 0
    assert "msdds.md: MSDDS diagram surface control" in result.output
    assert "mdt.md: Microsoft Data Tools diagram controls" in result.output


def test_sources_json() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["sources", "--json"], obj=DdsregContext.for_test())

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert [d["name"] for d in data["documents"]] == ["msdds.md", "mdt.md"]
    assert data["documents"][0]["sources"]
