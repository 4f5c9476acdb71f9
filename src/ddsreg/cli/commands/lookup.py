"""Lookup command - find identifier entries by GUID."""

import click

from ddsreg.cli.constants import EXIT_NOT_FOUND, KIND_CHOICES
from ddsreg.cli.ensure import Ensure, kind_from_choice
from ddsreg.cli.json_output import emit_json, json_error_boundary
from ddsreg.cli.json_schemas import LookupCommandResponse, identifier_info
from ddsreg.cli.output import machine_output
from ddsreg.cli.rendering import render_entry
from ddsreg.core.context import DdsregContext


@click.command("lookup")
@click.argument("guid")
@click.option(
    "--kind",
    type=click.Choice(KIND_CHOICES, case_sensitive=False),
    default=None,
    help="Only match entries of this kind.",
)
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Show every entry listed under the GUID, not just the first.",
)
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
@json_error_boundary
def lookup_cmd(
    ctx: DdsregContext, guid: str, kind: str | None, show_all: bool, output_json: bool
) -> None:
    """Look up an identifier by GUID (braces and hex case optional)."""
    kind_filter = kind_from_choice(kind)
    if show_all:
        entries = [e for e in ctx.registry.lookup_all(guid) if kind_filter in (None, e.kind)]
    else:
        entry = ctx.registry.lookup_by_guid(guid, kind=kind_filter)
        entries = [entry] if entry is not None else []

    if output_json or ctx.output_json:
        response = LookupCommandResponse(
            query=guid,
            found=bool(entries),
            entries=[identifier_info(e) for e in entries],
        )
        emit_json(response.model_dump(mode="json"))
        if not entries:
            raise SystemExit(EXIT_NOT_FOUND)
        return

    Ensure.invariant(bool(entries), f"No identifier listed for {guid}")
    for index, entry in enumerate(entries):
        if index:
            machine_output()
        render_entry(entry)
