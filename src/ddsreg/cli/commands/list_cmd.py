"""List command - every identifier in load order."""

import click

from ddsreg.cli.constants import KIND_CHOICES
from ddsreg.cli.ensure import kind_from_choice
from ddsreg.cli.json_output import emit_json, json_error_boundary
from ddsreg.cli.json_schemas import FindCommandResponse, identifier_info
from ddsreg.cli.rendering import render_entries
from ddsreg.core.context import DdsregContext


@click.command("list")
@click.option(
    "--kind",
    type=click.Choice(KIND_CHOICES, case_sensitive=False),
    default=None,
    help="Only list entries of this kind.",
)
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
@json_error_boundary
def list_cmd(ctx: DdsregContext, kind: str | None, output_json: bool) -> None:
    """List every identifier."""
    entries = ctx.registry.entries(kind_from_choice(kind))

    if output_json or ctx.output_json:
        response = FindCommandResponse(
            query=None,
            count=len(entries),
            entries=[identifier_info(e) for e in entries],
        )
        emit_json(response.model_dump(mode="json"))
        return

    render_entries(entries)
