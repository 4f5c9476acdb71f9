"""Find command - search identifier labels."""

import click

from ddsreg.cli.constants import EXIT_NOT_FOUND, KIND_CHOICES
from ddsreg.cli.ensure import Ensure, kind_from_choice
from ddsreg.cli.json_output import emit_json, json_error_boundary
from ddsreg.cli.json_schemas import FindCommandResponse, identifier_info
from ddsreg.cli.rendering import render_entries
from ddsreg.core.context import DdsregContext


@click.command("find")
@click.argument("substring")
@click.option(
    "--kind",
    type=click.Choice(KIND_CHOICES, case_sensitive=False),
    default=None,
    help="Only match entries of this kind.",
)
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
@json_error_boundary
def find_cmd(ctx: DdsregContext, substring: str, kind: str | None, output_json: bool) -> None:
    """Find identifiers whose label contains SUBSTRING (case-insensitive)."""
    query = Ensure.non_empty_query(substring, "Search string")
    matches = ctx.registry.lookup_by_label(query, kind=kind_from_choice(kind))

    if output_json or ctx.output_json:
        entries = [identifier_info(e) for e in matches]
        response = FindCommandResponse(query=query, count=len(entries), entries=entries)
        emit_json(response.model_dump(mode="json"))
        if not entries:
            raise SystemExit(EXIT_NOT_FOUND)
        return

    count = render_entries(matches)
    Ensure.invariant(count > 0, f"No identifier label contains {query!r}")
