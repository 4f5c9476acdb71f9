"""Validate command - resolve a ProgID to a known CLSID."""

import click

from ddsreg.cli.constants import EXIT_NOT_FOUND
from ddsreg.cli.json_output import emit_json, json_error_boundary
from ddsreg.cli.json_schemas import validate_response
from ddsreg.cli.rendering import render_validation
from ddsreg.core.context import DdsregContext
from ddsreg.core.progid import validate_prog_id_chain


@click.command("validate")
@click.argument("prog_id", metavar="PROGID")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
@json_error_boundary
def validate_cmd(ctx: DdsregContext, prog_id: str, output_json: bool) -> None:
    """Check that PROGID resolves to a listed CLSID.

    Exits 1 if the ProgID is not registered or its CLSID is not listed.
    """
    result = validate_prog_id_chain(ctx.registry, prog_id)

    if output_json or ctx.output_json:
        emit_json(validate_response(result).model_dump(mode="json"))
    else:
        render_validation(result)

    if not result.ok:
        raise SystemExit(EXIT_NOT_FOUND)
